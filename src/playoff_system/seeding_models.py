"""
Playoff Seeding Data Models

Seeds are derived data: they are recomputed from standings whenever needed
and only persisted as part of the current season's bracket.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from constants.team_ids import AFC, NFC


@dataclass(frozen=True)
class PlayoffSeed:
    """
    Represents a single playoff seed.

    Contains the team and the record it was seeded with.
    """
    seed: int                      # 1-7
    team_id: int
    conference: str                # "AFC" or "NFC"
    division: str                  # e.g., "North"
    division_winner: bool          # True for seeds 1-4
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def seed_label(self) -> str:
        """Get seed label (e.g., '#1 Seed (Bye)')."""
        if self.seed == 1:
            return "#1 Seed (Bye)"
        elif self.division_winner:
            return f"#{self.seed} Seed (Division Winner)"
        else:
            return f"#{self.seed} Seed (Wild Card)"


@dataclass(frozen=True)
class ConferenceSeeding:
    """Seven seeds for one conference, ordered 1-7."""
    conference: str
    seeds: Tuple[PlayoffSeed, ...]

    @property
    def division_winners(self) -> Tuple[PlayoffSeed, ...]:
        return tuple(seed for seed in self.seeds if seed.division_winner)

    @property
    def wildcards(self) -> Tuple[PlayoffSeed, ...]:
        return tuple(seed for seed in self.seeds if not seed.division_winner)

    @property
    def team_ids(self) -> Tuple[int, ...]:
        return tuple(seed.team_id for seed in self.seeds)

    def get_seed_by_number(self, seed_number: int) -> Optional[PlayoffSeed]:
        """Get seed by seed number (1-7)."""
        for seed in self.seeds:
            if seed.seed == seed_number:
                return seed
        return None

    def get_seed_by_team(self, team_id: int) -> Optional[PlayoffSeed]:
        """Get seed for a specific team."""
        for seed in self.seeds:
            if seed.team_id == team_id:
                return seed
        return None


@dataclass(frozen=True)
class PlayoffSeeding:
    """
    Complete playoff seeding for both conferences.

    Main output of ``PlayoffSeeder.calculate_seeding``.
    """
    season: int
    afc: ConferenceSeeding
    nfc: ConferenceSeeding

    def conference(self, name: str) -> ConferenceSeeding:
        if name == AFC:
            return self.afc
        if name == NFC:
            return self.nfc
        raise KeyError(f"Unknown conference: {name}")

    def get_seed(self, team_id: int) -> Optional[PlayoffSeed]:
        """
        Get playoff seed for a specific team (searches both conferences).

        Returns:
            PlayoffSeed if the team made the field, None otherwise
        """
        return self.afc.get_seed_by_team(team_id) or self.nfc.get_seed_by_team(team_id)

    def is_in_playoffs(self, team_id: int) -> bool:
        return self.get_seed(team_id) is not None

    @property
    def playoff_team_ids(self) -> Tuple[int, ...]:
        return self.afc.team_ids + self.nfc.team_ids

    def get_matchups(self) -> Dict[str, List[Tuple[int, int]]]:
        """
        Wild card pairings as (home_team_id, away_team_id).

        Returns:
            {'AFC': [2v7, 3v6, 4v5], 'NFC': [...]}
        """
        matchups = {}
        for conf in (self.afc, self.nfc):
            matchups[conf.conference] = [
                (conf.seeds[1].team_id, conf.seeds[6].team_id),  # 2 vs 7
                (conf.seeds[2].team_id, conf.seeds[5].team_id),  # 3 vs 6
                (conf.seeds[3].team_id, conf.seeds[4].team_id),  # 4 vs 5
            ]
        return matchups

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display and logging."""
        def conference_dict(conf: ConferenceSeeding) -> Dict[str, Any]:
            return {
                'seeds': [
                    {
                        'seed': s.seed,
                        'team_id': s.team_id,
                        'division': s.division,
                        'record': s.record_string,
                        'division_winner': s.division_winner,
                        'label': s.seed_label,
                    }
                    for s in conf.seeds
                ]
            }

        return {
            'season': self.season,
            'afc': conference_dict(self.afc),
            'nfc': conference_dict(self.nfc),
        }
