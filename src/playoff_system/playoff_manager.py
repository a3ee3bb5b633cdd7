"""
Playoff Manager

Pure logic for playoff bracket generation and progression.
Implements re-seeding after each round.
"""

import logging
from typing import List, Sequence, Tuple

from constants.team_ids import AFC, CONFERENCES, NFC
from .bracket_models import PlayoffBracket, PlayoffMatchup, PlayoffRound
from .playoff_exceptions import InvalidRoundException, InvalidSeedingException
from .seeding_models import PlayoffSeed, PlayoffSeeding


logger = logging.getLogger(__name__)


class PlayoffManager:
    """
    Generates and advances playoff brackets.

    This is pure business logic - no side effects. Takes seeding and
    completed matchups as input, returns new matchups and brackets.

    Playoff rules:
    - Wild Card: (2)v(7), (3)v(6), (4)v(5), #1 gets a bye
    - Later conference rounds: survivors are re-seeded, the lowest remaining
      seed number hosts the highest
    - Super Bowl: the two conference champions at a neutral site
    """

    # (home seed, away seed) for the wild card round
    WILD_CARD_PAIRINGS = ((2, 7), (3, 6), (4, 5))
    BYE_SEED = 1

    def generate_wild_card_round(
        self,
        seeds: Sequence[PlayoffSeed],
        season: int
    ) -> Tuple[PlayoffMatchup, ...]:
        """
        Generate one conference's wild card games.

        Args:
            seeds: The conference's seven seeds
            season: Season year (used in matchup ids)

        Returns:
            Three matchups, lower seed number at home

        Raises:
            InvalidSeedingException: If seeds are not exactly 1-7 from one conference
        """
        by_number = {seed.seed: seed for seed in seeds}
        conferences = {seed.conference for seed in seeds}
        if sorted(by_number) != list(range(1, 8)) or len(seeds) != 7 or len(conferences) != 1:
            raise InvalidSeedingException(
                f"Wild card round needs seeds 1-7 from one conference, got "
                f"{sorted((s.conference, s.seed) for s in seeds)}"
            )
        conference = conferences.pop()

        return tuple(
            self._create_matchup(
                season, PlayoffRound.WILD_CARD, conference, game_number,
                by_number[home_seed], by_number[away_seed]
            )
            for game_number, (home_seed, away_seed) in enumerate(self.WILD_CARD_PAIRINGS, start=1)
        )

    def generate_wild_card_bracket(self, seeding: PlayoffSeeding) -> PlayoffBracket:
        """
        Start a bracket with both conferences' wild card games.

        Returns:
            PlayoffBracket holding six wild card matchups
        """
        matchups = (
            self.generate_wild_card_round(seeding.afc.seeds, seeding.season)
            + self.generate_wild_card_round(seeding.nfc.seeds, seeding.season)
        )
        bracket = PlayoffBracket(season=seeding.season, seeding=seeding, matchups=matchups)
        bracket.validate()
        logger.info(f"Generated {seeding.season} wild card round ({len(matchups)} games)")
        return bracket

    def advance_round(
        self,
        prior_matchups: Sequence[PlayoffMatchup],
        seeding: PlayoffSeeding
    ) -> Tuple[PlayoffMatchup, ...]:
        """
        Generate the next round from a completed round.

        Args:
            prior_matchups: Every matchup of the just-finished round
            seeding: Original seeding (for the bye team and seed numbers)

        Returns:
            Next round's matchups

        Raises:
            InvalidRoundException: If the prior round is mixed, incomplete,
                or already the Super Bowl
        """
        rounds = {m.round for m in prior_matchups}
        if len(rounds) != 1:
            raise InvalidRoundException(
                ",".join(sorted(r.value for r in rounds)) or "none",
                message="advance_round needs the matchups of exactly one round"
            )
        prior_round = rounds.pop()
        next_round = prior_round.next_round
        if next_round is None:
            raise InvalidRoundException(prior_round.value, message="No round follows the Super Bowl")
        if len(prior_matchups) != prior_round.expected_game_count:
            raise InvalidRoundException(
                prior_round.value,
                message=f"{prior_round.display_name} has {len(prior_matchups)} matchups, "
                        f"expected {prior_round.expected_game_count}"
            )
        incomplete = [m.matchup_id for m in prior_matchups if not m.is_complete]
        if incomplete:
            raise InvalidRoundException(
                prior_round.value,
                message=f"{prior_round.display_name} has unfinished games: {incomplete}"
            )

        if next_round is PlayoffRound.SUPER_BOWL:
            return (self._create_super_bowl(prior_matchups, seeding),)

        matchups: List[PlayoffMatchup] = []
        for conference in CONFERENCES:
            survivors = self._surviving_seeds(prior_matchups, seeding, conference, prior_round)
            matchups.extend(self._reseed(survivors, seeding.season, next_round, conference))

        logger.info(f"Generated {seeding.season} {next_round.display_name} ({len(matchups)} games)")
        return tuple(matchups)

    def advance_bracket(self, bracket: PlayoffBracket) -> PlayoffBracket:
        """Append the next round once the bracket's current round is complete."""
        current = bracket.current_round
        if current is None:
            raise InvalidRoundException("none", message="Bracket has no rounds to advance from")
        new_matchups = self.advance_round(bracket.round_matchups(current), bracket.seeding)
        advanced = bracket.with_matchups(new_matchups)
        advanced.validate()
        return advanced

    def record_result(
        self,
        bracket: PlayoffBracket,
        matchup_id: str,
        home_score: int,
        away_score: int
    ) -> PlayoffBracket:
        """Apply a final score to one matchup."""
        return bracket.with_result(matchup_id, home_score, away_score)

    def _surviving_seeds(
        self,
        prior_matchups: Sequence[PlayoffMatchup],
        seeding: PlayoffSeeding,
        conference: str,
        prior_round: PlayoffRound
    ) -> List[PlayoffSeed]:
        conference_seeding = seeding.conference(conference)
        survivors = [
            conference_seeding.get_seed_by_team(m.winner_id)
            for m in prior_matchups if m.conference == conference
        ]
        if prior_round is PlayoffRound.WILD_CARD:
            survivors.append(conference_seeding.get_seed_by_number(self.BYE_SEED))
        if any(seed is None for seed in survivors):
            raise InvalidSeedingException(
                f"A {conference} survivor is missing from the seeding", conference=conference
            )
        return sorted(survivors, key=lambda s: s.seed)

    def _reseed(
        self,
        survivors: List[PlayoffSeed],
        season: int,
        playoff_round: PlayoffRound,
        conference: str
    ) -> List[PlayoffMatchup]:
        """Pair lowest remaining seed with highest, working inward."""
        matchups = []
        low, high = 0, len(survivors) - 1
        game_number = 1
        while low < high:
            matchups.append(self._create_matchup(
                season, playoff_round, conference, game_number,
                survivors[low], survivors[high]
            ))
            low += 1
            high -= 1
            game_number += 1
        return matchups

    def _create_super_bowl(
        self,
        conference_games: Sequence[PlayoffMatchup],
        seeding: PlayoffSeeding
    ) -> PlayoffMatchup:
        champions = {m.conference: m.winner_id for m in conference_games}
        if set(champions) != {AFC, NFC}:
            raise InvalidRoundException(
                PlayoffRound.CONFERENCE.value,
                message="Super Bowl needs one AFC and one NFC champion"
            )
        # Neutral site: the NFC champion is listed as home
        nfc_seed = seeding.nfc.get_seed_by_team(champions[NFC])
        afc_seed = seeding.afc.get_seed_by_team(champions[AFC])
        return PlayoffMatchup(
            matchup_id=f"{seeding.season}_{PlayoffRound.SUPER_BOWL.value}_1",
            round=PlayoffRound.SUPER_BOWL,
            conference=None,
            home_seed=nfc_seed.seed,
            away_seed=afc_seed.seed,
            home_team_id=nfc_seed.team_id,
            away_team_id=afc_seed.team_id,
        )

    @staticmethod
    def _create_matchup(
        season: int,
        playoff_round: PlayoffRound,
        conference: str,
        game_number: int,
        home: PlayoffSeed,
        away: PlayoffSeed
    ) -> PlayoffMatchup:
        return PlayoffMatchup(
            matchup_id=f"{season}_{playoff_round.value}_{conference.lower()}_{game_number}",
            round=playoff_round,
            conference=conference,
            home_seed=home.seed,
            away_seed=away.seed,
            home_team_id=home.team_id,
            away_team_id=away.team_id,
        )
