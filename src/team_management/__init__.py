"""
Team Management

Deterministic league construction: teams, rosters, contracts, coaches and
the player pools the offseason draws from.
"""

from .league_factory import LeagueFactory, create_league, next_player_id

__all__ = ['LeagueFactory', 'create_league', 'next_player_id']
