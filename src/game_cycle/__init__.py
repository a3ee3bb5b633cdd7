"""
Game Cycle - week-by-week season progression.

Simulates regular season and playoff weeks through an injectable game
simulator and folds results, injuries and playoff progression into the
league snapshot before advancing the calendar.
"""

from .game_simulator import GameSimulator, InstantGameSimulator, SimulatedGame
from .models.injury_models import InjuryReport
from .week_orchestrator import WeekOrchestrator, WeekResult, simulate_week

__all__ = [
    "GameSimulator",
    "InstantGameSimulator",
    "SimulatedGame",
    "InjuryReport",
    "WeekOrchestrator",
    "WeekResult",
    "simulate_week",
]
