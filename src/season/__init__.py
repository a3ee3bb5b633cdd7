"""
Season Management System

Sequences the calendar, week simulation and offseason engines into a
repeatable year-over-year cycle.
"""

from .season_constants import SeasonConstants
from .season_cycle_controller import SeasonCycleController

__all__ = ['SeasonConstants', 'SeasonCycleController']
