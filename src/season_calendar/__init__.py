"""
Season calendar: the {year, week, phase, offseason_subphase} state machine.

Usage:
    from season_calendar import Calendar, SeasonPhase, advance

    calendar = Calendar(year=2025, week=18, phase=SeasonPhase.REGULAR_SEASON)
    advance(calendar)  # 2025 Playoffs Week 19
"""

from .calendar_models import Calendar, SeasonPhase
from .calendar_clock import CalendarClock, advance
from .calendar_exceptions import CalendarException, CalendarInvariantError

__all__ = [
    'Calendar',
    'SeasonPhase',
    'CalendarClock',
    'advance',
    'CalendarException',
    'CalendarInvariantError',
]
