"""
Calendar Clock

The only place calendar transitions are defined. ``advance`` is total and
pure: every legal Calendar maps to exactly one legal successor.

    RegularSeason 1..18  ->  Playoffs 19
    Playoffs 19..22      ->  Offseason sub-phase 1
    Offseason 1..12      ->  Preseason week 1 of year + 1
    Preseason 1..4       ->  RegularSeason week 1

Callers (the week and offseason orchestrators) are responsible for only
advancing once the current week's work is done.
"""

import logging
from dataclasses import replace

from config.season_settings import SeasonSettings
from .calendar_models import Calendar, SeasonPhase


logger = logging.getLogger(__name__)


def advance(calendar: Calendar) -> Calendar:
    """
    Move the calendar one step forward.

    Args:
        calendar: Current calendar

    Returns:
        The next calendar (a new object; the input is untouched)
    """
    phase = calendar.phase

    if phase is SeasonPhase.REGULAR_SEASON:
        next_week = calendar.week + 1
        if next_week > SeasonSettings.REGULAR_SEASON_WEEKS:
            return replace(calendar, phase=SeasonPhase.PLAYOFFS,
                           week=SeasonSettings.FIRST_PLAYOFF_WEEK)
        return replace(calendar, week=next_week)

    if phase is SeasonPhase.PLAYOFFS:
        next_week = calendar.week + 1
        if next_week > SeasonSettings.LAST_PLAYOFF_WEEK:
            return replace(calendar, phase=SeasonPhase.OFFSEASON, week=1, offseason_subphase=1)
        return replace(calendar, week=next_week)

    if phase is SeasonPhase.OFFSEASON:
        next_subphase = calendar.offseason_subphase + 1
        if next_subphase > SeasonSettings.OFFSEASON_PHASE_COUNT:
            return Calendar(year=calendar.year + 1, week=1,
                            phase=SeasonPhase.PRESEASON, offseason_subphase=None)
        return replace(calendar, offseason_subphase=next_subphase)

    # Preseason
    next_week = calendar.week + 1
    if next_week > SeasonSettings.PRESEASON_WEEKS:
        return replace(calendar, phase=SeasonPhase.REGULAR_SEASON, week=1)
    return replace(calendar, week=next_week)


class CalendarClock:
    """
    Logging wrapper around ``advance``.

    Holds no calendar of its own; it exists so orchestrators can accept an
    injectable clock and so every transition leaves a debug trail.
    """

    def advance(self, calendar: Calendar) -> Calendar:
        next_calendar = advance(calendar)
        if next_calendar.phase is not calendar.phase:
            logger.info(f"Calendar phase change: {calendar} -> {next_calendar}")
        else:
            logger.debug(f"Calendar advanced: {calendar} -> {next_calendar}")
        return next_calendar
