"""
Scheduling Module

Seeded regular season schedule generation (18 weeks, 17 games per team,
one bye each). Playoff games are scheduled round by round by the week
orchestrator from the bracket.
"""

from .schedule_generator import RandomScheduleGenerator, create_schedule_generator

__all__ = ['RandomScheduleGenerator', 'create_schedule_generator']
