"""Game cycle models for the injury system."""

from .injury_models import (
    InjuryType,
    BodyPart,
    InjuryReport,
    INJURY_TYPE_TO_BODY_PART,
    INJURY_TYPE_WEEKS,
    INJURY_TYPE_WEIGHTS,
    POSITION_INJURY_WEIGHTS,
)

__all__ = [
    'InjuryType',
    'BodyPart',
    'InjuryReport',
    'INJURY_TYPE_TO_BODY_PART',
    'INJURY_TYPE_WEEKS',
    'INJURY_TYPE_WEIGHTS',
    'POSITION_INJURY_WEIGHTS',
]
