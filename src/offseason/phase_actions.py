"""
Offseason Phase Actions

The closed set of actions the offseason orchestrator accepts. Each action
is a frozen record tagged with ``ACTION_TYPE`` and carrying the phase it
targets; dispatch rejects it unless that phase is current.

Wire format (UI/CLI layers):

    {"type": "apply_draft_selections", "phase": "draft",
     "selections": [{"team_id": 4, "player_id": 90001}]}

``action_from_dict`` validates such payloads before anything is applied.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple, Type

from persistence.snapshot_serializer import from_primitive, to_primitive
from .offseason_data import CoachingChangeType, ContractDecisionType
from .offseason_exceptions import ActionValidationError
from .offseason_phases import OffseasonPhase


@dataclass(frozen=True)
class OffseasonAction:
    """Base for every offseason action."""
    ACTION_TYPE: ClassVar[str] = ""
    COMPLETES_TASK: ClassVar[Optional[str]] = None

    @property
    def action_type(self) -> str:
        return self.ACTION_TYPE

    def to_dict(self) -> Dict[str, Any]:
        payload = to_primitive(self)
        return {"type": self.ACTION_TYPE, **payload}


@dataclass(frozen=True)
class CoachingChange:
    team_id: int
    change_type: CoachingChangeType
    coach_name: str
    experience_years: int = 0


@dataclass(frozen=True)
class ApplyCoachingChanges(OffseasonAction):
    """Hire, fire, promote or demote head coaches."""
    ACTION_TYPE: ClassVar[str] = "apply_coaching_changes"
    COMPLETES_TASK: ClassVar[Optional[str]] = "make_changes"

    changes: Tuple[CoachingChange, ...]
    phase: OffseasonPhase = OffseasonPhase.COACHING_DECISIONS


@dataclass(frozen=True)
class ApplyContractDecision(OffseasonAction):
    """
    Cut, restructure, extend or tag one player.

    ``new_salary`` is required for restructures; ``new_years`` for
    extensions (salary defaults to the current one).
    """
    ACTION_TYPE: ClassVar[str] = "apply_contract_decision"
    COMPLETES_TASK: ClassVar[Optional[str]] = "contract_moves"

    team_id: int
    player_id: int
    decision: ContractDecisionType
    new_salary: Optional[int] = None
    new_years: Optional[int] = None
    phase: OffseasonPhase = OffseasonPhase.CONTRACT_MANAGEMENT


@dataclass(frozen=True)
class ApplyFreeAgencySigning(OffseasonAction):
    """Sign a player from the free agent pool."""
    ACTION_TYPE: ClassVar[str] = "apply_free_agency_signing"
    COMPLETES_TASK: ClassVar[Optional[str]] = "sign_players"

    team_id: int
    player_id: int
    annual_salary: int
    years: int
    phase: OffseasonPhase = OffseasonPhase.FREE_AGENCY


@dataclass(frozen=True)
class AdvanceFreeAgencyDay(OffseasonAction):
    """Move the free agency day counter forward."""
    ACTION_TYPE: ClassVar[str] = "advance_free_agency_day"

    days: int = 1
    phase: OffseasonPhase = OffseasonPhase.FREE_AGENCY


@dataclass(frozen=True)
class DraftPick:
    team_id: int
    player_id: int


@dataclass(frozen=True)
class ApplyDraftSelections(OffseasonAction):
    """Make one or more consecutive draft picks, in draft order."""
    ACTION_TYPE: ClassVar[str] = "apply_draft_selections"
    COMPLETES_TASK: ClassVar[Optional[str]] = "make_picks"

    selections: Tuple[DraftPick, ...]
    phase: OffseasonPhase = OffseasonPhase.DRAFT


@dataclass(frozen=True)
class ApplyUdfaSigning(OffseasonAction):
    """Sign an undrafted prospect at the minimum salary."""
    ACTION_TYPE: ClassVar[str] = "apply_udfa_signing"
    COMPLETES_TASK: ClassVar[Optional[str]] = "sign_udfa"

    team_id: int
    player_id: int
    phase: OffseasonPhase = OffseasonPhase.UDFA


@dataclass(frozen=True)
class ApplyFinalCuts(OffseasonAction):
    """Release players to get a roster down to the limit."""
    ACTION_TYPE: ClassVar[str] = "apply_final_cuts"
    COMPLETES_TASK: ClassVar[Optional[str]] = "cut_to_53"

    team_id: int
    player_ids: Tuple[int, ...]
    phase: OffseasonPhase = OffseasonPhase.FINAL_CUTS


ACTION_CLASSES: Tuple[Type[OffseasonAction], ...] = (
    ApplyCoachingChanges,
    ApplyContractDecision,
    ApplyFreeAgencySigning,
    AdvanceFreeAgencyDay,
    ApplyDraftSelections,
    ApplyUdfaSigning,
    ApplyFinalCuts,
)

ACTION_TYPES: Dict[str, Type[OffseasonAction]] = {cls.ACTION_TYPE: cls for cls in ACTION_CLASSES}


def action_from_dict(payload: Dict[str, Any]) -> OffseasonAction:
    """
    Build an action from its wire format.

    Args:
        payload: {"type": ..., "phase": ..., **fields}

    Returns:
        The typed action

    Raises:
        ActionValidationError: Unknown type, missing phase, or bad fields
    """
    if not isinstance(payload, dict):
        raise ActionValidationError("Action payload must be an object", payload=None)

    action_type = payload.get("type")
    action_class = ACTION_TYPES.get(action_type)
    if action_class is None:
        raise ActionValidationError(
            f"Unknown action type {action_type!r}; expected one of {sorted(ACTION_TYPES)}",
            payload=payload
        )
    if "phase" not in payload:
        raise ActionValidationError(f"{action_type} payload is missing 'phase'", payload=payload)

    fields = {key: value for key, value in payload.items() if key != "type"}
    try:
        return from_primitive(action_class, fields)
    except (KeyError, TypeError, ValueError) as e:
        raise ActionValidationError(f"Invalid {action_type} payload: {e}", payload=payload) from e
