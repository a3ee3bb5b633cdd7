"""
Offseason Phase Tasks

Every phase carries a checklist. Required tasks gate
``advance_to_next_phase``; optional ones are informational.

Validated tasks can only be completed once their condition holds against
the league (e.g. every roster at or under the limit for ``cut_to_53``).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .offseason_phases import OffseasonPhase


class TaskKind(Enum):
    """How a task gets completed."""
    REVIEW = "review"        # Completed by acknowledging it
    ACTION = "action"        # Completed by a successful dispatched action
    VALIDATE = "validate"    # Completed only when its condition holds


@dataclass(frozen=True)
class PhaseTask:
    task_id: str
    name: str
    is_required: bool
    kind: TaskKind = TaskKind.REVIEW
    condition: Optional[str] = None     # Name of the validation rule for VALIDATE tasks


# Validation rule names understood by the orchestrator
DRAFT_COMPLETE = "draft_complete"
ROSTERS_WITHIN_LIMIT = "rosters_within_limit"


PHASE_TASKS: Dict[OffseasonPhase, Tuple[PhaseTask, ...]] = {
    OffseasonPhase.SEASON_END: (
        PhaseTask("view_recap", "Review the season recap", True),
        PhaseTask("view_awards", "See the season awards", False),
        PhaseTask("view_draft_order", "Check the draft order", False),
    ),
    OffseasonPhase.COACHING_DECISIONS: (
        PhaseTask("review_staff", "Evaluate the coaching staff", True),
        PhaseTask("make_changes", "Hire or fire coaches", False, TaskKind.ACTION),
    ),
    OffseasonPhase.CONTRACT_MANAGEMENT: (
        PhaseTask("review_cap", "Review cap space and expiring deals", True),
        PhaseTask("contract_moves", "Cut, restructure, extend or tag players", False, TaskKind.ACTION),
    ),
    OffseasonPhase.COMBINE: (
        PhaseTask("view_prospects", "Review combine results", True),
    ),
    OffseasonPhase.FREE_AGENCY: (
        PhaseTask("review_market", "Review the free agent market", True),
        PhaseTask("sign_players", "Sign free agents", False, TaskKind.ACTION),
    ),
    OffseasonPhase.DRAFT: (
        PhaseTask("make_picks", "Make every draft selection", True,
                  TaskKind.VALIDATE, DRAFT_COMPLETE),
    ),
    OffseasonPhase.UDFA: (
        PhaseTask("review_udfa", "Review undrafted free agents", True),
        PhaseTask("sign_udfa", "Sign undrafted free agents", False, TaskKind.ACTION),
    ),
    OffseasonPhase.OTAS: (
        PhaseTask("view_reports", "Read OTA reports", True),
    ),
    OffseasonPhase.TRAINING_CAMP: (
        PhaseTask("view_battles", "Review position battles", True),
    ),
    OffseasonPhase.PRESEASON: (
        PhaseTask("sim_games", "Play the exhibition schedule", True),
    ),
    OffseasonPhase.FINAL_CUTS: (
        PhaseTask("cut_to_53", "Cut every roster to the limit", True,
                  TaskKind.VALIDATE, ROSTERS_WITHIN_LIMIT),
    ),
    OffseasonPhase.SEASON_START: (
        PhaseTask("view_expectations", "Review owner expectations", True),
    ),
}


def tasks_for(phase: OffseasonPhase) -> Tuple[PhaseTask, ...]:
    return PHASE_TASKS[phase]


def required_task_ids(phase: OffseasonPhase) -> Tuple[str, ...]:
    return tuple(task.task_id for task in PHASE_TASKS[phase] if task.is_required)


def find_task(phase: OffseasonPhase, task_id: str) -> Optional[PhaseTask]:
    for task in PHASE_TASKS[phase]:
        if task.task_id == task_id:
            return task
    return None
