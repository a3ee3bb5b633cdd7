"""
Offseason Exception Hierarchy

Exception Hierarchy:
    OffseasonException (base)
    ├── WrongPhaseError          - returned in PhaseResult, recoverable
    ├── MissingDependencyError   - returned in PhaseResult, recoverable
    ├── CapViolationError        - returned in PhaseResult, recoverable
    └── ActionValidationError    - raised for malformed action payloads

InvalidTransitionError and DataIntegrityError live in
``shared.league_exceptions``; they are raised, never returned.

The recoverable errors are instances (so they carry codes and context for
the caller to show) but the orchestrator hands them back inside a result
instead of raising them.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from shared.league_exceptions import DataIntegrityError, InvalidTransitionError


class OffseasonException(Exception):
    """
    Base exception for offseason errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        phase: Phase the failure relates to
        context: Additional context (team_id, player_id, action type, ...)
        recovery_strategy: How the caller should recover
    """

    def __init__(
        self,
        message: str,
        error_code: str = "OFFSEASON_000",
        phase: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_strategy: str = "correct input and retry"
    ):
        self.message = message
        self.error_code = error_code
        self.phase = phase
        self.context = context or {}
        self.recovery_strategy = recovery_strategy
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        lines = [f"[{self.error_code}] {self.message}"]

        if self.phase:
            lines.append(f"Phase: {self.phase}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "phase": self.phase,
            "context": self.context,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
        }


class WrongPhaseError(OffseasonException):
    """Action or phase entry submitted against a phase that is not current."""

    def __init__(self, requested_phase: str, current_phase: str, action_type: Optional[str] = None):
        self.requested_phase = requested_phase
        self.current_phase = current_phase
        super().__init__(
            message=f"{action_type or 'Request'} targets {requested_phase} "
                    f"but the current phase is {current_phase}",
            error_code="OFFSEASON_WRONG_PHASE",
            phase=current_phase,
            context={"requested_phase": requested_phase, "action_type": action_type},
        )


class MissingDependencyError(OffseasonException):
    """
    Phase work requires data that has not been generated yet.

    Examples:
    - Entering the Draft before a draft order exists
    - Completing cut_to_53 while rosters are still over the limit
    """

    def __init__(self, message: str, phase: Optional[str] = None, dependency: Optional[str] = None):
        self.dependency = dependency
        super().__init__(
            message=message,
            error_code="OFFSEASON_MISSING_DEPENDENCY",
            phase=phase,
            context={"dependency": dependency},
        )


class CapViolationError(OffseasonException):
    """Contract or signing action rejected by the cap calculator."""

    def __init__(self, message: str, team_id: int, cap_delta: int, cap_space: int, phase: Optional[str] = None):
        self.team_id = team_id
        self.cap_delta = cap_delta
        self.cap_space = cap_space
        super().__init__(
            message=message,
            error_code="OFFSEASON_CAP_VIOLATION",
            phase=phase,
            context={"team_id": team_id, "cap_delta": cap_delta, "cap_space": cap_space},
        )


class ActionValidationError(OffseasonException, ValueError):
    """Action payload is malformed (unknown type, missing or invalid field)."""

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="OFFSEASON_INVALID_ACTION",
            context={"payload": payload},
            recovery_strategy="fix the payload",
        )


__all__ = [
    'OffseasonException',
    'WrongPhaseError',
    'MissingDependencyError',
    'CapViolationError',
    'ActionValidationError',
    'InvalidTransitionError',
    'DataIntegrityError',
]
