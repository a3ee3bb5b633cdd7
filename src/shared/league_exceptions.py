"""
League State Exception Hierarchy

Exceptions raised while folding results or actions into a league snapshot.

Exception Hierarchy:
    LeagueException (base)
    ├── DataIntegrityError
    └── InvalidTransitionError

DataIntegrityError means a referenced team, player or game does not exist
(or a result is impossible). It aborts the whole pending fold; the previous
snapshot is never modified because transitions build a new one.

InvalidTransitionError is a caller bug: work was requested out of order,
such as simulating a week outside the season or leaving an offseason phase
with required tasks still open.
"""

from datetime import datetime
from typing import Any, Dict, Optional


class LeagueException(Exception):
    """
    Base exception for league snapshot errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        context: Identifiers involved (season, week, team_id, player_id, ...)
        operation: What operation was being performed
        recovery_strategy: How the caller should recover
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "LEAGUE_000",
        context: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        recovery_strategy: str = "abort",
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.operation = operation
        self.recovery_strategy = recovery_strategy
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build error message with all context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.operation:
            lines.append(f"Operation: {self.operation}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.recovery_strategy:
            lines.append(f"Recovery: {self.recovery_strategy}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {self.original_exception}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "context": self.context,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class DataIntegrityError(LeagueException):
    """
    Raised when a result or action references data that does not exist.

    Examples:
    - Simulator result for a team id that is not in the league
    - Injury report for a player not on the reported team
    - A playoff game that ended in a tie
    """

    def __init__(self, message: str, operation: Optional[str] = None, **context):
        super().__init__(
            message=message,
            error_code="LEAGUE_INTEGRITY_001",
            context=context,
            operation=operation,
            recovery_strategy="fix input and retry"
        )


class InvalidTransitionError(LeagueException):
    """
    Raised when a transition is requested before its preconditions hold.

    Examples:
    - Simulating a week while the calendar is in the offseason
    - Initializing the offseason while regular-season games remain unplayed
    - Advancing an offseason phase whose required tasks are incomplete
    """

    def __init__(self, message: str, operation: Optional[str] = None, **context):
        super().__init__(
            message=message,
            error_code="LEAGUE_TRANSITION_001",
            context=context,
            operation=operation,
            recovery_strategy="fix caller sequencing"
        )
