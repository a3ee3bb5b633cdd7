"""
Playoff System Exception Hierarchy

Exception Hierarchy:
    PlayoffException (base)
    ├── InvalidRoundException
    ├── InvalidSeedingException
    └── InvalidBracketException

All exceptions include:
- error_code: Unique identifier for programmatic handling
- severity: CRITICAL, ERROR, WARNING, INFO
- recovery_strategy: ABORT, RETRY, SKIP, ROLLBACK, RESET
- context_dict: Relevant context (season, round, conference, ...)
- original_exception: Wrapped exception if from try/except
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ExceptionSeverity(Enum):
    """Severity levels for exceptions"""
    CRITICAL = "critical"  # Bracket unusable, abort
    ERROR = "error"        # Operation failed, cannot continue
    WARNING = "warning"    # Potential issue, can continue with caution
    INFO = "info"


class RecoveryStrategy(Enum):
    """Recovery strategies for exception handling"""
    ABORT = "abort"
    RETRY = "retry"
    SKIP = "skip"
    ROLLBACK = "rollback"    # Keep the previous snapshot
    RESET = "reset"          # Regenerate seeding from standings


class PlayoffException(Exception):
    """
    Base exception for all playoff system errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code (e.g., "PLAYOFF_001")
        severity: Exception severity level
        recovery_strategy: Recommended recovery action
        context_dict: Additional context (season, round, ...)
        original_exception: Original exception if wrapping another exception
        timestamp: When the exception was raised
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PLAYOFF_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT,
        context_dict: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.recovery_strategy = recovery_strategy
        self.context_dict = context_dict or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        lines = [
            f"[{self.error_code}] {self.message}",
            f"Severity: {self.severity.value}",
            f"Recovery: {self.recovery_strategy.value}",
        ]

        context = {k: v for k, v in self.context_dict.items() if v is not None}
        if context:
            lines.append("Context:")
            for key, value in context.items():
                lines.append(f"  {key}: {value}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {self.original_exception}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recovery_strategy": self.recovery_strategy.value,
            "context": self.context_dict,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidRoundException(PlayoffException):
    """
    Raised when a round is requested out of order.

    Examples:
    - Advancing from a round whose games are not all complete
    - Advancing past the Super Bowl
    """

    def __init__(
        self,
        round_name: str,
        message: Optional[str] = None,
        valid_rounds: Optional[List[str]] = None,
        **kwargs
    ):
        context = {
            "invalid_round": round_name,
            "valid_rounds": valid_rounds,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message or f"Invalid playoff round: '{round_name}'",
            error_code="PLAYOFF_ROUND_001",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidSeedingException(PlayoffException):
    """
    Raised when seeding cannot be produced from the given standings.

    Examples:
    - A conference with fewer than seven teams
    - A division with no teams
    - Not exactly seven seeds handed to bracket generation
    """

    def __init__(
        self,
        message: str,
        conference: Optional[str] = None,
        seed_number: Optional[int] = None,
        team_id: Optional[int] = None,
        **kwargs
    ):
        context = {
            "conference": conference,
            "seed_number": seed_number,
            "team_id": team_id,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_SEED_002",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.RESET,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidBracketException(PlayoffException):
    """
    Raised when playoff bracket structure is invalid.

    Examples:
    - Wrong number of games per round (6, 4, 2, 1)
    - Uneven conference split outside the Super Bowl
    - A team appearing twice in one round
    """

    def __init__(
        self,
        message: str,
        round_name: Optional[str] = None,
        **kwargs
    ):
        context = {
            "round": round_name,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_BRACKET_003",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.RESET,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )
