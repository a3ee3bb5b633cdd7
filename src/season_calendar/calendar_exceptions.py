"""
Calendar Exception Classes

Errors raised when a calendar value breaks the phase/week/sub-phase rules.
"""

from typing import Any, Dict, Optional


class CalendarException(Exception):
    """
    Base exception for all calendar errors.

    Provides error code support and structured error messages.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize calendar exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Calendar fields involved in the failure
        """
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class CalendarInvariantError(CalendarException, ValueError):
    """
    Raised when a Calendar is constructed in an impossible state.

    Examples:
    - Offseason without a sub-phase, or a sub-phase outside 1..12
    - A sub-phase set while the phase is not Offseason
    - Playoffs at week 5, RegularSeason at week 19
    """

    def __init__(self, message: str, **context):
        super().__init__(message, error_code="CALENDAR_INVARIANT", context=context)
