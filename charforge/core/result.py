"""
Result object for error handling at charforge's boundaries.

Parsing and request handling return a Result instead of raising, so the
web and CLI layers can report problems without a traceback. The derivation
engine itself never fails for a well-formed build state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Machine-readable error classification."""

    # Input errors
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED_FIELD = "missing_required_field"

    # Rule data lookups
    UNKNOWN_CLASS = "unknown_class"
    UNKNOWN_BACKGROUND = "unknown_background"
    UNKNOWN_FEAT = "unknown_feat"
    UNKNOWN_SPELL = "unknown_spell"
    UNSUPPORTED_EDITION = "unsupported_edition"

    # Generic errors
    NOT_FOUND = "not_found"
    UNEXPECTED_ERROR = "unexpected_error"

    def __str__(self) -> str:
        return self.value


@dataclass
class Result:
    """
    Represents the result of an operation that can succeed or fail.

    Attributes:
        success: Whether the operation succeeded
        data: The result data if successful
        error: Error message if failed
        error_code: Machine-readable error code if failed

    Examples:
        >>> result = Result.ok({"proficiency_bonus": 2})
        >>> if result.success:
        ...     print(result.data)

        >>> result = Result.fail("Unknown class: Gunslinger", ErrorCode.UNKNOWN_CLASS)
        >>> if not result:
        ...     print(f"Error: {result.error}")
    """
    success: bool
    data: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @staticmethod
    def ok(data: Any = None) -> 'Result':
        """Create a successful result."""
        return Result(success=True, data=data)

    @staticmethod
    def fail(error: str, code: Optional[str | ErrorCode] = None) -> 'Result':
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            code: Machine-readable error code (ErrorCode enum or string)
        """
        error_code_str = code.value if isinstance(code, ErrorCode) else code
        return Result(success=False, error=error, error_code=error_code_str)

    def to_dict(self) -> dict:
        """JSON payload used by the web API."""
        if self.success:
            return {'success': True, 'data': self.data}
        return {'success': False, 'error': self.error, 'error_code': self.error_code}

    def __bool__(self) -> bool:
        """Allow using Result in boolean context: if result: ..."""
        return self.success
