"""
Custom exceptions for the Endurance Analytics engine.

Only genuinely malformed input raises. Metrics that cannot be computed for
lack of data return None or an empty collection, and reference lookups that
miss return None, so a dashboard stays usable with partial data.

Each exception carries:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Physiology errors
    THRESHOLD_VALIDATION_ERROR = "THRESHOLD_VALIDATION_ERROR"

    # Input data errors
    RECORD_VALIDATION_ERROR = "RECORD_VALIDATION_ERROR"


class EnduranceAnalyticsError(Exception):
    """
    Base exception for all Endurance Analytics errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(EnduranceAnalyticsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details=error_details,
        )
        self.field = field


class ThresholdValidationError(ValidationError):
    """Raised when heart rate inputs to the threshold estimator are implausible."""

    def __init__(
        self,
        message: str,
        max_hr: Optional[float] = None,
        resting_hr: Optional[float] = None,
    ) -> None:
        super().__init__(
            message=message,
            details={"max_hr": max_hr, "resting_hr": resting_hr},
            code=ErrorCode.THRESHOLD_VALIDATION_ERROR,
        )


class RecordValidationError(ValidationError):
    """Raised when a caller-supplied record cannot be coerced into a model."""

    def __init__(
        self,
        message: str,
        record_type: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["record_type"] = record_type
        super().__init__(
            message=message,
            details=error_details,
            code=ErrorCode.RECORD_VALIDATION_ERROR,
        )


# ============================================================================
# Configuration Errors (500)
# ============================================================================

class ConfigurationError(EnduranceAnalyticsError):
    """Raised when explicitly passed engine parameters are inconsistent."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            details={"parameter": parameter} if parameter else None,
        )
