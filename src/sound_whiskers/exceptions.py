"""Custom exceptions for the Sound Whiskers client."""

from typing import Any, Dict, Optional


class SoundWhiskersError(Exception):
    """Base exception for all Sound Whiskers client errors."""

    pass


class ValidationError(SoundWhiskersError, ValueError):
    """Raised when a command fails client-side validation.

    Attributes:
        errors: Individual validation messages
    """

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ApiError(SoundWhiskersError):
    """Raised when the playlist service rejects a request.

    Attributes:
        status: HTTP status code (None for transport faults)
        code: Machine-readable error code from the service
        message: Human-readable error message
        details: Optional structured error details
    """

    def __init__(
        self,
        status: Optional[int],
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize API error.

        Args:
            status: HTTP status code, or None when no response was received
            code: Error code (e.g., "PRO_PLAN_REQUIRED", "INVALID_INPUT")
            message: Human-readable error message
            details: Optional structured details
        """
        self.status = status
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the service's error response shape."""
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}
