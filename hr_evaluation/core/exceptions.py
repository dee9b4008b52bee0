from typing import Any, Dict, Optional


class AppException(Exception):
    def __init__(
        self,
        message: str,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class InvalidRecordError(AppException):
    """Raised (or collected) for an evaluation record that fails validation."""
    def __init__(self, index: int, payload: Any, reason: str):
        self.index = index
        self.payload = payload
        super().__init__(
            message=f"Invalid evaluation record at position {index}: {reason}",
            error_code="INVALID_RECORD",
            details={"index": index, "reason": reason}
        )


class ConfigurationError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="INVALID_CONFIGURATION",
            details=details
        )


class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            error_code="PERMISSION_DENIED"
        )
