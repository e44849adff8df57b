from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, raw model output)
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "SERVICE_ERROR"

    def __init__(self, message: str = "Service error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class NotFoundError(ServiceError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class ConflictError(ServiceError):
    """Raised when a resource conflict occurs (e.g., duplicate id)."""

    http_status = 409
    default_code = "CONFLICT"

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class AIUnavailableError(ServiceError):
    """Raised when an AI endpoint is called without a configured API key."""

    http_status = 503
    default_code = "AI_NOT_CONFIGURED"

    def __init__(self, message: str = "AI service not configured. Please set GEMINI_API_KEY environment variable.", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class AIResponseError(ServiceError):
    """Raised when the model call fails or its output cannot be used.

    When the output was not valid JSON the raw text is kept in ``details["raw"]``
    so callers can see what the model actually said.
    """

    http_status = 500
    default_code = "AI_RESPONSE_ERROR"

    def __init__(self, message: str = "AI response could not be processed", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)
