from typing import Any, Mapping, Optional


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class IneligibleSkipWindowError(ServiceValidationError):
    """Raised when a mess cut is requested inside the advance-notice window."""

    def __init__(self, message: str = "Mess cut requests must be made at least 12 hours in advance", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = "INELIGIBLE_SKIP_WINDOW"):
        super().__init__(message, details, code)


class NotFoundError(Exception):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class DeliveryNotFoundError(NotFoundError):
    """Raised when no delivery row matches the requested subscription/date/slot or id."""

    def __init__(self, message: str = "Delivery not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = "DELIVERY_NOT_FOUND"):
        super().__init__(message, details, code)


class ConflictError(Exception):
    """Raised when a resource conflict occurs (e.g., duplicate entry).

    Attributes are similar to ServiceValidationError. http_status is 409.
    """

    http_status = 409

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class DataIntegrityError(Exception):
    """Raised when related rows that must exist are missing.

    Used when a skipped delivery cannot be joined back to its subscription
    or mess. The underlying cause is kept in ``details``. http_status is 500.
    """

    http_status = 500

    def __init__(self, message: str = "Data integrity error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = "DATA_INTEGRITY_ERROR"):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message

