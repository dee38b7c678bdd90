"""Error taxonomy shared by the REST and gRPC surfaces.

Every store and extractor failure is raised as a ``CompanyServiceError``
subclass. The REST layer converts them to ``{"message": ..., **details}``
responses with ``status_code``; nothing crosses the boundary unconverted.
"""

from typing import Any


class CompanyServiceError(Exception):
    """Base exception for all company service errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {"message": self.message, **self.details}


class BadRequest(CompanyServiceError):
    """Raised when the request itself is malformed (missing query, non-object body)."""

    status_code = 400
    default_message = "Bad request"


class ValidationError(BadRequest):
    """Raised when entity fields violate their constraints.

    Carries the full list of violations, not just the first one.
    """

    default_message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]], message: str | None = None) -> None:
        super().__init__(message, details={"errors": errors})
        self.errors = errors


class Unauthorized(CompanyServiceError):
    """Raised when the caller identity cannot be resolved."""

    status_code = 401
    default_message = "Unauthorized"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(CompanyServiceError):
    """Raised when an entity exists but belongs to another identity."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(CompanyServiceError):
    """Raised when an entity is absent, or not owned in single-step lookups."""

    status_code = 404
    default_message = "Not found"


class Conflict(CompanyServiceError):
    """Raised when a delete would orphan dependent records."""

    status_code = 409
    default_message = "Conflict"


class UpstreamError(CompanyServiceError):
    """Raised when the external company directory call fails.

    ``status_code`` mirrors the upstream status when one was received.
    """

    default_message = "Error fetching companies from external API"

    def __init__(self, status_code: int | None, detail: str) -> None:
        super().__init__(details={"details": detail})
        self.status_code = status_code or 500
