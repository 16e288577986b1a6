"""
Domain exceptions for the scam-report backend.

Services and the authentication module raise these instead of HTTP errors;
the handlers registered in main.py translate each family to a status code.
Every exception carries the request correlation ID so a failure can be
matched against the logs.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        correlation_id: Request correlation ID, or a fresh one outside a request.
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a requested resource does not exist."""


class PermissionDeniedException(DomainException):
    """Raised when the caller is identified but not allowed to act."""


class ValidationException(DomainException):
    """
    Raised when submitted data is missing or malformed.

    Attributes:
        fields: Names of the offending request fields, echoed to the client.
    """

    def __init__(
        self,
        message: str,
        fields: list[str] | None = None,
        correlation_id: str | None = None,
    ):
        self.fields = fields or []
        super().__init__(message, correlation_id)


class ConflictException(DomainException):
    """Raised when an operation conflicts with existing data."""


class AlreadyExistsException(DomainException):
    """Raised when creating a resource that already exists."""


class AuthenticationException(DomainException):
    """Raised when no usable identity is present."""


class StorageException(DomainException):
    """Raised when the database refuses a write after recovery attempts."""


# Specific exceptions for domain entities


class UserNotFoundException(NotFoundException):
    """User not found."""


class UserAlreadyExistsException(AlreadyExistsException):
    """Email already registered."""


class UsernameTakenException(AlreadyExistsException):
    """Username already in use."""


class ScamReportNotFoundException(NotFoundException):
    """Scam report not found."""


class ConsolidatedScamNotFoundException(NotFoundException):
    """Consolidated scam not found."""


class LawyerProfileNotFoundException(NotFoundException):
    """Lawyer profile not found."""


class LawyerRequestNotFoundException(NotFoundException):
    """Lawyer request not found."""


class ScamVideoNotFoundException(NotFoundException):
    """Scam video not found."""


class UploadedFileNotFoundException(NotFoundException):
    """Stored proof file not found."""


class InvalidCredentialsException(AuthenticationException):
    """Invalid email or password."""


class SessionExpiredException(AuthenticationException):
    """Bearer token has expired."""


class InsufficientPermissionsException(PermissionDeniedException):
    """Caller lacks the admin capability."""


class ReportNotAvailableException(PermissionDeniedException):
    """Report is unpublished and the caller may not see it."""

    def __init__(self, correlation_id: str | None = None):
        super().__init__("This report is not available", correlation_id)


class MissingFieldsException(ValidationException):
    """Required submission fields are absent or blank."""

    def __init__(self, fields: list[str], correlation_id: str | None = None):
        super().__init__("Missing required fields", fields, correlation_id)


class ReportAlreadyConsolidatedException(ConflictException):
    """A report is already linked to a consolidated scam."""

    def __init__(self, report_id: int, correlation_id: str | None = None):
        self.report_id = report_id
        super().__init__(
            f"Scam report {report_id} is already linked to a consolidated scam",
            correlation_id,
        )


class LawyerProfileExistsException(ValidationException):
    """User already has a lawyer profile."""

    def __init__(self, correlation_id: str | None = None):
        super().__init__("User already has a lawyer profile", [], correlation_id)
