class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AttendanceRuleError(ValidationError):
    """Raised when a check-in/check-out breaks an attendance rule."""


class AlreadyCheckedInError(AttendanceRuleError):
    pass


class AlreadyCheckedOutError(AttendanceRuleError):
    pass


class CheckinWindowClosedError(AttendanceRuleError):
    pass


class ShiftNotAllowedError(AttendanceRuleError):
    pass


class NothingToExportError(DomainError):
    """Raised when an export would produce an empty sheet."""


class BackendError(Exception):
    """Raised when the data store fails to answer a query or a write."""
