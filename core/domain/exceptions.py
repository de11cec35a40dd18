"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. The HTTP layer maps each
family to a status code (see api.exceptions).
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class DomainValidationError(DomainException):
    """Raised when input is malformed or missing."""

    def __init__(self, message: str = "Invalid input", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class NotFoundError(DomainException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class StateConflictError(DomainException):
    """Raised when an operation is invalid for the entity's current state."""

    def __init__(self, message: str = "Invalid state", code: str = "STATE_CONFLICT"):
        super().__init__(message, code=code)


class ResourceExhaustedError(DomainException):
    """Raised when a quota or limit has been reached."""

    def __init__(self, message: str = "Limit exceeded", code: str = "RESOURCE_EXHAUSTED"):
        super().__init__(message, code=code)


class DuplicateError(DomainException):
    """Raised when a uniqueness rule would be violated."""

    def __init__(self, message: str = "Resource already exists", code: str = "DUPLICATE"):
        super().__init__(message, code=code)


class AuthenticationError(DomainException):
    """Raised when credentials or tokens are missing or invalid."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHENTICATED"):
        super().__init__(message, code=code)


class ForbiddenError(DomainException):
    """Raised when the caller is authenticated but not allowed."""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


# Licenses


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseRevokedError(StateConflictError):
    """Raised when an operation targets a revoked license."""

    def __init__(self, message: str = "License is revoked"):
        super().__init__(message, code="LICENSE_REVOKED")


class LicenseExpiredError(StateConflictError):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License is expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


class LicensePausedError(StateConflictError):
    """Raised when a paused license is used by a client."""

    def __init__(self, message: str = "License is paused"):
        super().__init__(message, code="LICENSE_PAUSED")


class DeviceLimitExceededError(ResourceExhaustedError):
    """Raised when binding a new device would exceed the device limit."""

    def __init__(self, message: str = "Device limit exceeded"):
        super().__init__(message, code="DEVICE_LIMIT_EXCEEDED")


class DuplicateSerialError(DuplicateError):
    """Raised when serial generation keeps colliding with stored serials."""

    def __init__(self, message: str = "Could not allocate a unique serial"):
        super().__init__(message, code="DUPLICATE_SERIAL")


# Plans and currencies


class PlanNotFoundError(NotFoundError):
    """Raised when a plan is not found."""

    def __init__(self, message: str = "Plan not found"):
        super().__init__(message, code="PLAN_NOT_FOUND")


class NoActivePlanError(StateConflictError):
    """Raised when no active plan can be assigned."""

    def __init__(self, message: str = "No active plans found to assign license."):
        super().__init__(message, code="NO_ACTIVE_PLAN")


class CurrencyNotFoundError(NotFoundError):
    """Raised when a currency is not found."""

    def __init__(self, message: str = "Currency not found"):
        super().__init__(message, code="CURRENCY_NOT_FOUND")


# Clinics


class ClinicNotFoundError(NotFoundError):
    """Raised when a clinic is not found."""

    def __init__(self, message: str = "Clinic not found"):
        super().__init__(message, code="CLINIC_NOT_FOUND")


class ClinicAlreadyApprovedError(StateConflictError):
    """Raised when approving a clinic that is already approved."""

    def __init__(self, message: str = "Clinic already approved"):
        super().__init__(message, code="CLINIC_ALREADY_APPROVED")


class InvalidClinicStatusError(StateConflictError):
    """Raised when a clinic transition is invalid for its status."""

    def __init__(self, message: str = "Invalid clinic status"):
        super().__init__(message, code="INVALID_CLINIC_STATUS")


# Accounts


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials do not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when a refresh token is invalid, expired or revoked."""

    def __init__(self, message: str = "Invalid refresh token"):
        super().__init__(message, code="INVALID_TOKEN")


class AccountInactiveError(ForbiddenError):
    """Raised when a user or its clinic is not approved."""

    def __init__(self, message: str = "Account is not active"):
        super().__init__(message, code="ACCOUNT_INACTIVE")


# Back office


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification is not found."""

    def __init__(self, message: str = "Notification not found"):
        super().__init__(message, code="NOTIFICATION_NOT_FOUND")


class AppVersionNotFoundError(NotFoundError):
    """Raised when an app version is not found."""

    def __init__(self, message: str = "Version not found"):
        super().__init__(message, code="VERSION_NOT_FOUND")


class TicketNotFoundError(NotFoundError):
    """Raised when a support ticket is not found."""

    def __init__(self, message: str = "Ticket not found"):
        super().__init__(message, code="TICKET_NOT_FOUND")


class SupportMessageNotFoundError(NotFoundError):
    """Raised when a support message is not found."""

    def __init__(self, message: str = "Support message not found"):
        super().__init__(message, code="SUPPORT_MESSAGE_NOT_FOUND")


class TrafficLogNotFoundError(NotFoundError):
    """Raised when a traffic log entry is not found."""

    def __init__(self, message: str = "Log not found"):
        super().__init__(message, code="TRAFFIC_LOG_NOT_FOUND")
