"""Domain layer errors."""

from typing import Final

# Public error catalogue: code -> human readable message.
ERROR_CODES: Final[dict[str, str]] = {
    "USER_NOT_LOGGED_IN": "User must be logged in to create an invite",
    "INSUFFICIENT_PERMISSIONS": "User does not have sufficient permissions to create invite",
    "NO_SUCH_USER": "No such user",
    "NO_USES_LEFT_FOR_INVITE_CODE": "No uses left for invite code",
    "INVALID_OR_EXPIRED_INVITE": "Invalid or expired invite code",
    "INVITE_REQUIRED": "An invite code is required to sign up",
}


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateInviteCodeError(DomainError):
    """Raised when a generated code collides with an existing invite."""

    pass


class InviteError(DomainError):
    """Base for errors surfaced to clients with a stable error code."""

    code: str = ""

    def __init__(self, message: str | None = None):
        super().__init__(message or ERROR_CODES[self.code])

    @property
    def message(self) -> str:
        return str(self)


class AuthorizationError(InviteError):
    """Caller may not perform the operation. Never retried."""


class NotAuthenticatedError(AuthorizationError):
    code = "USER_NOT_LOGGED_IN"


class NoSuchUserError(AuthorizationError):
    code = "NO_SUCH_USER"


class InsufficientPermissionsError(AuthorizationError):
    code = "INSUFFICIENT_PERMISSIONS"


class InviteValidationError(InviteError):
    """Invite code is not currently redeemable."""


class InvalidOrExpiredInviteError(InviteValidationError):
    """Covers both unknown and expired codes so existence is never leaked."""

    code = "INVALID_OR_EXPIRED_INVITE"


class NoUsesLeftError(InviteValidationError):
    code = "NO_USES_LEFT_FOR_INVITE_CODE"


class InviteRequiredError(InviteValidationError):
    code = "INVITE_REQUIRED"


class EmailAlreadyRegisteredError(ValidationError):
    """Raised when signing up with an email that already has an account."""

    pass


class InvalidCredentialsError(DomainError):
    """Raised when an email/password pair does not match an account."""

    pass
