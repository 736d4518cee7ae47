"""Domain error taxonomy.

Every error carries the HTTP status it maps to and a stable ``code`` that is
returned to clients in the ``error`` field of the response envelope.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "Internal"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# === 400 ===


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "ValidationError"
    default_message = "Invalid request"


class InvalidOrExpiredOtp(ValidationFailed):
    code = "InvalidOrExpiredOtp"
    default_message = "Invalid or expired verification code"


class NoPendingOtp(ValidationFailed):
    code = "NoPendingOtp"
    default_message = "No verification code pending. Please request a new one."


class MissingOwner(ValidationFailed):
    code = "MissingOwner"
    default_message = "Admin must provide seller_id when creating this resource"


class AlreadyHasSellerProfile(ValidationFailed):
    code = "AlreadyHasSellerProfile"
    default_message = "User already has a seller profile"


class RoleNotEligible(ValidationFailed):
    code = "RoleNotEligible"
    default_message = "Admins cannot create a seller profile"


class SelfModificationForbidden(ValidationFailed):
    code = "SelfModificationForbidden"
    default_message = "You cannot modify your own account this way"


# === 401 ===


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "Unauthenticated"
    default_message = "Not authenticated"


class InvalidCredentials(Unauthenticated):
    code = "InvalidCredentials"
    default_message = "Invalid credentials"


class InvalidToken(Unauthenticated):
    code = "InvalidToken"
    default_message = "Invalid identity token"


# === 403 ===


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "Forbidden"
    default_message = "Access denied"


class OwnershipViolation(Forbidden):
    code = "OwnershipViolation"
    default_message = "Access denied. You can only manage your own resources."


class EmailNotVerified(Forbidden):
    code = "EmailNotVerified"
    default_message = "Email address has not been verified"


# === 404 ===


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NotFound"
    default_message = "Resource not found"


class NoSellerProfile(NotFound):
    code = "NoSellerProfile"
    default_message = "User has no seller profile"


# === 409 ===


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "Conflict"
    default_message = "Resource already exists"


class DuplicateIdentity(Conflict):
    code = "DuplicateIdentity"
    default_message = "An account with this identity already exists"


# === 429 ===


class TooManyOtpAttempts(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "TooManyOtpAttempts"
    default_message = "Too many verification attempts. Please request a new code."


# === 5xx ===


class UpstreamFailure(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "UpstreamFailure"
    default_message = "An external service failed"


class ProviderNotConfigured(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "ProviderNotConfigured"
    default_message = "Google sign-in is not configured"


# === Database constraint mapping ===

_UNIQUE_MARKERS = ("unique", "duplicate key")
_INVALID_MARKERS = ("not null", "not-null", "null value", "foreign key")


def from_integrity_error(exc: Exception) -> AppError:
    """Map a database constraint violation to the client-facing error."""
    detail = str(getattr(exc, "orig", exc)).lower()
    if any(marker in detail for marker in _UNIQUE_MARKERS):
        return Conflict("Duplicate value for a unique field")
    if any(marker in detail for marker in _INVALID_MARKERS):
        return ValidationFailed("Missing or invalid reference in request")
    return AppError()
