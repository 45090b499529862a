"""
SecureAuth - Error Types

Every failure the core can report has its own exception class so the
workflows can decide what to show the user. All of them derive from
SecureAuthError.
"""


class SecureAuthError(Exception):
    """Base class for all SecureAuth errors."""


class ValidationError(SecureAuthError):
    """Username or password input was rejected. The user is re-prompted."""


class DuplicateUsernameError(ValidationError):
    """The username is already registered."""


class CredentialNotFoundError(SecureAuthError):
    """No record exists for the requested username."""


class HashMismatchError(SecureAuthError):
    """The password does not match the stored hash."""


class HashingError(SecureAuthError):
    """The key derivation function failed (bad salt, out of memory, ...)."""


class InitializationError(SecureAuthError):
    """The cryptographic backend is unusable. Startup must abort."""
