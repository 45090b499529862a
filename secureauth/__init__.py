"""
SecureAuth - Local Credential Manager

Registers users with a strong password and verifies logins against salted
Argon2id hashes kept in a flat text file.

Components:
- strength.py: Password policy and 0-100 strength score
- crypto.py: Salt generation, Argon2id hashing, verification
- store.py: username -> (hash, salt) file with write-through saves
- workflows.py: Registration and login on top of the three above
- config.py: Cost profiles, paths, environment overrides
- errors.py: Exception types

Usage:
    python auth_main.py                              # Interactive menu
    SECUREAUTH_PROFILE=fast-dev python auth_main.py  # Cheap hashing for dev
"""

from .crypto import CredentialHasher
from .errors import (
    CredentialNotFoundError,
    DuplicateUsernameError,
    HashingError,
    HashMismatchError,
    InitializationError,
    SecureAuthError,
    ValidationError,
)
from .store import CredentialRecord, CredentialStore

__version__ = "0.1.0"
__author__ = "SecureAuth Team"
