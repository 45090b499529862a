"""
SecureAuth - Cryptography Module

All password hashing lives here. It is designed to be:
- Easy to follow (one class, four operations)
- Minimal dependencies (only the 'cryptography' library)
- Secure (Argon2id, random per-user salts, constant-time comparison)

Flow:
    1. Registration: generate_salt() -> hash_password(password, salt)
    2. Both are stored as lowercase hex next to the username
    3. Login: verify_password(password, stored_hash, stored_salt)

Why Argon2id?
    - Memory-hard: every guess costs the attacker RAM, not just CPU
    - Resists GPU/ASIC acceleration far better than SHA-2 or PBKDF2
    - Winner of the Password Hashing Competition, libsodium's default
"""

import hmac
import logging
import os

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.argon2 import Argon2id

from .config import DEFAULT_PROFILE, HASH_SIZE, KDF_PROFILES, SALT_SIZE, get_profile
from .errors import HashingError, InitializationError

logger = logging.getLogger(__name__)

_KDF_FAILURES = (ValueError, MemoryError, UnsupportedAlgorithm, InternalError)


# =============================================================================
# Hasher
# =============================================================================

class CredentialHasher:
    """
    Salted Argon2id password hashing.

    Usage:
        hasher = CredentialHasher("moderate")
        if not hasher.initialize():
            sys.exit(1)

        salt = hasher.generate_salt()
        stored_hash = hasher.hash_password("Str0ng!Passw0rd", salt)

        hasher.verify_password("Str0ng!Passw0rd", stored_hash, salt)  # True
    """

    def __init__(self, profile: str = DEFAULT_PROFILE):
        """
        Args:
            profile: Name of a cost profile in config.KDF_PROFILES

        Raises:
            ValueError: If the profile does not exist
        """
        self.profile = profile
        self.params = get_profile(profile)
        self.initialized = False

    def initialize(self) -> bool:
        """
        Check that the Argon2id primitive works before accepting credentials.

        Runs one derivation with the cheapest profile. Older OpenSSL builds
        behind 'cryptography' do not ship Argon2, so this is where it shows.

        Returns:
            True if hashing is usable, False otherwise
        """
        probe = KDF_PROFILES["fast-dev"]
        try:
            Argon2id(salt=bytes(SALT_SIZE), length=HASH_SIZE, **probe).derive(b"probe")
        except _KDF_FAILURES as e:
            logger.error("Argon2id unavailable: %s", e)
            self.initialized = False
            return False

        self.initialized = True
        logger.debug("Hasher ready (profile=%s)", self.profile)
        return True

    def generate_salt(self) -> str:
        """
        Generate a random per-user salt.

        Returns:
            SALT_SIZE random bytes as lowercase hex
        """
        return os.urandom(SALT_SIZE).hex()

    def hash_password(self, password: str, salt_hex: str) -> str:
        """
        Derive the password hash with Argon2id.

        Args:
            password: Plaintext password
            salt_hex: Salt from generate_salt() (hex)

        Returns:
            HASH_SIZE-byte digest as lowercase hex

        Raises:
            InitializationError: If initialize() was not called successfully
            HashingError: If the salt is malformed or the derivation fails
        """
        if not self.initialized:
            raise InitializationError("Hasher used before initialize()")

        try:
            salt = bytes.fromhex(salt_hex)
        except (ValueError, TypeError) as e:
            raise HashingError(f"Salt is not valid hex: {e}") from e
        if len(salt) != SALT_SIZE:
            raise HashingError(f"Salt must be {SALT_SIZE} bytes, got {len(salt)}")

        try:
            kdf = Argon2id(salt=salt, length=HASH_SIZE, **self.params)
            digest = kdf.derive(password.encode('utf-8'))
        except _KDF_FAILURES as e:
            logger.warning("Argon2id derivation failed: %s", e)
            raise HashingError(f"Hashing failed: {e}") from e

        return digest.hex()

    def verify_password(self, password: str, hash_hex: str, salt_hex: str) -> bool:
        """
        Check a login attempt against a stored (hash, salt) pair.

        Fails closed: if the hash cannot be recomputed, the answer is False.

        Returns:
            True only if the recomputed hash matches
        """
        try:
            candidate = self.hash_password(password, salt_hex)
        except HashingError:
            return False

        return constant_compare(candidate.encode('ascii'), hash_hex.lower().encode('utf-8'))


# =============================================================================
# Helpers
# =============================================================================

def constant_compare(a: bytes, b: bytes) -> bool:
    """
    Compare two byte strings in constant time.

    Normal comparison (a == b) returns on the first mismatch, which lets an
    attacker time how many bytes matched. hmac.compare_digest does not.
    """
    return hmac.compare_digest(a, b)
