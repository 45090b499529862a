"""
SecureAuth - Configuration

Constants shared by the hasher, the store and the CLI, plus a small
Settings object read from the environment.

Environment overrides:
    SECUREAUTH_STORE      Path of the credential file
    SECUREAUTH_PROFILE    KDF cost profile (fast-dev, moderate, high-security)
    SECUREAUTH_LOG_LEVEL  Logging level name (default WARNING)
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional


# =============================================================================
# Credential format
# =============================================================================

SALT_SIZE = 16           # 128-bit salt (same as libsodium crypto_pwhash_SALTBYTES)
HASH_SIZE = 32           # 256-bit digest -> 64 hex chars
MIN_PASSWORD_LENGTH = 12
FIELD_SEPARATOR = ","


# =============================================================================
# Argon2id cost profiles
# =============================================================================

# memory_cost is in KiB. Changing a profile invalidates hashes made with it.
KDF_PROFILES: Dict[str, Dict[str, int]] = {
    # Only for tests and local development
    "fast-dev": {"iterations": 1, "memory_cost": 8 * 1024, "lanes": 1},
    # libsodium OPSLIMIT_MODERATE / MEMLIMIT_MODERATE
    "moderate": {"iterations": 3, "memory_cost": 256 * 1024, "lanes": 1},
    # libsodium OPSLIMIT_SENSITIVE / MEMLIMIT_SENSITIVE
    "high-security": {"iterations": 4, "memory_cost": 1024 * 1024, "lanes": 1},
}
DEFAULT_PROFILE = "moderate"


# =============================================================================
# Paths and logging
# =============================================================================

DEFAULT_STORE_PATH = os.path.join(os.path.expanduser("~"), ".secureauth", "users.txt")
DEFAULT_LOG_LEVEL = "WARNING"


def get_profile(name: str) -> Dict[str, int]:
    """
    Look up Argon2id parameters by profile name.

    Raises:
        ValueError: If the profile does not exist
    """
    try:
        return KDF_PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(KDF_PROFILES))
        raise ValueError(f"Unknown KDF profile '{name}' (expected one of: {known})")


@dataclass(frozen=True)
class Settings:
    store_path: str = DEFAULT_STORE_PATH
    profile: str = DEFAULT_PROFILE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from SECUREAUTH_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        settings = cls(
            store_path=env.get("SECUREAUTH_STORE") or DEFAULT_STORE_PATH,
            profile=env.get("SECUREAUTH_PROFILE") or DEFAULT_PROFILE,
            log_level=(env.get("SECUREAUTH_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
        get_profile(settings.profile)
        if not isinstance(logging.getLevelName(settings.log_level), int):
            raise ValueError(f"Unknown log level '{settings.log_level}'")
        return settings
