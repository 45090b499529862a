"""
SecureAuth - Credential Store

This file handles:
- Loading credential records from a flat text file
- Username lookups and uniqueness
- Write-through persistence after every insert

File format (one record per line):
    <username>,<hashHex>,<saltHex>

The file is rewritten in full on every change. Fine for a handful of local
users; there is no locking, so only one process may write at a time.
"""

import logging
import os
import tempfile
from typing import Dict, NamedTuple, Optional, Tuple

from .config import FIELD_SEPARATOR
from .errors import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# RECORD
# =============================================================================

class CredentialRecord(NamedTuple):
    username: str
    password_hash: str
    salt: str

    def to_line(self) -> str:
        return FIELD_SEPARATOR.join(self) + "\n"

    @classmethod
    def from_line(cls, line: str) -> Optional["CredentialRecord"]:
        """
        Parse one stored line.

        Splits on the first two separators, so the salt field keeps anything
        after them. Returns None if a field is missing or empty.
        """
        parts = line.rstrip("\r\n").split(FIELD_SEPARATOR, 2)
        if len(parts) < 3 or not all(parts):
            return None
        return cls(*parts)


def _check_field(name: str, value: str) -> None:
    if not value:
        raise ValidationError(f"{name} must not be empty")
    if FIELD_SEPARATOR in value or "\n" in value or "\r" in value:
        raise ValidationError(f"{name} must not contain '{FIELD_SEPARATOR}' or line breaks")


# =============================================================================
# STORE CLASS
# =============================================================================

class CredentialStore:
    """
    Username -> (hash, salt) mapping backed by a text file.

    Usage:
        store = CredentialStore("users.txt")
        store.load()

        if store.add("alice", hash_hex, salt_hex):
            ...  # already on disk

        pair = store.lookup("alice")  # (hash_hex, salt_hex) or None
    """

    def __init__(self, path: str):
        """
        Args:
            path: Backing file (created on first add)
        """
        self.path = path
        self._records: Dict[str, CredentialRecord] = {}

    def load(self) -> None:
        """
        Replace the in-memory mapping with the contents of the backing file.

        A missing file means an empty store. Malformed or undecodable
        lines are skipped.
        """
        self._records = {}
        if not os.path.exists(self.path):
            logger.info("No credential file at %s, starting empty", self.path)
            return

        with open(self.path, "rb") as f:
            for lineno, raw in enumerate(f, 1):
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError:
                    logger.warning("Skipping undecodable line %d in %s", lineno, self.path)
                    continue
                if not line.strip():
                    continue
                record = CredentialRecord.from_line(line)
                if record is None:
                    # Never log the line itself, it may hold a hash
                    logger.warning("Skipping malformed line %d in %s", lineno, self.path)
                    continue
                self._records[record.username] = record

        logger.info("Loaded %d credential(s) from %s", len(self._records), self.path)

    def save(self) -> None:
        """
        Write every record to the backing file.

        Writes to a temp file in the same directory, then os.replace() so a
        crash never leaves a half-written file behind.
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".users-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                for username in sorted(self._records):
                    f.write(self._records[username].to_line())
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def exists(self, username: str) -> bool:
        """Case-sensitive membership test."""
        return username in self._records

    def add(self, username: str, password_hash: str, salt: str) -> bool:
        """
        Insert a new record and persist it immediately.

        Args:
            username: Unique key
            password_hash: Hex digest from CredentialHasher.hash_password()
            salt: Hex salt the digest was derived with

        Returns:
            False if the username is taken (nothing changes), True otherwise

        Raises:
            ValidationError: If a field is empty or contains the separator
            OSError: If the file cannot be written (the insert is undone)
        """
        _check_field("Username", username)
        _check_field("Hash", password_hash)
        _check_field("Salt", salt)

        if self.exists(username):
            return False

        self._records[username] = CredentialRecord(username, password_hash, salt)
        try:
            self.save()
        except OSError:
            del self._records[username]
            raise

        logger.info("Added credential for %s", username)
        return True

    def lookup(self, username: str) -> Optional[Tuple[str, str]]:
        """
        Returns:
            (hash_hex, salt_hex) for the user, or None if unknown
        """
        record = self._records.get(username)
        if record is None:
            return None
        return record.password_hash, record.salt

    def count(self) -> int:
        """Number of records currently held."""
        return len(self._records)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, username: str) -> bool:
        return self.exists(username)
