"""
SecureAuth - Registration and Login

Glue between the strength checker, the hasher and the store. Input comes
from an InputProvider so the same code runs against a terminal or a script
of canned answers (tests, demos).
"""

import getpass
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Iterable, List, NamedTuple

from . import strength
from .crypto import CredentialHasher
from .errors import (
    CredentialNotFoundError,
    DuplicateUsernameError,
    HashingError,
    HashMismatchError,
    ValidationError,
)
from .store import CredentialStore

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


class WorkflowResult(NamedTuple):
    ok: bool
    message: str


# =============================================================================
# Input providers
# =============================================================================

class InputProvider(ABC):
    """Where usernames and passwords come from."""

    @abstractmethod
    def ask(self, prompt: str) -> str:
        ...

    @abstractmethod
    def ask_secret(self, prompt: str) -> str:
        ...


class ConsoleInput(InputProvider):
    """Interactive terminal. Secrets are read without echo."""

    def ask(self, prompt: str) -> str:
        return input(prompt)

    def ask_secret(self, prompt: str) -> str:
        return getpass.getpass(prompt)


class ScriptedInput(InputProvider):
    """
    Replays a fixed list of answers, secret or not, in order.

    Raises EOFError once the answers run out, like input() at end of file.
    Every prompt shown is kept in self.prompts.
    """

    def __init__(self, answers: Iterable[str]):
        self.answers = deque(answers)
        self.prompts: List[str] = []

    def _next(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError(f"No scripted answer for prompt {prompt!r}")
        return self.answers.popleft()

    def ask(self, prompt: str) -> str:
        return self._next(prompt)

    def ask_secret(self, prompt: str) -> str:
        return self._next(prompt)


# =============================================================================
# Helpers
# =============================================================================

PASSWORD_REQUIREMENTS = (
    "Password Requirements:\n"
    f"- Minimum {strength.MIN_PASSWORD_LENGTH} characters\n"
    "- At least 1 uppercase, 1 lowercase\n"
    "- At least 1 digit and 1 special character"
)


def validate_username(username: str) -> str:
    """
    Returns:
        The username, unchanged

    Raises:
        ValidationError: If empty or not ASCII letters/digits only
    """
    if not username:
        raise ValidationError("Username required")
    if not (username.isascii() and username.isalnum()):
        raise ValidationError("Only alphanumeric characters allowed")
    return username


def progress_bar(value: int, total: int = 100, width: int = 50) -> str:
    """Render e.g. '[=========>          ] 45 %'."""
    fraction = max(0, min(value, total)) / total
    filled = int(width * fraction)
    return f"[{'=' * filled}>{' ' * (width - filled)}] {int(fraction * 100)} %"


def _choose_password(inputs: InputProvider, echo: Echo) -> str:
    """Prompt until a password passes the policy and is confirmed."""
    while True:
        password = inputs.ask_secret("Enter password: ")
        if not password:
            echo("Password cannot be empty")
            continue

        ok, missing = strength.check_strength(password)
        if not ok:
            for message in strength.describe_missing(missing):
                echo(message)
            continue

        score = strength.score_strength(password)
        echo(f"Password strength: {progress_bar(score)}")
        label = strength.strength_label(score)
        if label == "weak":
            echo("Password could be stronger")
        elif label == "excellent":
            echo("Excellent password!")

        confirm = inputs.ask_secret("Confirm password: ")
        if confirm != password:
            echo("Passwords don't match")
            continue
        return password


# =============================================================================
# Workflows
# =============================================================================

def register(
    store: CredentialStore,
    hasher: CredentialHasher,
    inputs: InputProvider,
    echo: Echo = print,
) -> WorkflowResult:
    """
    Create a new account.

    Steps: username -> uniqueness -> password policy + confirmation ->
    salt -> hash -> store.add(). Nothing is written unless every step
    succeeds.
    """
    try:
        username = validate_username(inputs.ask("Username: ").strip())
        if store.exists(username):
            raise DuplicateUsernameError("Username already taken")

        echo(PASSWORD_REQUIREMENTS)
        password = _choose_password(inputs, echo)

        salt = hasher.generate_salt()
        password_hash = hasher.hash_password(password, salt)
    except ValidationError as e:
        return WorkflowResult(False, str(e))
    except HashingError as e:
        logger.warning("Registration aborted: %s", e)
        return WorkflowResult(False, "Account creation failed")

    if not store.add(username, password_hash, salt):
        return WorkflowResult(False, "Account creation failed")
    return WorkflowResult(True, "Account created successfully!")


def authenticate(
    store: CredentialStore,
    hasher: CredentialHasher,
    username: str,
    password: str,
) -> None:
    """
    Check a username/password pair.

    Raises:
        CredentialNotFoundError: Unknown username
        HashMismatchError: Wrong password
    """
    stored = store.lookup(username)
    if stored is None:
        raise CredentialNotFoundError(username)

    password_hash, salt = stored
    if not hasher.verify_password(password, password_hash, salt):
        raise HashMismatchError(username)


def login(
    store: CredentialStore,
    hasher: CredentialHasher,
    inputs: InputProvider,
) -> WorkflowResult:
    """Prompt for credentials and report the outcome."""
    username = inputs.ask("Username: ").strip()
    if not username:
        return WorkflowResult(False, "Username required")
    password = inputs.ask_secret("Password: ")

    try:
        authenticate(store, hasher, username, password)
    except CredentialNotFoundError:
        return WorkflowResult(False, "User not found")
    except HashMismatchError:
        logger.info("Failed login for %s", username)
        return WorkflowResult(False, "Invalid credentials")

    return WorkflowResult(True, f"Login successful! Welcome to your secure account, {username}!")
