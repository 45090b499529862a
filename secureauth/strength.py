"""
SecureAuth - Password Strength

Pure functions, no I/O:
- check_strength(): accept/reject a password and say what is missing
- score_strength(): informational 0-100 score
- strength_label(): bucket a score for display

Character classes:
    lowercase  c.islower()
    uppercase  c.isupper()
    digit      c.isdigit()
    special    anything that is not a letter and not a digit
"""

from typing import FrozenSet, Iterable, List, Tuple

from .config import MIN_PASSWORD_LENGTH


MIN_LENGTH = "min_length"
LOWERCASE = "lowercase"
UPPERCASE = "uppercase"
DIGIT = "digit"
SPECIAL = "special"

# Order used when explaining a rejection
MISSING_MESSAGES = (
    (MIN_LENGTH, f"Password length must be at least {MIN_PASSWORD_LENGTH} characters"),
    (LOWERCASE, "Missing lowercase character"),
    (UPPERCASE, "Missing uppercase character"),
    (DIGIT, "Missing digit"),
    (SPECIAL, "Missing special character"),
)

LENGTH_POINTS_MAX = 40
LENGTH_POINTS_PER_CHAR = 3.33
CLASS_POINTS = 15


def _character_classes(password: str) -> FrozenSet[str]:
    """Return the set of character classes present in the password."""
    found = set()
    for c in password:
        if c.islower():
            found.add(LOWERCASE)
        elif c.isupper():
            found.add(UPPERCASE)
        elif c.isdigit():
            found.add(DIGIT)
        elif not c.isalpha():
            found.add(SPECIAL)
    return frozenset(found)


def check_strength(password: str) -> Tuple[bool, FrozenSet[str]]:
    """
    Check a password against the composition policy.

    Policy: at least MIN_PASSWORD_LENGTH characters, and at least one
    lowercase, one uppercase, one digit and one special character.

    Args:
        password: Candidate password

    Returns:
        (ok, missing) tuple
        - ok: True only if every rule holds
        - missing: every failed rule (MIN_LENGTH, LOWERCASE, ...)
    """
    present = _character_classes(password)
    missing = {cls for cls in (LOWERCASE, UPPERCASE, DIGIT, SPECIAL) if cls not in present}
    if len(password) < MIN_PASSWORD_LENGTH:
        missing.add(MIN_LENGTH)
    return not missing, frozenset(missing)


def describe_missing(missing: Iterable[str]) -> List[str]:
    """Turn a set of failed rules into user-facing messages, in a fixed order."""
    missing = set(missing)
    return [message for rule, message in MISSING_MESSAGES if rule in missing]


def score_strength(password: str) -> int:
    """
    Score a password from 0 to 100.

    Length gives up to 40 points (3.33 per character), each character class
    present gives 15. Informational only: acceptance is decided by
    check_strength().
    """
    score = min(LENGTH_POINTS_MAX, round(len(password) * LENGTH_POINTS_PER_CHAR))
    score += CLASS_POINTS * len(_character_classes(password))
    return min(100, score)


def strength_label(score: int) -> str:
    if score >= 90:
        return "excellent"
    if score >= 70:
        return "good"
    return "weak"
