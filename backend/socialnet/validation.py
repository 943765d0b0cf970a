"""
Field validation for users and friendships.

QUICK only checks that fields are present; SLOW also enforces name shape
and a plausible email address. Every problem found for a user is reported
in a single ValidationError.
"""
from __future__ import annotations

from enum import Enum

from socialnet.errors import ValidationError

MIN_NAME_LENGTH = 3


class ValidateStrategy(str, Enum):
    QUICK = "quick"
    SLOW = "slow"


def _check_present(label: str, value: str | None) -> str | None:
    if value is None:
        return f"{label} cannot be null."
    if not value:
        return f"{label} cannot be empty."
    return None


def _check_name(label: str, value: str | None) -> str | None:
    missing = _check_present(label, value)
    if missing:
        return missing
    if len(value) < MIN_NAME_LENGTH:
        return f"{label} should contain at least {MIN_NAME_LENGTH} characters."
    if not value[0].isupper():
        return f"{label} needs to start with an uppercase letter."
    if any(not ("a" <= ch <= "z") for ch in value[1:]):
        return f"{label} should contain only letters."
    return None


def _check_email(value: str | None) -> str | None:
    missing = _check_present("Email", value)
    if missing:
        return missing
    parts = value.split("@")
    if len(parts) != 2 or not parts[0]:
        return "Email format not valid."
    domain = parts[1].split(".")
    if len(domain) < 2 or not all(domain):
        return "Email domain format not valid."
    return None


def validate_user(
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    strategy: ValidateStrategy = ValidateStrategy.SLOW,
) -> None:
    strategy = ValidateStrategy(strategy)
    if strategy is ValidateStrategy.QUICK:
        problems = [
            _check_present("First name", first_name),
            _check_present("Last name", last_name),
            _check_present("Email", email),
        ]
    else:
        problems = [
            _check_name("First name", first_name),
            _check_name("Last name", last_name),
            _check_email(email),
        ]

    errors = [p for p in problems if p]
    if errors:
        raise ValidationError(" ".join(errors))


def validate_friendship(user_id_1: str | None, user_id_2: str | None) -> None:
    if not user_id_1 or not user_id_2:
        raise ValidationError("Friendship needs two user ids.")
    if user_id_1 == user_id_2:
        raise ValidationError("Friendship cannot be made between the same user.")
