"""Generation of 11-character metadata identifiers."""

import re
import secrets
import string

UID_LENGTH = 11
LETTERS = string.ascii_letters
ALPHANUMERIC = string.ascii_letters + string.digits

_UID_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9]{10}$")


def generate_uid() -> str:
    """Random identifier: a letter followed by ten letters or digits."""
    return secrets.choice(LETTERS) + "".join(
        secrets.choice(ALPHANUMERIC) for _ in range(UID_LENGTH - 1)
    )


def is_valid_uid(value: str | None) -> bool:
    return bool(value) and _UID_PATTERN.match(value) is not None
