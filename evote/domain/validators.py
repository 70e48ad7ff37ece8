"""Field-level validation rules shared by the login and signup forms.

Each rule is a :class:`Constraint`: a named predicate plus the message shown
under the field when the predicate rejects the raw input. Calling a constraint
returns ``None`` for valid input and the message otherwise. Constraints never
raise for malformed input; ``None``, non-string values and whitespace are all
reported through the message.

Rules are module-level singletons so both form schemas reference the same
objects (see ``evote.domain.forms``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

AGE_MIN = 18
AGE_MAX = 120
CNIC_LENGTH = 12

CNIC_MESSAGE = "CNIC number must be exactly 12 digits."
AGE_MESSAGE = f"Age must be a whole number between {AGE_MIN} and {AGE_MAX}."
MOBILE_MESSAGE = "Mobile number must be 10 to 15 digits, optionally starting with '+'."
EMAIL_MESSAGE = "Must be a valid email address."

_CNIC_PATTERN = re.compile(r"[0-9]{%d}" % CNIC_LENGTH)
_AGE_PATTERN = re.compile(r"[0-9]{1,3}")
_MOBILE_PATTERN = re.compile(r"\+?[0-9]{10,15}")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def as_text(raw: Any) -> Optional[str]:
    """Return the raw form value as text, or ``None`` when it is missing."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return str(raw)
    return None


def is_blank(raw: Any) -> bool:
    text = as_text(raw)
    return text is None or not text.strip()


@dataclass(frozen=True)
class Constraint:
    """Predicate over raw field text paired with its failure message."""

    name: str
    predicate: Callable[[str], bool]
    message: str

    def __call__(self, raw: Any) -> Optional[str]:
        text = as_text(raw)
        if text is None:
            return self.message
        try:
            ok = bool(self.predicate(text))
        except (TypeError, ValueError):
            ok = False
        return None if ok else self.message


def pattern(name: str, regex: "re.Pattern[str]", message: str) -> Constraint:
    """Build a constraint that requires the whole value to match ``regex``."""
    return Constraint(name, lambda text: regex.fullmatch(text) is not None, message)


def min_length(length: int, message: Optional[str] = None) -> Constraint:
    """Build a constraint requiring at least ``length`` characters."""
    if length < 1:
        raise ValueError("min_length requires a positive length")
    return Constraint(
        f"min_length_{length}",
        lambda text: len(text) >= length,
        message or f"Must be at least {length} characters long.",
    )


def not_blank(message: str) -> Constraint:
    return Constraint("not_blank", lambda text: bool(text.strip()), message)


def _is_age(text: str) -> bool:
    if _AGE_PATTERN.fullmatch(text) is None:
        return False
    return AGE_MIN <= int(text) <= AGE_MAX


CNIC_RULE = pattern("cnic", _CNIC_PATTERN, CNIC_MESSAGE)
AGE_RULE = Constraint("age", _is_age, AGE_MESSAGE)
MOBILE_RULE = pattern("mobile", _MOBILE_PATTERN, MOBILE_MESSAGE)
EMAIL_RULE = pattern("email", _EMAIL_PATTERN, EMAIL_MESSAGE)


__all__ = [
    "AGE_MAX",
    "AGE_MIN",
    "AGE_RULE",
    "CNIC_LENGTH",
    "CNIC_MESSAGE",
    "CNIC_RULE",
    "Constraint",
    "EMAIL_RULE",
    "MOBILE_RULE",
    "as_text",
    "is_blank",
    "min_length",
    "not_blank",
    "pattern",
]
