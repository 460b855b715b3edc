"""Requirement models.

Defines the core data structures of the requirement engine:

- RequirementType: Built-in rule kinds
- Violation: A single (attribute, rule kind) failure
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class RequirementType(str, Enum):
    """Built-in rule kinds.

    Tags only; they carry no message text.  Custom rules declare their
    own ``str, Enum`` tags instead of extending this one.
    """

    NONE = "none"
    VALUE_MUST_NOT_BE_NULL = "value_must_not_be_null"
    VALUE_HAS_TO_BE_POSITIVE = "value_has_to_be_positive"
    VALUE_MUST_NOT_BE_EMPTY = "value_must_not_be_empty"


# ---------------------------------------------------------------------------
# Violation record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """Names the attribute that failed and the rule kind it failed."""

    attribute: str
    requirement: Enum

    def __str__(self) -> str:
        return f"{self.attribute}: {kind_label(self.requirement)}"


def kind_label(kind: Enum) -> str:
    """Text used for a rule kind in rendered errors."""
    value = kind.value
    return value if isinstance(value, str) else kind.name.lower()
