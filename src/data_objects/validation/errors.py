"""Validation-specific error types.

All inherit from DataObjectsError via ValidationError.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from data_objects.core.errors import DataObjectsError

from .models import Violation, kind_label


class ValidationError(DataObjectsError):
    """Base for all validation errors."""


class AttributionError(ValidationError):
    """A reference passed to a rule has no recoverable attribute name."""


class ObjectRequirementError(ValidationError):
    """Every requirement violated in one validation pass.

    Violations are grouped by attribute.  Adding the same
    ``(attribute, kind)`` pair twice keeps a single entry, so merging
    errors is commutative and idempotent.  Attributes and kinds keep
    first-seen order, which makes :meth:`render` reproducible.
    """

    def __init__(self, violations: Iterable[Violation] = ()) -> None:
        # Dicts with None values act as insertion-ordered sets
        self._errors: dict[str, dict[Enum, None]] = {}
        for violation in violations:
            self.add_violation(violation)
        super().__init__()

    @classmethod
    def single(cls, attribute: str, requirement: Enum) -> ObjectRequirementError:
        """Error carrying one violation."""
        error = cls()
        error.add(attribute, requirement)
        return error

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def add(self, attribute: str, requirement: Enum) -> None:
        self._errors.setdefault(attribute, {})[requirement] = None

    def add_violation(self, violation: Violation) -> None:
        self.add(violation.attribute, violation.requirement)

    def merge(self, other: ObjectRequirementError) -> None:
        """Fold every violation of ``other`` into this error."""
        for violation in other.violations:
            self.add_violation(violation)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def errors(self) -> Mapping[str, frozenset[Enum]]:
        """Read-only mapping of attribute name to violated rule kinds."""
        return MappingProxyType(
            {name: frozenset(kinds) for name, kinds in self._errors.items()}
        )

    @property
    def violations(self) -> tuple[Violation, ...]:
        return tuple(
            Violation(name, kind)
            for name, kinds in self._errors.items()
            for kind in kinds
        )

    def as_dict(self) -> dict[str, list[str]]:
        """Plain ``{attribute: [kind, ...]}`` for logging and presentation."""
        return {
            name: [kind_label(kind) for kind in kinds]
            for name, kinds in self._errors.items()
        }

    def render(self) -> str:
        """One line per attribute: ``"<attribute>: <kind> <kind>"``."""
        return "\n".join(
            f"{name}: {' '.join(labels)}" for name, labels in self.as_dict().items()
        )

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ObjectRequirementError({self.as_dict()!r})"
