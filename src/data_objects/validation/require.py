"""Declarative field requirements.

A rule is data: a rule kind plus a predicate.  Applying a rule to one or
more named-value references yields a :class:`Violation` for every
reference whose value fails the predicate.  Rules never raise on a
failing value; :func:`commit` folds the results of any number of rule
calls into one :class:`ObjectRequirementError` and raises it only if
something failed.

Usage inside a validating constructor::

    commit(
        not_null(lambda: name, lambda: purchases),
        not_empty(lambda: name),
        positive(lambda: customer_number),
    )

New rules are new ``Rule`` instances; existing ones stay untouched::

    class ShopRequirement(str, Enum):
        VALUE_MUST_BE_UPPERCASE = "value_must_be_uppercase"

    uppercase = Rule(ShopRequirement.VALUE_MUST_BE_UPPERCASE, str.isupper)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from decimal import Decimal
from numbers import Real
from typing import Any, Callable

from .errors import ObjectRequirementError
from .models import RequirementType, Violation
from .references import Reference, reference_name, reference_value

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rule model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """A named predicate applied to named-value references."""

    kind: Enum
    predicate: Callable[[Any], bool]

    def evaluate(self, *refs: Reference) -> list[Violation]:
        """Check every reference; return one violation per failing value.

        All attribute names are resolved before any predicate runs, so a
        reference without a recoverable name fails the whole call with
        :class:`AttributionError` even when its value would pass.
        """
        names = [reference_name(ref) for ref in refs]
        return [
            Violation(name, self.kind)
            for name, ref in zip(names, refs)
            if not self.predicate(reference_value(ref))
        ]

    def __call__(self, *refs: Reference) -> list[Violation]:
        return self.evaluate(*refs)


def check(
    kind: Enum,
    predicate: Callable[[Any], bool],
    *refs: Reference,
) -> list[Violation]:
    """Apply an ad-hoc rule without declaring a :class:`Rule`."""
    return Rule(kind, predicate).evaluate(*refs)


# ---------------------------------------------------------------------------
# Built-in predicates and rules
# ---------------------------------------------------------------------------


def is_not_null(value: Any) -> bool:
    return value is not None


def is_positive(value: Any) -> bool:
    # bool is an int subclass but never a quantity
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return False
    if isinstance(value, Decimal) and value.is_nan():
        return False
    return value > 0


def is_not_empty(value: Any) -> bool:
    if value is None:
        return False
    try:
        return len(value) > 0
    except TypeError:
        return False


not_null = Rule(RequirementType.VALUE_MUST_NOT_BE_NULL, is_not_null)
positive = Rule(RequirementType.VALUE_HAS_TO_BE_POSITIVE, is_positive)
not_empty = Rule(RequirementType.VALUE_MUST_NOT_BE_EMPTY, is_not_empty)


# ---------------------------------------------------------------------------
# Commit
# ---------------------------------------------------------------------------


def commit(*groups: Iterable[Violation]) -> None:
    """Raise every violation in ``groups`` as one aggregated error.

    Returns normally when no group holds a violation.

    Raises:
        ObjectRequirementError: If at least one violation was found.
    """
    error = ObjectRequirementError()
    for group in groups:
        for violation in group:
            error.add_violation(violation)

    if error:
        logger.debug(
            "Requirement check failed: %s",
            error.as_dict(),
        )
        raise error
