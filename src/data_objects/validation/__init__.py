"""Requirement engine: declarative field rules with aggregated failures.

Public API
----------
Models:
    RequirementType, Violation

References:
    NamedValue, named, resolve_reference

Rules:
    Rule, check, not_null, positive, not_empty

Commit:
    commit

Errors:
    ValidationError, ObjectRequirementError, AttributionError
"""

from data_objects.validation.errors import (
    AttributionError,
    ObjectRequirementError,
    ValidationError,
)
from data_objects.validation.models import RequirementType, Violation
from data_objects.validation.references import (
    NamedValue,
    Reference,
    named,
    resolve_reference,
)
from data_objects.validation.require import (
    Rule,
    check,
    commit,
    not_empty,
    not_null,
    positive,
)

__all__ = [
    # Enums
    "RequirementType",
    # Models
    "Violation",
    # References
    "NamedValue",
    "Reference",
    "named",
    "resolve_reference",
    # Rules
    "Rule",
    "check",
    "not_empty",
    "not_null",
    "positive",
    # Commit
    "commit",
    # Errors
    "AttributionError",
    "ObjectRequirementError",
    "ValidationError",
]
