"""Immutable values built through validating constructors."""

from data_objects.domain.base import DeepCloneable, ImmutableMeta, ImmutableObject
from data_objects.domain.collections import ImmutableList
from data_objects.domain.entities import Customer, Purchase

__all__ = [
    "Customer",
    "DeepCloneable",
    "ImmutableList",
    "ImmutableMeta",
    "ImmutableObject",
    "Purchase",
]
