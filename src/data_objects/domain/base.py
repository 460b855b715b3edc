"""Immutable value base.

Instances of :class:`ImmutableObject` subclasses are sealed as soon as
their ``__init__`` returns; from then on attribute assignment raises
:class:`ImmutableAttributeError`.  A constructor that raises (e.g. from
:func:`~data_objects.validation.commit`) never hands out an instance, so
no partially built value is observable.

"Changing" a value means deriving a new one::

    class Purchase(ImmutableObject):
        def __init__(self, purchase_id: int) -> None:
            commit(positive(lambda: purchase_id))
            self.purchase_id = purchase_id

        def deep_clone(self) -> Purchase:
            return Purchase(self.purchase_id)

        def with_purchase_id(self, purchase_id: int) -> Purchase:
            return self._with(purchase_id=purchase_id)

:meth:`ImmutableObject._with` clones, edits only the clone, and (unless
``Settings.revalidate_on_derive`` is off) finalizes the clone through
``deep_clone()`` once more so the validating constructor sees the new
state.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from data_objects.core.config import get_settings
from data_objects.core.errors import ImmutableAttributeError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ImmutableObject")

_SEALED = "_sealed"


@runtime_checkable
class DeepCloneable(Protocol):
    """Something that can produce a structurally identical copy of itself."""

    def deep_clone(self) -> Any:
        ...


class ImmutableMeta(ABCMeta):
    """Seals every instance once construction completes."""

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        instance = super().__call__(*args, **kwargs)
        object.__setattr__(instance, _SEALED, True)
        return instance


@contextmanager
def _unsealed(instance: ImmutableObject) -> Iterator[None]:
    object.__setattr__(instance, _SEALED, False)
    try:
        yield
    finally:
        object.__setattr__(instance, _SEALED, True)


class ImmutableObject(metaclass=ImmutableMeta):
    """Base for values that validate at construction and never change.

    Equality and hashing use the type plus every public attribute, so
    ``hash()`` needs hashable fields.  Hold collections as
    :class:`~data_objects.domain.collections.ImmutableList` or
    ``frozenset``; a subclass keeping a ``list``, ``set`` or ``dict`` is
    still comparable but raises ``TypeError`` when hashed.
    """

    @abstractmethod
    def deep_clone(self: T) -> T:
        """Return a fresh instance carrying a copy of this instance's state."""

    def _with(
        self: T,
        modifier: Callable[[T], None] | None = None,
        **changes: Any,
    ) -> T:
        """Derive a modified copy.

        ``changes`` are assigned on the clone first, then ``modifier`` (if
        given) is called with the clone.  Only existing attributes may be
        changed.

        Raises:
            ObjectRequirementError: If revalidation is on and the derived
                state violates the type's requirements.
        """
        clone = self.deep_clone()
        if clone is self:
            raise TypeError(
                f"{type(self).__name__}.deep_clone() returned the same instance"
            )

        with _unsealed(clone):
            for attribute, value in changes.items():
                if attribute.startswith("_") or attribute not in vars(clone):
                    raise AttributeError(
                        f"{type(self).__name__} has no attribute '{attribute}'"
                    )
                setattr(clone, attribute, value)
            if modifier is not None:
                modifier(clone)

        if get_settings().revalidate_on_derive:
            clone = clone.deep_clone()

        logger.debug(
            "Derived %s (changed: %s)",
            type(self).__name__,
            ", ".join(changes) or "<modifier>",
        )
        return clone

    # ------------------------------------------------------------------
    # Sealing
    # ------------------------------------------------------------------

    @property
    def is_sealed(self) -> bool:
        return bool(self.__dict__.get(_SEALED, False))

    def __setattr__(self, name: str, value: Any) -> None:
        if self.is_sealed:
            raise ImmutableAttributeError(type(self).__name__, name)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if self.is_sealed:
            raise ImmutableAttributeError(type(self).__name__, name)
        object.__delattr__(self, name)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def _state(self) -> dict[str, Any]:
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._state() == other._state()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), tuple(self._state().items())))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._state().items())
        return f"{type(self).__name__}({fields})"
