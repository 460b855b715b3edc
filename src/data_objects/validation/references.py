"""Named-value references.

Rules are handed *references* to values rather than bare values so the
attribute name reported in a violation always comes from the code that
reads the value, never from a separately typed label.

Two reference forms are accepted:

- A zero-argument accessor such as ``lambda: name`` or
  ``lambda: self.name``.  The attribute name is recovered from the
  accessor's bytecode: the body must be a single variable load,
  optionally followed by attribute loads, and nothing else.  The last
  loaded name wins (``lambda: self.name`` -> ``"name"``).
- An explicit :class:`NamedValue`, built with :func:`named` or passed
  as a ``(name, value)`` tuple.

Anything else (``lambda: a + b``, ``lambda: 5``, ``lambda: f()``) has no
recoverable name and raises :class:`AttributionError`.
"""

from __future__ import annotations

import dis
from dataclasses import dataclass
from functools import lru_cache
from types import CodeType
from typing import Any, Callable, Union

from .errors import AttributionError

# Bookkeeping opcodes emitted around a function body
_PREAMBLE_OPS = frozenset({
    "RESUME",
    "COPY_FREE_VARS",
    "MAKE_CELL",
    "NOP",
    "CACHE",
    "EXTENDED_ARG",
    "NOT_TAKEN",
})

_VARIABLE_LOAD_PREFIXES = ("LOAD_FAST", "LOAD_DEREF", "LOAD_GLOBAL", "LOAD_NAME")


@dataclass(frozen=True)
class NamedValue:
    """Explicit association of an attribute name with a value accessor."""

    name: str
    getter: Callable[[], Any]

    def get(self) -> Any:
        return self.getter()


Reference = Union[Callable[[], Any], NamedValue, tuple[str, Any]]


def named(name: str, value: Any) -> NamedValue:
    """Pair ``value`` with an explicit attribute ``name``."""
    return NamedValue(name, lambda: value)


@lru_cache(maxsize=1024)
def _name_from_code(code: CodeType) -> str | None:
    """Attribute name read by a simple accessor body, else ``None``."""
    if code.co_argcount or code.co_kwonlyargcount or code.co_posonlyargcount:
        return None

    body = [
        ins for ins in dis.get_instructions(code)
        if ins.opname not in _PREAMBLE_OPS
    ]
    if len(body) < 2 or body[-1].opname != "RETURN_VALUE":
        return None

    loads = body[:-1]
    if not loads[0].opname.startswith(_VARIABLE_LOAD_PREFIXES):
        return None
    if any(ins.opname != "LOAD_ATTR" for ins in loads[1:]):
        return None

    name = loads[-1].argval
    return name if isinstance(name, str) and name else None


def reference_name(ref: Reference) -> str:
    """Recover the attribute name of ``ref``.

    Raises:
        AttributionError: If ``ref`` is not a simple member access.
    """
    if isinstance(ref, NamedValue):
        if not ref.name:
            raise AttributionError("Named value has an empty attribute name")
        return ref.name

    if isinstance(ref, tuple):
        if len(ref) == 2 and isinstance(ref[0], str) and ref[0]:
            return ref[0]
        raise AttributionError(
            f"Expected a (name, value) pair, got {ref!r}"
        )

    code = getattr(ref, "__code__", None)
    if not callable(ref) or not isinstance(code, CodeType):
        raise AttributionError(
            f"Cannot derive an attribute name from {ref!r}; "
            "pass an accessor such as `lambda: value` or use named()"
        )

    name = _name_from_code(code)
    if name is None:
        raise AttributionError(
            f"Accessor {code.co_name!r} at {code.co_filename}:"
            f"{code.co_firstlineno} is not a simple member access"
        )
    return name


def reference_value(ref: Reference) -> Any:
    """Read the current value behind ``ref``."""
    if isinstance(ref, NamedValue):
        return ref.get()
    if isinstance(ref, tuple):
        return ref[1]
    return ref()


def resolve_reference(ref: Reference) -> tuple[str, Any]:
    """Return ``(attribute name, value)`` for ``ref``."""
    return reference_name(ref), reference_value(ref)
