"""Tagged union over the two accepted lock file representations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias


class InvalidInputKind(TypeError):
    """Raised when a lock file is neither a mapping nor text."""


@dataclass(slots=True, frozen=True)
class StructuredInput:
    """Lock file content already decoded from JSON or JSON with comments."""

    mapping: Mapping[str, Any]


@dataclass(slots=True, frozen=True)
class TextInput:
    """Raw, unparsed lock file text."""

    text: str


LockInput: TypeAlias = StructuredInput | TextInput


def coerce_input(value: Any) -> LockInput:
    """Wrap ``value`` in the matching ``LockInput`` variant.

    Raises:
        InvalidInputKind: if ``value`` is not a ``str`` or a ``Mapping``.
    """
    if isinstance(value, (StructuredInput, TextInput)):
        return value
    if isinstance(value, str):
        return TextInput(value)
    if isinstance(value, Mapping):
        return StructuredInput(value)
    raise InvalidInputKind(f"expected str or mapping, got {type(value).__name__}")
