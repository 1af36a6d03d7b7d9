"""
Tagged scalar values held by the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias, Union, cast

# same range as an unsigned 64-bit integer
MAX_INTEGER = 2**64 - 1


@dataclass(frozen=True)
class Integer:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("Integer value must be an int")
        if self.value < 0:
            raise ValueError("Integer value must be non-negative")
        if self.value > MAX_INTEGER:
            raise ValueError(f"Integer value must not exceed {MAX_INTEGER}")

    def to_tagged(self) -> dict[str, object]:
        return {"Integer": self.value}


@dataclass(frozen=True)
class Text:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Text value must be a str")

    def to_tagged(self) -> dict[str, object]:
        return {"Text": self.value}


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError("Boolean value must be a bool")

    def to_tagged(self) -> dict[str, object]:
        return {"Boolean": self.value}


Value: TypeAlias = Union[Integer, Text, Boolean]

_VARIANTS: dict[str, type] = {
    "Integer": Integer,
    "Text": Text,
    "Boolean": Boolean,
}


def coerce_value(value: object) -> Value:
    """Wrap a native int/str/bool, or pass a Value through unchanged."""
    if isinstance(value, (Integer, Text, Boolean)):
        return value
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, str):
        return Text(value)
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def value_from_tagged(data: object) -> Value:
    """Rebuild a Value from its tagged form, e.g. ``{"Integer": 42}``."""
    if not isinstance(data, Mapping) or len(data) != 1:
        raise ValueError(f"Tagged value must be a single-entry mapping: {data!r}")
    tag, payload = next(iter(cast(Mapping[str, object], data).items()))
    variant = _VARIANTS.get(tag)
    if variant is None:
        raise ValueError(f"Unknown value tag: {tag!r}")
    try:
        return cast(Value, variant(payload))
    except TypeError as e:
        raise ValueError(f"Invalid payload for {tag}: {payload!r}") from e
