"""
Codec for the flat ``key=value`` backing file.

Every write path uses the same line encoding, so anything written by
``encode`` can be read back by ``decode``.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import cast

from .errors import MalformedFileError
from .values import MAX_INTEGER, Boolean, Integer, Text, Value, value_from_tagged


DELIMITER = "="

_INTEGER_RE = re.compile(r"\+?[0-9]+")
_FORBIDDEN = (DELIMITER, "\n", "\r")
_MAX_DIGITS = len(str(MAX_INTEGER))


def parse_value(raw: str) -> Value:
    """Infer a value from its raw text: bool literal, then integer, then text."""
    if raw == "true":
        return Boolean(True)
    if raw == "false":
        return Boolean(False)
    if _INTEGER_RE.fullmatch(raw):
        digits = raw.lstrip("+").lstrip("0") or "0"
        # out-of-range digit runs stay text
        if len(digits) <= _MAX_DIGITS and int(digits) <= MAX_INTEGER:
            return Integer(int(digits))
    return Text(raw)


def format_value(value: Value) -> str:
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, Integer):
        return str(value.value)
    return value.value


def parse_line(line: str, lineno: int) -> tuple[str, Value]:
    stripped = line.rstrip("\n")
    if stripped.endswith("\r"):
        stripped = stripped[:-1]
    parts = stripped.split(DELIMITER)
    if len(parts) != 2:
        raise MalformedFileError(lineno, stripped)
    key, raw = parts
    return key, parse_value(raw)


def decode(lines: Iterable[str]) -> dict[str, Value]:
    """Parse backing file lines into a mapping.

    Raises:
        MalformedFileError: On the first line without exactly one '='.
            Nothing is returned for the lines already parsed.
    """
    mapping: dict[str, Value] = {}
    for lineno, line in enumerate(lines, start=1):
        key, value = parse_line(line, lineno)
        mapping[key] = value
    return mapping


def encode(mapping: Mapping[str, Value]) -> str:
    return "".join(
        f"{key}{DELIMITER}{format_value(mapping[key])}\n" for key in sorted(mapping)
    )


def check_encodable(key: str, value: Value) -> None:
    """Reject keys and text that would not survive a reload of the file."""
    for token in _FORBIDDEN:
        if token in key:
            raise ValueError(f"Key must not contain {token!r}: {key!r}")
        if isinstance(value, Text) and token in value.value:
            raise ValueError(f"Value must not contain {token!r}: {value.value!r}")
    if isinstance(value, Text) and parse_value(value.value) != value:
        raise ValueError(f"Text {value.value!r} would reload as {parse_value(value.value)!r}")


def dump_json(mapping: Mapping[str, Value]) -> str:
    """Encode the whole mapping as tagged JSON, e.g. ``{"a": {"Integer": 1}}``."""
    payload = {key: mapping[key].to_tagged() for key in sorted(mapping)}
    return json.dumps(payload, ensure_ascii=False, indent=2)


def load_json(text: str) -> dict[str, Value]:
    data = cast(object, json.loads(text))
    if not isinstance(data, dict):
        raise ValueError("Tagged JSON export must be an object")
    mapping: dict[str, Value] = {}
    for key, tagged in cast(dict[str, object], data).items():
        value = value_from_tagged(tagged)
        check_encodable(key, value)
        mapping[key] = value
    return mapping
