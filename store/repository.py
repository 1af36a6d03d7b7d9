"""
File-backed key-value store with whole-file write-back.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

from . import codec
from .errors import MalformedFileError
from .values import Value, coerce_value

logger = logging.getLogger(__name__)


class InsertResult(Enum):
    INSERTED = "inserted"


class RemoveResult(Enum):
    REMOVED = "removed"


def _load(path: Path) -> dict[str, Value]:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return codec.decode(f)
    except FileNotFoundError:
        return {}
    except MalformedFileError as e:
        raise e.with_path(path) from None
    except UnicodeDecodeError as e:
        raise OSError(f"{path} is not valid UTF-8: {e}") from e


class KeyValueStore:
    """In-memory map of key -> Value, persisted to a flat text file.

    The file is read once at construction and rewritten in full after every
    mutation. Not safe for concurrent writers.
    """

    path: Path

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Value] = _load(self.path)
        logger.debug(f"Loaded {len(self._data)} entries from {self.path}")

    def reload(self) -> None:
        """Re-read the backing file; the map is left untouched if parsing fails."""
        self._data = _load(self.path)

    def get(self, key: str) -> Value | None:
        return self._data.get(key)

    def insert(self, key: str, value: Value | int | str | bool) -> InsertResult:
        typed_value = coerce_value(value)
        codec.check_encodable(key, typed_value)
        self._data[key] = typed_value
        self._write_back()
        return InsertResult.INSERTED

    def remove(self, key: str) -> RemoveResult:
        self._data.pop(key, None)
        self._write_back()
        return RemoveResult.REMOVED

    def clear(self) -> None:
        self._data.clear()
        self._write_back()

    def len(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return not self._data

    def keys(self) -> list[str]:
        return sorted(self._data)

    def items(self) -> list[tuple[str, Value]]:
        return [(key, self._data[key]) for key in sorted(self._data)]

    def export_json(self) -> str:
        return codec.dump_json(self._data)

    def import_json(self, text: str) -> int:
        """Merge entries from a tagged JSON export and write back once."""
        incoming = codec.load_json(text)
        self._data.update(incoming)
        self._write_back()
        logger.info(f"Imported {len(incoming)} entries into {self.path}")
        return len(incoming)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"KeyValueStore(path={str(self.path)!r}, entries={len(self._data)})"

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _write_back(self) -> None:
        """Replace the backing file with the encoded map via temp file + rename."""
        payload = codec.encode(self._data)
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(self._data)} entries to {self.path}")
