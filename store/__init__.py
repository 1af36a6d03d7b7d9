"""
Store Module

File-backed key-value persistence layer.

This module provides:
- Tagged scalar values (Integer, Text, Boolean)
- The flat `key=value` file codec
- KeyValueStore: in-memory map with whole-file write-back
- Tagged JSON export/import
"""

__version__ = "0.1.0"

from .errors import MalformedFileError, StoreError
from .repository import InsertResult, KeyValueStore, RemoveResult
from .values import Boolean, Integer, Text, Value

__all__ = [
    "Boolean",
    "InsertResult",
    "Integer",
    "KeyValueStore",
    "MalformedFileError",
    "RemoveResult",
    "StoreError",
    "Text",
    "Value",
]
