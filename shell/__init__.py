"""
Shell Module

Command shell and CLI around the key-value store.

This module provides:
- YAML-based configuration loading
- Logging setup
- The interactive command loop (get/set/remove/list/clear/exit)
- One-shot CLI commands and tagged JSON export/import
"""

__version__ = "0.1.0"
