"""Durable key-value slot adapters.

Implementations support multiple backends:
- SQLite (single-file database, one row per slot)
- JSON file (one plain file per slot)
"""
