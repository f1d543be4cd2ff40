"""External adapters for the Bookshelf catalog.

This package contains all external dependencies (SQLite, the filesystem,
the terminal) and provides implementations of the core port interfaces.

Adapter Organization:

- store/: Durable key-value slots for the persisted catalog (SQLite, JSON file)
- confirmation/: Yes/no decisions for destructive operations (prompt, auto)
- cli/: Command-line interface for browsing and editing the catalog
"""
