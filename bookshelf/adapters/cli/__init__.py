"""Command-line interface adapters.

Provides CLI commands for managing the catalog:
- list: Search and sort books
- add: Create a book from a draft
- remove: Delete one book (confirmed)
- clear: Delete every book (confirmed)
"""
