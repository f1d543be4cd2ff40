"""Bookshelf: a personal catalog of book records.

Add, remove, search, sort and clear books; the catalog survives across
sessions in a durable key-value slot.
"""

__version__ = "0.1.0"
