"""JSON file key-value slot adapter.

Implements KeyValueSlotPort with one file per key under a base directory
(``<base_dir>/<key>.json``). Writes go through a temporary file and an
atomic rename so a crash never leaves a half-written slot behind.
"""

import asyncio
import hashlib
import logging
import os
import re
from pathlib import Path

from bookshelf.core.models import DeserializationError, PersistenceWriteError
from bookshelf.core.ports import KeyValueSlotPort

logger = logging.getLogger(__name__)

MAX_KEY_LENGTH = 100


class JsonFileKeyValueSlot(KeyValueSlotPort):
    """Stores each slot as a UTF-8 file in a directory."""

    def __init__(self, base_dir: str):
        """Initialize JSON file slot storage.

        Args:
            base_dir: Directory holding the slot files. Created if missing.

        Raises:
            ValueError: If base_dir is a filesystem root.
            OSError: If the directory cannot be created.
        """
        self.base_dir = Path(base_dir).resolve()

        if self.base_dir.parent == self.base_dir:
            raise ValueError(f"base_dir cannot be a filesystem root: {base_dir}")

        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OSError(f"Failed to create slot directory {base_dir}: {e}") from e
        self._lock = asyncio.Lock()

    @staticmethod
    def _sanitize_key(key: str) -> str:
        """Make a slot key safe to use as a filename.

        Replaces every character that is not alphanumeric, underscore,
        hyphen or dot with an underscore. Keys longer than MAX_KEY_LENGTH
        are cut short and suffixed with a digest of the full key so that
        distinct long keys never share a file.

        Examples:
            >>> JsonFileKeyValueSlot._sanitize_key("library_books_v1")
            'library_books_v1'
            >>> JsonFileKeyValueSlot._sanitize_key("../etc/passwd")
            '.._etc_passwd'
        """
        safe = re.sub(r"[^\w\-.]", "_", key)
        if len(safe) <= MAX_KEY_LENGTH:
            return safe
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:12]
        return f"{safe[: MAX_KEY_LENGTH - len(digest) - 1]}-{digest}"

    def path_for(self, key: str) -> Path:
        """Return the file backing a slot key."""
        return self.base_dir / f"{self._sanitize_key(key)}.json"

    async def read(self, key: str) -> str | None:
        """Read a slot file, or None if it does not exist."""
        path = self.path_for(key)
        async with self._lock:
            try:
                return await asyncio.to_thread(path.read_text, encoding="utf-8")
            except FileNotFoundError:
                return None
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read slot file {path}: {e}")
                raise DeserializationError(f"Cannot read {path}: {e}") from e

    async def write(self, key: str, value: str) -> None:
        """Atomically replace a slot file."""
        path = self.path_for(key)
        async with self._lock:
            try:
                await asyncio.to_thread(self._write_atomic, path, value)
            except OSError as e:
                logger.error(f"Failed to write slot file {path}: {e}")
                raise PersistenceWriteError(f"Cannot write {path}: {e}") from e

    @staticmethod
    def _write_atomic(path: Path, value: str) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
