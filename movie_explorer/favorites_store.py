"""
Favorites persistence.
A small key-value storage abstraction shaped like browser localStorage, plus
FavoritesStore which keeps the favorites list under one key as a JSON array.

Loading never fails: a missing, unreadable or malformed value is an empty list.
Saving never fails either: errors are logged and the in-memory list stays
authoritative for the session.
"""

import json  # JSON (de)serialization of the favorites list
import os  # atomic replace
import tempfile  # temporary file next to the target
from pathlib import Path  # filesystem-safe paths
from typing import Dict, List, Optional, Sequence, Union  # type hints

# Validation errors raised for schema-invalid stored values
from pydantic import ValidationError  # malformed favorites

# Console logging
from loguru import logger  # console logger

from .config import FAVORITES_STORAGE_KEY  # storage key
from .models import FAVORITES_ADAPTER, Favorite  # persisted layout


class MemoryStorage:
	"""Session-only storage; nothing survives the process."""

	def __init__(self, initial: Optional[Dict[str, str]] = None):
		self._items: Dict[str, str] = dict(initial or {})  # key -> raw string

	def get_item(self, key: str) -> Optional[str]:
		return self._items.get(key)

	def set_item(self, key: str, value: str) -> None:
		self._items[key] = value


class FileStorage:
	"""
	Stores each key as `<directory>/<key>.json`.
	Writes go to a temporary file first and are moved into place, so a crash
	mid-write leaves the previous value intact.
	"""

	def __init__(self, directory: Union[str, Path]):
		self.directory = Path(directory)  # coerce to Path

	def _path(self, key: str) -> Path:
		return self.directory / f"{key}.json"

	def get_item(self, key: str) -> Optional[str]:
		path = self._path(key)
		if not path.exists():  # nothing stored yet
			return None
		return path.read_text(encoding="utf-8")

	def set_item(self, key: str, value: str) -> None:
		self.directory.mkdir(parents=True, exist_ok=True)  # ensure exists
		fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
		try:
			with os.fdopen(fd, "w", encoding="utf-8") as f:
				f.write(value)
			os.replace(tmp_path, self._path(key))  # atomic on the same filesystem
		except BaseException:
			Path(tmp_path).unlink(missing_ok=True)  # do not leave temp files behind
			raise


class FavoritesStore:
	"""Reads and writes the favorites list under a single storage key."""

	def __init__(self, storage, key: str = FAVORITES_STORAGE_KEY):
		self.storage = storage  # any object with get_item/set_item
		self.key = key

	def load(self) -> List[Favorite]:
		"""Return the stored favorites, or an empty list if there is nothing usable."""
		try:
			raw = self.storage.get_item(self.key)
		except Exception as e:  # unreadable storage behaves like empty storage
			logger.warning(f"[Favorites] Could not read '{self.key}': {e}")
			return []

		if not raw:  # absent or empty value
			return []

		try:
			favorites = FAVORITES_ADAPTER.validate_python(json.loads(raw))
		except json.JSONDecodeError as e:
			logger.warning(f"[Favorites] Ignoring unparseable value for '{self.key}': {e}")
			return []
		except ValidationError as e:
			logger.warning(f"[Favorites] Ignoring malformed favorites list '{self.key}': {e.error_count()} error(s)")
			return []

		logger.info(f"[Favorites] Loaded {len(favorites)} favorites")
		return favorites

	def save(self, favorites: Sequence[Favorite]) -> bool:
		"""
		Serialize the whole list and write it. Failures (disk full, permissions)
		are logged and swallowed; returns True only when the write succeeded.
		"""
		try:
			raw = FAVORITES_ADAPTER.dump_json(list(favorites)).decode("utf-8")
			self.storage.set_item(self.key, raw)
		except Exception as e:
			logger.warning(f"[Favorites] Could not persist {len(favorites)} favorites: {e}")
			return False
		logger.debug(f"[Favorites] Saved {len(favorites)} favorites")
		return True
