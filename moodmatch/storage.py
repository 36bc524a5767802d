"""
Local durable cache.
A small key/value store persisted as one JSON document, playing the role the
browser's localStorage plays for the web front end.
"""

import json  # document encoding
import threading  # serializes writers sharing the file
from pathlib import Path  # filesystem-safe paths
from typing import Any, Dict, Optional  # type hints

from loguru import logger  # console logger


class LocalStorage:
	"""
	Key/value cache backed by a JSON file.
	Reads are always served from disk so the cache stays usable offline and
	across restarts; a missing or corrupt file reads as empty.
	"""

	def __init__(self, path: Path):
		self.path = Path(path)
		self._lock = threading.Lock()

	def _read(self) -> Dict[str, Any]:
		if not self.path.exists():
			return {}
		try:
			with open(self.path, "r", encoding="utf-8") as f:
				data = json.load(f)
		except (OSError, json.JSONDecodeError) as e:
			logger.warning(f"[Storage] Ignoring unreadable cache at {self.path}: {e}")
			return {}
		if not isinstance(data, dict):
			logger.warning(f"[Storage] Ignoring cache with unexpected shape at {self.path}")
			return {}
		return data

	def get_item(self, key: str) -> Optional[Any]:
		"""Return the stored value for key, or None when absent."""
		return self._read().get(key)

	def set_item(self, key: str, value: Any) -> None:
		"""Store value under key, replacing any previous value."""
		with self._lock:  # read-modify-write must not interleave across sessions
			data = self._read()
			data[key] = value
			self.path.parent.mkdir(parents=True, exist_ok=True)  # first write creates the folder
			tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
			with open(tmp_path, "w", encoding="utf-8") as f:
				json.dump(data, f)
			tmp_path.replace(self.path)  # atomic swap so readers never see half a file
		logger.debug(f"[Storage] Wrote key '{key}' to {self.path}")

