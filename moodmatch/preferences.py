"""
Preference state store.
Holds the wizard's current selection and mirrors every change into the query
string so the page state can be bookmarked or shared.
"""

from typing import MutableMapping, Optional  # type hints

from loguru import logger  # console logger

from .choices import GENRES, LANGUAGES, MOODS, normalize_choice  # option lists
from .config import MAX_RELEASE_YEAR, MIN_RELEASE_YEAR  # accepted release years
from .models import Actor, PreferenceSelection  # selection record

# Query-string keys, one per selection field
QUERY_KEYS = ("mood", "genre", "language", "actor", "release_date_start", "release_date_end")


def is_valid_release_year(value: str) -> bool:
	"""True for a four-digit year inside the accepted range."""
	if len(value) != 4 or not (value.isascii() and value.isdigit()):
		return False
	return MIN_RELEASE_YEAR <= int(value) <= MAX_RELEASE_YEAR


class PreferenceStore:
	"""
	Every setter updates the in-memory selection and then mirrors the value into
	the query mapping, deleting the key when the value is cleared.
	query_params can be any mutable mapping; the UI passes st.query_params.
	"""

	def __init__(self, query_params: Optional[MutableMapping[str, str]] = None):
		self.selection = PreferenceSelection()
		self.query_params = query_params if query_params is not None else {}

	def _mirror(self, key: str, value: Optional[str]) -> None:
		if value:
			self.query_params[key] = value
		elif key in self.query_params:
			del self.query_params[key]

	def set_mood(self, mood: Optional[str]) -> None:
		self.selection.mood = mood or None
		self._mirror("mood", mood)

	def set_genre(self, genre: Optional[str]) -> None:
		self.selection.genre = genre or None
		self._mirror("genre", genre)

	def set_language(self, language: Optional[str]) -> None:
		self.selection.language = language or None
		self._mirror("language", language)

	def set_actor(self, actor: Optional[Actor]) -> None:
		self.selection.actor = actor
		self._mirror("actor", actor.name if actor else None)

	def _set_year(self, key: str, value: Optional[str]) -> bool:
		value = (value or "").strip()
		if value and not is_valid_release_year(value):
			logger.debug(f"[Preferences] Ignoring out-of-range year {value!r} for {key}")
			return False
		setattr(self.selection, key, value or None)
		self._mirror(key, value)
		return True

	def set_release_date_start(self, value: Optional[str]) -> bool:
		"""Set the first release year; out-of-range years are ignored (returns False)."""
		return self._set_year("release_date_start", value)

	def set_release_date_end(self, value: Optional[str]) -> bool:
		"""Set the last release year; out-of-range years are ignored (returns False)."""
		return self._set_year("release_date_end", value)

	def reset(self) -> None:
		"""Clear every field and its query key."""
		self.selection.clear()
		for key in QUERY_KEYS:
			self._mirror(key, None)
		logger.debug("[Preferences] Selection reset")

	def load_from_query(self) -> PreferenceSelection:
		"""
		Restore the selection from the query mapping (e.g. a shared link).
		Option values are snapped to the known labels; unknown values are dropped
		from both the selection and the query string. The actor comes back by name only.
		"""
		for key, options in (("mood", MOODS), ("genre", GENRES), ("language", LANGUAGES)):
			raw = self.query_params.get(key)
			value = normalize_choice(raw, options)
			if raw and value is None:
				logger.warning(f"[Preferences] Dropping unknown {key} {raw!r} from query string")
			getattr(self, f"set_{key}")(value)

		actor_name = (self.query_params.get("actor") or "").strip()
		self.set_actor(Actor(id=None, name=actor_name) if actor_name else None)

		for key in ("release_date_start", "release_date_end"):
			raw = self.query_params.get(key)
			if not self._set_year(key, raw):
				self._set_year(key, None)

		logger.info(f"[Preferences] Restored selection from query string: {self.selection}")
		return self.selection
