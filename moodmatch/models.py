"""
Data models for the MoodMatch client.
Defines the in-memory structures the wizard mutates while the user picks preferences.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, fields  # auto-generated __init__/__repr__, field introspection
# Import typing helpers for precise and self-documenting types
from typing import Dict, List, Optional  # optional values and the request payload

from .config import TMDB_IMAGE_URL  # poster/profile image host


@dataclass(frozen=True)
class Actor:
	"""
	A person picked in the actor step.
	id is None only when the actor was restored by name from a shared URL.
	"""
	id: Optional[int]  # catalog person id
	name: str  # display name, also what the backend receives
	profile_path: Optional[str] = None  # catalog image path like "/abc.jpg"

	@property
	def profile_image_url(self) -> Optional[str]:
		"""Small profile image URL as shown next to search results."""
		if not self.profile_path:
			return None
		return f"{TMDB_IMAGE_URL}/w92{self.profile_path}"


@dataclass
class PreferenceSelection:
	"""
	Everything the user chose in the wizard.
	Each field stays optional until the step requiring it is reached.
	"""
	mood: Optional[str] = None  # e.g. "😂 Funny"
	genre: Optional[str] = None  # e.g. "Comedy"
	language: Optional[str] = None  # e.g. "English"
	actor: Optional[Actor] = None  # optional actor filter
	release_date_start: Optional[str] = None  # four-digit year string
	release_date_end: Optional[str] = None  # four-digit year string

	def missing_required(self) -> List[str]:
		"""Names of the required fields that are still unset."""
		return [name for name in ("mood", "language", "genre") if not getattr(self, name)]

	def date_range_warning(self) -> Optional[str]:
		"""Soft warning when both years are set and start is not before end."""
		if self.release_date_start and self.release_date_end:
			if int(self.release_date_start) >= int(self.release_date_end):
				return "Release Date Start must be less than Release Date End."
		return None

	def to_request(self) -> Dict[str, Optional[str]]:
		"""Serialize for POST /api/search_films; the actor travels as its name only."""
		payload = {f.name: getattr(self, f.name) for f in fields(self)}
		payload["actor"] = self.actor.name if self.actor else None
		return payload

	def clear(self) -> None:
		for f in fields(self):
			setattr(self, f.name, None)
