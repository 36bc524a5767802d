"""
Wire models for films received from the backend and the catalog.
Raw JSON is converted here, at the network boundary, and nowhere else.
"""

from datetime import datetime  # release date formatting
from typing import Any, List, Optional, Type, TypeVar  # type hints

from loguru import logger  # console logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator  # schema definitions

ModelT = TypeVar("ModelT", bound=BaseModel)


# Canonical film record used by result cards
class FilmSummary(BaseModel):
	model_config = ConfigDict(frozen=True, extra="ignore")

	id: str  # identity of the film
	title: str  # human-readable title
	cover_image: Optional[str] = None  # poster URL if known
	rating: Optional[float] = None  # average rating
	year: Optional[int] = None  # release year
	genres: Optional[List[str]] = None  # genre names

	@field_validator("id", mode="before")
	@classmethod
	def _coerce_id(cls, value: Any) -> Any:
		# catalog ids arrive as integers
		return str(value) if isinstance(value, int) else value

	@model_validator(mode="before")
	@classmethod
	def _poster_fallback(cls, data: Any) -> Any:
		# recommendations may carry poster_url instead of cover_image
		if isinstance(data, dict) and not data.get("cover_image") and data.get("poster_url"):
			data = {**data, "cover_image": data["poster_url"]}
		return data


# Cast entry on the detail page
class CastMember(BaseModel):
	model_config = ConfigDict(frozen=True, extra="ignore")

	name: str  # actor name
	profile_path: Optional[str] = None  # full profile image URL, if any


# Extended film record returned by GET /api/film/<id>
class FilmDetail(BaseModel):
	model_config = ConfigDict(frozen=True, extra="ignore")

	id: str
	title: str
	director: Optional[str] = None
	cover_image: Optional[str] = None
	trailer_url: Optional[str] = None
	description: Optional[str] = None
	release_date: Optional[str] = None  # ISO date string
	language: Optional[str] = None
	genres: List[str] = []
	rating: Optional[str] = None  # shown verbatim
	actors: List[CastMember] = []

	@field_validator("id", "rating", mode="before")
	@classmethod
	def _coerce_str(cls, value: Any) -> Any:
		return str(value) if isinstance(value, (int, float)) else value

	@property
	def formatted_release_date(self) -> Optional[str]:
		"""Release date as MM/DD/YYYY; the raw value when it cannot be parsed."""
		if not self.release_date:
			return None
		try:
			return datetime.strptime(self.release_date[:10], "%Y-%m-%d").strftime("%m/%d/%Y")
		except ValueError:
			return self.release_date

	def summary(self) -> FilmSummary:
		"""Collapse to the card representation."""
		year = None
		if self.release_date and self.release_date[:4].isdigit():
			year = int(self.release_date[:4])
		try:
			rating = float(self.rating) if self.rating else None
		except ValueError:
			rating = None
		return FilmSummary(
			id=self.id,
			title=self.title,
			cover_image=self.cover_image,
			rating=rating,
			year=year,
			genres=list(self.genres) or None,
		)


def parse_list(payload: Any, model: Type[ModelT], source: str) -> List[ModelT]:
	"""
	Convert a JSON array into models.
	A payload that is not a list is logged and treated as empty; items that fail
	validation are skipped with a warning so one bad record never hides the rest.
	"""
	if not isinstance(payload, list):
		logger.error(f"[Schemas] Unexpected response format from {source}: {type(payload).__name__}")
		return []

	items: List[ModelT] = []  # accumulator
	for position, raw in enumerate(payload):
		try:
			items.append(model.model_validate(raw))
		except ValidationError as e:
			logger.warning(f"[Schemas] Skipping malformed item {position} from {source}: {e.error_count()} error(s)")
	return items
