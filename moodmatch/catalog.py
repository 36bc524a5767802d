"""
TMDB catalog client.
Title search, person search and lookup by id, queried directly with a public API key.
"""

from typing import Any, Dict, List, Optional  # type hints

import requests  # HTTP transport
from loguru import logger  # console logger
from pydantic import ValidationError as SchemaError  # card validation

from .config import TMDB_API_URL, TMDB_IMAGE_URL  # catalog endpoints
from .errors import ConfigurationError, RemoteCallError  # failure types
from .models import Actor  # person search results
from .schemas import FilmSummary  # card representation


class CatalogClient:
	"""
	Converts catalog records into FilmSummary / Actor at the boundary.
	Results without a usable id or title are dropped.
	"""

	def __init__(
		self,
		api_key: Optional[str],
		base_url: str = TMDB_API_URL,
		image_base_url: str = TMDB_IMAGE_URL,
		session: Optional[requests.Session] = None,
		timeout: float = 10.0,
	):
		self.api_key = api_key
		self.base_url = base_url.rstrip("/")
		self.image_base_url = image_base_url.rstrip("/")
		self.session = session or requests.Session()
		self.timeout = timeout

	def image_url(self, path: Optional[str], size: str = "w200") -> Optional[str]:
		"""Full image URL for a catalog path like "/abc.jpg"."""
		if not path:
			return None
		return f"{self.image_base_url}/{size}{path}"

	def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
		if not self.api_key:
			logger.error("[Catalog] TMDB API key is not set")
			raise ConfigurationError("TMDB API key is not set")

		query = {"api_key": self.api_key, **(params or {})}
		try:
			response = self.session.request("GET", f"{self.base_url}{path}", params=query, timeout=self.timeout)
		except requests.RequestException as e:
			logger.error(f"[Catalog] GET {path} failed: {e}")
			raise RemoteCallError(f"GET {path} failed: {e}") from e

		if not response.ok:
			logger.error(f"[Catalog] GET {path}: {response.status_code} {response.reason}")
			raise RemoteCallError(f"GET {path}: {response.status_code} {response.reason}", status_code=response.status_code)
		try:
			return response.json()
		except ValueError:
			logger.error(f"[Catalog] GET {path} returned a non-JSON body")
			return {}

	def _results(self, payload: Any, path: str) -> List[Dict[str, Any]]:
		results = payload.get("results") if isinstance(payload, dict) else None
		if not isinstance(results, list):
			logger.error(f"[Catalog] Unexpected response format from {path}")
			return []
		return [r for r in results if isinstance(r, dict)]

	def _to_summary(self, record: Dict[str, Any], size: str) -> Optional[FilmSummary]:
		if record.get("id") is None or not record.get("title"):
			return None
		try:
			release = record.get("release_date")
			release = release[:4] if isinstance(release, str) else ""
			return FilmSummary.model_validate({
				"id": record["id"],
				"title": record["title"],
				"cover_image": self.image_url(record.get("poster_path"), size),
				"rating": record.get("vote_average"),
				"year": int(release) if release.isascii() and release.isdigit() else None,
			})
		except (SchemaError, ValueError, TypeError) as e:
			logger.warning(f"[Catalog] Skipping malformed movie record {record.get('id')!r}: {e}")
			return None

	def search_movies(self, title: str) -> List[FilmSummary]:
		"""Films whose title matches the query."""
		payload = self._get("/search/movie", {"query": title})
		films = [self._to_summary(r, "w200") for r in self._results(payload, "/search/movie")]
		films = [f for f in films if f is not None]
		logger.debug(f"[Catalog] '{title}' matched {len(films)} films")
		return films

	def search_people(self, name: str) -> List[Actor]:
		"""People matching the query; only those with a profile image are kept."""
		payload = self._get("/search/person", {"query": name})
		actors = []
		for record in self._results(payload, "/search/person"):
			if record.get("id") is None or not record.get("name") or not record.get("profile_path"):
				continue
			if not isinstance(record["name"], str) or not isinstance(record["profile_path"], str):
				logger.warning(f"[Catalog] Skipping malformed person record {record.get('id')!r}")
				continue
			try:
				person_id = int(record["id"])
			except (ValueError, TypeError):
				logger.warning(f"[Catalog] Skipping person with non-numeric id {record['id']!r}")
				continue
			actors.append(Actor(id=person_id, name=record["name"], profile_path=record["profile_path"]))
		logger.debug(f"[Catalog] '{name}' matched {len(actors)} people")
		return actors

	def get_movie(self, movie_id: str) -> Optional[FilmSummary]:
		"""One film by catalog id, with a large poster."""
		payload = self._get(f"/movie/{movie_id}")
		if not isinstance(payload, dict):
			return None
		return self._to_summary(payload, "w500")
