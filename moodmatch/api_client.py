"""
HTTP client for the recommendation backend.
Endpoints:
- POST /api/search_films: recommendations for a preference selection
- POST /api/search_similar_films: films similar to a selected film
- POST /api/search: films matching a free-text description
- GET /api/film/<id>: extended film details
- GET /api/liked_movies: the signed-in user's liked movie ids
- POST|DELETE /api/like_movie: like or unlike a movie for the signed-in user
"""

from typing import Any, Dict, List, Optional  # type hints

import requests  # HTTP transport
from loguru import logger  # console logger
from pydantic import ValidationError as SchemaError  # detail payload validation

from .auth import Identity  # per-user request headers
from .config import DEFAULT_API_URL  # localhost backend
from .errors import RemoteCallError  # non-2xx and transport failures
from .models import PreferenceSelection  # wizard selection
from .schemas import FilmDetail, FilmSummary, parse_list  # wire models


class ApiClient:
	"""
	Thin wrapper over a requests.Session for the backend's JSON API.
	Every non-2xx response or transport failure becomes a RemoteCallError; the
	caller decides whether the flow surfaces it or drops it.
	"""

	def __init__(self, base_url: str = DEFAULT_API_URL, session: Optional[requests.Session] = None, timeout: float = 10.0):
		self.base_url = base_url.rstrip("/")
		self.session = session or requests.Session()
		self.timeout = timeout

	def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> Any:
		"""Issue one request and return the decoded JSON body (None when empty)."""
		url = f"{self.base_url}{path}"
		logger.debug(f"[Api] {method} {path}")
		try:
			response = self.session.request(method, url, json=json, headers=headers, timeout=self.timeout)
		except requests.RequestException as e:
			logger.error(f"[Api] {method} {path} failed: {e}")
			raise RemoteCallError(f"{method} {path} failed: {e}") from e

		if not response.ok:
			message = f"{method} {path}: {response.status_code} {response.reason} - {response.text}"
			logger.error(f"[Api] {message}")
			raise RemoteCallError(message, status_code=response.status_code)

		if not response.content:
			return None
		try:
			return response.json()
		except ValueError:
			logger.error(f"[Api] {method} {path} returned a non-JSON body")
			return None

	# ------------------------------------------------------------- searches

	def search_films(self, selection: PreferenceSelection) -> List[FilmSummary]:
		"""Recommendations for the wizard's selection."""
		payload = self._request("POST", "/api/search_films", json=selection.to_request())
		films = parse_list(payload, FilmSummary, "/api/search_films")
		logger.info(f"[Api] Received {len(films)} recommendations")
		return films

	def search_similar_films(self, film_id: str) -> List[FilmSummary]:
		payload = self._request("POST", "/api/search_similar_films", json={"selected_film_id": film_id})
		return parse_list(payload, FilmSummary, "/api/search_similar_films")

	def search_by_description(self, description: str) -> List[FilmSummary]:
		payload = self._request("POST", "/api/search", json={"description": description})
		return parse_list(payload, FilmSummary, "/api/search")

	def get_film(self, film_id: str) -> Optional[FilmDetail]:
		"""Film details, or None when the payload does not look like a film."""
		payload = self._request("GET", f"/api/film/{requests.utils.quote(str(film_id), safe='')}")
		try:
			return FilmDetail.model_validate(payload)
		except SchemaError as e:
			logger.error(f"[Api] Unexpected film detail format for {film_id}: {e.error_count()} error(s)")
			return None

	# --------------------------------------------------------------- likes

	def get_liked_movies(self, identity: Identity) -> Optional[List[str]]:
		"""
		Liked movie ids for the signed-in user.
		Returns None when the response lacks a likedMovies array.
		"""
		payload = self._request("GET", "/api/liked_movies", headers=identity.auth_headers())
		entries = payload.get("likedMovies") if isinstance(payload, dict) else None
		if not isinstance(entries, list):
			logger.error(f"[Api] Unexpected liked movies format: {payload!r}")
			return None

		ids: List[str] = []
		for entry in entries:
			movie_id = entry.get("id") if isinstance(entry, dict) else None
			if movie_id is None:
				logger.warning(f"[Api] Skipping liked movie entry without id: {entry!r}")
				continue
			ids.append(str(movie_id))
		return ids

	def like_movie(self, identity: Identity, movie_id: str, liked: bool) -> None:
		"""Create (liked=True) or delete (liked=False) the like for the signed-in user."""
		method = "POST" if liked else "DELETE"
		headers = {"Content-Type": "application/json", **identity.auth_headers()}
		self._request(method, "/api/like_movie", json={"movieId": movie_id, "liked": liked}, headers=headers)
		logger.info(f"[Api] {'Liked' if liked else 'Unliked'} movie {movie_id} for user {identity.user_id}")
