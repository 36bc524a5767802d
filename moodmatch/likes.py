"""
Liked-movie reconciliation.
The liked set lives in two places: a local durable cache (readable offline,
and the only copy for anonymous users) and the remote per-user store, which
is the source of truth once the user is signed in.
"""

from typing import Callable, List, Optional, Tuple  # type hints

from loguru import logger  # console logger

from .api_client import ApiClient  # remote per-user store
from .auth import Identity, IdentityProvider  # signed-in user lookup
from .catalog import CatalogClient  # id -> film resolution
from .config import LIKED_MOVIES_KEY  # cache key
from .errors import MoodMatchError, RemoteCallError  # failure types
from .schemas import FilmSummary  # liked-movies page cards
from .storage import LocalStorage  # local durable cache

Subscriber = Callable[[Tuple[str, ...]], None]


def cache_key(identity: Optional[Identity]) -> str:
	"""Local cache slot for one client: per signed-in user, or the bare key when anonymous."""
	if identity is None:
		return LIKED_MOVIES_KEY
	return f"{LIKED_MOVIES_KEY}:{identity.user_id}"


class LikedMovieStore:
	"""
	Sole mutator of the liked-movie set; everything else subscribes.
	Changes are applied only after the remote store confirms them, and a failed
	remote call is logged and dropped without retry.
	"""

	def __init__(self, api: ApiClient, storage: LocalStorage, identity_provider: IdentityProvider):
		self.api = api
		self.storage = storage
		self.identity_provider = identity_provider
		self._liked: List[str] = []
		self._subscribers: List[Subscriber] = []

	@property
	def liked_ids(self) -> Tuple[str, ...]:
		return tuple(self._liked)

	def is_liked(self, movie_id: str) -> bool:
		return str(movie_id) in self._liked

	def subscribe(self, callback: Subscriber) -> Callable[[], None]:
		"""Register an observer; returns a function that unregisters it."""
		self._subscribers.append(callback)

		def unsubscribe() -> None:
			if callback in self._subscribers:
				self._subscribers.remove(callback)

		return unsubscribe

	def _replace(self, ids: List[str], identity: Optional[Identity]) -> None:
		"""Swap in a new working set, mirror it to the user's cache slot and notify observers."""
		deduped = list(dict.fromkeys(str(i) for i in ids))
		changed = deduped != self._liked
		self._liked = deduped
		self.storage.set_item(cache_key(identity), deduped)
		if changed:
			snapshot = self.liked_ids
			for callback in list(self._subscribers):
				callback(snapshot)

	def hydrate(self) -> Tuple[str, ...]:
		"""Load the working set from the current user's slot in the local cache."""
		cached = self.storage.get_item(cache_key(self.identity_provider()))
		if cached is None:
			cached = []
		elif not isinstance(cached, list):
			logger.warning(f"[Likes] Ignoring cached liked movies of type {type(cached).__name__}")
			cached = []
		self._liked = list(dict.fromkeys(str(i) for i in cached))
		logger.debug(f"[Likes] Hydrated {len(self._liked)} liked movies from local cache")
		return self.liked_ids

	def sync_remote(self) -> bool:
		"""
		Replace the working set with the remote store's contents.
		Returns False (state untouched) for anonymous users, failed calls and
		malformed payloads.
		"""
		identity = self.identity_provider()
		if identity is None:
			return False
		try:
			remote_ids = self.api.get_liked_movies(identity)
		except RemoteCallError as e:
			logger.error(f"[Likes] Failed to fetch liked movies: {e}")
			return False
		if remote_ids is None:
			return False

		self._replace(remote_ids, identity)
		logger.info(f"[Likes] Reconciled {len(self._liked)} liked movies from remote store")
		return True

	def toggle(self, movie_id: str, liked: bool) -> bool:
		"""
		Like or unlike a movie for the signed-in user.
		Returns True when the remote store confirmed the change.
		"""
		identity = self.identity_provider()
		if identity is None:
			logger.debug(f"[Likes] Ignoring like toggle for {movie_id}: no signed-in user")
			return False

		movie_id = str(movie_id)
		try:
			self.api.like_movie(identity, movie_id, liked)
		except RemoteCallError as e:
			logger.error(f"[Likes] Error {'liking' if liked else 'unliking'} movie {movie_id}: {e}")
			return False

		if liked and movie_id not in self._liked:
			self._replace(self._liked + [movie_id], identity)
		elif not liked and movie_id in self._liked:
			self._replace([i for i in self._liked if i != movie_id], identity)
		return True

	def remove(self, movie_id: str) -> bool:
		return self.toggle(movie_id, False)

	def liked_films(self, catalog: CatalogClient) -> List[FilmSummary]:
		"""Resolve liked ids to cards; ids the catalog cannot resolve are skipped."""
		films: List[FilmSummary] = []
		for movie_id in self._liked:
			try:
				film: Optional[FilmSummary] = catalog.get_movie(movie_id)
			except MoodMatchError as e:
				logger.warning(f"[Likes] Could not resolve liked movie {movie_id}: {e}")
				continue
			if film is not None:
				films.append(film)
		return films
