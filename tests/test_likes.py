"""
Tests for LikedMovieStore: confirmed toggles, anonymous no-ops, local cache
mirroring and remote reconciliation.
"""

from unittest.mock import MagicMock

import pytest

from conftest import film
from moodmatch.api_client import ApiClient
from moodmatch.auth import Identity
from moodmatch.catalog import CatalogClient
from moodmatch.config import LIKED_MOVIES_KEY
from moodmatch.errors import RemoteCallError
from moodmatch.likes import LikedMovieStore, cache_key
from moodmatch.storage import LocalStorage

USER_KEY = cache_key(Identity("user_123", "tok"))


@pytest.fixture
def api():
	return MagicMock(spec=ApiClient)


@pytest.fixture
def storage(tmp_path):
	return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def store(api, storage, identity):
	return LikedMovieStore(api, storage, lambda: identity)


def test_like_twice_keeps_single_entry(store, api, storage, identity):
	assert store.toggle("603", True)
	assert store.toggle("603", True)
	assert store.liked_ids == ("603",)
	assert storage.get_item(USER_KEY) == ["603"]
	api.like_movie.assert_called_with(identity, "603", True)
	assert api.like_movie.call_count == 2


def test_unlike_removes_and_persists(store, storage):
	store.toggle("1", True)
	store.toggle("2", True)
	assert store.toggle("1", False)
	assert store.liked_ids == ("2",)
	assert storage.get_item(USER_KEY) == ["2"]


def test_unlike_absent_id_is_noop(store):
	store.toggle("1", True)
	assert store.toggle("99", False)
	assert store.liked_ids == ("1",)


def test_anonymous_toggle_makes_no_call(api, storage):
	store = LikedMovieStore(api, storage, lambda: None)
	assert not store.toggle("603", True)
	api.like_movie.assert_not_called()
	assert store.liked_ids == ()
	assert storage.get_item(LIKED_MOVIES_KEY) is None


def test_remote_failure_leaves_state_untouched(store, api, storage):
	store.toggle("1", True)
	api.like_movie.side_effect = RemoteCallError("500 Internal Server Error", status_code=500)
	assert not store.toggle("2", True)
	assert store.liked_ids == ("1",)
	assert storage.get_item(USER_KEY) == ["1"]


def test_hydrate_reads_local_cache(api, storage):
	storage.set_item(LIKED_MOVIES_KEY, ["10", 11, "10"])
	store = LikedMovieStore(api, storage, lambda: None)
	assert store.hydrate() == ("10", "11")
	assert store.is_liked("11")
	api.get_liked_movies.assert_not_called()


def test_hydrate_ignores_garbage(api, storage):
	storage.set_item(LIKED_MOVIES_KEY, {"not": "a list"})
	store = LikedMovieStore(api, storage, lambda: None)
	assert store.hydrate() == ()


def test_sync_remote_replaces_working_set(store, api, storage):
	storage.set_item(USER_KEY, ["local-only"])
	store.hydrate()
	api.get_liked_movies.return_value = ["5", "6"]

	assert store.sync_remote()
	assert store.liked_ids == ("5", "6")
	assert storage.get_item(USER_KEY) == ["5", "6"]


def test_sync_remote_failure_keeps_local(store, api, storage):
	storage.set_item(USER_KEY, ["7"])
	store.hydrate()
	api.get_liked_movies.side_effect = RemoteCallError("timeout")
	assert not store.sync_remote()
	assert store.liked_ids == ("7",)


def test_sync_remote_malformed_keeps_local(store, api, storage):
	storage.set_item(USER_KEY, ["7"])
	store.hydrate()
	api.get_liked_movies.return_value = None
	assert not store.sync_remote()
	assert store.liked_ids == ("7",)


def test_sync_remote_skipped_for_anonymous(api, storage):
	store = LikedMovieStore(api, storage, lambda: None)
	assert not store.sync_remote()
	api.get_liked_movies.assert_not_called()


def test_subscribers_are_notified(store):
	seen = []
	unsubscribe = store.subscribe(seen.append)
	store.toggle("1", True)
	store.toggle("1", True)  # no change, no notification
	unsubscribe()
	store.toggle("2", True)
	assert seen == [("1",)]


def test_remove_is_unlike(store, api, identity):
	store.toggle("3", True)
	assert store.remove("3")
	api.like_movie.assert_called_with(identity, "3", False)
	assert store.liked_ids == ()


def test_liked_films_skips_unresolvable(store):
	store.toggle("1", True)
	store.toggle("2", True)
	store.toggle("3", True)
	catalog = MagicMock(spec=CatalogClient)
	catalog.get_movie.side_effect = [film("1"), RemoteCallError("404", status_code=404), None]
	films = store.liked_films(catalog)
	assert [f.id for f in films] == ["1"]


def test_cache_is_keyed_per_user():
	assert cache_key(None) == LIKED_MOVIES_KEY
	assert cache_key(Identity("user_123")) == "likedMovies:user_123"


def test_signed_in_sync_does_not_leak_to_anonymous_session(api, storage, identity):
	signed_in = LikedMovieStore(api, storage, lambda: identity)
	api.get_liked_movies.return_value = ["603"]
	assert signed_in.sync_remote()

	anonymous = LikedMovieStore(api, storage, lambda: None)
	assert anonymous.hydrate() == ()


def test_two_users_share_storage_without_overwriting(api, storage):
	alice = Identity("alice", "a")
	bob = Identity("bob", "b")
	alice_store = LikedMovieStore(api, storage, lambda: alice)
	bob_store = LikedMovieStore(api, storage, lambda: bob)

	alice_store.toggle("1", True)
	bob_store.toggle("2", True)

	assert LikedMovieStore(api, storage, lambda: alice).hydrate() == ("1",)
	assert LikedMovieStore(api, storage, lambda: bob).hydrate() == ("2",)


def test_hydrate_follows_the_current_user(api, storage, identity):
	current = {"identity": identity}
	store = LikedMovieStore(api, storage, lambda: current["identity"])
	store.toggle("603", True)

	current["identity"] = None
	assert store.hydrate() == ()
	current["identity"] = identity
	assert store.hydrate() == ("603",)
