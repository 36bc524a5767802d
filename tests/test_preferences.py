"""
Tests for PreferenceStore: query-string mirroring and restoring shared links.
"""

from moodmatch.config import MAX_RELEASE_YEAR
from moodmatch.models import Actor
from moodmatch.preferences import PreferenceStore, is_valid_release_year


def test_setting_and_clearing_mood_mirrors_query():
	params = {}
	store = PreferenceStore(params)

	store.set_mood("Funny")
	assert params == {"mood": "Funny"}
	assert store.selection.mood == "Funny"

	store.set_mood(None)
	assert "mood" not in params
	assert store.selection.mood is None


def test_setters_are_idempotent():
	params = {}
	store = PreferenceStore(params)
	store.set_genre("Drama")
	first = dict(params)
	store.set_genre("Drama")
	assert params == first


def test_actor_is_mirrored_by_name():
	params = {}
	store = PreferenceStore(params)
	store.set_actor(Actor(id=31, name="Tom Hanks", profile_path="/th.jpg"))
	assert params["actor"] == "Tom Hanks"
	assert store.selection.actor.id == 31

	store.set_actor(None)
	assert "actor" not in params


def test_empty_year_clears_key():
	params = {}
	store = PreferenceStore(params)
	assert store.set_release_date_start("1995")
	assert params["release_date_start"] == "1995"
	assert store.set_release_date_start("")
	assert "release_date_start" not in params
	assert store.selection.release_date_start is None


def test_out_of_range_year_is_ignored():
	params = {}
	store = PreferenceStore(params)
	store.set_release_date_end("2001")
	assert not store.set_release_date_end("1850")
	assert not store.set_release_date_end(str(MAX_RELEASE_YEAR + 1))
	assert not store.set_release_date_end("abcd")
	assert store.selection.release_date_end == "2001"
	assert params["release_date_end"] == "2001"


def test_is_valid_release_year_bounds():
	assert is_valid_release_year("1900")
	assert is_valid_release_year(str(MAX_RELEASE_YEAR))
	assert not is_valid_release_year("1899")
	assert not is_valid_release_year("")


def test_is_valid_release_year_rejects_non_ascii_digits():
	assert not is_valid_release_year("²")
	assert not is_valid_release_year("19²5")
	assert not is_valid_release_year("١٩٩٩")  # Arabic-Indic digits
	assert not is_valid_release_year("01999")


def test_shared_link_with_odd_year_still_loads():
	params = {"release_date_start": "²", "release_date_end": "2001"}
	selection = PreferenceStore(params).load_from_query()
	assert selection.release_date_start is None
	assert selection.release_date_end == "2001"
	assert "release_date_start" not in params


def test_reset_clears_every_key():
	params = {"page": "keep"}
	store = PreferenceStore(params)
	store.set_mood("😂 Funny")
	store.set_language("English")
	store.set_release_date_start("1990")
	store.reset()
	assert params == {"page": "keep"}
	assert store.selection.missing_required() == ["mood", "language", "genre"]


def test_load_from_query_normalizes_options():
	params = {
		"mood": "funny",
		"genre": "comedy",
		"language": "English",
		"actor": "Keanu Reeves",
		"release_date_start": "1990",
		"release_date_end": "1850",
	}
	store = PreferenceStore(params)
	selection = store.load_from_query()

	assert selection.mood == "😂 Funny"
	assert selection.genre == "Comedy"
	assert selection.language == "English"
	assert selection.actor == Actor(id=None, name="Keanu Reeves")
	assert selection.release_date_start == "1990"
	assert selection.release_date_end is None
	# normalized values are written back, invalid ones removed
	assert params["mood"] == "😂 Funny"
	assert "release_date_end" not in params


def test_load_from_query_drops_unknown_values():
	params = {"genre": "zzzzqqq"}
	store = PreferenceStore(params)
	store.load_from_query()
	assert store.selection.genre is None
	assert "genre" not in params
