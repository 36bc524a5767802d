"""
Tests for the selection record and the film wire models.
"""

import pytest
from pydantic import ValidationError as SchemaError

from moodmatch.models import Actor, PreferenceSelection
from moodmatch.schemas import FilmDetail, FilmSummary


def test_date_range_warning_only_when_start_not_before_end():
	assert PreferenceSelection(release_date_start="1990", release_date_end="2000").date_range_warning() is None
	assert PreferenceSelection(release_date_start="2000").date_range_warning() is None
	assert PreferenceSelection(release_date_start="2000", release_date_end="2000").date_range_warning()
	assert PreferenceSelection(release_date_start="2005", release_date_end="2000").date_range_warning()


def test_missing_required_lists_unset_fields():
	selection = PreferenceSelection(mood="😊 Happy", genre="Drama")
	assert selection.missing_required() == ["language"]


def test_to_request_without_actor():
	payload = PreferenceSelection(mood="m", genre="g", language="l").to_request()
	assert payload["actor"] is None
	assert set(payload) == {"mood", "genre", "language", "actor", "release_date_start", "release_date_end"}


def test_actor_image_url():
	assert Actor(id=1, name="A").profile_image_url is None
	assert Actor(id=1, name="A", profile_path="/a.jpg").profile_image_url == "https://image.tmdb.org/t/p/w92/a.jpg"


def test_film_summary_is_immutable_and_coerces_id():
	summary = FilmSummary(id=42, title="Answer", genres=["Sci-Fi"])
	assert summary.id == "42"
	with pytest.raises(SchemaError):
		summary.title = "Other"


def test_film_detail_unparseable_date_is_returned_verbatim():
	detail = FilmDetail(id="1", title="T", release_date="sometime in 1999")
	assert detail.formatted_release_date == "sometime in 1999"
	assert detail.summary().year is None
