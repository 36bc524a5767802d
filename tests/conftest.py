"""
Shared fixtures: fake HTTP responses, manually fired timers, sample films.
"""

import json
from typing import Any, List
from unittest.mock import MagicMock

import pytest
import requests

from moodmatch.auth import Identity
from moodmatch.schemas import FilmSummary


def make_response(status_code: int = 200, payload: Any = None, reason: str = "OK") -> requests.Response:
	"""A real requests.Response carrying a JSON body."""
	response = requests.Response()
	response.status_code = status_code
	response.reason = reason
	response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
	response.headers["Content-Type"] = "application/json"
	return response


def film(film_id: str, title: str = None) -> FilmSummary:
	return FilmSummary(id=film_id, title=title or f"Film {film_id}")


class ManualTimer:
	"""Stand-in for threading.Timer that only fires when told to."""

	def __init__(self, interval, function, args=None):
		self.interval = interval
		self.function = function
		self.args = tuple(args or ())
		self.daemon = False
		self.started = False
		self.cancelled = False

	def start(self):
		self.started = True

	def cancel(self):
		self.cancelled = True

	def fire(self):
		if not self.cancelled:
			self.function(*self.args)


class ManualTimerFactory:
	def __init__(self):
		self.timers: List[ManualTimer] = []

	def __call__(self, interval, function, args=None):
		timer = ManualTimer(interval, function, args)
		self.timers.append(timer)
		return timer

	@property
	def live(self) -> List[ManualTimer]:
		return [t for t in self.timers if not t.cancelled]

	def fire_all(self):
		for timer in list(self.live):
			timer.fire()


@pytest.fixture
def session():
	"""A requests.Session double; set session.request.return_value per test."""
	fake = MagicMock(spec=requests.Session)
	fake.request.return_value = make_response(200, [])
	return fake


@pytest.fixture
def timers():
	return ManualTimerFactory()


@pytest.fixture
def identity():
	return Identity(user_id="user_123", token="tok")
