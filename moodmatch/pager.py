"""
Result pager.
Shows result cards three at a time with wraparound navigation.
"""

import math  # page count
from typing import Iterable, List  # type hints

from loguru import logger  # console logger

from .config import PAGE_SIZE  # cards per page
from .schemas import FilmSummary  # result cards


def dedupe_films(films: Iterable[FilmSummary]) -> List[FilmSummary]:
	"""Drop repeated ids, keeping the first occurrence and the original order."""
	seen = set()
	unique = []
	for film in films:
		if film.id in seen:
			continue
		seen.add(film.id)
		unique.append(film)
	return unique


class ResultPager:
	def __init__(self, films: Iterable[FilmSummary] = (), page_size: int = PAGE_SIZE):
		if page_size < 1:
			raise ValueError(f"page_size must be positive, got {page_size}")
		self.page_size = page_size
		self.films: List[FilmSummary] = []
		self.current_page = 0
		self.reset(films)

	def reset(self, films: Iterable[FilmSummary]) -> None:
		"""Replace the result set and go back to the first page."""
		raw = list(films)
		self.films = dedupe_films(raw)
		self.current_page = 0
		if len(raw) != len(self.films):
			logger.debug(f"[Pager] Dropped {len(raw) - len(self.films)} duplicate results")

	@property
	def page_count(self) -> int:
		return math.ceil(len(self.films) / self.page_size)

	@property
	def has_navigation(self) -> bool:
		"""Navigation controls only make sense with more than one page."""
		return self.page_count > 1

	@property
	def visible(self) -> List[FilmSummary]:
		start = self.current_page * self.page_size
		return self.films[start:start + self.page_size]

	def next(self) -> int:
		if self.page_count:
			self.current_page = (self.current_page + 1) % self.page_count
		return self.current_page

	def previous(self) -> int:
		if self.page_count:
			self.current_page = (self.current_page - 1) % self.page_count
		return self.current_page
