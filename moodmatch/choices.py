"""
Fixed option lists offered by the wizard, and fuzzy normalization of
free-typed values (e.g. a hand-edited ?mood=funny in a shared URL).
"""

from typing import Optional, Sequence  # type hints

from rapidfuzz import fuzz, process  # fuzzy matching utilities

MOODS = (
	"😊 Happy",
	"😌 Relaxing",
	"🤔 Thought-provoking",
	"🎢 Thrilling",
	"🥰 Romantic",
	"🎭 Dramatic",
	"🧘‍♀️ Inspiring",
	"😂 Funny",
)
LANGUAGES = ("English", "Spanish", "French", "German", "Japanese", "Korean", "Chinese", "Other")
GENRES = ("Action", "Comedy", "Drama", "Sci-Fi", "Romance", "Thriller", "Horror", "Documentary")

# Minimum WRatio score for a fuzzy match to be accepted
MATCH_THRESHOLD = 80


def _plain(label: str) -> str:
	"""Drop the leading emoji so "funny" can match "😂 Funny"."""
	return "".join(ch for ch in label if ch.isascii()).strip().lower()


def normalize_choice(value: Optional[str], options: Sequence[str]) -> Optional[str]:
	"""
	Map value onto one of options.
	Exact labels pass through; otherwise the closest option above MATCH_THRESHOLD
	wins; anything else yields None.
	"""
	if not value or not value.strip():
		return None
	if value in options:
		return value

	plain_options = [_plain(o) for o in options]
	best = process.extractOne(_plain(value), plain_options, scorer=fuzz.WRatio, score_cutoff=MATCH_THRESHOLD)
	if best is None:
		return None
	_, _, index = best
	return options[index]
