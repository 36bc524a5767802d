"""
Configuration for the MoodMatch client.
Settings come from the environment (a local .env file is honoured) with
sensible defaults for running against a backend on localhost.
"""

import os  # environment lookups
import sys  # stderr sink for loguru
from dataclasses import dataclass  # plain settings record
from datetime import datetime  # current year for the release-year bound
from pathlib import Path  # filesystem-safe paths
from typing import Optional  # optional API key

from dotenv import load_dotenv  # read .env into the process environment
from loguru import logger  # console logger

# Default URL where the recommendation backend is expected to run locally
DEFAULT_API_URL = "http://localhost:5000"
# Third-party catalog endpoints
TMDB_API_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p"

# Local durable cache key holding the JSON array of liked movie ids
LIKED_MOVIES_KEY = "likedMovies"
DEFAULT_STORAGE_PATH = Path.home() / ".moodmatch" / "local_storage.json"

# Wizard and search constants
PAGE_SIZE = 3
MIN_QUERY_LENGTH = 2
DEBOUNCE_SECONDS = 0.3
MIN_RELEASE_YEAR = 1900
MAX_RELEASE_YEAR = datetime.now().year


@dataclass
class Settings:
	api_url: str = DEFAULT_API_URL
	tmdb_api_key: Optional[str] = None
	storage_path: Path = DEFAULT_STORAGE_PATH
	request_timeout: float = 10.0
	debounce_seconds: float = DEBOUNCE_SECONDS
	log_level: str = "INFO"

	@classmethod
	def from_env(cls) -> "Settings":
		"""Build settings from environment variables, loading .env first."""
		load_dotenv()  # no-op when there is no .env file
		return cls(
			api_url=os.getenv("MOODMATCH_API_URL", DEFAULT_API_URL).rstrip("/"),
			tmdb_api_key=os.getenv("TMDB_API_KEY") or None,
			storage_path=Path(os.getenv("MOODMATCH_STORAGE_PATH", str(DEFAULT_STORAGE_PATH))).expanduser(),
			request_timeout=float(os.getenv("MOODMATCH_REQUEST_TIMEOUT", "10")),
			debounce_seconds=float(os.getenv("MOODMATCH_DEBOUNCE_SECONDS", str(DEBOUNCE_SECONDS))),
			log_level=os.getenv("MOODMATCH_LOG_LEVEL", "INFO").upper(),
		)


def setup_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a stderr sink at the given level."""
	logger.remove()
	logger.add(sys.stderr, level=level)
	logger.debug(f"[Config] Logging configured at level {level}")
