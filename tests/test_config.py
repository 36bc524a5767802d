"""
Tests for environment-driven settings.
"""

from pathlib import Path

from moodmatch.config import DEFAULT_API_URL, Settings


def test_defaults(monkeypatch):
	for name in ("MOODMATCH_API_URL", "TMDB_API_KEY", "MOODMATCH_STORAGE_PATH", "MOODMATCH_REQUEST_TIMEOUT",
			"MOODMATCH_DEBOUNCE_SECONDS", "MOODMATCH_LOG_LEVEL"):
		monkeypatch.delenv(name, raising=False)
	monkeypatch.setattr("moodmatch.config.load_dotenv", lambda: False)
	settings = Settings.from_env()
	assert settings.api_url == DEFAULT_API_URL
	assert settings.tmdb_api_key is None
	assert settings.debounce_seconds == 0.3
	assert settings.log_level == "INFO"


def test_overrides(monkeypatch, tmp_path):
	monkeypatch.setattr("moodmatch.config.load_dotenv", lambda: False)
	monkeypatch.setenv("MOODMATCH_API_URL", "http://films.internal:8080/")
	monkeypatch.setenv("TMDB_API_KEY", "abc")
	monkeypatch.setenv("MOODMATCH_STORAGE_PATH", str(tmp_path / "cache.json"))
	monkeypatch.setenv("MOODMATCH_REQUEST_TIMEOUT", "2.5")
	monkeypatch.setenv("MOODMATCH_LOG_LEVEL", "debug")
	settings = Settings.from_env()
	assert settings.api_url == "http://films.internal:8080"
	assert settings.tmdb_api_key == "abc"
	assert settings.storage_path == Path(tmp_path / "cache.json")
	assert settings.request_timeout == 2.5
	assert settings.log_level == "DEBUG"
