"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from movie_explorer.config import DEFAULT_TIMEOUT_S, DEFAULT_TMDB_BASE_URL, Settings

ENV_VARS = ("TMDB_API_KEY", "TMDB_BASE_URL", "TMDB_TIMEOUT", "MOVIE_EXPLORER_API_URL", "FAVORITES_DIR", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
	for name in ENV_VARS:
		monkeypatch.delenv(name, raising=False)
	return monkeypatch


def test_defaults(clean_env):
	settings = Settings.from_env(load_env_file=False)

	assert settings.tmdb_api_key is None
	assert not settings.credential_configured
	assert settings.tmdb_base_url == DEFAULT_TMDB_BASE_URL
	assert settings.api_url == "http://localhost:8000"
	assert settings.favorites_dir == Path("data")
	assert settings.log_level == "INFO"


def test_blank_key_counts_as_missing(clean_env):
	clean_env.setenv("TMDB_API_KEY", "   ")
	assert Settings.from_env(load_env_file=False).tmdb_api_key is None


def test_overrides(clean_env, tmp_path):
	clean_env.setenv("TMDB_API_KEY", "abc123")
	clean_env.setenv("TMDB_BASE_URL", "https://tmdb.test/3/")
	clean_env.setenv("TMDB_TIMEOUT", "2.5")
	clean_env.setenv("MOVIE_EXPLORER_API_URL", "http://api.test:9000/")
	clean_env.setenv("FAVORITES_DIR", str(tmp_path))
	clean_env.setenv("LOG_LEVEL", "debug")

	settings = Settings.from_env(load_env_file=False)

	assert settings.credential_configured
	assert settings.tmdb_base_url == "https://tmdb.test/3"
	assert settings.tmdb_timeout == 2.5
	assert settings.api_url == "http://api.test:9000"
	assert settings.favorites_dir == tmp_path
	assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["ten", "", "-3", "0"])
def test_unusable_timeout_falls_back_to_default(clean_env, raw):
	clean_env.setenv("TMDB_TIMEOUT", raw)
	assert Settings.from_env(load_env_file=False).tmdb_timeout == DEFAULT_TIMEOUT_S
