"""
Runtime configuration for the proxy API and the Streamlit UI.
Values come from environment variables, optionally seeded from a `.env` file.
"""

import os  # environment access
import sys  # stderr sink for logging
from dataclasses import dataclass  # immutable settings record
from pathlib import Path  # favorites directory handling
from typing import Optional  # credential may be absent

from dotenv import load_dotenv  # read .env files during local development
from loguru import logger  # console logger

# Default upstream and local endpoints
DEFAULT_TMDB_BASE_URL = "https://api.themoviedb.org/3"  # TMDB v3 REST root
DEFAULT_API_URL = "http://localhost:8000"  # where `uvicorn api:app` listens
DEFAULT_FAVORITES_DIR = "data"  # directory holding persisted favorites
DEFAULT_TIMEOUT_S = 10.0  # per-request timeout against TMDB

# Storage key for the favorites list; bump the suffix when the layout changes
FAVORITES_STORAGE_KEY = "movie_explorer_favorites_v1"


@dataclass(frozen=True)
class Settings:
	"""Resolved configuration shared by the API and the UI."""
	tmdb_api_key: Optional[str] = None  # None means the proxy is misconfigured
	tmdb_base_url: str = DEFAULT_TMDB_BASE_URL  # upstream base URL
	tmdb_timeout: float = DEFAULT_TIMEOUT_S  # seconds
	api_url: str = DEFAULT_API_URL  # proxy base URL used by the UI
	favorites_dir: Path = Path(DEFAULT_FAVORITES_DIR)  # local favorites storage
	log_level: str = "INFO"  # loguru level name

	@property
	def credential_configured(self) -> bool:
		return bool(self.tmdb_api_key)

	@classmethod
	def from_env(cls, load_env_file: bool = True) -> "Settings":
		"""Build settings from the process environment (and `.env` if present)."""
		if load_env_file:
			load_dotenv()  # never overrides variables that are already set

		api_key = (os.getenv("TMDB_API_KEY") or "").strip()  # blank counts as unset
		return cls(
			tmdb_api_key=api_key or None,
			tmdb_base_url=os.getenv("TMDB_BASE_URL", DEFAULT_TMDB_BASE_URL).rstrip("/"),
			tmdb_timeout=_env_float("TMDB_TIMEOUT", DEFAULT_TIMEOUT_S),
			api_url=os.getenv("MOVIE_EXPLORER_API_URL", DEFAULT_API_URL).rstrip("/"),
			favorites_dir=Path(os.getenv("FAVORITES_DIR", DEFAULT_FAVORITES_DIR)),
			log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
		)


def _env_float(name: str, default: float) -> float:
	"""Read a positive float from the environment, falling back to `default` when unusable."""
	raw = os.getenv(name)
	if raw is None or not raw.strip():
		return default
	try:
		value = float(raw)
	except ValueError:
		logger.warning(f"[Config] {name}='{raw}' is not a number; using {default}")
		return default
	if value <= 0:
		logger.warning(f"[Config] {name}={raw} must be positive; using {default}")
		return default
	return value


def configure_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a single stderr sink at `level`."""
	logger.remove()  # drop default handler so repeated calls do not duplicate output
	logger.add(sys.stderr, level=level)
