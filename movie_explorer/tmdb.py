"""
TMDB gateway used by the proxy API.
Validates the caller's input, attaches the server-held API key, forwards a
single request to TMDB and returns the decoded JSON body unchanged.
No caching and no retries: one upstream failure is one error.
"""

from typing import Any, Optional  # type hints
from urllib.parse import quote  # path-safe movie ids

# HTTP client for TMDB calls
import requests  # blocking HTTP

# Console logging
from loguru import logger  # console logger

from .errors import BadRequestError, ConfigurationError, TransportError, UpstreamError  # error taxonomy
from .config import DEFAULT_TIMEOUT_S, DEFAULT_TMDB_BASE_URL  # defaults


class TMDBGateway:
	"""
	Thin forwarder for the two TMDB endpoints the app needs:
	- search_movies(query) -> GET /search/movie
	- get_movie(movie_id)  -> GET /movie/{id}
	"""

	def __init__(
		self,
		api_key: Optional[str],  # None or "" leaves the gateway misconfigured
		base_url: str = DEFAULT_TMDB_BASE_URL,  # TMDB v3 root
		timeout: float = DEFAULT_TIMEOUT_S,  # seconds per request
		session: Optional[requests.Session] = None,  # injectable for tests
	):
		self.api_key = api_key or None  # normalize blank credential to None
		self.base_url = base_url.rstrip("/")  # avoid double slashes
		self.timeout = timeout
		self.session = session or requests.Session()  # reuse connections

	@property
	def configured(self) -> bool:
		return self.api_key is not None

	def search_movies(self, query: Optional[str]) -> Any:
		"""Forward a title search with adult content excluded."""
		q = (query or "").strip()  # whitespace-only counts as missing
		if not q:
			raise BadRequestError("Missing query parameter.")
		api_key = self._require_api_key()

		logger.debug(f"[TMDB] search query='{q}'")  # never log the key
		return self._get("/search/movie", {"api_key": api_key, "query": q, "include_adult": "false"})

	def get_movie(self, movie_id: Any) -> Any:
		"""Forward a single-movie lookup; the id is passed through as given."""
		mid = str(movie_id).strip() if movie_id is not None else ""  # normalize to text
		if not mid:
			raise BadRequestError("Missing movie id.")
		api_key = self._require_api_key()

		logger.debug(f"[TMDB] movie id={mid}")
		return self._get(f"/movie/{quote(mid, safe='')}", {"api_key": api_key})

	def close(self):
		"""Release pooled connections."""
		self.session.close()

	def _require_api_key(self) -> str:
		if not self.api_key:
			logger.error("[TMDB] TMDB_API_KEY is not configured")
			raise ConfigurationError("TMDB_API_KEY is not set on the server.")
		return self.api_key

	def _get(self, path: str, params: dict) -> Any:
		"""Issue exactly one GET and translate failures into gateway errors."""
		url = f"{self.base_url}{path}"  # absolute upstream URL
		try:
			resp = self.session.get(url, params=params, timeout=self.timeout)
		except requests.RequestException as e:
			logger.error(f"[TMDB] Network error on GET {path}: {e}")
			raise TransportError() from e

		if not resp.ok:
			body = resp.text  # raw body is forwarded as `details`
			logger.warning(f"[TMDB] GET {path} failed with status {resp.status_code}: {body[:200]}")
			raise UpstreamError(resp.status_code, body)

		try:
			return resp.json()  # pass the body through untouched
		except ValueError as e:
			logger.error(f"[TMDB] Unparseable body from GET {path}: {e}")
			raise TransportError() from e
