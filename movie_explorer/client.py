"""
HTTP client the UI uses to reach the Movie Explorer proxy API.
Blocking `requests` calls are wrapped in async methods that run in a worker
thread, so the controller can await them without stalling its event loop.
"""

import asyncio  # worker-thread offloading
from typing import Any, Dict, List, Optional  # type hints

import requests  # HTTP client
from loguru import logger  # console logger
from pydantic import ValidationError  # malformed payloads

from .config import DEFAULT_API_URL  # default proxy location
from .errors import ProxyRequestError, TransportError  # error taxonomy
from .models import MOVIES_ADAPTER, Movie, MovieDetails  # response shapes


class ProxyClient:
	"""Calls /api/tmdb/search and /api/tmdb/movie/{id}; no retries."""

	def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = 15.0, session: Optional[requests.Session] = None):
		self.base_url = base_url.rstrip("/")  # proxy root
		self.timeout = timeout  # seconds per request
		self.session = session or requests.Session()  # reuse connections

	async def search(self, query: str) -> List[Movie]:
		return await asyncio.to_thread(self.search_sync, query)

	async def get_details(self, movie_id: int) -> MovieDetails:
		return await asyncio.to_thread(self.get_details_sync, movie_id)

	def search_sync(self, query: str) -> List[Movie]:
		"""Return the `results` array of the search response as Movie objects."""
		data = self._get_json("/api/tmdb/search", params={"query": query})
		try:
			movies = MOVIES_ADAPTER.validate_python((data or {}).get("results") or [])
		except (AttributeError, ValidationError) as e:  # not an object, or bad items
			raise TransportError(f"Malformed search response: {e}") from e
		logger.debug(f"[Client] search '{query}' returned {len(movies)} movies")
		return movies

	def get_details_sync(self, movie_id: int) -> MovieDetails:
		data = self._get_json(f"/api/tmdb/movie/{movie_id}")
		try:
			return MovieDetails.model_validate(data)
		except ValidationError as e:
			raise TransportError(f"Malformed details response: {e}") from e

	def is_available(self) -> bool:
		"""Probe /health; False when the API cannot be reached."""
		try:
			resp = self.session.get(f"{self.base_url}/health", timeout=3)
		except requests.RequestException:
			return False
		return resp.ok

	def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
		url = f"{self.base_url}{path}"  # absolute proxy URL
		try:
			resp = self.session.get(url, params=params, timeout=self.timeout)
			data = resp.json()  # both success and error bodies are JSON
		except (requests.RequestException, ValueError) as e:
			logger.warning(f"[Client] GET {path} failed: {e}")
			raise TransportError(str(e)) from e

		if not resp.ok:
			message = data.get("error") if isinstance(data, dict) else None
			logger.info(f"[Client] GET {path} -> {resp.status_code}: {message}")
			raise ProxyRequestError(resp.status_code, message, data if isinstance(data, dict) else None)
		return data
