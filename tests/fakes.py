"""
Test doubles: a recording HTTP session, an async proxy client whose responses
can be held back, and canned TMDB payloads.
"""

import asyncio

from movie_explorer.models import Movie, MovieDetails


INCEPTION = {
	"id": 27205,
	"title": "Inception",
	"release_date": "2010-07-15",
	"overview": "...",
	"poster_path": "/abc.jpg",
}


class FakeResponse:
	"""Just enough of requests.Response for the gateway and the client."""

	def __init__(self, status_code=200, payload=None, text=None):
		self.status_code = status_code
		self._payload = payload
		self.text = text if text is not None else ("" if payload is None else str(payload))

	@property
	def ok(self):
		return 200 <= self.status_code < 400

	def json(self):
		if self._payload is None:
			raise ValueError("No JSON object could be decoded")
		return self._payload


class FakeSession:
	"""Records every GET and answers with queued responses (or raises queued errors)."""

	def __init__(self, *responses):
		self.responses = list(responses)
		self.calls = []

	def get(self, url, params=None, timeout=None):
		self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
		outcome = self.responses.pop(0)
		if isinstance(outcome, Exception):
			raise outcome
		return outcome

	def close(self):
		pass


class FakeProxyClient:
	"""
	Async stand-in for ProxyClient.
	`search_outcomes` / `details_outcomes` map a query or movie id to either a
	value or an exception to raise. With `gated=True` every call waits until
	`release(key)` is called, which lets tests control completion order.
	"""

	def __init__(self, search_outcomes=None, details_outcomes=None, gated=False):
		self.search_outcomes = dict(search_outcomes or {})
		self.details_outcomes = dict(details_outcomes or {})
		self.gated = gated
		self.search_calls = []
		self.details_calls = []
		self._gates = {}

	def _gate(self, key):
		if key not in self._gates:
			self._gates[key] = asyncio.Event()
		return self._gates[key]

	def release(self, key):
		self._gate(key).set()

	async def _settle(self, key, outcome):
		if self.gated:
			await self._gate(key).wait()
		if isinstance(outcome, Exception):
			raise outcome
		return outcome

	async def search(self, query):
		self.search_calls.append(query)
		return await self._settle(query, self.search_outcomes.get(query, []))

	async def get_details(self, movie_id):
		self.details_calls.append(movie_id)
		return await self._settle(movie_id, self.details_outcomes[movie_id])


def movie(**overrides):
	data = dict(INCEPTION)
	data.update(overrides)
	return Movie(**data)


def details(**overrides):
	data = dict(INCEPTION, runtime=148)
	data.update(overrides)
	return MovieDetails(**data)
