"""
Application state controller.
Owns the search state, the detail-view state and the favorites list, and is
the only place any of them is mutated. The UI reads state from here and calls
the methods below in response to user actions.

Network operations are coroutines. State changes happen on the caller's event
loop, and a response is applied only if it still belongs to the most recent
request of its kind.
"""

import itertools  # monotonically increasing request tokens
from dataclasses import dataclass, field  # state records
from enum import Enum  # search status values
from typing import Dict, List, Optional, Tuple, Union  # type hints

# Console logging
from loguru import logger  # console logger

from .errors import ProxyRequestError, TransportError  # failures raised by the client
from .favorites_store import FavoritesStore  # persistence
from .models import Favorite, Movie, MovieDetails  # data records

# User-facing messages
MSG_EMPTY_QUERY = "Please enter a movie title."
MSG_NO_RESULTS = "No results found."
MSG_SEARCH_FAILED = "Search failed."
MSG_SEARCH_NETWORK = "Network error. Please try again."
MSG_DETAILS_FAILED = "Failed to load details."
MSG_DETAILS_NETWORK = "Network error while loading details."


class SearchStatus(str, Enum):
	IDLE = "idle"
	LOADING = "loading"
	ERROR = "error"
	HAS_RESULTS = "has_results"


@dataclass(frozen=True)
class SearchState:
	status: SearchStatus = SearchStatus.IDLE  # where the last search stands
	query: str = ""  # trimmed query of the last search
	results: Tuple[Movie, ...] = ()  # empty unless status is HAS_RESULTS
	error: Optional[str] = None  # set only when status is ERROR


# Detail view states; every open state carries the movie id it belongs to
@dataclass(frozen=True)
class DetailsClosed:
	pass


@dataclass(frozen=True)
class DetailsLoading:
	movie_id: int
	request_id: int  # distinguishes two requests for the same movie


@dataclass(frozen=True)
class DetailsError:
	movie_id: int
	message: str


@dataclass(frozen=True)
class DetailsLoaded:
	movie_id: int
	details: MovieDetails


DetailsState = Union[DetailsClosed, DetailsLoading, DetailsError, DetailsLoaded]


@dataclass
class AppController:
	"""
	Single owner of the application state.
	- client: anything with async `search(query)` and `get_details(movie_id)`
	- store: FavoritesStore used to load favorites once and save after each change
	"""
	client: object
	store: FavoritesStore
	search_state: SearchState = field(default_factory=SearchState)
	details: DetailsState = field(default_factory=DetailsClosed)

	def __post_init__(self):
		self._favorites: List[Favorite] = []  # newest first
		self._index: Dict[int, Favorite] = {}  # id -> favorite, rebuilt on change
		self._tokens = itertools.count(1)  # request tokens for staleness checks
		self._search_token = 0  # token of the most recent search
		self._set_favorites(self._dedupe(self.store.load()))

	# ---- search ---------------------------------------------------------

	async def search(self, query: str) -> SearchState:
		"""Run a title search through the proxy and record the outcome."""
		q = (query or "").strip()  # normalize spaces
		token = next(self._tokens)  # newer searches supersede this one
		self._search_token = token

		if not q:  # validation happens locally; no network call
			self.search_state = SearchState(status=SearchStatus.ERROR, error=MSG_EMPTY_QUERY)
			return self.search_state

		self.search_state = SearchState(status=SearchStatus.LOADING, query=q)
		logger.debug(f"[Controller] search #{token} '{q}'")

		try:
			movies = await self.client.search(q)
		except ProxyRequestError as e:
			new_state = SearchState(status=SearchStatus.ERROR, query=q, error=e.message or MSG_SEARCH_FAILED)
		except TransportError as e:
			logger.warning(f"[Controller] search '{q}' failed: {e}")
			new_state = SearchState(status=SearchStatus.ERROR, query=q, error=MSG_SEARCH_NETWORK)
		except Exception:
			logger.exception(f"[Controller] Unexpected error while searching '{q}'")
			new_state = SearchState(status=SearchStatus.ERROR, query=q, error=MSG_SEARCH_NETWORK)
		else:
			if movies:
				new_state = SearchState(status=SearchStatus.HAS_RESULTS, query=q, results=tuple(movies))
			else:
				new_state = SearchState(status=SearchStatus.ERROR, query=q, error=MSG_NO_RESULTS)

		if token != self._search_token:  # a newer search owns the state now
			logger.debug(f"[Controller] Dropping stale search #{token}")
			return self.search_state
		self.search_state = new_state
		return new_state

	# ---- details --------------------------------------------------------

	async def open_details(self, movie_id: int) -> DetailsState:
		"""Open the detail view for `movie_id` and load its details."""
		loading = DetailsLoading(movie_id=movie_id, request_id=next(self._tokens))
		self.details = loading  # the overlay shows before any data arrives

		try:
			details = await self.client.get_details(movie_id)
		except ProxyRequestError as e:
			outcome: DetailsState = DetailsError(movie_id, e.message or MSG_DETAILS_FAILED)
		except TransportError as e:
			logger.warning(f"[Controller] details for {movie_id} failed: {e}")
			outcome = DetailsError(movie_id, MSG_DETAILS_NETWORK)
		except Exception:
			logger.exception(f"[Controller] Unexpected error while loading details for {movie_id}")
			outcome = DetailsError(movie_id, MSG_DETAILS_NETWORK)
		else:
			outcome = DetailsLoaded(movie_id, details)

		# Only the request that is still being displayed may settle the view
		if self.details != loading:
			logger.debug(f"[Controller] Dropping stale details for {movie_id} (request {loading.request_id})")
			return self.details
		self.details = outcome
		return outcome

	def close_details(self) -> None:
		self.details = DetailsClosed()

	@property
	def details_open(self) -> bool:
		return not isinstance(self.details, DetailsClosed)

	# ---- favorites ------------------------------------------------------

	@property
	def favorites(self) -> Tuple[Favorite, ...]:
		"""Favorites, newest first."""
		return tuple(self._favorites)

	@property
	def favorite_count(self) -> int:
		return len(self._favorites)

	def is_favorite(self, movie_id: int) -> bool:
		return movie_id in self._index

	def get_favorite(self, movie_id: int) -> Optional[Favorite]:
		return self._index.get(movie_id)

	def add_favorite(self, movie: Movie) -> bool:
		"""Prepend `movie` with rating 3 and an empty note; False if already saved."""
		if self.is_favorite(movie.id):
			return False
		self._set_favorites([Favorite.from_movie(movie)] + self._favorites)
		logger.info(f"[Controller] Favorited {movie.id} '{movie.title}'")
		self._persist()
		return True

	def remove_favorite(self, movie_id: int) -> bool:
		"""Drop the favorite for `movie_id`; False (and no write) if absent."""
		if not self.is_favorite(movie_id):
			return False
		self._set_favorites([f for f in self._favorites if f.id != movie_id])
		logger.info(f"[Controller] Removed favorite {movie_id}")
		self._persist()
		return True

	def update_favorite(self, movie_id: int, rating: Optional[int] = None, note: Optional[str] = None) -> Optional[Favorite]:
		"""
		Change the rating and/or note of a favorite. Other fields never change.
		Returns the updated favorite, or None if `movie_id` is not a favorite.
		Raises pydantic.ValidationError for a rating outside 1..5.
		"""
		current = self._index.get(movie_id)
		if current is None:
			return None
		updated = current.with_changes(rating=rating, note=note)  # validates before any mutation
		self._set_favorites([updated if f.id == movie_id else f for f in self._favorites])
		self._persist()
		return updated

	def _set_favorites(self, favorites: List[Favorite]) -> None:
		self._favorites = favorites
		self._index = {f.id: f for f in favorites}  # derived lookup

	def _persist(self) -> None:
		self.store.save(self._favorites)  # failures are logged by the store

	@staticmethod
	def _dedupe(favorites: List[Favorite]) -> List[Favorite]:
		"""Keep the first entry per id from a stored list."""
		seen = set()
		unique = []
		for fav in favorites:
			if fav.id in seen:
				continue
			seen.add(fav.id)
			unique.append(fav)
		return unique
