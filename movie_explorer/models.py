"""
Data models for Movie Explorer.
Movie and MovieDetails mirror the TMDB payloads we read; Favorite is the
user's saved copy of a movie plus a rating and a note.
"""

# Pydantic validates upstream payloads and persisted favorites alike
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator  # schema primitives
# Typing helpers for optional fields and the collection adapter
from typing import List, Optional  # optional values and lists

# Rating bounds and defaults for a newly favorited movie
MIN_RATING = 1  # lowest allowed user rating
MAX_RATING = 5  # highest allowed user rating
DEFAULT_RATING = 3  # rating given to a fresh favorite


class Movie(BaseModel):
	"""One entry of a TMDB search response; extra TMDB fields are ignored."""
	model_config = ConfigDict(extra="ignore", frozen=True)

	id: int  # TMDB movie id
	title: str  # display title
	release_date: Optional[str] = None  # "YYYY-MM-DD" or empty when unknown
	overview: str = ""  # synopsis
	poster_path: Optional[str] = None  # relative TMDB image path like "/abc.jpg"

	@field_validator("overview", mode="before")
	@classmethod
	def overview_null_to_empty(cls, value):
		# TMDB sends null for movies without a synopsis
		return "" if value is None else value


class MovieDetails(Movie):
	"""Single-movie payload shown in the detail view."""
	runtime: Optional[int] = None  # minutes; TMDB sends null or 0 when unknown


class Favorite(BaseModel):
	"""
	A movie the user saved. The movie fields are copied at the moment of
	favoriting and never change afterwards; only `rating` and `note` are
	user-editable, and edits produce a new instance.
	"""
	model_config = ConfigDict(frozen=True)

	id: int  # TMDB movie id, unique within the favorites list
	title: str  # copied from the search result
	release_date: Optional[str] = None  # copied from the search result
	overview: str = ""  # copied from the search result
	poster_path: Optional[str] = None  # copied from the search result
	rating: int = Field(default=DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)  # 1..5
	note: str = ""  # free text

	@classmethod
	def from_movie(cls, movie: Movie) -> "Favorite":
		"""Snapshot a search result into a new favorite with default rating and note."""
		return cls(
			id=movie.id,
			title=movie.title,
			release_date=movie.release_date,
			overview=movie.overview,
			poster_path=movie.poster_path,
		)

	def with_changes(self, rating: Optional[int] = None, note: Optional[str] = None) -> "Favorite":
		"""Return a validated copy with a new rating and/or note."""
		data = self.model_dump()  # current field values
		if rating is not None:
			data["rating"] = rating
		if note is not None:
			data["note"] = note
		return Favorite.model_validate(data)  # re-validates the rating bounds


# Adapters used to (de)serialize whole lists in one call
FAVORITES_ADAPTER = TypeAdapter(List[Favorite])  # persisted favorites layout
MOVIES_ADAPTER = TypeAdapter(List[Movie])  # `results` array of a search response
