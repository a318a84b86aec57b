"""
Tests for favorites persistence: round-trips, tolerant loading and swallowed
write failures.
"""

import json

import pytest

from movie_explorer.config import FAVORITES_STORAGE_KEY
from movie_explorer.favorites_store import FavoritesStore, FileStorage, MemoryStorage
from movie_explorer.models import Favorite


def sample_favorites():
	return [
		Favorite(id=27205, title="Inception", release_date="2010-07-15", overview="...", poster_path="/abc.jpg", rating=5, note="dream levels"),
		Favorite(id=603, title="The Matrix", release_date=None, overview="", poster_path=None, rating=1, note=""),
		Favorite(id=155, title="The Dark Knight", release_date="2008-07-16", overview="Batman", poster_path="/dk.jpg"),
	]


def test_round_trip_in_memory(store, storage):
	favorites = sample_favorites()

	assert store.save(favorites) is True
	reloaded = FavoritesStore(storage).load()  # a fresh session over the same storage

	assert reloaded == favorites


def test_round_trip_on_disk(tmp_path):
	favorites = sample_favorites()
	FavoritesStore(FileStorage(tmp_path)).save(favorites)

	reloaded = FavoritesStore(FileStorage(tmp_path)).load()

	assert reloaded == favorites
	assert [p.name for p in tmp_path.iterdir()] == [f"{FAVORITES_STORAGE_KEY}.json"]  # no temp files left


def test_persisted_layout(store, storage):
	store.save(sample_favorites()[:1])

	stored = json.loads(storage.get_item(FAVORITES_STORAGE_KEY))

	assert stored == [{
		"id": 27205,
		"title": "Inception",
		"release_date": "2010-07-15",
		"overview": "...",
		"poster_path": "/abc.jpg",
		"rating": 5,
		"note": "dream levels",
	}]


def test_load_missing_value_is_empty(store):
	assert store.load() == []


def test_load_missing_directory_is_empty(tmp_path):
	assert FavoritesStore(FileStorage(tmp_path / "nowhere")).load() == []


@pytest.mark.parametrize("raw", [
	"not json",
	"{\"id\": 1}",
	"[1, 2, 3]",
	"[{\"id\": 1, \"title\": \"x\", \"rating\": 9, \"note\": \"\"}]",
	"[{\"title\": \"no id\"}]",
])
def test_load_malformed_value_is_empty(raw):
	storage = MemoryStorage({FAVORITES_STORAGE_KEY: raw})
	assert FavoritesStore(storage).load() == []


def test_load_unreadable_storage_is_empty():
	class ExplodingStorage:
		def get_item(self, key):
			raise OSError("disk on fire")

	assert FavoritesStore(ExplodingStorage()).load() == []


def test_save_failure_is_swallowed():
	class FullStorage(MemoryStorage):
		def set_item(self, key, value):
			raise OSError("quota exceeded")

	assert FavoritesStore(FullStorage()).save(sample_favorites()) is False


def test_custom_key(storage):
	FavoritesStore(storage, key="other").save(sample_favorites())
	assert storage.get_item(FAVORITES_STORAGE_KEY) is None
	assert len(FavoritesStore(storage, key="other").load()) == 3
