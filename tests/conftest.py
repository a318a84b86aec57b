"""
Pytest configuration: make the project root and this directory importable,
and expose the shared fakes as fixtures.
"""

import sys
from pathlib import Path

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
TESTS = Path(__file__).resolve().parent
for path in (ROOT, TESTS):
	if str(path) not in sys.path:
		sys.path.insert(0, str(path))

from fakes import INCEPTION  # noqa: E402
from movie_explorer.favorites_store import FavoritesStore, MemoryStorage  # noqa: E402


@pytest.fixture
def inception():
	return dict(INCEPTION)


@pytest.fixture
def connection_error():
	return requests.ConnectionError("connection refused")


@pytest.fixture
def storage():
	return MemoryStorage()


@pytest.fixture
def store(storage):
	return FavoritesStore(storage)
