"""Tests for the command-line TMDB smoke check."""

from scripts import smoke_search
from movie_explorer.errors import UpstreamError


def test_exit_code_without_credential(monkeypatch):
	monkeypatch.setenv("TMDB_API_KEY", "")
	assert smoke_search.main(["Inception"]) == 1


def test_exit_code_on_success(monkeypatch, inception):
	monkeypatch.setenv("TMDB_API_KEY", "secret")
	monkeypatch.setattr(
		smoke_search.TMDBGateway,
		"search_movies",
		lambda self, query: {"results": [inception], "total_results": 1},
	)
	assert smoke_search.main(["Inception"]) == 0


def test_exit_code_on_upstream_failure(monkeypatch):
	def fail(self, query):
		raise UpstreamError(401, "Invalid API key")

	monkeypatch.setenv("TMDB_API_KEY", "secret")
	monkeypatch.setattr(smoke_search.TMDBGateway, "search_movies", fail)
	assert smoke_search.main([]) == 1
