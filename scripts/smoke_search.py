"""
Check that the configured TMDB credential works.

This script:
1) Reads TMDB_API_KEY (and friends) from the environment or .env
2) Runs one title search through the same gateway the API uses
3) Logs the first few results, or the error envelope the API would return

Usage:
    python -m scripts.smoke_search "Inception"
"""

import sys  # command-line arguments and exit status

from loguru import logger  # console logging

from movie_explorer.config import Settings, configure_logging  # env-based settings
from movie_explorer.errors import MovieExplorerError  # error taxonomy
from movie_explorer.tmdb import TMDBGateway  # TMDB forwarder


def main(argv=None) -> int:
	argv = sys.argv[1:] if argv is None else argv  # allow calling from tests
	query = " ".join(argv) or "Inception"  # default query

	settings = Settings.from_env()  # resolve configuration
	configure_logging(settings.log_level)
	logger.info("=" * 60)
	logger.info(f"TMDB smoke search: '{query}' against {settings.tmdb_base_url}")
	logger.info("=" * 60)

	gateway = TMDBGateway(settings.tmdb_api_key, base_url=settings.tmdb_base_url, timeout=settings.tmdb_timeout)
	try:
		payload = gateway.search_movies(query)
	except MovieExplorerError as e:
		logger.error(f"[FAIL] HTTP {e.status_code}: {e.to_envelope()}")  # what the API would answer
		return 1
	finally:
		gateway.close()

	results = payload.get("results", [])  # TMDB search envelope
	logger.info(f"[OK] {payload.get('total_results', len(results))} total results; showing {min(5, len(results))}")
	for i, movie in enumerate(results[:5], start=1):
		logger.info(f"  {i}. {movie.get('title')} ({(movie.get('release_date') or '—')[:4]}) id={movie.get('id')}")
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke check
