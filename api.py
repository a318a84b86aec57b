"""
FastAPI server proxying the TMDB API for Movie Explorer.
Endpoints:
- GET /health: basic health check
- GET /api/tmdb/search?query=...: TMDB title search (adult content excluded)
- GET /api/tmdb/movie/{movie_id}: TMDB movie details

The TMDB key stays on the server (TMDB_API_KEY). Successful responses are the
TMDB JSON bodies unchanged; failures use the envelope {error, status?, details?}.
"""

# Import standard libraries for timing
import time  # measure startup latency
from typing import Optional  # precise typing for clarity

# Import FastAPI for building the web API
from fastapi import Depends, FastAPI, Query, Request  # FastAPI primitives
from fastapi.responses import JSONResponse  # explicit status codes for envelopes

# Import our internal modules for configuration and upstream access
from movie_explorer.config import Settings, configure_logging  # env-based settings
from movie_explorer.errors import MovieExplorerError, TransportError  # error taxonomy
from movie_explorer.tmdb import TMDBGateway  # TMDB forwarder

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Explorer API", version="1.0.0")  # web app

# Globals that hold the gateway instance and measured startup time
GATEWAY: Optional[TMDBGateway] = None  # will point to the initialized gateway
STARTUP_TIME_S: float = 0.0  # measures how long startup took
UNCONFIGURED_GATEWAY = TMDBGateway(None)  # served until startup has run; answers 500


# FastAPI startup hook to initialize the gateway once
@app.on_event("startup")
async def startup_event():
	"""Read configuration and create the TMDB gateway."""
	global GATEWAY, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = Settings.from_env()  # env + optional .env file
	configure_logging(settings.log_level)  # single stderr sink
	GATEWAY = TMDBGateway(settings.tmdb_api_key, base_url=settings.tmdb_base_url, timeout=settings.tmdb_timeout)

	if not settings.credential_configured:
		logger.warning("[API] TMDB_API_KEY is not set; TMDB endpoints will answer 500")  # misconfiguration

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s. Upstream: {settings.tmdb_base_url}")  # summary


# FastAPI shutdown hook to release pooled connections
@app.on_event("shutdown")
async def shutdown_event():
	if GATEWAY is not None:
		GATEWAY.close()


def get_gateway() -> TMDBGateway:
	"""Dependency returning the shared gateway (overridden in tests)."""
	if GATEWAY is None:  # startup hook has not run
		return UNCONFIGURED_GATEWAY  # shared, so no session per request
	return GATEWAY


# Known errors render as their own envelope and status
@app.exception_handler(MovieExplorerError)
async def handle_known_error(request: Request, exc: MovieExplorerError):
	logger.info(f"[API] {request.url.path} -> {exc.status_code} {exc.message}")
	return JSONResponse(exc.to_envelope(), status_code=exc.status_code)


# Anything else becomes the generic 500 envelope
@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
	logger.exception(f"[API] Unhandled error on {request.url.path}: {exc}")
	fallback = TransportError()  # generic message, no internals leaked
	return JSONResponse(fallback.to_envelope(), status_code=fallback.status_code)


# Simple health endpoint for readiness checks
@app.get("/health")
def health(gateway: TMDBGateway = Depends(get_gateway)):
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"credential_configured": gateway.configured,  # False means TMDB routes answer 500
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# Title search forwarded to TMDB
@app.get("/api/tmdb/search")
def search(
	query: str = Query("", description="Movie title to search for"),
	gateway: TMDBGateway = Depends(get_gateway),
):
	"""Forward a title search; returns TMDB's search response unchanged."""
	logger.debug(f"[API] /api/tmdb/search query='{query}'")  # debug log of input
	return gateway.search_movies(query)  # errors are rendered by the handlers above


# Path without an id is answered explicitly rather than with a 404
@app.get("/api/tmdb/movie")
@app.get("/api/tmdb/movie/")
def movie_without_id(gateway: TMDBGateway = Depends(get_gateway)):
	return gateway.get_movie(None)


# Single-movie details forwarded to TMDB
@app.get("/api/tmdb/movie/{movie_id}")
def movie_details(movie_id: str, gateway: TMDBGateway = Depends(get_gateway)):
	"""Forward a details lookup; returns TMDB's movie object unchanged."""
	logger.debug(f"[API] /api/tmdb/movie/{movie_id}")  # debug log of input
	return gateway.get_movie(movie_id)
