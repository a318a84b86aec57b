"""Formatting helpers for the Streamlit UI."""

from typing import Optional

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p"  # TMDB image CDN
PLACEHOLDER = "—"  # shown when a value is unknown
OVERVIEW_PREVIEW_CHARS = 180  # synopsis length in result cards


def poster_url(path: Optional[str], size: str = "w185") -> Optional[str]:
	"""Absolute poster URL for a TMDB image path, or None without a poster."""
	return f"{TMDB_IMAGE_BASE}/{size}{path}" if path else None


def release_year(release_date: Optional[str]) -> str:
	return release_date[:4] if release_date else PLACEHOLDER


def runtime_label(runtime: Optional[int]) -> str:
	# TMDB reports 0 for unknown runtimes
	return f"{runtime} min" if runtime else PLACEHOLDER


def truncate_overview(overview: Optional[str], limit: int = OVERVIEW_PREVIEW_CHARS) -> str:
	if not overview:
		return "No description."
	return overview[:limit] + ("…" if len(overview) > limit else "")
