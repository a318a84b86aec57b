"""
Error types shared by the proxy API, the proxy client and the controller.
Each server-side error knows its HTTP status and the JSON envelope it renders to.
"""

from typing import Any, Dict, Optional  # type hints


class MovieExplorerError(Exception):
	"""Base class for every error raised by this package."""

	status_code: int = 500  # HTTP status used when rendered by the API

	def __init__(self, message: str):
		super().__init__(message)
		self.message = message  # human-readable text shown in the envelope

	def to_envelope(self) -> Dict[str, Any]:
		"""Render the uniform `{error, status?, details?}` body."""
		return {"error": self.message}


class BadRequestError(MovieExplorerError):
	"""Missing or blank user input (query text or movie id)."""

	status_code = 400


class ConfigurationError(MovieExplorerError):
	"""The server was started without the TMDB credential."""

	status_code = 500


class UpstreamError(MovieExplorerError):
	"""TMDB answered with a non-success status code."""

	status_code = 502

	def __init__(self, upstream_status: int, details: str):
		super().__init__("TMDB request failed")
		self.upstream_status = upstream_status  # status returned by TMDB
		self.details = details  # raw response body, kept for diagnostics

	def to_envelope(self) -> Dict[str, Any]:
		return {"error": self.message, "status": self.upstream_status, "details": self.details}


class TransportError(MovieExplorerError):
	"""Network failure or an unparseable body; always reported generically."""

	status_code = 500

	def __init__(self, message: str = "Unexpected server error."):
		super().__init__(message)


class ProxyRequestError(MovieExplorerError):
	"""
	Raised by the proxy client when the API answers with a non-2xx status.
	`message` is the envelope's `error` text, or None when the body had none.
	"""

	def __init__(self, status_code: int, message: Optional[str], envelope: Optional[Dict[str, Any]] = None):
		super().__init__(message or "")
		self.status_code = status_code  # status returned by the proxy API
		self.message = message  # None when the envelope carried no error text
		self.envelope = envelope or {}  # full decoded body for diagnostics
