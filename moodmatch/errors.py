"""
Exception hierarchy shared across the client package.
"""

from typing import Optional


class MoodMatchError(Exception):
	"""Base class for every error raised by this package."""


class ValidationError(MoodMatchError):
	"""A required wizard selection is missing; shown inline to the user."""


class ConfigurationError(MoodMatchError):
	"""A required setting (such as the TMDB API key) is not configured."""


class RemoteCallError(MoodMatchError):
	"""
	A remote call failed: non-2xx status or transport error.
	status_code is None when no response was received at all.
	"""

	def __init__(self, message: str, status_code: Optional[int] = None):
		super().__init__(message)
		self.status_code = status_code
