"""
Exceptions raised while building the movie catalog.
"""

from typing import Optional


class CatalogError(Exception):
	"""Base class for catalog errors."""


class CatalogLoadError(CatalogError):
	"""
	The catalog source could not be read or one of its records is invalid.
	`position` is the 0-based record index and `field` the offending key, when known.
	"""

	def __init__(self, message: str, position: Optional[int] = None, field: Optional[str] = None):
		self.position = position  # record index within the source
		self.field = field  # raw field name that failed validation
		if position is not None:
			message = f"record {position}: {message}"  # prefix location for logs
		super().__init__(message)
