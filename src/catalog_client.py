"""
HTTP client for the Movie Catalog API, used by the Streamlit page in API mode.
"""

from typing import Any, Dict, List, Optional, Tuple

import requests  # HTTP calls to the FastAPI server

from loguru import logger  # console logging


class CatalogClient:
	"""
	Thin wrapper over the JSON API.
	`session` defaults to the `requests` module; anything with a compatible `get` works.
	"""

	def __init__(self, api_url: str, session: Any = None, timeout: float = 30):
		self.api_url = api_url.rstrip('/')  # base URL without trailing slash
		self.session = session if session is not None else requests
		self.timeout = timeout  # seconds per request

	def _get(self, path: str, params: Optional[Dict[str, Any]] = None):
		logger.debug(f"[Client] GET {self.api_url}{path} params={params}")
		return self.session.get(f"{self.api_url}{path}", params=params, timeout=self.timeout)

	def is_healthy(self) -> bool:
		return self._get("/health").status_code == 200

	def genres(self) -> List[str]:
		resp = self._get("/movies/genres")
		return resp.json() if resp.status_code == 200 else []

	def search(self, name: Optional[str] = None, movie_id: Optional[int] = None, genre: Optional[str] = None) -> Dict[str, Any]:
		"""Run a search; 400 responses (no criteria) are returned as-is since they carry a message."""
		params = {k: v for k, v in (("name", name), ("id", movie_id), ("genre", genre)) if v is not None}
		return self._get("/movies/search", params=params).json()

	def movie_details(self, movie_id: int) -> Tuple[Optional[Dict[str, Any]], str]:
		"""
		Fetch one movie.
		Returns (movie, "") on success or (None, message) when the server reports it missing.
		"""
		resp = self._get(f"/movies/{movie_id}")
		if resp.status_code == 200:
			return resp.json(), ""
		detail = resp.json().get("detail", f"Request failed with status {resp.status_code}")
		logger.info(f"[Client] Movie {movie_id} unavailable: {detail}")
		return None, detail if isinstance(detail, str) else str(detail)
