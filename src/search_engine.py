"""
Search engine module.
Answers id lookups and case-insensitive substring filters over a loaded Catalog.
"""

from typing import Iterable, List, Optional  # type annotations for clarity

# Import project data structures
from .models import Catalog, Movie  # immutable catalog + records

# Import loguru for console logging
from loguru import logger  # simple structured logger


def normalize_pattern(pattern: Optional[str]) -> str:
	"""Trim and case-fold a search pattern; None becomes the empty string."""
	if pattern is None:
		return ''
	return pattern.strip().casefold()


def is_valid_id(movie_id: Optional[int]) -> bool:
	"""Identifiers are strictly positive integers; anything else can never match."""
	return isinstance(movie_id, int) and not isinstance(movie_id, bool) and movie_id > 0


class SearchEngine:
	"""
	Read-only query API over a Catalog.

	Composite `search` ANDs its criteria in a fixed order: id first (via the index), then
	title, then genre. With no criteria it returns the whole catalog, whereas the single-field
	searches return nothing for blank input. Results always keep catalog order.
	"""

	def __init__(self, catalog: Catalog):
		self.catalog = catalog  # never mutated
		logger.info(f"[Engine] Ready with {len(catalog)} movies and {len(catalog.genres)} genres")

	def get_all(self) -> List[Movie]:
		"""Return every movie in catalog order."""
		return list(self.catalog.movies)

	def get_by_id(self, movie_id: Optional[int]) -> Optional[Movie]:
		"""Return the movie with this id, or None when absent or not a positive id."""
		if not is_valid_id(movie_id):
			return None  # short-circuit, no lookup needed
		return self.catalog.index.get(movie_id)

	def search_by_name(self, name: Optional[str]) -> List[Movie]:
		"""Movies whose title contains `name` (case-insensitive). Blank input matches nothing."""
		needle = normalize_pattern(name)
		if not needle:
			logger.warning("[Engine] Empty name provided for search, returning no movies")
			return []
		results = self._filter_title(self.catalog.movies, needle)
		logger.info(f"[Engine] Name search for '{name}' found {len(results)} movies")
		return results

	def search_by_genre(self, genre: Optional[str]) -> List[Movie]:
		"""Movies whose genre contains `genre` (case-insensitive). Blank input matches nothing."""
		needle = normalize_pattern(genre)
		if not needle:
			logger.warning("[Engine] Empty genre provided for search, returning no movies")
			return []
		results = self._filter_genre(self.catalog.movies, needle)
		logger.info(f"[Engine] Genre search for '{genre}' found {len(results)} movies")
		return results

	def search(
		self,
		name: Optional[str] = None,  # title substring
		movie_id: Optional[int] = None,  # exact identifier
		genre: Optional[str] = None,  # genre substring
	) -> List[Movie]:
		"""
		Combined search: every supplied criterion must match.
		A supplied id that is zero or negative matches nothing.
		"""
		logger.info(f"[Engine] Starting movie search with name={name!r}, id={movie_id!r}, genre={genre!r}")
		results: List[Movie] = list(self.catalog.movies)  # start from everything

		# Filter by id first: it is the most specific criterion
		if movie_id is not None:
			movie = self.get_by_id(movie_id)
			results = [movie] if movie is not None else []
			logger.debug(f"[Engine] Filtered by id {movie_id}, {len(results)} movies left")

		# Filter by title substring
		name_needle = normalize_pattern(name)
		if name_needle:
			results = self._filter_title(results, name_needle)
			logger.debug(f"[Engine] Filtered by name '{name}', {len(results)} movies left")

		# Filter by genre substring
		genre_needle = normalize_pattern(genre)
		if genre_needle:
			results = self._filter_genre(results, genre_needle)
			logger.debug(f"[Engine] Filtered by genre '{genre}', {len(results)} movies left")

		logger.info(f"[Engine] Search complete, found {len(results)} movies")
		return results

	def list_genres(self) -> List[str]:
		"""
		Distinct genres sorted ascending.
		Deduplication is case-sensitive: "Drama" and "drama" are listed separately.
		"""
		genres = list(self.catalog.genres)  # cached at load time
		logger.debug(f"[Engine] Found {len(genres)} unique genres")
		return genres

	@staticmethod
	def _filter_title(movies: Iterable[Movie], needle: str) -> List[Movie]:
		return [m for m in movies if needle in m.title.casefold()]

	@staticmethod
	def _filter_genre(movies: Iterable[Movie], needle: str) -> List[Movie]:
		return [m for m in movies if needle in m.genre.casefold()]
