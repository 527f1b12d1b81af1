"""
Data loading and validation module.
Turns the bundled movie records (JSON array or JSON Lines) into an immutable Catalog.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON documents
import math  # finite-number checks
from typing import Any, Iterable, List, Mapping, Optional, Tuple  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes and the load error raised on bad input
from .models import Catalog, Movie  # structured records
from .errors import CatalogLoadError  # raised for unreadable/malformed sources

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and validating movie records.

	Loading is all-or-nothing: one bad record fails the whole load. By default the failure is
	logged and an empty catalog is returned so the service still starts; with `strict=True`
	the CatalogLoadError propagates to the caller instead.
	"""

	# Raw field name(s) accepted for each Movie attribute, first match wins
	FIELD_ALIASES = {
		'id': ('id',),
		'title': ('movieName', 'title'),  # bundled data uses movieName
		'director': ('director',),
		'year': ('year',),
		'genre': ('genre',),
		'description': ('description',),
		'duration': ('duration',),
		'rating': ('imdbRating', 'rating'),  # bundled data uses imdbRating
	}

	def __init__(self, strict: bool = False):
		"""Create a loader; `strict` makes load failures fatal instead of yielding an empty catalog."""
		self.strict = strict  # failure policy for this loader

	def load_catalog_from_json(self, filepath: str) -> Catalog:
		"""
		Load the catalog from a JSON file.
		`.jsonl` files are read as one object per line, anything else as a single JSON array.
		"""
		filepath = Path(filepath)  # normalize path
		logger.info(f"[Loader] Loading movies from {filepath}...")  # log action
		try:
			records = self._read_records(filepath)  # raw dicts
		except CatalogLoadError as e:
			return self._handle_failure(e)  # unreadable source
		return self.load_catalog(records)  # validate + index

	def load_catalog(self, records: Iterable[Mapping[str, Any]]) -> Catalog:
		"""
		Validate every raw record and build the catalog with its id index.
		Duplicate ids are kept in order; the later record wins in the index.
		"""
		movies: List[Movie] = []  # accumulator for parsed movies
		seen = set()  # ids encountered so far
		try:
			for position, raw in enumerate(records):  # keep position for diagnostics
				movie = self._parse_movie_data(raw, position)  # raw -> Movie
				if movie.id in seen:
					logger.warning(
						f"[Loader] Duplicate id {movie.id} at record {position}; index will point to this later record"
					)
				seen.add(movie.id)
				movies.append(movie)  # collect
		except CatalogLoadError as e:
			return self._handle_failure(e)  # never keep a partial catalog
		except Exception as e:
			# the record source itself failed part-way (I/O error, broken generator, ...)
			error = CatalogLoadError(f"Cannot read movie records: {type(e).__name__}: {e}")
			error.__cause__ = e
			return self._handle_failure(error)

		catalog = Catalog.from_movies(movies)  # freeze + index
		logger.info(
			f"[Loader] Successfully loaded {len(catalog)} movies ({len(catalog.index)} unique ids, {len(catalog.genres)} genres)."
		)
		return catalog

	def _handle_failure(self, error: CatalogLoadError) -> Catalog:
		"""Apply the loader's failure policy."""
		if self.strict:
			logger.error(f"[Loader] Failed to load movies: {error}")
			raise error
		logger.error(f"[Loader] Failed to load movies, starting with an empty catalog: {error}")
		return Catalog.empty()

	def _read_records(self, filepath: Path) -> List[Any]:
		"""Read raw records from disk; every failure is reported as CatalogLoadError."""
		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise CatalogLoadError(f"Movie data file not found: {filepath}")
		try:
			text = filepath.read_text(encoding='utf-8')
		except (OSError, UnicodeDecodeError) as e:
			raise CatalogLoadError(f"Cannot read {filepath}: {e}") from e

		if filepath.suffix == '.jsonl':
			records = []
			for line_num, line in enumerate(text.splitlines(), 1):  # 1-based line numbers
				if not line.strip():
					continue  # blank lines are allowed
				try:
					records.append(json.loads(line))
				except (ValueError, RecursionError) as e:  # JSONDecodeError is a ValueError
					raise CatalogLoadError(f"Invalid JSON at line {line_num}: {e}") from e
			return records

		try:
			data = json.loads(text)
		except (ValueError, RecursionError) as e:  # includes too deeply nested documents
			raise CatalogLoadError(f"Invalid JSON in {filepath}: {e}") from e
		if not isinstance(data, list):
			raise CatalogLoadError(f"Expected a JSON array of movies in {filepath}, got {type(data).__name__}")
		return data

	def _parse_movie_data(self, data: Any, position: int) -> Movie:
		"""
		Convert a raw mapping into a strongly-typed Movie.
		Raises CatalogLoadError for a missing field or a value of the wrong type.
		"""
		if not isinstance(data, Mapping):
			raise CatalogLoadError(f"expected an object, got {type(data).__name__}", position)

		movie_id = self._as_int(data, 'id', position)
		if movie_id <= 0:
			raise CatalogLoadError(f"id must be positive, got {movie_id}", position, 'id')

		return Movie(
			id=movie_id,
			title=self._as_text(data, 'title', position, required=True),
			director=self._as_text(data, 'director', position),
			year=self._as_int(data, 'year', position),
			genre=self._as_text(data, 'genre', position, required=True),
			description=self._as_text(data, 'description', position),
			duration=self._as_int(data, 'duration', position),
			rating=self._as_float(data, 'rating', position),
		)

	def _lookup(self, data: Mapping[str, Any], name: str, position: int) -> Tuple[str, Any]:
		"""Find the raw value for a Movie attribute, trying each accepted key."""
		for key in self.FIELD_ALIASES[name]:
			if key in data and data[key] is not None:
				return key, data[key]
		primary = self.FIELD_ALIASES[name][0]  # report the bundled-data key name
		raise CatalogLoadError(f"missing field '{primary}'", position, primary)

	def _as_int(self, data: Mapping[str, Any], name: str, position: int) -> int:
		key, value = self._lookup(data, name, position)
		if isinstance(value, bool):  # bool is an int subclass, never a valid number here
			raise CatalogLoadError(f"'{key}' must be an integer, got {value!r}", position, key)
		if isinstance(value, int):
			return value
		if isinstance(value, float) and value.is_integer():
			return int(value)
		if isinstance(value, str):
			try:
				return int(value.strip())
			except ValueError:
				pass  # reported below
		raise CatalogLoadError(f"'{key}' must be an integer, got {value!r}", position, key)

	def _as_float(self, data: Mapping[str, Any], name: str, position: int) -> float:
		key, value = self._lookup(data, name, position)
		if isinstance(value, bool):
			raise CatalogLoadError(f"'{key}' must be a number, got {value!r}", position, key)
		number = None
		if isinstance(value, (int, float)):
			try:
				number = float(value)
			except OverflowError:
				pass  # int too large for a float
		elif isinstance(value, str):
			try:
				number = float(value.strip())
			except ValueError:
				pass
		# nan and inf parse as floats but are not ratings
		if number is not None and math.isfinite(number):
			return number
		raise CatalogLoadError(f"'{key}' must be a number, got {value!r}", position, key)

	def _as_text(self, data: Mapping[str, Any], name: str, position: int, required: bool = False) -> str:
		key, value = self._lookup(data, name, position)
		if not isinstance(value, str):
			raise CatalogLoadError(f"'{key}' must be a string, got {value!r}", position, key)
		if required and not value.strip():
			raise CatalogLoadError(f"'{key}' must not be blank", position, key)
		return value

	def get_all_directors(self, catalog: Catalog) -> List[str]:
		"""Return a sorted list of all unique director names in the catalog."""
		return sorted({m.director for m in catalog.movies if m.director})

	def get_year_range(self, catalog: Catalog) -> Optional[Tuple[int, int]]:
		"""Return (earliest, latest) release year, or None for an empty catalog."""
		years = [m.year for m in catalog.movies if m.year]  # ignore zero years
		if not years:
			return None
		return min(years), max(years)
