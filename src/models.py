"""
Data models for the Movie Catalog service.
Defines the immutable records and the catalog structure shared by the loader and the engine.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Read-only view over a dict so the id index cannot be mutated after loading
from types import MappingProxyType  # immutable mapping proxy
# Import typing helpers for precise and self-documenting types
from typing import Dict, Iterable, Mapping, Tuple  # containers used by the catalog


@dataclass(frozen=True)
class Movie:
	"""
	Represents a single movie record exactly as loaded from the catalog file.
	Frozen so records can be shared between concurrent readers safely.
	"""
	id: int  # unique, strictly positive identifier
	title: str  # movie title as displayed (original casing kept)
	director: str  # director's name
	year: int  # release year (e.g., 1994)
	genre: str  # single genre label (e.g., "Drama" or "Crime/Drama")
	description: str  # short synopsis
	duration: int  # running time in minutes
	rating: float  # average rating on a 0-10 scale


@dataclass(frozen=True)
class Catalog:
	"""
	The ordered, immutable collection of movies plus its derived lookups.
	`movies` keeps insertion order; `index` maps id -> Movie; `genres` is cached because
	the catalog never changes after it is built.
	"""
	movies: Tuple[Movie, ...] = ()  # ordered records
	index: Mapping[int, Movie] = field(default_factory=lambda: MappingProxyType({}))  # id lookup
	genres: Tuple[str, ...] = ()  # sorted distinct genres

	@classmethod
	def from_movies(cls, movies: Iterable[Movie]) -> "Catalog":
		"""
		Build a catalog from already-validated movies.
		A repeated id keeps both records in `movies` but the later one wins in `index`.
		"""
		ordered = tuple(movies)  # freeze order
		index: Dict[int, Movie] = {}  # id -> movie
		for movie in ordered:
			index[movie.id] = movie  # later duplicates overwrite
		genres = tuple(sorted({m.genre for m in ordered}))  # case-sensitive dedup
		return cls(movies=ordered, index=MappingProxyType(index), genres=genres)

	@classmethod
	def empty(cls) -> "Catalog":
		"""Return a catalog with no movies (used when loading fails)."""
		return cls()

	def __len__(self) -> int:
		return len(self.movies)
