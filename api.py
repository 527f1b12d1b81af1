"""
FastAPI server exposing the movie catalog.
Endpoints:
- GET /health: basic health check
- GET /movies: every movie plus the genre list
- GET /movies/genres: distinct genres, sorted
- GET /movies/search?name=...&id=...&genre=...: combined search (at least one criterion required)
- GET /movies/{id}: a single movie or 404

Startup loads the catalog once from MOVIES_DATA_PATH (data/movies.json by default).
"""

# Import standard libraries for timing and lifespan management
import time  # measure startup and request latencies
from contextlib import asynccontextmanager  # FastAPI lifespan hook
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from fastapi.responses import JSONResponse  # explicit status codes for search errors
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for configuration, loading and search
from src.config import Settings, configure_logging  # env-driven settings
from src.data_loader import DataLoader  # loads and validates movies
from src.models import Movie  # core record
from src.search_engine import SearchEngine  # query engine

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Globals that hold the search engine instance and measured startup time
ENGINE: Optional[SearchEngine] = None  # will point to the initialized engine
STARTUP_TIME_S: float = 0.0  # measures how long startup took


@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Load the catalog once before serving requests."""
	global ENGINE, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = Settings.from_env()  # read MOVIES_* variables
	configure_logging(settings.log_level)
	logger.info("[API] Startup: loading movie catalog...")  # log intent

	loader = DataLoader(strict=settings.strict_load)  # failure policy from config
	catalog = loader.load_catalog_from_json(str(settings.data_path))  # read dataset
	ENGINE = SearchEngine(catalog)  # create engine

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(catalog)} movies.")
	yield


# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Catalog API", version="1.0.0", lifespan=lifespan)  # web app


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int  # unique id
	title: str  # human-readable title
	director: str  # director name
	year: int  # release year
	genre: str  # genre label
	description: str  # synopsis
	duration: int  # minutes
	rating: float  # average rating


class MovieListResponse(BaseModel):
	movies: List[MovieOut]  # catalog order
	genres: List[str]  # for search dropdowns


class SearchParameters(BaseModel):
	name: Optional[str] = None
	id: Optional[int] = None
	genre: Optional[str] = None


# Pydantic model for the complete search response payload
class SearchResponse(BaseModel):
	success: bool  # False when the request was rejected or failed
	message: str  # human-readable summary
	movies: List[MovieOut]  # matching movies in catalog order
	total_results: int  # len(movies)
	search_parameters: Optional[SearchParameters] = None  # echo of the request


def _movie_out(m: Movie) -> MovieOut:
	"""Convert a core Movie to its response schema."""
	return MovieOut(
		id=m.id,
		title=m.title,
		director=m.director,
		year=m.year,
		genre=m.genre,
		description=m.description,
		duration=m.duration,
		rating=m.rating,
	)


def _engine() -> SearchEngine:
	if ENGINE is None:  # engine must be ready to serve
		logger.warning("[API] Request received but catalog not initialized")
		raise HTTPException(status_code=503, detail="Catalog not loaded yet")
	return ENGINE


def _is_blank(value: Optional[str]) -> bool:
	return value is None or not value.strip()


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"catalog_ready": ENGINE is not None,  # True if engine initialized
		"movie_count": len(ENGINE.catalog) if ENGINE is not None else 0,  # 0 also after a failed load
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/movies", response_model=MovieListResponse)
async def list_movies():
	"""Return the whole catalog and the available genres."""
	engine = _engine()
	logger.info("[API] Fetching movies")
	return MovieListResponse(
		movies=[_movie_out(m) for m in engine.get_all()],
		genres=engine.list_genres(),
	)


@app.get("/movies/genres", response_model=List[str])
async def list_genres():
	"""Return the distinct genres, sorted."""
	return _engine().list_genres()


# Main search endpoint combining name, id and genre criteria
@app.get("/movies/search", response_model=SearchResponse)
async def search(
	name: Optional[str] = Query(None, description="Title substring, case-insensitive"),
	movie_id: Optional[int] = Query(None, alias="id", description="Exact movie id"),
	genre: Optional[str] = Query(None, description="Genre substring, case-insensitive"),
):
	"""Run a combined search; at least one criterion must be supplied."""
	engine = _engine()
	logger.info(f"[API] Search requested with name={name!r}, id={movie_id!r}, genre={genre!r}")

	# Reject requests without any criteria instead of dumping the whole catalog
	if _is_blank(name) and movie_id is None and _is_blank(genre):
		logger.warning("[API] No search parameters provided")
		payload = SearchResponse(
			success=False,
			message="At least one search parameter is required",
			movies=[],
			total_results=0,
		)
		return JSONResponse(status_code=400, content=payload.model_dump())

	start = time.time()  # start timer
	try:
		results = engine.search(name, movie_id, genre)  # delegate to the engine
	except Exception as e:
		logger.exception(f"[API] Error during movie search: {e}")
		payload = SearchResponse(
			success=False,
			message="Something went wrong with the search, try again later",
			movies=[],
			total_results=0,
		)
		return JSONResponse(status_code=500, content=payload.model_dump())
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /movies/search served {len(results)} results in {elapsed_ms:.2f} ms")

	if results:
		message = f"Found {len(results)} movies"
	else:
		message = "No movies found matching the search criteria"

	return SearchResponse(
		success=True,
		message=message,
		movies=[_movie_out(m) for m in results],
		total_results=len(results),
		search_parameters=SearchParameters(name=name, id=movie_id, genre=genre),
	)


@app.get("/movies/{movie_id}", response_model=MovieOut)
async def movie_details(movie_id: int):
	"""Return one movie by id."""
	logger.info(f"[API] Fetching details for movie id {movie_id}")
	movie = _engine().get_by_id(movie_id)
	if movie is None:
		logger.warning(f"[API] Movie with id {movie_id} not found")
		raise HTTPException(status_code=404, detail=f"Movie with ID {movie_id} was not found.")
	return _movie_out(movie)
