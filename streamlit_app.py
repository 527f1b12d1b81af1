"""
Streamlit UI for the Movie Catalog.
Calls the local FastAPI server (MOVIES_API_URL, http://localhost:8000 by default) to search,
or runs locally by loading the catalog file the same way the API does.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Convert frozen Movie records to dicts for rendering
from dataclasses import asdict  # dataclass -> dict
# Typing to make function signatures clearer
from typing import List, Optional  # indicates values can be None

from loguru import logger  # console logging

# Local engine imports for fallback/local mode (when API isn't used)
from src.catalog_client import CatalogClient  # JSON API client
from src.config import Settings  # env-driven settings
from src.data_loader import DataLoader  # load movies from file
from src.search_engine import SearchEngine  # id + substring search

settings = Settings.from_env()  # data path, API URL, failure policy

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Catalog", layout="wide")  # wide layout

# Main page title
st.title("🎬 Movie Catalog")  # header

# Cache the local engine so we only load the catalog once per session
@st.cache_resource(show_spinner=True)
def init_local_engine() -> Optional[SearchEngine]:
	"""Create a local SearchEngine over the configured catalog file."""
	try:
		loader = DataLoader(strict=settings.strict_load)  # create loader
		catalog = loader.load_catalog_from_json(str(settings.data_path))  # read dataset
		return SearchEngine(catalog)  # success
	except Exception as e:
		# Show an error in the UI so users know local mode failed
		logger.error(f"[UI] Local engine failed: {e}")
		st.error(f"Failed to initialize local movie catalog: {e}")
		return None  # signal failure

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", settings.api_url)  # where the API lives
	# Toggle to force local mode; if API health probe fails we also fall back to local
	use_local = st.toggle("Use local catalog", value=False, help="If enabled or API is unreachable, the app will run fully locally.")

client = CatalogClient(api_url)  # used whenever the API is active

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		api_available = CatalogClient(api_url, timeout=3).is_healthy()  # ping API health endpoint
	except requests.RequestException:
		api_available = False  # probe failed
		st.sidebar.info("API not reachable; will use local catalog.")  # inform user

# Initialize local engine only when needed (user toggle or API not available)
local_engine: Optional[SearchEngine] = None  # placeholder
if use_local or not api_available:
	with st.spinner("Loading local catalog..."):
		local_engine = init_local_engine()
		if local_engine is not None:
			st.sidebar.success("Local catalog ready.")  # success note
		else:
			st.sidebar.error("Local catalog failed to load.")  # error note


def fetch_genres() -> List[str]:
	"""Genre list for the dropdown, from whichever backend is active."""
	if local_engine is not None:
		return local_engine.list_genres()
	try:
		return client.genres()
	except requests.RequestException as e:
		st.warning(f"Could not fetch genres: {e}")
		return []


# Search form: name, id and genre, any combination
col1, col2, col3 = st.columns([3, 1, 2])
with col1:
	name = st.text_input("Movie name", placeholder="e.g., prison")
with col2:
	movie_id = st.number_input("Movie ID", min_value=0, value=0, step=1, help="0 means any id")
with col3:
	genre_choice = st.selectbox("Genre", ["Any"] + fetch_genres())
genre = None if genre_choice == "Any" else genre_choice
search_btn = st.button("Search", type="primary")  # triggers a search


def render_movies(movies: List[dict]) -> None:
	"""Render each movie as a subheader plus details."""
	for movie in movies:
		st.subheader(f"{movie['title']} ({movie['year']})")  # title + year
		st.caption(f"#{movie['id']} | {movie['genre']} | {movie['duration']} min | ⭐ {movie['rating']}")
		st.write(f"Director: {movie['director']}")  # director
		if movie.get('description'):
			st.write(movie['description'])  # synopsis
		st.divider()  # separator


if search_btn:
	id_param = int(movie_id) if movie_id else None  # 0 = not supplied
	with st.spinner("Searching..."):
		try:
			if local_engine is not None:
				# Local mode: no criteria shows the whole catalog with a hint
				if not name.strip() and id_param is None and genre is None:
					st.info("Provide search criteria to narrow the list; showing all movies.")
					movies = local_engine.get_all()
				else:
					movies = local_engine.search(name, id_param, genre)
				payload = {
					"message": f"Found {len(movies)} movies" if movies else "No movies found matching the search criteria",
					"movies": [asdict(m) for m in movies],
				}
			else:
				# API mode: call the server and let it perform the search
				payload = client.search(name or None, id_param, genre)  # 400 bodies carry a message too

			if payload.get("movies"):
				st.success(payload.get("message", ""))
			else:
				st.warning(payload.get("message", "No movies found"))
			render_movies(payload.get("movies", []))

		except requests.RequestException as e:  # network/API errors
			st.error(f"API request failed: {e}")  # show human-friendly message

# Detail view: one movie by id
st.header("Movie details")
detail_col1, detail_col2 = st.columns([1, 4])
with detail_col1:
	detail_id = st.number_input("Movie ID to show", min_value=1, value=1, step=1, key="detail_id")
with detail_col2:
	detail_btn = st.button("Show details")

if detail_btn:
	try:
		if local_engine is not None:
			found = local_engine.get_by_id(int(detail_id))
			movie = asdict(found) if found is not None else None
			message = "" if found is not None else f"Movie with ID {int(detail_id)} was not found."
		else:
			movie, message = client.movie_details(int(detail_id))  # 404 detail on miss
		if movie is None:
			st.warning(message)
		else:
			render_movies([movie])
	except requests.RequestException as e:
		st.error(f"API request failed: {e}")

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if local_engine is not None:
	st.sidebar.caption(f"Mode: Local catalog ({len(local_engine.catalog)} movies)")  # mode label
else:
	st.sidebar.caption("Mode: API client (ensure uvicorn api:app --reload is running)")  # mode label
