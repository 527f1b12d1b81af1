"""
Runtime settings for the Movie Catalog service.
Values come from MOVIES_* environment variables with defaults suited to a local checkout.
"""

import os  # environment access
import sys  # stderr sink for loguru
from dataclasses import dataclass  # settings container
from pathlib import Path  # path handling

from loguru import logger  # console logging

# Project root (one level above src/)
ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DATA_PATH = ROOT / 'data' / 'movies.json'  # bundled catalog
DEFAULT_API_URL = "http://localhost:8000"  # where the FastAPI server is expected locally

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def _env_bool(name: str, default: bool) -> bool:
	value = os.getenv(name)
	if value is None:
		return default
	value = value.strip().lower()
	if value in _TRUE:
		return True
	if value in _FALSE:
		return False
	raise ValueError(f"Invalid boolean for {name}: {value!r}")


@dataclass
class Settings:
	data_path: Path = DEFAULT_DATA_PATH  # catalog file (.json array or .jsonl)
	strict_load: bool = False  # True: a bad catalog stops startup instead of serving nothing
	log_level: str = "INFO"  # loguru level name
	api_url: str = DEFAULT_API_URL  # base URL used by the Streamlit page

	@classmethod
	def from_env(cls) -> "Settings":
		"""Build settings from MOVIES_* environment variables."""
		return cls(
			data_path=Path(os.getenv('MOVIES_DATA_PATH', str(DEFAULT_DATA_PATH))),
			strict_load=_env_bool('MOVIES_STRICT_LOAD', False),
			log_level=os.getenv('MOVIES_LOG_LEVEL', 'INFO').upper(),
			api_url=os.getenv('MOVIES_API_URL', DEFAULT_API_URL).rstrip('/'),
		)


def configure_logging(level: str) -> None:
	"""Replace loguru's default sink with a stderr sink at `level`."""
	logger.remove()  # drop default handler
	logger.add(sys.stderr, level=level)
