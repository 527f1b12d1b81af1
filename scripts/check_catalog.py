"""
Validate the bundled movie catalog.

This script:
1) Loads the catalog file (MOVIES_DATA_PATH, data/movies.json by default) in strict mode
2) Reports movie count, genres, directors and year range

Usage:
    python -m scripts.check_catalog

Exits with status 1 when the file cannot be loaded, so it can gate CI before deploying.
"""

import sys  # exit status

from loguru import logger  # console logging

from src.config import Settings, configure_logging  # env-driven settings
from src.data_loader import DataLoader  # data ingestion
from src.errors import CatalogLoadError  # strict-mode failure


def main() -> int:
	settings = Settings.from_env()
	configure_logging(settings.log_level)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Check Movie Catalog")
	logger.info("=" * 60)

	# 1) Load data, failing loudly instead of falling back to an empty catalog
	logger.info(f"[1/2] Loading {settings.data_path}...")
	loader = DataLoader(strict=True)
	try:
		catalog = loader.load_catalog_from_json(str(settings.data_path))
	except CatalogLoadError as e:
		logger.error(f"[FAIL] {e}")
		return 1
	logger.info(f"[OK] Loaded {len(catalog)} movies")

	# 2) Summarize
	logger.info("[2/2] Catalog summary")
	duplicates = len(catalog) - len(catalog.index)
	if duplicates:
		logger.warning(f"  Duplicate ids: {duplicates} record(s) shadowed in the id index")
	logger.info(f"  Genres ({len(catalog.genres)}): {', '.join(catalog.genres)}")
	logger.info(f"  Directors: {len(loader.get_all_directors(catalog))}")
	year_range = loader.get_year_range(catalog)
	if year_range:
		logger.info(f"  Year range: {year_range[0]} - {year_range[1]}")

	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())
