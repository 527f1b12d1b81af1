"""
Tests for the catalog loader: validation, the empty-catalog fallback, strict mode and duplicates.
"""

import json

import pytest

from src.config import DEFAULT_DATA_PATH
from src.data_loader import DataLoader
from src.errors import CatalogLoadError


def make_record(movie_id=1, **overrides):
    record = {
        "id": movie_id,
        "movieName": f"Movie {movie_id}",
        "director": "Jane Roe",
        "year": 2000,
        "genre": "Drama",
        "description": "A story.",
        "duration": 100,
        "imdbRating": 4.0,
    }
    record.update(overrides)
    return record


def test_bundled_catalog_loads():
    """The shipped data file is valid and keeps file order."""
    loader = DataLoader(strict=True)
    catalog = loader.load_catalog_from_json(str(DEFAULT_DATA_PATH))

    assert len(catalog) == 12
    assert [m.id for m in catalog.movies] == list(range(1, 13))
    assert catalog.index[1].title == "The Prison Escape"
    assert catalog.index[1].rating == 5.0
    assert list(catalog.genres) == sorted(set(catalog.genres))
    assert loader.get_year_range(catalog) == (1972, 2019)


def test_converts_field_types_and_aliases():
    loader = DataLoader()
    raw = {
        "id": "7",  # numeric string
        "title": "Plain Keys",  # alias for movieName
        "director": "",
        "year": 1999.0,  # integral float
        "genre": "Comedy",
        "description": "",
        "duration": " 90 ",
        "rating": "3.5",  # alias for imdbRating
    }
    catalog = loader.load_catalog([raw])

    movie = catalog.index[7]
    assert movie.title == "Plain Keys"
    assert movie.year == 1999
    assert movie.duration == 90
    assert movie.rating == 3.5


@pytest.mark.parametrize("bad", [
    {"movieName": None},
    {"genre": "   "},
    {"year": "nineteen"},
    {"duration": 99.5},
    {"imdbRating": "great"},
    {"id": 0},
    {"id": -4},
    {"id": True},
    {"director": 42},
])
def test_invalid_record_fails_whole_load(bad):
    """One bad record means an empty catalog, never a partial one."""
    records = [make_record(1), make_record(2, **bad), make_record(3)]
    catalog = DataLoader().load_catalog(records)

    assert len(catalog) == 0
    assert len(catalog.index) == 0
    assert catalog.genres == ()


def test_missing_field_fails_load():
    record = make_record(1)
    del record["description"]
    assert len(DataLoader().load_catalog([record])) == 0


def test_strict_mode_raises_with_location():
    records = [make_record(1), make_record(2)]
    del records[1]["genre"]

    with pytest.raises(CatalogLoadError) as excinfo:
        DataLoader(strict=True).load_catalog(records)

    assert excinfo.value.position == 1
    assert excinfo.value.field == "genre"
    assert "record 1" in str(excinfo.value)


def test_non_object_record_fails_load():
    assert len(DataLoader().load_catalog([make_record(1), ["not", "a", "dict"]])) == 0


def test_duplicate_ids_keep_order_and_later_wins_in_index():
    records = [make_record(1, movieName="First"), make_record(2), make_record(1, movieName="Second")]
    catalog = DataLoader().load_catalog(records)

    assert [m.title for m in catalog.movies] == ["First", "Movie 2", "Second"]
    assert len(catalog.index) == 2
    assert catalog.index[1].title == "Second"


def test_accepts_any_iterable_source():
    catalog = DataLoader().load_catalog(make_record(i) for i in (3, 1, 2))
    assert [m.id for m in catalog.movies] == [3, 1, 2]


def test_missing_file_gives_empty_catalog(tmp_path):
    catalog = DataLoader().load_catalog_from_json(str(tmp_path / "nope.json"))
    assert len(catalog) == 0


def test_missing_file_is_fatal_in_strict_mode(tmp_path):
    with pytest.raises(CatalogLoadError):
        DataLoader(strict=True).load_catalog_from_json(str(tmp_path / "nope.json"))


def test_invalid_json_gives_empty_catalog(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text("[{\"id\": 1,", encoding="utf-8")
    assert len(DataLoader().load_catalog_from_json(str(path))) == 0


def test_top_level_must_be_array(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(json.dumps({"movies": [make_record(1)]}), encoding="utf-8")
    assert len(DataLoader().load_catalog_from_json(str(path))) == 0


def test_jsonl_file(tmp_path):
    path = tmp_path / "movies.jsonl"
    lines = [json.dumps(make_record(i)) for i in (1, 2)]
    path.write_text("\n".join(lines) + "\n\n", encoding="utf-8")

    catalog = DataLoader(strict=True).load_catalog_from_json(str(path))
    assert [m.id for m in catalog.movies] == [1, 2]


def test_catalog_is_read_only():
    catalog = DataLoader().load_catalog([make_record(1)])
    with pytest.raises(TypeError):
        catalog.index[2] = catalog.index[1]  # mappingproxy rejects writes


def failing_source():
    """Yields one good record, then the underlying reader breaks."""
    yield make_record(1)
    raise OSError("disk went away")


def test_source_error_mid_read_gives_empty_catalog():
    catalog = DataLoader().load_catalog(failing_source())
    assert len(catalog) == 0
    assert len(catalog.index) == 0


def test_source_error_mid_read_is_load_error_in_strict_mode():
    with pytest.raises(CatalogLoadError) as excinfo:
        DataLoader(strict=True).load_catalog(failing_source())
    assert "disk went away" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def write_deeply_nested(path):
    path.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")


def test_deeply_nested_json_gives_empty_catalog(tmp_path):
    path = tmp_path / "movies.json"
    write_deeply_nested(path)
    assert len(DataLoader().load_catalog_from_json(str(path))) == 0


def test_deeply_nested_jsonl_gives_empty_catalog(tmp_path):
    path = tmp_path / "movies.jsonl"
    write_deeply_nested(path)
    assert len(DataLoader().load_catalog_from_json(str(path))) == 0


def test_deeply_nested_json_is_load_error_in_strict_mode(tmp_path):
    path = tmp_path / "movies.json"
    write_deeply_nested(path)
    with pytest.raises(CatalogLoadError):
        DataLoader(strict=True).load_catalog_from_json(str(path))


@pytest.mark.parametrize("rating", ["nan", "inf", "-Infinity", float("nan"), float("inf"), 10 ** 400])
def test_non_finite_rating_fails_load(rating):
    catalog = DataLoader().load_catalog([make_record(1, imdbRating=rating)])
    assert len(catalog) == 0


def test_json_nan_literal_rating_fails_load(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(json.dumps([make_record(1)]).replace("4.0", "NaN"), encoding="utf-8")
    with pytest.raises(CatalogLoadError) as excinfo:
        DataLoader(strict=True).load_catalog_from_json(str(path))
    assert excinfo.value.field == "imdbRating"
