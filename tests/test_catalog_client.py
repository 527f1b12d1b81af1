"""
Tests for the API client used by the Streamlit page, run against the FastAPI app in-process.
"""

import pytest
from fastapi.testclient import TestClient

import api
from src.catalog_client import CatalogClient
from src.models import Catalog, Movie
from src.search_engine import SearchEngine


MOVIES = [
    Movie(1, "The Prison Escape", "John Doe", 1994, "Drama", "Two men bond.", 142, 5.0),
    Movie(2, "Sea Battle", "Admiral Blackbeard", 2022, "Action", "Epic naval warfare", 140, 4.0),
]


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api, "ENGINE", SearchEngine(Catalog.from_movies(MOVIES)))
    return CatalogClient("http://testserver/", session=TestClient(api.app))


def test_health_and_genres(client):
    assert client.is_healthy() is True
    assert client.genres() == ["Action", "Drama"]


def test_movie_details_found(client):
    movie, message = client.movie_details(2)
    assert movie["title"] == "Sea Battle"
    assert message == ""


def test_movie_details_missing_reports_server_message(client):
    movie, message = client.movie_details(42)
    assert movie is None
    assert message == "Movie with ID 42 was not found."


def test_search(client):
    payload = client.search(name="prison")
    assert [m["id"] for m in payload["movies"]] == [1]

    payload = client.search()
    assert payload["success"] is False  # no criteria is rejected by the server
