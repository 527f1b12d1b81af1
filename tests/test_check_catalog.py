"""
Tests for the catalog check script.
"""

from scripts.check_catalog import main


def test_bundled_catalog_passes(monkeypatch):
    monkeypatch.delenv("MOVIES_DATA_PATH", raising=False)
    assert main() == 0


def test_broken_catalog_fails(tmp_path, monkeypatch):
    path = tmp_path / "movies.json"
    path.write_text('[{"id": 1}]', encoding="utf-8")
    monkeypatch.setenv("MOVIES_DATA_PATH", str(path))
    assert main() == 1
