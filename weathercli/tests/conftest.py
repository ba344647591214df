"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weathercli.storage.favorites_repo import FavoritesRepo

TEST_BASE_URL = "https://test-owm.example.com"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def london_weather(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_london.json") as f:
        return json.load(f)


@pytest.fixture
def favorites_path(tmp_path: Path) -> Path:
    return tmp_path / "favorites.json"


@pytest.fixture
def favorites_repo(favorites_path: Path) -> FavoritesRepo:
    return FavoritesRepo(favorites_path)


@pytest.fixture
def config_yaml_path(tmp_path: Path, favorites_path: Path) -> Path:
    """Write a config pointing at the test provider and a temp favorites file."""
    data = {
        "provider": {"base_url": TEST_BASE_URL},
        "favorites_path": str(favorites_path),
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "test-key")
    return "test-key"
