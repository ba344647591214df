"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from weathercli.cli import main

URL = "https://test-owm.example.com/data/2.5/weather"


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.delenv("OPENWEATHERMAP_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


class TestCLI:
    def test_no_arguments_returns_1(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path)])
        assert result == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "weathercli" in capsys.readouterr().out

    def test_invalid_unit_is_usage_error(self, config_yaml_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_yaml_path), "-c", "London", "-u", "K"])
        assert exc_info.value.code == 2

    def test_invalid_config_returns_1(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("bogus: true\n")
        result = main(["--config", str(path), "-c", "London"])
        assert result == 1
        assert "Invalid config" in capsys.readouterr().err


class TestQuery:
    @respx.mock
    def test_single_city(
        self, config_yaml_path: Path, api_key: str, london_weather: dict, capsys
    ):
        route = respx.get(URL).mock(
            return_value=httpx.Response(200, json=london_weather)
        )
        result = main(["--config", str(config_yaml_path), "-c", "London"])
        assert result == 0
        assert route.calls[0].request.url.params["appid"] == "test-key"
        out = capsys.readouterr().out
        assert "Weather in London, GB:" in out
        assert "°C" in out

    @respx.mock
    def test_unit_flag_case_insensitive(
        self, config_yaml_path: Path, api_key: str, london_weather: dict, capsys
    ):
        respx.get(URL).mock(return_value=httpx.Response(200, json=london_weather))
        result = main(["--config", str(config_yaml_path), "-c", "London", "-u", "f"])
        assert result == 0
        assert "59.00 °F" in capsys.readouterr().out

    @respx.mock
    def test_failure_does_not_affect_exit_status(
        self, config_yaml_path: Path, api_key: str, london_weather: dict, capsys
    ):
        respx.get(URL, params={"q": "Atlantis"}).mock(
            return_value=httpx.Response(404, json={"message": "city not found"})
        )
        respx.get(URL, params={"q": "London"}).mock(
            return_value=httpx.Response(200, json=london_weather)
        )
        result = main(["--config", str(config_yaml_path), "-c", "Atlantis,London"])
        assert result == 0
        captured = capsys.readouterr()
        assert "Error fetching weather for Atlantis: HTTP 404" in captured.err
        assert "Weather in London, GB:" in captured.out

    @respx.mock
    def test_details_flag(
        self, config_yaml_path: Path, api_key: str, london_weather: dict, capsys
    ):
        respx.get(URL).mock(return_value=httpx.Response(200, json=london_weather))
        main(["--config", str(config_yaml_path), "-c", "London", "--details"])
        out = capsys.readouterr().out
        assert "Ground-level pressure: 1008 hPa" in out

    @respx.mock
    def test_json_format(
        self, config_yaml_path: Path, api_key: str, london_weather: dict, capsys
    ):
        respx.get(URL).mock(return_value=httpx.Response(200, json=london_weather))
        main(["--config", str(config_yaml_path), "-c", "London", "--format", "json"])
        assert json.loads(capsys.readouterr().out)["city"] == "London"

    @respx.mock
    def test_favorites_token(
        self,
        config_yaml_path: Path,
        favorites_path: Path,
        api_key: str,
        london_weather: dict,
    ):
        favorites_path.write_text('["Tokyo", "Berlin"]')
        route = respx.get(URL).mock(
            return_value=httpx.Response(200, json=london_weather)
        )
        result = main(
            ["--config", str(config_yaml_path), "-c", "Paris", "-c", "Favorites"]
        )
        assert result == 0
        queried = [c.request.url.params["q"] for c in route.calls]
        assert queried == ["Paris", "Tokyo", "Berlin"]

    @respx.mock(assert_all_called=False)
    def test_missing_credential_is_fatal(
        self, config_yaml_path: Path, no_api_key, capsys
    ):
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))
        result = main(["--config", str(config_yaml_path), "-c", "London"])
        assert result == 1
        assert not route.called
        assert "OPENWEATHERMAP_API_KEY not set" in capsys.readouterr().err

    @respx.mock(assert_all_called=False)
    def test_corrupt_favorites_aborts_query(
        self, config_yaml_path: Path, favorites_path: Path, api_key: str, capsys
    ):
        favorites_path.write_text("{broken")
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))
        result = main(["--config", str(config_yaml_path), "-c", "favorites"])
        assert result == 1
        assert not route.called
        assert "could not read favorites" in capsys.readouterr().err

    def test_empty_favorites_queries_nothing(
        self, config_yaml_path: Path, no_api_key, capsys
    ):
        assert main(["--config", str(config_yaml_path), "-c", "favorites"]) == 0
        assert capsys.readouterr().err.strip() == "No favorite cities saved."

    @respx.mock
    def test_default_city_from_config(
        self, tmp_path: Path, api_key: str, london_weather: dict
    ):
        path = tmp_path / "config.yaml"
        path.write_text(
            "provider:\n  base_url: https://test-owm.example.com\n"
            "default_city: Minneapolis\n"
            f"favorites_path: {tmp_path / 'favorites.json'}\n"
        )
        route = respx.get(URL).mock(
            return_value=httpx.Response(200, json=london_weather)
        )
        assert main(["--config", str(path)]) == 0
        assert route.calls[0].request.url.params["q"] == "Minneapolis"


class TestFavoritesCommands:
    def test_add_and_list(self, config_yaml_path: Path, no_api_key, capsys):
        cfg = ["--config", str(config_yaml_path)]
        assert main(cfg + ["--add-favorite", "Paris"]) == 0
        assert main(cfg + ["--add-favorite", "Tokyo"]) == 0
        capsys.readouterr()

        assert main(cfg + ["--list-favorites"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Favorite cities:",
            "  1. Paris",
            "  2. Tokyo",
        ]

    def test_add_twice(self, config_yaml_path: Path, favorites_path: Path, capsys):
        cfg = ["--config", str(config_yaml_path)]
        main(cfg + ["--add-favorite", "Paris"])
        main(cfg + ["--add-favorite", "Paris"])
        assert "already in favorites" in capsys.readouterr().out
        assert json.loads(favorites_path.read_text()) == ["Paris"]

    def test_remove(self, config_yaml_path: Path, favorites_path: Path, capsys):
        favorites_path.write_text('["Paris", "Tokyo"]')
        result = main(
            ["--config", str(config_yaml_path), "--remove-favorite", "Paris"]
        )
        assert result == 0
        assert "Removed Paris" in capsys.readouterr().out
        assert json.loads(favorites_path.read_text()) == ["Tokyo"]

    def test_remove_absent(self, config_yaml_path: Path, capsys):
        result = main(
            ["--config", str(config_yaml_path), "--remove-favorite", "Atlantis"]
        )
        assert result == 0
        assert "was not in favorites" in capsys.readouterr().out

    @pytest.mark.parametrize("name", ["", "   ", "favorites", "FAVORITES"])
    def test_add_rejects_blank_and_reserved(
        self, config_yaml_path: Path, favorites_path: Path, name: str, capsys
    ):
        result = main(["--config", str(config_yaml_path), "--add-favorite", name])
        assert result == 1
        assert "cannot add" in capsys.readouterr().err
        assert not favorites_path.exists()

    def test_add_strips_whitespace(
        self, config_yaml_path: Path, favorites_path: Path
    ):
        main(["--config", str(config_yaml_path), "--add-favorite", "  Paris "])
        assert json.loads(favorites_path.read_text()) == ["Paris"]

    def test_favorites_file_flag_overrides_config(
        self, config_yaml_path: Path, tmp_path: Path
    ):
        other = tmp_path / "other.json"
        main([
            "--config", str(config_yaml_path),
            "--favorites-file", str(other),
            "--add-favorite", "Rome",
        ])
        assert json.loads(other.read_text()) == ["Rome"]

    def test_corrupt_favorites_command_fails(
        self, config_yaml_path: Path, favorites_path: Path, capsys
    ):
        favorites_path.write_text("[1, 2]")
        result = main(["--config", str(config_yaml_path), "--list-favorites"])
        assert result == 1
        assert "could not list favorites" in capsys.readouterr().err
        assert favorites_path.read_text() == "[1, 2]"

    @respx.mock
    def test_mutation_then_query_same_invocation(
        self, config_yaml_path: Path, api_key: str, london_weather: dict, capsys
    ):
        route = respx.get(URL).mock(
            return_value=httpx.Response(200, json=london_weather)
        )
        result = main([
            "--config", str(config_yaml_path),
            "--add-favorite", "London",
            "-c", "favorites",
        ])
        assert result == 0
        assert route.call_count == 1
        out = capsys.readouterr().out
        assert out.index("Added London") < out.index("Weather in London")

    @respx.mock
    def test_failed_mutation_still_queries(
        self,
        config_yaml_path: Path,
        favorites_path: Path,
        api_key: str,
        london_weather: dict,
    ):
        favorites_path.write_text("oops")
        route = respx.get(URL).mock(
            return_value=httpx.Response(200, json=london_weather)
        )
        result = main([
            "--config", str(config_yaml_path),
            "--add-favorite", "Paris",
            "-c", "London",
        ])
        assert result == 1
        assert route.call_count == 1
