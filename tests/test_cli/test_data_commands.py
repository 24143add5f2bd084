"""CLI tests for the data commands (imagery, weather, catalog)."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import pytest

from skyfetch import __version__
from skyfetch.app import app
from skyfetch.client import RequestPipeline
from skyfetch.exit_codes import EXIT_PAYLOAD_ERROR, EXIT_RETRIES_EXHAUSTED
from skyfetch.facade import SpaceDataClient


APOD_PAYLOAD = {
    "url": "https://apod.nasa.gov/apod/image/horsehead.jpg",
    "title": "The Horsehead Nebula",
    "date": "2024-01-01",
}

COMET = {
    "englishName": "Halley",
    "bodyType": "Comet",
    "sideralOrbit": 27510,
    "perihelion": 0.586,
    "inclination": 162.26,
}


@pytest.fixture()
def serve(monkeypatch, clock):
    """Route CLI commands to a mock API answering by URL path.

    Returns a function taking the route table and returning the list of
    recorded requests and the API keys passed to ``build_client``.
    """
    http_clients: list[httpx.Client] = []

    def _serve(routes: dict[str, Any]) -> tuple[list[httpx.Request], list[Optional[str]]]:
        requests: list[httpx.Request] = []
        keys: list[Optional[str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            answer = routes.get(request.url.path, httpx.Response(404))
            if isinstance(answer, httpx.Response):
                return answer
            return httpx.Response(200, json=answer)

        def build_client(api_key: Optional[str] = None) -> SpaceDataClient:
            keys.append(api_key)
            http = httpx.Client(transport=httpx.MockTransport(handler))
            http_clients.append(http)
            pipeline = RequestPipeline(client=http, clock=clock, sleep=clock.sleep)
            return SpaceDataClient(api_key=api_key or "TEST", pipeline=pipeline)

        monkeypatch.setattr("skyfetch.commands.build_client", build_client)
        return requests, keys

    yield _serve
    for http in http_clients:
        http.close()


class TestGlobalOptions:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"skyfetch {__version__}" in result.stdout

    def test_help_lists_commands(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("apod", "planet", "image", "weather", "catalog", "config"):
            assert command in result.stdout

    def test_api_key_flag_is_forwarded(self, cli_runner, serve) -> None:
        requests, keys = serve({"/planetary/apod": APOD_PAYLOAD})

        result = cli_runner.invoke(app, ["--json", "--api-key", "MINE", "apod"])

        assert result.exit_code == 0, result.output
        assert keys == ["MINE"]
        assert requests[0].url.params["api_key"] == "MINE"


class TestImagery:
    def test_apod_json(self, cli_runner, serve) -> None:
        requests, _ = serve({"/planetary/apod": APOD_PAYLOAD})

        result = cli_runner.invoke(app, ["--json", "apod", "--date", "2024-01-01"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["url"] == APOD_PAYLOAD["url"]
        assert data["source"] == "api"
        assert data["fallback_reason"] is None
        assert requests[0].url.params["date"] == "2024-01-01"

    def test_apod_fallback_warns(self, cli_runner, serve) -> None:
        serve({"/planetary/apod": httpx.Response(500)})

        result = cli_runner.invoke(app, ["--no-color", "apod"])

        assert result.exit_code == 0
        assert "Using fallback image for The Sun (fetch_failed)" in result.output

    def test_apod_range(self, cli_runner, serve) -> None:
        requests, _ = serve({"/planetary/apod": APOD_PAYLOAD})

        result = cli_runner.invoke(
            app, ["--json", "apod", "--start", "2024-01-01", "--end", "2024-01-02"]
        )

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)) == 2
        assert len(requests) == 2

    def test_apod_range_needs_both_ends(self, cli_runner, serve) -> None:
        requests, _ = serve({})
        result = cli_runner.invoke(app, ["apod", "--start", "2024-01-01"])
        assert result.exit_code == 2
        assert requests == []

    def test_apod_range_invalid_date(self, cli_runner, serve) -> None:
        serve({})
        result = cli_runner.invoke(
            app, ["--no-color", "apod", "--start", "soon", "--end", "2024-01-02"]
        )
        assert result.exit_code == 2
        assert "Invalid date 'soon'" in result.output

    def test_planet_not_configured(self, cli_runner, serve) -> None:
        requests, _ = serve({})

        result = cli_runner.invoke(app, ["--no-color", "planet", "Pluto"])

        assert result.exit_code == 0
        assert "not_configured" in result.output
        assert requests == []

    def test_planet_enhanced(self, cli_runner, serve) -> None:
        serve(
            {
                "/planetary/apod": APOD_PAYLOAD,
                "/mars-photos/api/v1/rovers/curiosity/photos": {"photos": [{"id": 7}]},
            }
        )

        result = cli_runner.invoke(app, ["--json", "planet", "Mars", "--enhanced"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["image_data"]["url"] == APOD_PAYLOAD["url"]
        assert data["additional_data"] == {"mars_photos": [{"id": 7}]}

    def test_meteorite_image(self, cli_runner, serve) -> None:
        serve({"/planetary/apod": APOD_PAYLOAD})
        result = cli_runner.invoke(app, ["--json", "image", "meteorite", "Hoba"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["url"] == APOD_PAYLOAD["url"]

    def test_mars(self, cli_runner, serve) -> None:
        requests, _ = serve(
            {"/mars-photos/api/v1/rovers/spirit/photos": {"photos": [{"id": 1}, {"id": 2}]}}
        )

        result = cli_runner.invoke(app, ["--json", "mars", "--rover", "spirit", "--sol", "5"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [{"id": 1}, {"id": 2}]
        assert requests[0].url.params["sol"] == "5"

    def test_neo_unexpected_payload(self, cli_runner, serve) -> None:
        serve({"/neo/rest/v1/feed": {"error": "OVER_RATE_LIMIT"}})
        result = cli_runner.invoke(app, ["--no-color", "neo"])
        assert result.exit_code == EXIT_PAYLOAD_ERROR
        assert "neo_feed: unexpected payload" in result.output

    def test_earth_no_enhance(self, cli_runner, serve) -> None:
        requests, _ = serve({"/planetary/earth/imagery": {"url": "e"}})
        result = cli_runner.invoke(app, ["--json", "earth", "--lat", "1.5", "--no-enhance"])
        assert result.exit_code == 0, result.output
        assert "enhance" not in requests[0].url.params


class TestWeather:
    def test_flares_window(self, cli_runner, serve) -> None:
        requests, _ = serve({"/DONKI/FLR": [{"flrID": "2024-01-01-FLR"}]})

        result = cli_runner.invoke(
            app, ["--json", "weather", "flares", "--start", "2024-01-01", "--end", "2024-01-31"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [{"flrID": "2024-01-01-FLR"}]
        params = requests[0].url.params
        assert params["startDate"] == "2024-01-01"
        assert params["endDate"] == "2024-01-31"

    def test_storms_default_window(self, cli_runner, serve) -> None:
        requests, _ = serve({"/DONKI/GST": []})
        result = cli_runner.invoke(app, ["--json", "weather", "storms"])
        assert result.exit_code == 0, result.output
        assert requests[0].url.params["startDate"] == "2023-01-01"

    def test_notifications_failure(self, cli_runner, serve) -> None:
        requests, _ = serve({"/DONKI/notifications": httpx.Response(503)})

        result = cli_runner.invoke(app, ["--no-color", "weather", "notifications"])

        assert result.exit_code == EXIT_RETRIES_EXHAUSTED
        assert "Request failed after 3 attempts: HTTP error! Status: 503" in result.output
        assert len(requests) == 3


class TestCatalog:
    def test_comets_plain_table(self, cli_runner, serve) -> None:
        serve({"/rest/bodies": {"bodies": [COMET]}})

        result = cli_runner.invoke(app, ["--plain", "catalog", "comets"])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "name\ttype\torbitalPeriod\tperihelion"
        assert lines[1] == "Halley\tComet\t27510 days\t0.586 AU"

    def test_comets_json_full_records(self, cli_runner, serve) -> None:
        serve({"/rest/bodies": {"bodies": [COMET]}})

        result = cli_runner.invoke(app, ["--json", "catalog", "comets"])

        assert result.exit_code == 0, result.output
        records = json.loads(result.stdout)
        assert records[0]["properties"]["inclination"] == "162.26°"

    def test_meteorites(self, cli_runner, serve) -> None:
        serve({"/resource/gh4g-9sfh.json": [{"name": "Aachen", "recclass": "L5"}]})
        result = cli_runner.invoke(app, ["--json", "catalog", "meteorites"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)[0]["type"] == "L5"

    def test_asteroids_failure(self, cli_runner, serve) -> None:
        serve({})
        result = cli_runner.invoke(app, ["catalog", "asteroids"])
        assert result.exit_code == EXIT_RETRIES_EXHAUSTED


class TestConfiguredClient:
    def test_invalid_config_file(self, cli_runner, isolated_config) -> None:
        config_dir = isolated_config / "config" / "skyfetch"
        config_dir.mkdir(parents=True)
        (config_dir / "config.json").write_text("{oops", encoding="utf-8")

        result = cli_runner.invoke(app, ["--no-color", "apod"])

        assert result.exit_code == 1
        assert "Invalid global config" in result.output
