import json
from typing import Any

import httpx
import pytest

from fantasy_points_tracker.espn.client import ESPNFantasyClient, build_cookie, extract_roster_names
from fantasy_points_tracker.exceptions import EnrichmentError


def _league(*names: str) -> dict[str, Any]:
    return {
        "teams": [
            {"roster": {"entries": [{"playerPoolEntry": {"player": {"fullName": n}}} for n in names]}},
            {"roster": {}},
        ]
    }


def _json_response(body: Any) -> httpx.Response:
    return httpx.Response(200, content=json.dumps(body).encode(), headers={"content-type": "application/json"})


class RoutingTransport(httpx.BaseTransport):
    """Responds by host so primary and fallback endpoints can differ."""

    def __init__(self, responses: dict[str, httpx.Response]) -> None:
        self._responses = responses
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses[request.url.host]


_PRIMARY = "lm-api-reads.fantasy.espn.com"
_FALLBACK = "fantasy.espn.com"


class TestBuildCookie:
    def test_plain_value(self) -> None:
        assert build_cookie("{ABC}", "s2value") == "SWID={ABC}; espn_s2=s2value"

    def test_percent_encoded_value_is_decoded(self) -> None:
        assert build_cookie("{ABC}", "AE%2Bx%3D") == "SWID={ABC}; espn_s2=AE+x="


class TestExtractRosterNames:
    def test_collects_names(self) -> None:
        assert extract_roster_names(_league("Aaron Judge", "Juan Soto")) == {"Aaron Judge", "Juan Soto"}

    def test_no_teams(self) -> None:
        assert extract_roster_names({}) == set()


class TestESPNFantasyClient:
    def test_primary_endpoint(self) -> None:
        transport = RoutingTransport({_PRIMARY: _json_response(_league("Aaron Judge"))})
        client = ESPNFantasyClient("{ABC}", "s2", client=httpx.Client(transport=transport))
        assert client.fetch_rostered_player_names("999", 2024) == {"Aaron Judge"}
        request = transport.requests[0]
        assert request.url.path == "/apis/v3/games/flb/seasons/2024/segments/0/leagues/999"
        assert request.url.params.get_list("view") == ["mRoster", "mTeam", "mSettings", "modular", "mNav"]
        assert request.headers["Cookie"] == "SWID={ABC}; espn_s2=s2"

    def test_falls_back_on_non_json(self) -> None:
        transport = RoutingTransport(
            {
                _PRIMARY: httpx.Response(200, content=b"<html/>", headers={"content-type": "text/html"}),
                _FALLBACK: _json_response(_league("Juan Soto")),
            }
        )
        client = ESPNFantasyClient("{ABC}", "s2", client=httpx.Client(transport=transport))
        assert client.fetch_rostered_player_names("999", 2024) == {"Juan Soto"}
        assert transport.requests[1].url.params.get_list("view") == ["mRoster"]

    def test_falls_back_on_error_status(self) -> None:
        transport = RoutingTransport(
            {
                _PRIMARY: httpx.Response(401, content=b"{}", headers={"content-type": "application/json"}),
                _FALLBACK: _json_response(_league("Juan Soto")),
            }
        )
        client = ESPNFantasyClient("{ABC}", "s2", client=httpx.Client(transport=transport))
        assert client.fetch_rostered_player_names("999", 2024) == {"Juan Soto"}

    def test_both_non_json_raises(self) -> None:
        html = httpx.Response(200, content=b"<html/>", headers={"content-type": "text/html"})
        transport = RoutingTransport({_PRIMARY: html, _FALLBACK: html})
        client = ESPNFantasyClient("{ABC}", "s2", client=httpx.Client(transport=transport))
        with pytest.raises(EnrichmentError, match="non-JSON"):
            client.fetch_rostered_player_names("999", 2024)
