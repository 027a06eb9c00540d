"""
Tests for the HTTP endpoints
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import app
from spielplan_api import cache
from spielplan_api.source_client import SourceFetchError


@pytest.fixture
def client():
    cache.clear()
    return TestClient(app)


COMBINED = {
    "data": {
        "meetings_excerpt": {"meetings": [{"x": {
            "date": "2024-09-14T19:30:00+02:00",
            "team_home": "TTC A",
            "team_away": "TTC B",
            "matches_won": 0,
            "matches_lost": 0,
            "league_name": "Kreisliga",
        }}]},
        "table": [{"table_rank": 1, "team_name": "TTC A", "points_won": 4, "points_lost": 0}],
    }
}


class TestHealth:

    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"


class TestRender:

    def test_render_with_rules(self, client):
        res = client.post("/api/render", json={
            "dataset": COMBINED,
            "rules": [{"pattern": "TTC A", "replacement": "Erste", "league": "Kreisliga"}],
        })
        assert res.status_code == 200
        body = res.json()
        assert body["mode"] == "combined"

        schedule = body["sections"][0]["table"]
        row = dict(zip(schedule["columns"], schedule["rows"][0]))
        assert row["teams"] == "<b>Erste</b><br />TTC B"
        assert row["matches"] == ""
        assert row["time"] == "19:30"

        # standings row carries no league, the scoped rule does not apply
        standings = body["sections"][1]["table"]
        assert standings["rows"][0][1] == "TTC A"
        assert standings["rows"][0][4] == "4:0"

    def test_render_with_parallel_lists(self, client):
        res = client.post("/api/render", json={
            "dataset": COMBINED["data"],
            "search": ["TTC A"],
            "replace": ["Erste"],
            "liga": [""],
        })
        assert res.json()["sections"][1]["table"]["rows"][0][1] == "<b>Erste</b>"

    def test_render_without_dataset(self, client):
        res = client.post("/api/render", json={})
        assert res.status_code == 200
        assert [s["message"] for s in res.json()["sections"]] == [
            "No game data available.", "No table data available.",
        ]

    def test_render_html(self, client):
        res = client.post("/api/render/html", json={"dataset": {"2024": []}})
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/html")
        assert res.text.startswith("<div><table><thead>")


class TestTables:

    def test_missing_url(self, client):
        assert client.get("/api/tables").status_code == 400

    @patch("main.fetch_dataset_cached")
    def test_html(self, mock_fetch, client):
        mock_fetch.return_value = (COMBINED, False, None)
        res = client.get("/api/tables", params={
            "url": "https://liga.example/a", "search": ["TTC B"], "replace": ["Gast"],
        })
        assert res.status_code == 200
        assert "TTC A<br /><b>Gast</b>" in res.text
        assert res.headers["x-data-stale"] == "0"

    @patch("main.fetch_dataset_cached")
    def test_fetch_failure(self, mock_fetch, client):
        mock_fetch.side_effect = SourceFetchError("HTTP 500: boom")
        res = client.get("/api/tables", params={"url": "https://liga.example/a"})
        assert res.status_code == 502
        assert "HTTP 500" in res.json()["detail"]

    @patch("main.fetch_dataset_cached")
    def test_data_stale(self, mock_fetch, client):
        mock_fetch.return_value = (COMBINED, True, "Network error: slow")
        res = client.get("/api/tables/data", params={"url": "https://liga.example/a"})
        body = res.json()
        assert body["stale"] is True
        assert body["source"] == "cache"
        assert body["data"]["mode"] == "combined"
