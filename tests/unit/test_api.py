"""
API tests for the headline endpoints, with crawl and stats dependencies overridden.
"""
import json
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.headlines import get_crawl_session, get_sites, get_stats_client
from app.core.config import Settings, get_settings
from app.crawler.base import CrawlSession
from app.crawler.sites import SiteSpec
from app.main import create_app
from app.services.stats import StatsClient


SITES = (
    SiteSpec(
        name="alpha",
        container_selector=".story",
        heading_selector="h3",
        link_selector="a",
        published_selector="time",
        base_url="https://alpha.example.com/",
    ),
    SiteSpec(
        name="beta",
        container_selector=".story",
        heading_selector="h3",
        link_selector="a",
        published_selector="time",
        base_url="https://beta.example.com/",
        dedup_required=True,
    ),
)

PAGES = {
    "https://alpha.example.com/": (
        '<div class="story"><h3>One</h3><a href="/1">x</a><time>09:00</time></div>'
        '<div class="story"><h3>Two</h3><a href="/2">x</a><time>10:00</time></div>'
        '<div class="story"><h3>Three</h3><a href="/3">x</a><time>11:00</time></div>'
    ),
    "https://beta.example.com/": (
        '<div class="story"><h3>Same</h3><a href="/s1">x</a></div>'
        '<div class="story"><h3>Same</h3><a href="/s2">x</a></div>'
    ),
}

STATS_BODY = {
    "country": "Nigeria", "cases": 10, "todayCases": 1, "deaths": 2, "todayDeaths": 0,
    "recovered": 7, "active": 1, "critical": 0, "casesPerOneMillion": 3,
    "deathsPerOneMillion": 0, "totalTests": 100, "testsPerOneMillion": 50,
}


def page_client(pages):
    async def get(url, headers=None):
        page = pages[url]
        if isinstance(page, Exception):
            raise page
        return httpx.Response(200, text=page, headers={"content-type": "text/html"},
                              request=httpx.Request("GET", url))

    client = AsyncMock()
    client.get.side_effect = get
    return client


class TestHeadlinesAPI:
    """Tests for /api/v1/headlines."""

    @pytest.fixture
    def settings(self):
        return Settings(STATS_API_URL="https://stats.example.com")

    @pytest.fixture
    def pages(self):
        return dict(PAGES)

    @pytest.fixture
    def stats_transport(self):
        """Mock httpx client for the stats API."""
        client = AsyncMock()
        client.get.return_value = httpx.Response(
            200, text=json.dumps(STATS_BODY), request=httpx.Request("GET", "https://stats.example.com")
        )
        return client

    @pytest.fixture
    def client(self, settings, pages, stats_transport):
        app = create_app()

        async def override_session():
            yield CrawlSession(client=page_client(pages))

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_sites] = lambda: SITES
        app.dependency_overrides[get_crawl_session] = override_session
        app.dependency_overrides[get_stats_client] = lambda: StatsClient(settings, client=stats_transport)
        return TestClient(app)

    def test_view_without_stats(self, client):
        response = client.get("/api/v1/headlines")

        assert response.status_code == 200
        data = response.json()
        assert list(data["sites"]) == ["alpha", "beta"]
        assert len(data["sites"]["alpha"]) == 3
        assert len(data["sites"]["beta"]) == 1
        assert data["sites"]["alpha"][0] == {"heading": "One", "link": "/1", "published_at": "09:00"}
        assert data["statuses"]["beta"]["removed_duplicates"] == 1
        assert data["covid_case"] is None

    def test_view_with_stats(self, client, stats_transport):
        response = client.post("/api/v1/headlines", json={"country": "Nigeria"})

        assert response.status_code == 200
        data = response.json()
        assert data["covid_case"]["country"] == "Nigeria"
        assert data["covid_case"]["total_cases"] == 10
        assert data["covid_case"]["tests_per_million"] == 50
        assert len(data["sites"]["alpha"]) == 3
        stats_transport.get.assert_awaited_once_with("https://stats.example.com/countries/Nigeria")

    def test_unknown_country_is_client_error(self, client, stats_transport):
        stats_transport.get.return_value = httpx.Response(
            200, text="Country not found", request=httpx.Request("GET", "https://stats.example.com")
        )

        response = client.post("/api/v1/headlines", json={"country": "Atlantis"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Country not found"

    def test_stats_failure_is_server_error(self, client, stats_transport):
        stats_transport.get.side_effect = httpx.ConnectError("down")

        response = client.post("/api/v1/headlines", json={"country": "Nigeria"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Something went wrong"

    def test_unencodable_country_is_server_error(self, client, stats_transport):
        stats_transport.get.side_effect = httpx.InvalidURL("Invalid non-printable ASCII character in URL")

        response = client.post("/api/v1/headlines", json={"country": "Nigeria\n"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Something went wrong"

    def test_empty_country_rejected(self, client):
        response = client.post("/api/v1/headlines", json={"country": ""})

        assert response.status_code == 422

    def test_failed_site_marked_unavailable(self, client, pages):
        pages["https://beta.example.com/"] = httpx.ConnectError("refused")

        response = client.get("/api/v1/headlines")

        assert response.status_code == 200
        data = response.json()
        assert data["sites"]["beta"] == []
        assert data["statuses"]["beta"]["available"] is False
        assert data["statuses"]["alpha"]["available"] is True

    def test_fail_fast_returns_server_error(self, client, pages, settings):
        settings.CRAWL_FAIL_FAST = True
        pages["https://beta.example.com/"] = httpx.ConnectError("refused")

        response = client.get("/api/v1/headlines")

        assert response.status_code == 500
        assert response.json()["detail"] == "Something went wrong"

    def test_list_sites(self, client):
        response = client.get("/api/v1/sites")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["sites"][1]["name"] == "beta"
        assert data["sites"][1]["dedup_required"] is True

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
