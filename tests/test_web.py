"""Tests for the leaderboard web page."""

import re

import httpx
import pytest
from conftest import FakeUpstream, address
from fastapi.testclient import TestClient

from zero_leaderboard.core.config import LeaderboardConfig
from zero_leaderboard.web.app import create_app


def client_for(config: LeaderboardConfig, upstream: FakeUpstream, **kwargs) -> TestClient:
    app = create_app(config, transport=httpx.MockTransport(upstream))
    return TestClient(app, **kwargs)


class TestLeaderboardPage:
    """Rendering of the index page."""

    def test_renders_stats_and_table(self, config, three_holders):
        with client_for(config, three_holders) as client:
            response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "Leaderboard" in html
        assert "Holders" in html
        assert "Total Supply" in html
        assert "Transfers" in html
        assert ">42<" in html

    def test_allocations_in_order(self, config, three_holders):
        with client_for(config, three_holders) as client:
            html = client.get("/").text

        percents = re.findall(r"<span>(\d+%)</span>", html)
        assert percents == ["50%", "30%", "20%"]

    def test_labels_and_links(self, config, three_holders):
        with client_for(config, three_holders) as client:
            html = client.get("/").text

        assert "alice.eth" in html
        assert "0x0000…0002" in html
        assert "0x0000…0003" in html
        assert f'href="https://app.zerion.io/{address(2)}/overview"' in html
        assert 'rel="noopener noreferrer"' in html

    def test_upstream_failure_renders_error_page(self, config, three_holders):
        three_holders.failures = {"/holders": 503}

        with client_for(config, three_holders) as client:
            response = client.get("/")

        assert response.status_code == 500
        assert "could not be loaded" in response.text


class TestCanonicalRedirect:
    """www -> apex redirect in production."""

    @pytest.fixture
    def production_config(self, config) -> LeaderboardConfig:
        return LeaderboardConfig(
            token_address=config.token_address,
            explorer_base_url=config.explorer_base_url,
            identity_base_url=config.identity_base_url,
            production=True,
        )

    def test_redirects_www_in_production(self, production_config, three_holders):
        with client_for(production_config, three_holders, base_url="http://www.zero.test") as client:
            response = client.get("/?ref=x", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "https://zero.test/?ref=x"
        assert three_holders.requests == []

    def test_apex_served_in_production(self, production_config, three_holders):
        with client_for(production_config, three_holders, base_url="https://zero.test") as client:
            response = client.get("/")

        assert response.status_code == 200

    def test_no_redirect_outside_production(self, config, three_holders):
        with client_for(config, three_holders, base_url="http://www.zero.test") as client:
            response = client.get("/", follow_redirects=False)

        assert response.status_code == 200
