"""Pytest configuration and fixtures for leaderboard tests."""

import asyncio
from typing import Any, Callable

import httpx
import pytest

from zero_leaderboard.core.config import LeaderboardConfig

TOKEN_ADDRESS = "0x88129563b5cd13bd6f0e2dae364b35a5771cbc5e"
EXPLORER_URL = "https://explorer.test"
IDENTITY_URL = "https://identity.test"


def make_token(
    total_supply: str = "100",
    decimals: str = "0",
    holders: str = "3",
) -> dict[str, Any]:
    """Token object as embedded by the explorer."""
    return {
        "address": TOKEN_ADDRESS,
        "circulating_market_cap": None,
        "decimals": decimals,
        "exchange_rate": None,
        "holders": holders,
        "icon_url": None,
        "name": "ZERO",
        "symbol": "ZERO",
        "total_supply": total_supply,
        "type": "ERC-20",
    }


def make_holders(balances: list[tuple[str, str]], token: dict[str, Any]) -> dict[str, Any]:
    """Holders page for (address, value) pairs."""
    return {
        "items": [
            {
                "address": {
                    "hash": holder_address,
                    "implementation_name": None,
                    "name": None,
                    "is_contract": False,
                    "is_verified": False,
                },
                "value": value,
                "token_id": None,
                "token": token,
            }
            for holder_address, value in balances
        ],
        "next_page_params": {"items_count": 50, "value": 1},
    }


def address(n: int) -> str:
    """Deterministic test address."""
    return "0x" + f"{n:040x}"


class FakeUpstream:
    """Routes explorer and identity requests to canned payloads."""

    def __init__(
        self,
        holders: dict[str, Any],
        counters: dict[str, Any] | None = None,
        token: dict[str, Any] | None = None,
        handles: dict[str, str] | None = None,
        failures: dict[str, int] | None = None,
    ):
        self.holders = holders
        self.counters = counters or {"token_holders_count": "3", "transfers_count": "42"}
        self.token = token or make_token()
        self.handles = handles or {}
        # path suffix -> status code to return instead
        self.failures = failures or {}
        self.requests: list[httpx.Request] = []

    def identity_payload(self, identifiers: list[str]) -> dict[str, Any]:
        data = []
        for ident in identifiers:
            if ident in self.handles:
                data.append(
                    {
                        "address": ident,
                        "nft": None,
                        "identities": [
                            {"provider": "ens", "address": ident, "handle": self.handles[ident]}
                        ],
                    }
                )
            else:
                data.append({"address": ident, "nft": None, "identities": []})
        return {"meta": None, "data": data, "errors": None}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        for suffix, status in self.failures.items():
            if path.endswith(suffix):
                return httpx.Response(status, json={"message": "error"})

        if path.endswith("/holders"):
            return httpx.Response(200, json=self.holders)
        if path.endswith("/counters"):
            return httpx.Response(200, json=self.counters)
        if path == f"/api/v2/tokens/{TOKEN_ADDRESS}":
            return httpx.Response(200, json=self.token)
        if path == "/wallet/get-meta/v1":
            identifiers = request.url.params["identifiers"].split(",")
            return httpx.Response(200, json=self.identity_payload(identifiers))
        return httpx.Response(404, json={"message": "not found"})

    def requests_to(self, path_suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(path_suffix)]


class OverlapRecorder:
    """Async handler that holds matching requests until all of them are in flight.

    Sequential callers never get past the first held request, so they hit
    the timeout and get a 504 instead.
    """

    def __init__(
        self,
        inner: Callable[[httpx.Request], httpx.Response],
        path_suffixes: tuple[str, ...],
        expected: int,
        timeout: float = 1.0,
    ):
        self.inner = inner
        self.path_suffixes = path_suffixes
        self.expected = expected
        self.timeout = timeout
        self.arrived = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.all_arrived = asyncio.Event()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if not request.url.path.endswith(self.path_suffixes):
            return self.inner(request)

        self.arrived += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        if self.arrived >= self.expected:
            self.all_arrived.set()
        try:
            await asyncio.wait_for(self.all_arrived.wait(), self.timeout)
        except asyncio.TimeoutError:
            return httpx.Response(504, json={"message": "held request never joined"})
        finally:
            self.in_flight -= 1
        return self.inner(request)


@pytest.fixture
def config() -> LeaderboardConfig:
    """Config pointing at the fake upstream hosts."""
    return LeaderboardConfig(
        token_address=TOKEN_ADDRESS,
        explorer_base_url=EXPLORER_URL,
        identity_base_url=IDENTITY_URL,
    )


@pytest.fixture
def three_holders() -> FakeUpstream:
    """Balances 50/30/20 of a 100-unit supply, first holder has a handle."""
    token = make_token(total_supply="100", decimals="0")
    holders = make_holders(
        [(address(1), "50"), (address(2), "30"), (address(3), "20")],
        token,
    )
    return FakeUpstream(holders, token=token, handles={address(1): "alice.eth"})


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient over a mock transport."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def raw_body() -> Callable[[str], Callable[[httpx.Request], httpx.Response]]:
    """Handler returning a fixed non-JSON body."""

    def factory(body: str) -> Callable[[httpx.Request], httpx.Response]:
        return lambda request: httpx.Response(200, content=body.encode())

    return factory
