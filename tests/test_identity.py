"""Tests for the Zerion identity provider."""

import uuid

import httpx
import pytest
from conftest import IDENTITY_URL, OverlapRecorder, address

from zero_leaderboard.core.exceptions import DataSourceError
from zero_leaderboard.providers.identity.zerion import (
    ZerionIdentityProvider,
    split_into_chunks,
)


class TestSplitIntoChunks:
    """Tests for fixed-size chunking."""

    @pytest.mark.parametrize("length", [0, 1, 9, 10, 11, 25, 50])
    def test_partition(self, length):
        items = [address(i) for i in range(length)]
        chunks = split_into_chunks(items, 10)

        assert len(chunks) == -(-length // 10)
        assert all(1 <= len(c) <= 10 for c in chunks)
        assert [x for chunk in chunks for x in chunk] == items

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            split_into_chunks([1, 2, 3], 0)


def wallet(addr: str, *handles: str | None) -> dict:
    return {
        "address": addr,
        "identities": [
            {"provider": "ens", "address": addr, "handle": h} for h in handles
        ],
    }


class RecordingHandler:
    """Serves one canned wallet-meta response per identifier batch."""

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        identifiers = request.url.params["identifiers"].split(",")
        return self.responder(identifiers)


class TestZerionIdentityProvider:
    """Tests for handle resolution."""

    @pytest.mark.asyncio
    async def test_batches_and_headers(self, make_client):
        handler = RecordingHandler(
            lambda ids: httpx.Response(200, json={"data": [wallet(i) for i in ids]})
        )
        addresses = [address(i) for i in range(23)]

        async with make_client(handler) as client:
            provider = ZerionIdentityProvider(client, IDENTITY_URL)
            await provider.resolve_handles(addresses)

        assert len(handler.requests) == 3
        sent = []
        request_ids = set()
        for request in handler.requests:
            assert request.url.path == "/wallet/get-meta/v1"
            assert request.headers["zerion-client-type"] == "web"
            assert request.headers["zerion-client-version"] == "1.0.0"
            request_ids.add(str(uuid.UUID(request.headers["x-request-id"])))
            sent.extend(request.url.params["identifiers"].split(","))
        assert len(request_ids) == 3
        assert sorted(sent) == sorted(addresses)

    @pytest.mark.asyncio
    async def test_batches_requested_concurrently(self, make_client):
        inner = RecordingHandler(
            lambda ids: httpx.Response(200, json={"data": [wallet(i, f"{i[-2:]}.eth") for i in ids]})
        )
        handler = OverlapRecorder(inner, ("/wallet/get-meta/v1",), expected=3)
        addresses = [address(i) for i in range(23)]

        async with make_client(handler) as client:
            provider = ZerionIdentityProvider(client, IDENTITY_URL)
            handles = await provider.resolve_handles(addresses)

        assert handler.max_in_flight == 3
        assert len(inner.requests) == 3
        assert len(handles) == 23

    @pytest.mark.asyncio
    async def test_first_identity_handle_only(self, make_client):
        a, b, c, d = (address(i) for i in range(1, 5))

        def respond(ids):
            return httpx.Response(
                200,
                json={
                    "data": [
                        wallet(a, "alice.eth", "alice.lens"),
                        wallet(b),
                        wallet(c, None, "second.eth"),
                        # d is absent from the response
                    ]
                },
            )

        async with make_client(RecordingHandler(respond)) as client:
            provider = ZerionIdentityProvider(client, IDENTITY_URL)
            handles = await provider.resolve_handles([a, b, c, d])

        assert handles == {a: "alice.eth"}

    @pytest.mark.asyncio
    async def test_null_data_batches_skipped(self, make_client):
        addresses = [address(i) for i in range(15)]

        def respond(ids):
            if address(0) in ids:
                return httpx.Response(200, json={"data": None, "errors": None})
            return httpx.Response(200, json={"data": [wallet(i, f"h{i[-2:]}") for i in ids]})

        async with make_client(RecordingHandler(respond)) as client:
            provider = ZerionIdentityProvider(client, IDENTITY_URL)
            wallets = await provider.resolve_identities(addresses)

        assert [w.address for w in wallets] == addresses[10:]

    @pytest.mark.asyncio
    async def test_missing_identities_key(self, make_client):
        a = address(1)
        handler = RecordingHandler(lambda ids: httpx.Response(200, json={"data": [{"address": a}]}))

        async with make_client(handler) as client:
            handles = await ZerionIdentityProvider(client, IDENTITY_URL).resolve_handles([a])

        assert handles == {}

    @pytest.mark.asyncio
    async def test_empty_address_list_makes_no_request(self, make_client):
        handler = RecordingHandler(lambda ids: httpx.Response(200, json={"data": []}))

        async with make_client(handler) as client:
            handles = await ZerionIdentityProvider(client, IDENTITY_URL).resolve_handles([])

        assert handles == {}
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_one_failed_batch_fails_all(self, make_client):
        addresses = [address(i) for i in range(30)]

        def respond(ids):
            if address(15) in ids:
                return httpx.Response(503, json={"message": "unavailable"})
            return httpx.Response(200, json={"data": [wallet(i, "x.eth") for i in ids]})

        async with make_client(RecordingHandler(respond)) as client:
            provider = ZerionIdentityProvider(client, IDENTITY_URL)
            with pytest.raises(DataSourceError) as exc_info:
                await provider.resolve_handles(addresses)

        assert exc_info.value.status_code == 503
        assert exc_info.value.source == "zerion"
        audit = provider.get_audit_trail()
        assert any(not entry.success for entry in audit)

    @pytest.mark.asyncio
    async def test_custom_batch_size(self, make_client):
        handler = RecordingHandler(lambda ids: httpx.Response(200, json={"data": []}))

        async with make_client(handler) as client:
            provider = ZerionIdentityProvider(client, IDENTITY_URL, batch_size=4)
            await provider.resolve_handles([address(i) for i in range(9)])

        assert len(handler.requests) == 3
