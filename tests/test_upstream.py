"""Unit tests for the upstream API client - mocked transport, no internet."""

import json

import httpx
import pytest

from talenthub.core.upstream import TalentAPIClient, encode_search_params
from talenthub.exceptions import UpstreamError

from conftest import TEST_API_KEY, FakeUpstream, load_fixture


def _client(upstream: FakeUpstream, api_key: str = TEST_API_KEY) -> TalentAPIClient:
    return TalentAPIClient(api_key=api_key, transport=upstream.transport())


class TestEncodeSearchParams:

    def test_values_json_encoded(self):
        params = encode_search_params({
            "query": {"credentials": [{"name": "GitHub Stars", "dataIssuer": "GitHub"}]},
            "page": 1,
        })
        assert params["page"] == "1"
        assert json.loads(params["query"]) == {
            "credentials": [{"name": "GitHub Stars", "dataIssuer": "GitHub"}]
        }

    def test_compact_encoding(self):
        params = encode_search_params({"sort": {"score": {"order": "desc"}}})
        assert params["sort"] == '{"score":{"order":"desc"}}'


class TestTalentAPIClient:

    @pytest.mark.asyncio
    async def test_get_sends_api_key(self):
        upstream = FakeUpstream({"/credentials": load_fixture("credentials")})
        async with _client(upstream) as client:
            data = await client.get("credentials")

        assert len(data["credentials"]) == 2
        request = upstream.requests[0]
        assert request.headers["X-API-KEY"] == TEST_API_KEY
        assert request.headers["Accept"] == "application/json"
        assert str(request.url).startswith("https://api.talentprotocol.com/credentials")

    @pytest.mark.asyncio
    async def test_search_is_get_with_query_params(self):
        upstream = FakeUpstream({"/search/advanced/profiles": load_fixture("search_response")})
        body = {"query": {"credentials": []}, "page": 1, "per_page": 25}

        async with _client(upstream) as client:
            data = await client.search_profiles(body)

        assert len(data["profiles"]) == 3
        request = upstream.requests[0]
        assert request.method == "GET"
        assert request.url.params["per_page"] == "25"
        assert json.loads(request.url.params["query"]) == {"credentials": []}

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self):
        upstream = FakeUpstream({"/profiles/lookup": {"ok": True}})
        async with _client(upstream) as client:
            data = await client.post("profiles/lookup", {"ids": ["1"]})

        assert data == {"ok": True}
        request = upstream.requests[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {"ids": ["1"]}

    @pytest.mark.asyncio
    async def test_non_ok_raises_with_status(self):
        upstream = FakeUpstream()
        async with _client(upstream) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get("missing")

        assert exc_info.value.status_code == 404
        assert "Not found" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_wrong_key_is_upstream_error(self):
        upstream = FakeUpstream({"/credentials": {}})
        async with _client(upstream, api_key="wrong") as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get("credentials")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self):
        upstream = FakeUpstream({"/credentials": httpx.ConnectError("refused")})
        async with _client(upstream) as client:
            with pytest.raises(UpstreamError):
                await client.get("credentials")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        upstream = FakeUpstream({"/credentials": httpx.Response(200, text="<html>")})
        async with _client(upstream) as client:
            with pytest.raises(UpstreamError):
                await client.get("credentials")
