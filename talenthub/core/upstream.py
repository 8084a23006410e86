"""httpx-based client for the Talent Protocol REST API."""

import json
from typing import Any

import httpx

from talenthub.exceptions import UpstreamError
from talenthub.logging import get_logger


ADVANCED_SEARCH_ENDPOINT = "search/advanced/profiles"


def encode_search_params(body: dict[str, Any]) -> dict[str, str]:
    """
    Encode an advanced-search body as query parameters.

    Every top-level key becomes one parameter whose value is the compact JSON
    encoding of the body value.

    Example:
        {"page": 1, "sort": {"score": {"order": "desc"}}}
        -> {"page": "1", "sort": '{"score":{"order":"desc"}}'}
    """
    return {key: json.dumps(value, separators=(",", ":")) for key, value in body.items()}


class TalentAPIClient:
    """
    Thin async wrapper around the upstream API.

    Every request carries the `X-API-KEY` header. Non-2xx responses, transport
    failures and non-JSON bodies are raised as UpstreamError.

    Example:
        async with TalentAPIClient(api_key="...") as client:
            data = await client.get("credentials")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.talentprotocol.com",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Talent Protocol API key
            base_url: Upstream base URL
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (used to mock the upstream)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._log = get_logger("upstream")

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
                headers={
                    "X-API-KEY": self.api_key,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        body: Any = None,
    ) -> Any:
        client = self._ensure_client()
        url = f"/{endpoint.lstrip('/')}"
        self._log.debug("upstream_request", method=method, endpoint=endpoint)

        try:
            response = await client.request(method, url, params=params, json=body)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request to {endpoint} failed: {e}") from e

        self._log.debug("upstream_response", endpoint=endpoint, status=response.status_code)

        if not response.is_success:
            raise UpstreamError(
                f"API request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON from {endpoint}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def get(self, endpoint: str, params: dict[str, str] | None = None) -> Any:
        """GET an upstream endpoint and return its decoded JSON body."""
        return await self._request("GET", endpoint, params=params)

    async def post(self, endpoint: str, body: Any) -> Any:
        """POST a JSON body to an upstream endpoint."""
        return await self._request("POST", endpoint, body=body)

    async def search_profiles(self, body: dict[str, Any]) -> Any:
        """
        Run an advanced profile search.

        The upstream expects the search as a GET with JSON-encoded query
        parameters rather than a POST body.
        """
        return await self.get(ADVANCED_SEARCH_ENDPOINT, params=encode_search_params(body))

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TalentAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
