"""Server-side forwarding of proxy route calls to the upstream API."""

from dataclasses import dataclass
from typing import Any

from talenthub.config import TalentHubConfig
from talenthub.core.upstream import ADVANCED_SEARCH_ENDPOINT, TalentAPIClient
from talenthub.exceptions import MissingEndpointError, UpstreamError
from talenthub.fixtures import fallback_post_ack, fallback_search_response, fallback_user_credentials
from talenthub.logging import get_logger


@dataclass
class ProxyResponse:
    """Status code and JSON payload to send back to the caller."""

    status_code: int
    payload: Any


MISSING_ENDPOINT = ProxyResponse(400, {"error": "Missing endpoint parameter"})


def _require_endpoint(endpoint: str | None) -> str:
    if not endpoint:
        raise MissingEndpointError("Missing endpoint parameter")
    return endpoint


class TalentProxy:
    """
    Forwards GET/POST calls to the Talent Protocol API.

    Without an upstream client (no API key configured) fixed fallback payloads
    are returned instead, chosen by the endpoint string.
    """

    def __init__(self, client: TalentAPIClient | None = None):
        self.client = client
        self._log = get_logger("proxy")

    @classmethod
    def from_config(cls, config: TalentHubConfig) -> "TalentProxy":
        """Build a proxy; it serves fallback data when no API key is set."""
        if not config.api_key:
            return cls(None)
        return cls(
            TalentAPIClient(
                api_key=config.api_key,
                base_url=config.api_base_url,
                timeout_seconds=config.request_timeout_seconds,
            )
        )

    @property
    def live(self) -> bool:
        return self.client is not None

    async def get(self, endpoint: str | None) -> ProxyResponse:
        """Handle `GET /api/talent?endpoint=<endpoint>`."""
        try:
            endpoint = _require_endpoint(endpoint)
        except MissingEndpointError:
            self._log.warning("missing_endpoint", method="GET")
            return MISSING_ENDPOINT

        self._log.info("proxy_get", endpoint=endpoint, live=self.live)

        if self.client is None:
            self._log.info("api_key_missing", endpoint=endpoint, fallback=True)
            if "credentials" in endpoint:
                return ProxyResponse(200, fallback_user_credentials())
            return ProxyResponse(200, fallback_search_response())

        try:
            data = await self.client.get(endpoint)
        except UpstreamError as e:
            self._log.error("upstream_error", method="GET", endpoint=endpoint, status=e.status_code, error=str(e))
            return ProxyResponse(500, {"error": "Failed to fetch data from Talent Protocol"})

        if "profiles" in endpoint and "credentials" in endpoint and isinstance(data, dict):
            self._log.debug(
                "profile_credentials",
                endpoint=endpoint,
                count=len(data.get("user_credentials") or []),
            )

        return ProxyResponse(200, data)

    async def post(self, endpoint: str | None, read_body) -> ProxyResponse:
        """
        Handle `POST /api/talent?endpoint=<endpoint>`.

        Args:
            endpoint: Upstream endpoint path
            read_body: Awaitable factory returning the decoded JSON body; it is
                only awaited when the call is forwarded upstream
        """
        try:
            endpoint = _require_endpoint(endpoint)
        except MissingEndpointError:
            self._log.warning("missing_endpoint", method="POST")
            return MISSING_ENDPOINT

        self._log.info("proxy_post", endpoint=endpoint, live=self.live)

        if self.client is None:
            self._log.info("api_key_missing", endpoint=endpoint, fallback=True)
            if "search" in endpoint:
                return ProxyResponse(200, fallback_search_response())
            return ProxyResponse(200, fallback_post_ack())

        try:
            body = await read_body()
            if endpoint == ADVANCED_SEARCH_ENDPOINT:
                data = await self.client.search_profiles(body)
                if isinstance(data, dict):
                    self._log.info("search_response", profiles=len(data.get("profiles") or []))
            else:
                data = await self.client.post(endpoint, body)
        except (UpstreamError, ValueError, AttributeError) as e:
            self._log.error("upstream_error", method="POST", endpoint=endpoint, error=str(e))
            return ProxyResponse(
                500,
                {"error": "Failed to post data to Talent Protocol", "details": str(e)},
            )

        return ProxyResponse(200, data)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
