"""Talent service - searches, enriches and orders profiles through the proxy route."""

import asyncio
from datetime import datetime
from typing import Any

import httpx
from pydantic import ValidationError

from talenthub.cache.base import CacheProvider
from talenthub.cache.redis_cache import RedisCache
from talenthub.cache.sqlite_cache import SQLiteCache
from talenthub.catalog import CREDENTIAL_OPTIONS
from talenthub.config import CacheBackend, TalentHubConfig
from talenthub.core.transformer import (
    credential_scalar,
    extract_credential_values,
    sort_by_credential_value,
    transform_credential_details,
    transform_profiles,
)
from talenthub.core.upstream import ADVANCED_SEARCH_ENDPOINT
from talenthub.exceptions import CacheError, TalentHubError, UpstreamError
from talenthub.fixtures import fallback_profiles
from talenthub.logging import configure_logging, get_logger
from talenthub.models.credential import CredentialDetail, CredentialOption
from talenthub.models.profile import TalentProfile
from talenthub.models.result import SearchResult


PROXY_ROUTE = "/api/talent"


class _SearchFailed(TalentHubError):
    """Search could not produce a profile list; the fallback list applies."""


def build_search_query(credential: CredentialOption, per_page: int = 25) -> dict[str, Any]:
    """Advanced-search body for profiles holding a credential, best score first."""
    return {
        "query": {
            "credentials": [{
                "name": credential.name,
                "dataIssuer": credential.data_issuer,
            }]
        },
        "sort": {"score": {"order": "desc"}},
        "page": 1,
        "per_page": per_page,
    }


class TalentService:
    """
    High-level client for credential searches, backed by the proxy route.

    Example:
        async with TalentService() as service:
            result = await service.search(find_option("github-stars"))
            print(result.profiles[0].credential_value)
    """

    def __init__(
        self,
        config: TalentHubConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the service.

        Args:
            config: TalentHubConfig instance, uses defaults if None
            transport: Optional httpx transport for reaching the proxy route,
                e.g. httpx.ASGITransport(app=app) to run in-process
        """
        self.config = config or TalentHubConfig()
        self._transport = transport
        self._http: httpx.AsyncClient | None = None
        self._cache: CacheProvider | None = None
        self._semaphore = asyncio.Semaphore(max(1, self.config.max_concurrency))
        self._log = get_logger("service")

    async def __aenter__(self) -> "TalentService":
        """Open the HTTP client and cache."""
        configure_logging(self.config)
        self._http = httpx.AsyncClient(
            base_url=self.config.proxy_url,
            timeout=self.config.request_timeout_seconds,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

        if self.config.cache_backend == CacheBackend.SQLITE:
            self._cache = SQLiteCache(self.config.sqlite_path, self.config.cache_ttl_seconds)
        elif self.config.cache_backend == CacheBackend.REDIS:
            self._cache = RedisCache(self.config.redis_url, self.config.cache_ttl_seconds)

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
        if self._cache:
            await self._cache.close()

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("TalentService must be used as an async context manager")
        return self._http

    async def _call_proxy(self, method: str, endpoint: str, body: Any = None) -> Any:
        """Call the proxy route and return its JSON body, raising UpstreamError."""
        try:
            response = await self.http.request(
                method,
                PROXY_ROUTE,
                params={"endpoint": endpoint},
                json=body,
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Proxy call for {endpoint} failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(
                f"Proxy call for {endpoint} returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Proxy returned invalid JSON for {endpoint}") from e

    async def fetch_credential_details(self) -> list[CredentialDetail]:
        """
        Fetch the upstream credential catalog.

        Returns:
            Credential metadata, or an empty list on any failure
        """
        try:
            data = await self._call_proxy("GET", "credentials")
            details = transform_credential_details(data)
        except (UpstreamError, ValidationError) as e:
            self._log.error("credential_details_failed", error=str(e))
            return []

        self._log.info("credential_details_fetched", count=len(details))
        return details

    async def fetch_profile_credential_values(self, profile_id: str) -> dict[str, Any]:
        """
        Fetch one profile's credential values.

        Args:
            profile_id: Talent Protocol profile id

        Returns:
            Mapping of credential slug to value, or an empty dict on any failure
        """
        async with self._semaphore:
            try:
                data = await self._call_proxy("GET", f"profiles/{profile_id}/credentials")
            except UpstreamError as e:
                self._log.warning("credential_values_failed", profile_id=profile_id, error=str(e))
                return {}

        return extract_credential_values(data)

    async def _enrich(self, profiles: list[TalentProfile], slug: str) -> list[TalentProfile]:
        """Attach the credential value stored under `slug` to every profile."""
        values = await asyncio.gather(
            *(self.fetch_profile_credential_values(p.id) for p in profiles)
        )
        for profile, profile_values in zip(profiles, values):
            value = credential_scalar(profile_values.get(slug))
            if value is not None:
                profile.credential_value = value
        return profiles

    async def _search_profiles(self, credential: CredentialOption) -> tuple[list[TalentProfile], bool]:
        body = build_search_query(credential, self.config.search_page_size)
        self._log.info(
            "search_start",
            credential=credential.name,
            issuer=credential.data_issuer,
        )

        try:
            data = await self._call_proxy("POST", ADVANCED_SEARCH_ENDPOINT, body)
        except UpstreamError as e:
            raise _SearchFailed(str(e)) from e

        if not isinstance(data, dict) or "profiles" not in data:
            raise _SearchFailed("No profiles found in API response")
        if not isinstance(data["profiles"], list):
            return [], False

        try:
            profiles = transform_profiles(data["profiles"])
        except ValidationError as e:
            raise _SearchFailed(f"Malformed profile in API response: {e}") from e

        if not credential.slug or not profiles:
            return profiles, False

        self._log.info("enrich_start", slug=credential.slug, profiles=len(profiles))
        profiles = await self._enrich(profiles, credential.slug)
        return sort_by_credential_value(profiles), True

    async def search(
        self,
        credential: CredentialOption,
        force_refresh: bool = False,
    ) -> SearchResult:
        """
        Search profiles holding a credential, with caching.

        Args:
            credential: Credential filter to search by
            force_refresh: Skip cache and query the proxy

        Returns:
            SearchResult; on failure its profiles are the fallback list and
            `fallback` is set
        """
        key = credential.cache_key

        if self._cache and not force_refresh:
            try:
                cached = await self._cache.get(key)
            except CacheError as e:
                self._log.warning("cache_read_failed", key=key, error=str(e))
                cached = None
            if cached:
                self._log.info("cache_hit", key=key, age_seconds=cached.cache_age_seconds)
                return cached

        start = datetime.now()
        try:
            profiles, sorted_by_credential = await self._search_profiles(credential)
        except _SearchFailed as e:
            self._log.error("search_fallback", credential=credential.name, error=str(e))
            return SearchResult(
                credential=credential,
                profiles=fallback_profiles(),
                fallback=True,
                error_message=str(e),
                fetched_at=datetime.now(),
                duration_ms=(datetime.now() - start).total_seconds() * 1000,
            )

        duration_ms = (datetime.now() - start).total_seconds() * 1000
        result = SearchResult(
            credential=credential,
            profiles=profiles,
            sorted_by_credential=sorted_by_credential,
            fetched_at=datetime.now(),
            duration_ms=duration_ms,
        )
        self._log.info(
            "search_complete",
            credential=credential.name,
            profiles=len(profiles),
            duration_ms=duration_ms,
        )

        if self._cache:
            try:
                await self._cache.set(key, result)
            except CacheError as e:
                self._log.warning("cache_write_failed", key=key, error=str(e))

        return result

    async def fetch_profiles_by_credential(
        self,
        credential: CredentialOption,
        force_refresh: bool = False,
    ) -> list[TalentProfile]:
        """Profiles holding a credential; the fallback list if the search fails."""
        result = await self.search(credential, force_refresh=force_refresh)
        return result.profiles

    async def fetch_github_accounts(self) -> list[TalentProfile]:
        """Profiles holding the GitHub Account credential."""
        return await self.fetch_profiles_by_credential(CREDENTIAL_OPTIONS[0])

    async def invalidate_cache(self, credential: CredentialOption) -> None:
        if self._cache:
            await self._cache.invalidate(credential.cache_key)

    async def clear_cache(self) -> None:
        """Clear all cached search results."""
        if self._cache:
            await self._cache.clear()
