"""FastAPI server exposing the Talent Protocol proxy route."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from talenthub import __version__
from talenthub.catalog import group_by_issuer
from talenthub.config import TalentHubConfig
from talenthub.core.proxy import ProxyResponse, TalentProxy
from talenthub.logging import configure_logging, get_logger
from talenthub.manifest import build_manifest


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    live: bool


# Global proxy instance, created on first use
_config: Optional[TalentHubConfig] = None
_proxy: Optional[TalentProxy] = None

log = get_logger("api")


def get_config() -> TalentHubConfig:
    global _config
    if _config is None:
        _config = TalentHubConfig()
    return _config


def get_proxy() -> TalentProxy:
    """Shared TalentProxy built from configuration."""
    global _proxy
    if _proxy is None:
        config = get_config()
        _proxy = TalentProxy.from_config(config)
        log.info("proxy_ready", live=_proxy.live, api_key=config.masked_api_key)
    return _proxy


async def shutdown_proxy() -> None:
    """Close the shared proxy's upstream client, if one was built."""
    global _proxy
    if _proxy is not None:
        await _proxy.close()
        _proxy = None


def _respond(result: ProxyResponse) -> JSONResponse:
    return JSONResponse(content=result.payload, status_code=result.status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage proxy lifecycle."""
    configure_logging(get_config())
    yield
    await shutdown_proxy()


app = FastAPI(
    title="talenthub API",
    description="Talent Protocol proxy for developer profiles and credentials",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(proxy: TalentProxy = Depends(get_proxy)):
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        live=proxy.live,
    )


@app.get("/api/talent", tags=["Proxy"])
async def talent_get(
    endpoint: Optional[str] = Query(None, description="Upstream endpoint path"),
    proxy: TalentProxy = Depends(get_proxy),
):
    """
    Forward a GET to the Talent Protocol API.

    Returns fixed fallback data when no API key is configured.
    """
    return _respond(await proxy.get(endpoint))


@app.post("/api/talent", tags=["Proxy"])
async def talent_post(
    request: Request,
    endpoint: Optional[str] = Query(None, description="Upstream endpoint path"),
    proxy: TalentProxy = Depends(get_proxy),
):
    """
    Forward a POST to the Talent Protocol API.

    `search/advanced/profiles` is re-issued upstream as a GET with the body
    encoded into query parameters.
    """
    return _respond(await proxy.post(endpoint, request.json))


@app.get("/api/credentials/options", tags=["Catalog"])
async def credential_options():
    """Built-in credential filters grouped by issuer."""
    return {
        issuer: [option.model_dump() for option in options]
        for issuer, options in group_by_issuer().items()
    }


@app.get("/.well-known/farcaster.json", tags=["System"])
async def farcaster_manifest(config: TalentHubConfig = Depends(get_config)):
    """Mini-app manifest."""
    return build_manifest(config)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
