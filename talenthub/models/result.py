"""Search result wrapper model."""

from datetime import datetime

from pydantic import BaseModel

from talenthub.models.credential import CredentialOption
from talenthub.models.profile import TalentProfile


class SearchResult(BaseModel):
    """Wrapper for a complete credential search."""

    credential: CredentialOption
    profiles: list[TalentProfile] = []
    fallback: bool = False
    sorted_by_credential: bool = False
    cached: bool = False
    cache_age_seconds: float | None = None
    error_message: str | None = None
    fetched_at: datetime
    duration_ms: float
