"""Pydantic models for talenthub."""

from talenthub.models.profile import TalentProfile
from talenthub.models.credential import CredentialOption, CredentialDetail
from talenthub.models.result import SearchResult

__all__ = [
    "TalentProfile",
    "CredentialOption",
    "CredentialDetail",
    "SearchResult",
]
