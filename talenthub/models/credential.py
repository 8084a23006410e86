"""Credential data models."""

from pydantic import BaseModel, ConfigDict


class CredentialOption(BaseModel):
    """A selectable credential filter from the built-in catalog."""

    model_config = ConfigDict(frozen=True)

    name: str
    data_issuer: str
    display_name: str
    slug: str | None = None

    @property
    def cache_key(self) -> str:
        return (self.slug or f"{self.data_issuer}:{self.name}").lower()


class CredentialDetail(BaseModel):
    """Credential metadata as returned by the upstream `credentials` endpoint."""

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    name: str | None = None
    slug: str | None = None
    data_issuer: str | None = None
    data_issuer_display_name: str | None = None
    display_name: str | None = None
    description: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
