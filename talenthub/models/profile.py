"""Profile data model."""

from pydantic import BaseModel


class TalentProfile(BaseModel):
    """Represents a developer profile returned by the Talent Protocol search."""

    id: str
    full_name: str
    username: str | None = None
    bio: str | None = None
    profile_picture: str | None = None
    score: float | None = None
    human_verified: bool = False
    tags: list[str] = []

    # Attached during enrichment, used for sorting
    credential_value: int | float | str | None = None
