"""Data transformation and ordering for Talent Protocol responses."""

import math
from functools import cmp_to_key
from typing import Any

from talenthub.models.credential import CredentialDetail
from talenthub.models.profile import TalentProfile


def transform_profile(raw: dict) -> TalentProfile:
    """
    Map an upstream profile record onto the local TalentProfile model.

    Missing names fall back to "Unknown"; a missing checkmark means unverified.
    """
    builder_score = raw.get("builder_score") or {}
    score = builder_score.get("points") if isinstance(builder_score, dict) else None

    return TalentProfile(
        id=str(raw.get("id") or ""),
        full_name=raw.get("display_name") or raw.get("name") or "Unknown",
        username=raw.get("username"),
        bio=raw.get("bio"),
        profile_picture=raw.get("image_url"),
        score=score,
        human_verified=bool(raw.get("human_checkmark") or False),
        tags=raw.get("tags") or [],
    )


def transform_profiles(raw_profiles: list[Any]) -> list[TalentProfile]:
    """Transform a list of upstream profile records, skipping non-objects."""
    return [transform_profile(raw) for raw in raw_profiles if isinstance(raw, dict)]


def extract_credential_values(payload: Any) -> dict[str, Any]:
    """
    Build a slug -> value map from a `profiles/<id>/credentials` response.

    Entries without a credential slug or without a value are skipped.
    """
    if not isinstance(payload, dict):
        return {}

    user_credentials = payload.get("user_credentials")
    if not isinstance(user_credentials, list):
        return {}

    values: dict[str, Any] = {}
    for entry in user_credentials:
        if not isinstance(entry, dict):
            continue
        credential = entry.get("credential") or {}
        slug = credential.get("slug") if isinstance(credential, dict) else None
        if slug and entry.get("value") is not None:
            values[slug] = entry["value"]
    return values


def transform_credential_details(payload: Any) -> list[CredentialDetail]:
    """Extract the `credentials` list from the upstream credential catalog."""
    if not isinstance(payload, dict) or not isinstance(payload.get("credentials"), list):
        return []
    return [CredentialDetail.model_validate(c) for c in payload["credentials"] if isinstance(c, dict)]


def credential_scalar(value: Any) -> int | float | str | None:
    """
    Reduce a raw credential value to something a profile can hold.

    Booleans become 1/0 and non-finite numbers are dropped. Lists, objects
    and anything else non-scalar give None.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


def as_number(value: Any) -> float | None:
    """
    Interpret a credential value as a number.

    Examples:
        120 -> 120.0
        "1500" -> 1500.0
        "GitHub" -> None
        True -> None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _rank(profile: TalentProfile) -> tuple[int, Any]:
    # Tiers: 0 numeric, 1 text, 2 no value
    if profile.credential_value is None:
        return 2, None
    number = as_number(profile.credential_value)
    if number is not None:
        return 0, number
    return 1, str(profile.credential_value)


def _compare_descending(a: TalentProfile, b: TalentProfile) -> int:
    tier_a, val_a = _rank(a)
    tier_b, val_b = _rank(b)
    if tier_a != tier_b:
        return tier_a - tier_b
    if tier_a == 2:
        return 0
    return (val_b > val_a) - (val_b < val_a)


def sort_by_credential_value(profiles: list[TalentProfile]) -> list[TalentProfile]:
    """
    Order profiles by credential value, highest first.

    Numeric values come first and compare arithmetically, then text values
    in descending string order. Profiles without a value go last and keep
    their relative order.
    """
    return sorted(profiles, key=cmp_to_key(_compare_descending))
