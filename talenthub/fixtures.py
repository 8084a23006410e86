"""Fallback payloads served when the upstream API is unavailable."""

from talenthub.models.profile import TalentProfile


_FALLBACK_PEOPLE = [
    ("101", "Alex Johnson", "alexj", "Full-stack developer specializing in React and Node.js",
     "https://randomuser.me/api/portraits/men/1.jpg", 85, ["React", "Node.js", "TypeScript"], 120),
    ("102", "Sarah Williams", "sarahw", "Frontend developer with a passion for UI/UX",
     "https://randomuser.me/api/portraits/women/2.jpg", 78, ["JavaScript", "React", "CSS"], 85),
    ("103", "Miguel Sanchez", "miguels", "Backend engineer specialized in scalable systems",
     "https://randomuser.me/api/portraits/men/3.jpg", 92, ["Go", "Microservices", "Docker"], 210),
    ("104", "Emily Chen", "emilyc", "Machine learning engineer with focus on computer vision",
     "https://randomuser.me/api/portraits/women/4.jpg", 88, ["Python", "TensorFlow", "Computer Vision"], 150),
]


def fallback_search_response() -> dict:
    """Upstream-shaped `search/advanced/profiles` response."""
    return {
        "profiles": [
            {
                "id": pid,
                "display_name": name,
                "username": username,
                "bio": bio,
                "image_url": image_url,
                "builder_score": {"points": score},
                "human_checkmark": True,
                "tags": list(tags),
            }
            for pid, name, username, bio, image_url, score, tags, _ in _FALLBACK_PEOPLE
        ]
    }


def fallback_user_credentials() -> dict:
    """Upstream-shaped `profiles/<id>/credentials` response."""
    return {
        "user_credentials": [
            {
                "credential": {"name": "GitHub Stars", "slug": "github-stars", "data_issuer": "GitHub"},
                "value": 120,
            },
            {
                "credential": {"name": "GitHub Repositories", "slug": "github-repositories", "data_issuer": "GitHub"},
                "value": 25,
            },
        ]
    }


def fallback_post_ack() -> dict:
    return {"success": True, "message": "Mock data returned due to missing API key"}


def fallback_profiles() -> list[TalentProfile]:
    """Local view-model list returned by the service when a search fails."""
    return [
        TalentProfile(
            id=pid,
            full_name=name,
            username=username,
            bio=bio,
            profile_picture=image_url,
            score=score,
            human_verified=True,
            tags=list(tags),
            credential_value=value,
        )
        for pid, name, username, bio, image_url, score, tags, value in _FALLBACK_PEOPLE
    ]
