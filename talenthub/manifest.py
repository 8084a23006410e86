"""Mini-app manifest served at /.well-known/farcaster.json."""

from talenthub.config import TalentHubConfig


PERMISSIONS = [
    "notification:read",
    "notification:write",
    "frame:read",
    "frame:write",
    "user:read",
    "cast:write",
]


def build_manifest(config: TalentHubConfig) -> dict:
    """Static mini-app metadata, with name, icon and domains taken from config."""
    return {
        "miniApp": {
            "name": config.app_name,
            "description": config.app_description,
            "icons": [
                {
                    "src": config.app_icon,
                    "sizes": "512x512",
                    "type": "image/svg+xml",
                }
            ],
            "image": {"src": config.app_icon},
            "domains": list(config.app_domains),
            "permissions": list(PERMISSIONS),
        }
    }
