"""Custom exception hierarchy for talenthub."""


class TalentHubError(Exception):
    """Base exception for all talenthub errors."""


class UpstreamError(TalentHubError):
    """Talent Protocol API call failed or returned a non-OK status."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MissingEndpointError(TalentHubError):
    """Proxy request did not name an upstream endpoint."""


class UnknownCredentialError(TalentHubError):
    """No catalog entry matches the requested credential."""


class CacheError(TalentHubError):
    """Cache operation failed."""
