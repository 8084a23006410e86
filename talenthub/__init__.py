"""talenthub - Talent Protocol developer search."""

from talenthub.models.profile import TalentProfile
from talenthub.models.credential import CredentialOption, CredentialDetail
from talenthub.models.result import SearchResult
from talenthub.config import TalentHubConfig
from talenthub.catalog import CREDENTIAL_OPTIONS, group_by_issuer, find_option
from talenthub.core.service import TalentService
from talenthub.core.exporter import to_json, to_dict, save_json, load_json

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "TalentService",
    "TalentHubConfig",
    # Catalog
    "CREDENTIAL_OPTIONS",
    "group_by_issuer",
    "find_option",
    # Models
    "TalentProfile",
    "CredentialOption",
    "CredentialDetail",
    "SearchResult",
    # Export utilities
    "to_json",
    "to_dict",
    "save_json",
    "load_json",
    "__version__",
]
