"""Built-in catalog of credential filters."""

from talenthub.exceptions import UnknownCredentialError
from talenthub.models.credential import CredentialOption


def _option(name: str, issuer: str, display_name: str, slug: str) -> CredentialOption:
    return CredentialOption(name=name, data_issuer=issuer, display_name=display_name, slug=slug)


CREDENTIAL_OPTIONS: list[CredentialOption] = [
    _option("GitHub Account", "GitHub", "GitHub Account", "github-account"),
    _option("GitHub Crypto Repositories Commits", "GitHub", "GitHub Crypto Commits", "github-crypto-repositories-commits"),
    _option("GitHub Crypto Repositories Contributed", "GitHub", "GitHub Crypto Contributions", "github-crypto-repositories-contributed"),
    _option("GitHub Forks", "GitHub", "GitHub Forks", "github-forks"),
    _option("GitHub Repositories", "GitHub", "GitHub Repositories", "github-repositories"),
    _option("GitHub Stars", "GitHub", "GitHub Stars", "github-stars"),
    _option("GitHub Total Contributions", "GitHub", "GitHub Total Contributions", "github-total-contributions"),
    _option("Base Active Smart Contracts", "Base", "Base Active Smart Contracts", "base-active-smart-contracts"),
    _option("Base Around The World Participant", "Base", "Base Around The World Participant", "base-around-the-world-participant"),
    _option("Base Around The World Winner", "Base", "Base Around The World Winner", "base-around-the-world-winner"),
    _option("Basecamp Attendee", "Base", "Basecamp Attendee", "basecamp-attendee"),
    _option("Contracts Deployed (Mainnet)", "Base", "Contracts Deployed (Mainnet)", "contracts-deployed-mainnet"),
    _option("Contracts Deployed (Testnet)", "Base", "Contracts Deployed (Testnet)", "contracts-deployed-testnet"),
    _option("Onchain Summer Buildathon Participant", "Base", "Onchain Summer Buildathon Participant", "onchain-summer-buildathon-participant"),
    _option("Onchain Summer Buildathon Winner", "Base", "Onchain Summer Buildathon Winner", "onchain-summer-buildathon-winner"),
]


def group_by_issuer(
    options: list[CredentialOption] | None = None,
) -> dict[str, list[CredentialOption]]:
    """
    Group credential options by issuing service.

    Issuers appear in the order they are first seen.

    Args:
        options: Options to group, defaults to CREDENTIAL_OPTIONS

    Returns:
        Mapping of data issuer to its options
    """
    grouped: dict[str, list[CredentialOption]] = {}
    for option in options if options is not None else CREDENTIAL_OPTIONS:
        grouped.setdefault(option.data_issuer, []).append(option)
    return grouped


def find_option(key: str, options: list[CredentialOption] | None = None) -> CredentialOption:
    """
    Look up a credential option by slug, name or display name.

    Args:
        key: Slug, name or display name (case-insensitive)
        options: Options to search, defaults to CREDENTIAL_OPTIONS

    Raises:
        UnknownCredentialError: If no option matches
    """
    needle = key.strip().lower()
    for option in options if options is not None else CREDENTIAL_OPTIONS:
        candidates = {option.name.lower(), option.display_name.lower()}
        if option.slug:
            candidates.add(option.slug.lower())
        if needle in candidates:
            return option
    raise UnknownCredentialError(f"Unknown credential: {key}")
