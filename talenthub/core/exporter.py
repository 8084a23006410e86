"""Export utilities for search results."""

from pathlib import Path
from typing import TYPE_CHECKING

from talenthub.models.result import SearchResult

if TYPE_CHECKING:
    import pandas as pd

try:
    import pandas as pd
    PANDAS_AVAILABLE = True
except ImportError:
    PANDAS_AVAILABLE = False


def to_json(result: SearchResult, indent: int = 2) -> str:
    """
    Convert SearchResult to JSON string.

    Args:
        result: SearchResult to serialize
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return result.model_dump_json(indent=indent)


def to_dict(result: SearchResult) -> dict:
    """Convert SearchResult to a JSON-compatible dictionary."""
    return result.model_dump(mode="json")


def save_json(
    result: SearchResult,
    filepath: str | Path,
    indent: int = 2,
) -> Path:
    """
    Save SearchResult to JSON file.

    Args:
        result: SearchResult to save
        filepath: Output file path
        indent: JSON indentation level

    Returns:
        Path to saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.model_dump_json(indent=indent), encoding="utf-8")
    return path


def load_json(filepath: str | Path) -> SearchResult:
    """Load SearchResult from JSON file."""
    path = Path(filepath)
    return SearchResult.model_validate_json(path.read_text(encoding="utf-8"))


def _check_pandas():
    """Raise ImportError if pandas is not available."""
    if not PANDAS_AVAILABLE:
        raise ImportError(
            "pandas is required for DataFrame export. Install with: pip install pandas"
        )


def to_profiles_df(result: SearchResult) -> "pd.DataFrame":
    """
    Convert the profiles of a SearchResult to a pandas DataFrame.

    Rows keep the result's order and carry a 'rank' column starting at 1 and
    the credential slug searched by.

    Raises:
        ImportError: If pandas is not installed
    """
    _check_pandas()

    rows = []
    for rank, profile in enumerate(result.profiles, start=1):
        row = profile.model_dump(mode="json")
        row["rank"] = rank
        row["credential_slug"] = result.credential.slug
        rows.append(row)

    return pd.DataFrame(rows)


def save_csv(result: SearchResult, filepath: str | Path) -> Path:
    """
    Save the profiles of a SearchResult to a CSV file.

    Raises:
        ImportError: If pandas is not installed
    """
    _check_pandas()

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_profiles_df(result).to_csv(path, index=False)
    return path
