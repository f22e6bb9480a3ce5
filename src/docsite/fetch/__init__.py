"""Fetch request model and repository retrieval."""

from .git import clone_command, fetch_package, source_url
from .request import SEMVER_PATTERN, FetchRequest, is_semver

__all__ = [
    "FetchRequest",
    "SEMVER_PATTERN",
    "clone_command",
    "fetch_package",
    "is_semver",
    "source_url",
]
