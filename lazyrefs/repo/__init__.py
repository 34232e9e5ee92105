"""Repository data types and the git-backed data source."""

from .git import GitRepoData, discover_repo_root
from .types import Branch, Commit, Oid, Tag

__all__ = [
    "Branch",
    "Commit",
    "Oid",
    "Tag",
    "GitRepoData",
    "discover_repo_root",
]
