# RepoSync Utilities Module
# Helper functions for path handling and content hashing

from reposync.utils.hashing import content_hash
from reposync.utils.paths import (
    atomic_write,
    ensure_dir,
    expand_path,
    matches_any_pattern,
    matches_pattern,
)

__all__ = [
    # Paths
    "expand_path",
    "ensure_dir",
    "atomic_write",
    "matches_pattern",
    "matches_any_pattern",
    # Hashing
    "content_hash",
]
