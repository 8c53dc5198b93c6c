# RepoSync Repository Module
# Versioned repositories and the changes they report

from reposync.repository.git import GitRepository
from reposync.repository.types import (
    FileAction,
    FileInfo,
    RepositoryFileNotFoundError,
    VersionedFileChange,
    VersionedRepository,
)
from reposync.repository.workflows import can_use_incremental_sync

__all__ = [
    # Types
    "FileAction",
    "FileInfo",
    "VersionedFileChange",
    "VersionedRepository",
    "RepositoryFileNotFoundError",
    # Git
    "GitRepository",
    # Workflows
    "can_use_incremental_sync",
]
