# RepoSync Repository Types
# File actions, diff entries and the versioned repository contract

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class FileAction(str, Enum):
    """Action a diff entry asks the sync engine to replay."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    RENAMED = "renamed"
    IGNORED = "ignored"


class RepositoryFileNotFoundError(Exception):
    """Raised when a path does not exist in the repository at a revision."""

    def __init__(self, path: str, ref: str = ""):
        self.path = path
        self.ref = ref
        where = f" at {ref}" if ref else ""
        super().__init__(f"file not found: {path}{where}")


@dataclass(frozen=True)
class VersionedFileChange:
    """
    One entry of a file-level diff between two revisions.

    Created and updated entries carry ``ref``, deleted entries carry
    ``previous_ref``, renamed entries carry both along with ``previous_path``.
    """

    action: FileAction
    path: str
    previous_path: str = ""
    ref: str = ""
    previous_ref: str = ""


@dataclass
class FileInfo:
    """Content of a repository path at a revision."""

    path: str
    ref: str = ""
    data: bytes = b""
    hash: str = ""


class VersionedRepository(Protocol):
    """A repository that can diff two revisions and read paths."""

    def compare_files(self, base: str, ref: str) -> list[VersionedFileChange]:
        """Return the file changes between ``base`` and ``ref``."""
        ...

    def read(self, path: str, ref: str) -> FileInfo:
        """Read ``path`` at ``ref``; an empty ref reads the current state."""
        ...
