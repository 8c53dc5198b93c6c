# RepoSync Job Results
# Outcome of replaying one change

from dataclasses import dataclass
from typing import Optional

from reposync.repository.types import FileAction
from reposync.resources.types import FOLDER_KIND, GroupVersionKind


class QuotaExceededError(Exception):
    """Warning attached to a creation skipped because the quota is full."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"resource quota exceeded, skipping creation of {path}")


@dataclass(frozen=True)
class JobResourceResult:
    """
    Result of processing one file (or folder) during a sync.

    A result carries at most one of ``error`` and ``warning``.
    """

    path: str
    action: FileAction
    name: str = ""
    group: str = ""
    kind: str = ""
    error: Optional[Exception] = None
    warning: Optional[Exception] = None

    @classmethod
    def path_only(
        cls,
        path: str,
        action: FileAction,
        *,
        error: Optional[Exception] = None,
        warning: Optional[Exception] = None,
    ) -> "JobResourceResult":
        """Result that only knows the file path."""
        return cls(path=path, action=action, error=error, warning=warning)

    @classmethod
    def folder(
        cls,
        path: str,
        action: FileAction,
        *,
        name: str = "",
        error: Optional[Exception] = None,
    ) -> "JobResourceResult":
        """Result for a folder resource backing directory ``path``."""
        return cls(
            path=path,
            action=action,
            name=name,
            group=FOLDER_KIND.group,
            kind=FOLDER_KIND.kind,
            error=error,
        )

    @classmethod
    def for_resource(
        cls,
        name: str,
        gvk: Optional[GroupVersionKind],
        path: str,
        action: FileAction,
        *,
        error: Optional[Exception] = None,
    ) -> "JobResourceResult":
        """Result for a named resource defined by file ``path``."""
        gvk = gvk or GroupVersionKind()
        return cls(path=path, action=action, name=name, group=gvk.group, kind=gvk.kind, error=error)

    @property
    def is_folder(self) -> bool:
        """Check if this result describes a folder."""
        return self.kind == FOLDER_KIND.kind and self.group == FOLDER_KIND.group
