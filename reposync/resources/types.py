# RepoSync Resource Types
# Resource identity and the resource store contract

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class GroupVersionKind:
    """API group, version and kind of a resource."""

    group: str = ""
    version: str = ""
    kind: str = ""

    @property
    def api_version(self) -> str:
        """Kubernetes style apiVersion string."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


FOLDER_KIND = GroupVersionKind(group="folder.grafana.app", version="v1beta1", kind="Folder")
DASHBOARD_KIND = GroupVersionKind(group="dashboard.grafana.app", version="v0alpha1", kind="Dashboard")


class ResourceError(Exception):
    """
    Error raised by a resource store operation.

    ``name`` and ``gvk`` are filled in when the failing file could be
    resolved to a resource before the operation failed.
    """

    def __init__(self, message: str, *, name: str = "", gvk: Optional[GroupVersionKind] = None):
        self.message = message
        self.name = name
        self.gvk = gvk
        super().__init__(message)


class RepositoryResources(Protocol):
    """Internal resource store that files are replicated into."""

    def write_resource_from_file(self, path: str, ref: str) -> tuple[str, GroupVersionKind]:
        """Create or update the resource defined by ``path`` at ``ref``."""
        ...

    def remove_resource_from_file(self, path: str, ref: str) -> tuple[str, str, GroupVersionKind]:
        """Remove the resource defined by ``path`` at ``ref``; returns (name, folder uid, gvk)."""
        ...

    def rename_resource_file(
        self, previous_path: str, previous_ref: str, path: str, ref: str
    ) -> tuple[str, str, GroupVersionKind]:
        """Move a resource from ``previous_path`` to ``path``; returns (name, old folder uid, gvk)."""
        ...

    def ensure_folder_path_exist(self, dir_path: str) -> str:
        """Create every folder along ``dir_path``; returns the innermost folder uid."""
        ...

    def remove_folder(self, uid: str) -> None:
        """Remove a folder resource."""
        ...
