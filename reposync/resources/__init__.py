# RepoSync Resources Module
# Resource identity, parsing and the local resource store

from reposync.resources.parser import ParsedResource, parse_resource
from reposync.resources.paths import folder_path_for, is_path_supported
from reposync.resources.store import LocalResourceStore, StoredFolder, StoredResource
from reposync.resources.types import (
    DASHBOARD_KIND,
    FOLDER_KIND,
    GroupVersionKind,
    RepositoryResources,
    ResourceError,
)

__all__ = [
    # Types
    "GroupVersionKind",
    "RepositoryResources",
    "ResourceError",
    "FOLDER_KIND",
    "DASHBOARD_KIND",
    # Paths
    "is_path_supported",
    "folder_path_for",
    # Parser
    "ParsedResource",
    "parse_resource",
    # Store
    "LocalResourceStore",
    "StoredResource",
    "StoredFolder",
]
