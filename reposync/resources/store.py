# RepoSync Local Resource Store
# YAML-backed resource store that repository files are replicated into

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from reposync.repository import safepath
from reposync.repository.types import FileInfo, VersionedRepository
from reposync.resources.parser import ParsedResource, parse_resource
from reposync.resources.paths import folder_path_for
from reposync.resources.types import GroupVersionKind, ResourceError
from reposync.utils.hashing import content_hash
from reposync.utils.paths import atomic_write

logger = logging.getLogger(__name__)


@dataclass
class StoredResource:
    """A resource owned by the repository."""

    name: str
    group: str
    version: str
    kind: str
    path: str
    folder: str = ""
    hash: str = ""

    @property
    def gvk(self) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=self.kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoredResource":
        """Create from dictionary."""
        return cls(
            name=data.get("name", ""),
            group=data.get("group", ""),
            version=data.get("version", ""),
            kind=data.get("kind", ""),
            path=data.get("path", ""),
            folder=data.get("folder", ""),
            hash=data.get("hash", ""),
        )


@dataclass
class StoredFolder:
    """A folder mirroring a repository directory."""

    uid: str
    path: str
    parent: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoredFolder":
        """Create from dictionary."""
        return cls(uid=data.get("uid", ""), path=data.get("path", ""), parent=data.get("parent", ""))


@dataclass
class StoreState:
    """Complete content of the resource store."""

    version: str = "1.0"
    last_ref: Optional[str] = None
    resources: dict[str, StoredResource] = field(default_factory=dict)
    folders: dict[str, StoredFolder] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "version": self.version,
            "last_ref": self.last_ref,
            "resources": {key: r.to_dict() for key, r in self.resources.items()},
            "folders": {uid: f.to_dict() for uid, f in self.folders.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreState":
        """Create from dictionary."""
        return cls(
            version=data.get("version", "1.0"),
            last_ref=data.get("last_ref"),
            resources={k: StoredResource.from_dict(v) for k, v in (data.get("resources") or {}).items()},
            folders={k: StoredFolder.from_dict(v) for k, v in (data.get("folders") or {}).items()},
        )


def resource_key(name: str, gvk: GroupVersionKind) -> str:
    """Store key of a resource."""
    return f"{gvk.group}/{gvk.kind}/{name}"


def folder_uid(dir_path: str) -> str:
    """Deterministic folder uid for a repository directory."""
    return "f" + content_hash(dir_path, length=16)


class LocalResourceStore:
    """
    Resource store persisted as a YAML file.

    Implements the resource operations the sync engine replays file
    changes through. Every mutation is saved atomically.
    """

    def __init__(self, repo: VersionedRepository, state_path: Path):
        """
        Initialize resource store.

        Args:
            repo: Repository that file content is read from.
            state_path: YAML file holding the store.
        """
        self.repo = repo
        self.state_path = state_path
        self._state: Optional[StoreState] = None

    @property
    def state(self) -> StoreState:
        """Get current state, loading if necessary."""
        if self._state is None:
            self._state = self.load()
        return self._state

    def load(self) -> StoreState:
        """Load state from file."""
        if not self.state_path.exists():
            return StoreState()

        with open(self.state_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return StoreState()
        return StoreState.from_dict(data)

    def save(self) -> None:
        """Save state to file."""
        content = yaml.dump(self.state.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)
        atomic_write(self.state_path, content)

    @property
    def last_ref(self) -> Optional[str]:
        """Revision the store was last synced to."""
        return self.state.last_ref

    def set_last_ref(self, ref: str) -> None:
        """Remember the revision the store is in sync with."""
        self.state.last_ref = ref
        self.save()

    def count(self) -> int:
        """Number of resources owned by the repository."""
        return len(self.state.resources)

    def list_resources(self) -> list[StoredResource]:
        """All resources, sorted by path."""
        return sorted(self.state.resources.values(), key=lambda r: r.path)

    def get_folder(self, uid: str) -> Optional[StoredFolder]:
        """Get a folder by uid."""
        return self.state.folders.get(uid)

    def _read(self, path: str, ref: str) -> tuple[FileInfo, ParsedResource]:
        info = self.repo.read(path, ref)
        return info, parse_resource(path, info.data)

    def _find_by_path(self, path: str) -> Optional[tuple[str, StoredResource]]:
        for key, resource in self.state.resources.items():
            if resource.path == path:
                return key, resource
        return None

    def _lookup(self, path: str, ref: str) -> Optional[tuple[str, StoredResource]]:
        """Find the stored resource defined by ``path`` at ``ref``."""
        try:
            _, parsed = self._read(path, ref)
        except ResourceError:
            # Content no longer parses, fall back to the recorded path
            return self._find_by_path(path)

        key = resource_key(parsed.name, parsed.gvk)
        resource = self.state.resources.get(key)
        if resource is None:
            return None
        return key, resource

    def _ensure_folders(self, dir_path: str) -> str:
        """Create missing folders along ``dir_path`` without saving."""
        parent = ""
        for directory in safepath.ancestors(dir_path):
            uid = folder_uid(directory)
            if uid not in self.state.folders:
                self.state.folders[uid] = StoredFolder(uid=uid, path=directory, parent=parent)
                logger.debug("Created folder %s for %s", uid, directory)
            parent = uid
        return parent

    def ensure_folder_path_exist(self, dir_path: str) -> str:
        """
        Create every folder along a directory path.

        Args:
            dir_path: Directory path with trailing slash.

        Returns:
            Uid of the innermost folder.

        Raises:
            ResourceError: If the path is empty or hidden.
        """
        if not dir_path or safepath.is_hidden(dir_path):
            raise ResourceError(f"invalid folder path: {dir_path!r}")
        if not safepath.is_dir(dir_path):
            dir_path += "/"

        uid = self._ensure_folders(dir_path)
        self.save()
        return uid

    def _upsert(self, key: str, parsed: ParsedResource, path: str, info: FileInfo) -> None:
        existing = self.state.resources.get(key)
        if existing is not None and existing.path != path:
            raise ResourceError(
                f"resource {parsed.name} is already defined by {existing.path}",
                name=parsed.name,
                gvk=parsed.gvk,
            )

        directory = folder_path_for(path)
        uid = self._ensure_folders(directory) if directory else ""
        self.state.resources[key] = StoredResource(
            name=parsed.name,
            group=parsed.gvk.group,
            version=parsed.gvk.version,
            kind=parsed.gvk.kind,
            path=path,
            folder=uid,
            hash=info.hash,
        )

    def write_resource_from_file(self, path: str, ref: str) -> tuple[str, GroupVersionKind]:
        """
        Create or update the resource defined by a file.

        Args:
            path: Repository file path.
            ref: Revision to read the file at.

        Returns:
            Tuple of (name, gvk).

        Raises:
            ResourceError: If the file cannot be parsed or collides with
                a resource owned by another path.
        """
        info, parsed = self._read(path, ref)
        self._upsert(resource_key(parsed.name, parsed.gvk), parsed, path, info)
        self.save()
        return parsed.name, parsed.gvk

    def remove_resource_from_file(self, path: str, ref: str) -> tuple[str, str, GroupVersionKind]:
        """
        Remove the resource a file used to define.

        Args:
            path: Repository file path.
            ref: Revision the file still existed at.

        Returns:
            Tuple of (name, folder uid, gvk).

        Raises:
            ResourceError: If no stored resource matches the file.
        """
        found = self._lookup(path, ref)
        if found is None:
            raise ResourceError(f"no resource found for {path}")

        key, resource = found
        if resource.path != path:
            raise ResourceError(
                f"resource {resource.name} is owned by {resource.path}",
                name=resource.name,
                gvk=resource.gvk,
            )

        del self.state.resources[key]
        self.save()
        return resource.name, resource.folder, resource.gvk

    def rename_resource_file(
        self, previous_path: str, previous_ref: str, path: str, ref: str
    ) -> tuple[str, str, GroupVersionKind]:
        """
        Move a resource to a new file path.

        The old entry is dropped and the new one written in a single save.
        If the new entry cannot be written the old one is put back.

        Args:
            previous_path: Old repository path.
            previous_ref: Revision the old path existed at.
            path: New repository path.
            ref: Revision the new path exists at.

        Returns:
            Tuple of (name, folder uid, gvk), where the folder uid is the
            one the old entry lived in ("" when there was no old entry).
        """
        info, parsed = self._read(path, ref)
        old = self._lookup(previous_path, previous_ref)
        if old is not None and old[1].path != previous_path:
            old = None
        if old is not None:
            del self.state.resources[old[0]]

        key = resource_key(parsed.name, parsed.gvk)
        try:
            self._upsert(key, parsed, path, info)
        except ResourceError:
            if old is not None:
                self.state.resources[old[0]] = old[1]
            raise
        self.save()
        return parsed.name, old[1].folder if old is not None else "", parsed.gvk

    def remove_folder(self, uid: str) -> None:
        """
        Remove a folder and its empty subfolders.

        Args:
            uid: Folder uid.

        Raises:
            ResourceError: If the folder is unknown or still holds resources.
        """
        folder = self.state.folders.get(uid)
        if folder is None:
            raise ResourceError(f"folder {uid} not found")

        subtree = [f.uid for f in self.state.folders.values() if f.path.startswith(folder.path)]
        in_use = [r.path for r in self.state.resources.values() if r.folder in subtree]
        if in_use:
            raise ResourceError(f"folder {uid} still contains {len(in_use)} resource(s)")

        for folder_id in subtree:
            del self.state.folders[folder_id]
        self.save()
        logger.debug("Removed folder %s (%s)", uid, folder.path)
