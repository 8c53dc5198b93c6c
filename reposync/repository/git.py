# RepoSync Git Repository
# VersionedRepository backed by a local git checkout

import logging
from pathlib import Path
from typing import Optional

from reposync.git.operations import GitError, diff_name_status, ls_tree, object_exists, rev_parse, show_file
from reposync.repository import safepath
from reposync.repository.types import FileAction, FileInfo, RepositoryFileNotFoundError, VersionedFileChange
from reposync.utils.hashing import content_hash
from reposync.utils.paths import matches_any_pattern

logger = logging.getLogger(__name__)


class GitRepository:
    """
    Versioned repository over a local git checkout.

    Reads never touch the working tree: every lookup goes through the
    object database at an explicit revision, the configured branch being
    the current state of the source.
    """

    def __init__(self, path: Path, branch: str = "HEAD", ignore: Optional[list[str]] = None):
        """
        Initialize git repository.

        Args:
            path: Path to the git checkout.
            branch: Branch (or ref) that represents the current state.
            ignore: Glob patterns whose diff entries are reported as ignored.
        """
        self.path = path
        self.branch = branch
        self.ignore = list(ignore or [])

    def latest_ref(self) -> str:
        """Resolve the configured branch to a commit id."""
        return rev_parse(self.branch, self.path)

    def compare_files(self, base: str, ref: str) -> list[VersionedFileChange]:
        """
        List file changes between two revisions.

        Args:
            base: Previous revision.
            ref: Current revision.

        Returns:
            Changes in the order git reports them.
        """
        changes: list[VersionedFileChange] = []

        for status, paths in diff_name_status(base, ref, self.path):
            change = self._to_change(status, paths, base, ref)
            if change is None:
                logger.warning("Skipping unknown diff status %s for %s", status, paths)
                continue
            if matches_any_pattern(change.path, self.ignore):
                change = VersionedFileChange(action=FileAction.IGNORED, path=change.path, ref=ref)
            changes.append(change)

        logger.debug("Compared %s..%s: %d change(s)", base, ref, len(changes))
        return changes

    def _to_change(self, status: str, paths: list[str], base: str, ref: str) -> Optional[VersionedFileChange]:
        """Map a git name-status entry to a change."""
        code = status[0]

        if code == "A":
            return VersionedFileChange(action=FileAction.CREATED, path=paths[0], ref=ref)
        if code in ("M", "T"):
            return VersionedFileChange(action=FileAction.UPDATED, path=paths[0], ref=ref)
        if code == "D":
            return VersionedFileChange(
                action=FileAction.DELETED,
                path=paths[0],
                previous_path=paths[0],
                previous_ref=base,
            )
        if code == "R":
            return VersionedFileChange(
                action=FileAction.RENAMED,
                path=paths[1],
                previous_path=paths[0],
                ref=ref,
                previous_ref=base,
            )
        if code == "C":
            # A copy leaves the source untouched
            return VersionedFileChange(action=FileAction.CREATED, path=paths[1], ref=ref)
        return None

    def read(self, path: str, ref: str = "") -> FileInfo:
        """
        Read a file or directory at a revision.

        Args:
            path: Repository path; directories end with "/".
            ref: Revision; empty reads the configured branch.

        Returns:
            FileInfo with the content (empty for directories).

        Raises:
            RepositoryFileNotFoundError: If the path does not exist.
            GitError: If git fails for another reason (e.g. unknown ref).
        """
        commit = rev_parse(ref or self.branch, self.path)

        if safepath.is_dir(path):
            if not ls_tree(commit, path, self.path):
                raise RepositoryFileNotFoundError(path, ref)
            return FileInfo(path=path, ref=commit)

        if not object_exists(commit, path, self.path):
            raise RepositoryFileNotFoundError(path, ref)

        try:
            data = show_file(commit, path, self.path)
        except GitError as e:
            logger.debug("Reading %s at %s failed: %s", path, commit, e.stderr)
            raise

        return FileInfo(path=path, ref=commit, data=data, hash=content_hash(data))
