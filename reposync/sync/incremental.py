# RepoSync Incremental Sync
# Replay a repository diff into the resource store

import logging
import threading
from collections.abc import Callable
from typing import Optional

from reposync.jobs.progress import ProgressRecorder
from reposync.jobs.results import JobResourceResult, QuotaExceededError
from reposync.quotas.tracker import QuotaTracker
from reposync.repository import safepath
from reposync.repository.types import (
    FileAction,
    RepositoryFileNotFoundError,
    VersionedFileChange,
    VersionedRepository,
)
from reposync.resources.paths import folder_path_for, is_path_supported
from reposync.resources.types import RepositoryResources, ResourceError

logger = logging.getLogger(__name__)

# Lower weight runs first
ACTION_PRIORITY: dict[FileAction, int] = {
    FileAction.DELETED: 0,
    FileAction.RENAMED: 1,
    FileAction.UPDATED: 2,
    FileAction.CREATED: 3,
    FileAction.IGNORED: 4,
}


class SyncError(Exception):
    """Error that aborts a sync pass."""


class SyncCancelledError(SyncError):
    """Raised when the caller cancels a running sync."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


def sort_changes_by_action_priority(changes: list[VersionedFileChange]) -> list[VersionedFileChange]:
    """
    Order changes so deletions run first and ignored entries last.

    The sort is stable: changes with the same action keep the order the
    repository reported them in.

    Args:
        changes: Changes in repository order.

    Returns:
        New list sorted by action priority.
    """
    return sorted(changes, key=lambda c: ACTION_PRIORITY.get(c.action, len(ACTION_PRIORITY)))


def _wrap(message: str, err: Exception) -> ResourceError:
    """Prefix an error with the operation that failed."""
    if isinstance(err, ResourceError):
        wrapped = ResourceError(f"{message}: {err}", name=err.name, gvk=err.gvk)
    else:
        wrapped = ResourceError(f"{message}: {err}")
    wrapped.__cause__ = err
    return wrapped


class _IncrementalPass:
    """
    State of one incremental sync invocation.

    Holds the collaborators and the folders queued for cleanup; created
    and discarded by ``incremental_sync``.
    """

    def __init__(
        self,
        repo: VersionedRepository,
        resources: RepositoryResources,
        progress: ProgressRecorder,
        quota: QuotaTracker,
        cancel: Optional[threading.Event],
    ):
        self.repo = repo
        self.resources = resources
        self.progress = progress
        self.quota = quota
        self.cancel = cancel
        # directory -> folder uid, in deletion order
        self.affected_folders: dict[str, str] = {}
        self._handlers: dict[FileAction, Callable[[VersionedFileChange], JobResourceResult]] = {
            FileAction.CREATED: self._created,
            FileAction.UPDATED: self._updated,
            FileAction.DELETED: self._deleted,
            FileAction.RENAMED: self._renamed,
            FileAction.IGNORED: self._ignored,
        }

    def check_continue(self) -> None:
        """Stop the pass when the error budget is spent or the caller cancelled."""
        err = self.progress.too_many_errors()
        if err is not None:
            raise err
        self.check_cancelled()

    def check_cancelled(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise SyncCancelledError()

    def apply(self, change: VersionedFileChange) -> JobResourceResult:
        """Dispatch a change to the handler for its action."""
        handler = self._handlers.get(change.action)
        if handler is None:
            raise ValueError(f"unknown file action: {change.action}")
        logger.debug("Applying %s %s", change.action.value, change.path)
        return handler(change)

    def _created(self, change: VersionedFileChange) -> JobResourceResult:
        supported = is_path_supported(change.path)
        directory = folder_path_for(change.path)

        if self.progress.has_dir_path_failed_creation(change.path):
            logger.debug("Skipping %s, its folder failed creation earlier", change.path)
            return JobResourceResult.path_only(change.path, FileAction.IGNORED)

        if not supported and not directory:
            return JobResourceResult.path_only(change.path, FileAction.IGNORED)

        if not supported:
            # Non-resource files still materialize their directory as a folder
            try:
                uid = self.resources.ensure_folder_path_exist(directory)
            except Exception as e:
                return JobResourceResult.path_only(change.path, FileAction.IGNORED, error=e)
            logger.debug("Ensured folder %s (%s)", directory, uid)
            return JobResourceResult.folder(directory, FileAction.CREATED)

        if not self.quota.try_acquire():
            warning = QuotaExceededError(change.path)
            logger.warning("%s", warning)
            return JobResourceResult.path_only(change.path, FileAction.IGNORED, warning=warning)

        try:
            name, gvk = self.resources.write_resource_from_file(change.path, change.ref)
        except Exception as e:
            err = _wrap(f"writing resource from file {change.path}", e)
            return JobResourceResult.for_resource(err.name, err.gvk, change.path, FileAction.CREATED, error=err)

        return JobResourceResult.for_resource(name, gvk, change.path, FileAction.CREATED)

    def _updated(self, change: VersionedFileChange) -> JobResourceResult:
        try:
            name, gvk = self.resources.write_resource_from_file(change.path, change.ref)
        except Exception as e:
            err = _wrap(f"writing resource from file {change.path}", e)
            return JobResourceResult.for_resource(err.name, err.gvk, change.path, FileAction.UPDATED, error=err)

        return JobResourceResult.for_resource(name, gvk, change.path, FileAction.UPDATED)

    def _deleted(self, change: VersionedFileChange) -> JobResourceResult:
        try:
            name, folder_uid, gvk = self.resources.remove_resource_from_file(change.path, change.previous_ref)
        except Exception as e:
            # Slot stays taken until the deletion is confirmed
            err = _wrap(f"removing resource from file {change.path}", e)
            return JobResourceResult.for_resource(err.name, err.gvk, change.path, FileAction.DELETED, error=err)

        self.quota.release()

        if folder_uid:
            directory = safepath.dir_of(change.path)
            if directory:
                self.affected_folders.setdefault(directory, folder_uid)

        return JobResourceResult.for_resource(name, gvk, change.path, FileAction.DELETED)

    def _renamed(self, change: VersionedFileChange) -> JobResourceResult:
        if self.progress.has_dir_path_failed_creation(change.path):
            logger.debug("Skipping rename to %s, its folder failed creation earlier", change.path)
            return JobResourceResult.path_only(change.path, FileAction.IGNORED)

        try:
            name, old_folder_uid, gvk = self.resources.rename_resource_file(
                change.previous_path, change.previous_ref, change.path, change.ref
            )
        except Exception as e:
            err = _wrap(f"renaming resource file from {change.previous_path} to {change.path}", e)
            return JobResourceResult.for_resource(err.name, err.gvk, change.path, FileAction.RENAMED, error=err)

        if old_folder_uid:
            directory = safepath.dir_of(change.previous_path)
            if directory:
                self.affected_folders.setdefault(directory, old_folder_uid)

        return JobResourceResult.for_resource(name, gvk, change.path, FileAction.RENAMED)

    def _ignored(self, change: VersionedFileChange) -> JobResourceResult:
        return JobResourceResult.path_only(change.path, FileAction.IGNORED)

    def cleanup_orphaned_folders(self) -> None:
        """
        Remove folders whose directory disappeared from the source.

        A deleted or moved file says nothing about its siblings, so each
        affected directory is looked up once in the current state of the
        repository. Only cancellation stops this phase; the error budget
        is not consulted once every change has been replayed.
        """
        for directory, uid in self.affected_folders.items():
            self.check_cancelled()

            if self.progress.has_dir_path_failed_deletion(directory):
                logger.debug("Keeping folder %s, a deletion below it failed", directory)
                continue

            try:
                self.repo.read(directory, "")
            except RepositoryFileNotFoundError:
                pass
            except Exception as e:
                err = _wrap(f"reading directory {directory}", e)
                self.progress.record(JobResourceResult.folder(directory, FileAction.DELETED, name=uid, error=err))
                continue
            else:
                logger.debug("Directory %s still exists, keeping folder %s", directory, uid)
                continue

            try:
                self.resources.remove_folder(uid)
            except Exception as e:
                err = _wrap(f"removing folder {uid}", e)
                self.progress.record(JobResourceResult.folder(directory, FileAction.DELETED, name=uid, error=err))
                continue

            logger.info("Removed orphaned folder %s (%s)", uid, directory)
            self.progress.record(JobResourceResult.folder(directory, FileAction.DELETED, name=uid))


def incremental_sync(
    repo: VersionedRepository,
    previous_ref: str,
    current_ref: str,
    resources: RepositoryResources,
    progress: ProgressRecorder,
    quota: QuotaTracker,
    *,
    cancel: Optional[threading.Event] = None,
) -> None:
    """
    Replay the changes between two revisions into the resource store.

    Every change produces one recorded result; per-file failures and
    quota denials are recorded rather than raised. Partial progress is
    kept when the pass stops early.

    Args:
        repo: Repository to diff and read.
        previous_ref: Revision the store was last synced to.
        current_ref: Revision to sync to.
        resources: Resource store to mutate.
        progress: Recorder receiving messages and results.
        quota: Quota gate for resource creation.
        cancel: Optional event; once set the pass stops before the next change.

    Raises:
        SyncError: If the diff cannot be computed.
        SyncCancelledError: If ``cancel`` was set.
        Exception: The error returned by ``progress.too_many_errors()``.
    """
    if previous_ref == current_ref:
        progress.set_final_message("same commit as last time")
        return

    try:
        changes = repo.compare_files(previous_ref, current_ref)
    except Exception as e:
        raise SyncError(f"compare files error: {e}") from e

    if not changes:
        progress.set_final_message("no changes detected between commits")
        return

    progress.set_total(len(changes))
    progress.set_message("replicating versioned changes")

    sync_pass = _IncrementalPass(repo, resources, progress, quota, cancel)

    for change in sort_changes_by_action_priority(changes):
        sync_pass.check_continue()
        progress.record(sync_pass.apply(change))

    sync_pass.cleanup_orphaned_folders()

    progress.set_message("versioned changes replicated")
