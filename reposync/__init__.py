"""RepoSync - incremental repository synchronization.

Replicates resources defined as files in a git repository into a local
resource store by replaying the diff between two revisions, under a
best-effort resource quota.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "incremental_sync",
    "sort_changes_by_action_priority",
    "InMemoryQuotaTracker",
    "JobProgressRecorder",
    "JobResourceResult",
    "GitRepository",
    "LocalResourceStore",
    "FileAction",
    "VersionedFileChange",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("incremental_sync", "sort_changes_by_action_priority"):
        from reposync import sync

        return getattr(sync, name)
    if name == "InMemoryQuotaTracker":
        from reposync.quotas import InMemoryQuotaTracker

        return InMemoryQuotaTracker
    if name in ("JobProgressRecorder", "JobResourceResult"):
        from reposync import jobs

        return getattr(jobs, name)
    if name in ("GitRepository", "FileAction", "VersionedFileChange"):
        from reposync import repository

        return getattr(repository, name)
    if name == "LocalResourceStore":
        from reposync.resources import LocalResourceStore

        return LocalResourceStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
