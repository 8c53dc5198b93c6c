# RepoSync Job Progress
# Progress recording, error budget and job status aggregation

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from reposync.jobs.results import JobResourceResult, QuotaExceededError
from reposync.repository import safepath
from reposync.repository.types import FileAction

logger = logging.getLogger(__name__)

DEFAULT_MAX_ERRORS = 20

REASON_SUCCESS = "Success"
REASON_FAILURE = "Failure"
REASON_QUOTA_EXCEEDED = "QuotaExceeded"
REASON_COMPLETED_WITH_WARNINGS = "CompletedWithWarnings"


class JobState(str, Enum):
    """Final state of a sync job."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class TooManyErrorsError(Exception):
    """Raised to stop a sync once the error budget is spent."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"too many errors: {count}")


class ProgressRecorder(Protocol):
    """What the sync engine reports progress to."""

    def set_total(self, total: int) -> None: ...

    def set_message(self, message: str) -> None: ...

    def set_final_message(self, message: str) -> None: ...

    def record(self, result: JobResourceResult) -> None: ...

    def too_many_errors(self) -> Optional[Exception]: ...

    def has_dir_path_failed_creation(self, path: str) -> bool: ...

    def has_dir_path_failed_deletion(self, dir_path: str) -> bool: ...


@dataclass
class JobStatus:
    """Aggregated outcome of a sync job."""

    state: JobState
    message: str = ""
    total: int = 0
    processed: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        """Check if there are any errors or warnings."""
        return bool(self.errors or self.warnings)


class JobProgressRecorder:
    """
    Progress recorder for one sync invocation.

    Besides collecting results it remembers which directories failed to be
    created or cleaned up during the pass, so later changes under the same
    directory are not retried.
    """

    def __init__(self, max_errors: int = DEFAULT_MAX_ERRORS):
        """
        Initialize progress recorder.

        Args:
            max_errors: Error count at which ``too_many_errors`` trips.
        """
        self.max_errors = max_errors
        self.total = 0
        self.message = ""
        self.final_message = ""
        self.results: list[JobResourceResult] = []

        self._lock = threading.Lock()
        self._error_count = 0
        self._failed_creations: set[str] = set()
        self._failed_deletions: set[str] = set()

    def set_total(self, total: int) -> None:
        """Set the number of changes to process."""
        self.total = total

    def set_message(self, message: str) -> None:
        """Set the current progress message."""
        logger.info(message)
        self.message = message

    def set_final_message(self, message: str) -> None:
        """Set the message describing the finished job."""
        logger.info(message)
        self.final_message = message

    def record(self, result: JobResourceResult) -> None:
        """
        Record the result of one change.

        Args:
            result: Outcome to record.
        """
        with self._lock:
            self.results.append(result)
            if result.error is not None:
                self._error_count += 1
                self._mark_failed_dir(result)

        if result.error is not None:
            logger.warning("%s %s failed: %s", result.action.value, result.path, result.error)
        elif result.warning is not None:
            logger.warning("%s %s: %s", result.action.value, result.path, result.warning)
        else:
            logger.debug("%s %s", result.action.value, result.path)

    def _mark_failed_dir(self, result: JobResourceResult) -> None:
        """Remember the directory a failed result belongs to."""
        if result.is_folder:
            directory = result.path if safepath.is_dir(result.path) else result.path + "/"
        else:
            directory = safepath.dir_of(result.path)

        if not directory:
            return

        if result.action == FileAction.DELETED:
            self._failed_deletions.add(directory)
        elif result.is_folder or result.action == FileAction.IGNORED:
            self._failed_creations.add(directory)

    def has_dir_path_failed_creation(self, path: str) -> bool:
        """
        Check if the directory of ``path`` (or one of its parents) failed creation.

        Args:
            path: File or directory path.

        Returns:
            True if the folder could not be created earlier in this pass.
        """
        with self._lock:
            return any(d in self._failed_creations for d in safepath.ancestors(path))

    def has_dir_path_failed_deletion(self, dir_path: str) -> bool:
        """
        Check if a deletion failed in ``dir_path`` or anywhere beneath it.

        Args:
            dir_path: Directory path with trailing slash.

        Returns:
            True if the folder may still own resources.
        """
        with self._lock:
            return any(d.startswith(dir_path) for d in self._failed_deletions)

    def too_many_errors(self) -> Optional[Exception]:
        """
        Check the error budget.

        Returns:
            TooManyErrorsError once ``max_errors`` results failed, else None.
        """
        with self._lock:
            if self._error_count >= self.max_errors:
                return TooManyErrorsError(self._error_count)
        return None

    def complete(self, err: Optional[BaseException] = None) -> JobStatus:
        """
        Aggregate recorded results into a job status.

        Args:
            err: Error that aborted the sync, if any.

        Returns:
            JobStatus with state, messages and reasons.
        """
        with self._lock:
            results = list(self.results)

        errors = [f"{r.path}: {r.error}" for r in results if r.error is not None]
        warnings = [f"{r.path}: {r.warning}" for r in results if r.warning is not None]
        summary = dict(Counter(r.action.value for r in results))

        reasons: list[str] = []
        for r in results:
            if r.warning is None:
                continue
            reason = REASON_QUOTA_EXCEEDED if isinstance(r.warning, QuotaExceededError) else REASON_COMPLETED_WITH_WARNINGS
            if reason not in reasons:
                reasons.append(reason)

        if err is not None:
            state = JobState.ERROR
            message = str(err)
            errors.insert(0, message)
        elif errors:
            state = JobState.ERROR
            message = self.final_message or f"completed with {len(errors)} error(s)"
        elif warnings:
            state = JobState.WARNING
            message = self.final_message or f"completed with {len(warnings)} warning(s)"
        else:
            state = JobState.SUCCESS
            message = self.final_message or self.message

        return JobStatus(
            state=state,
            message=message,
            total=self.total,
            processed=len(results),
            errors=errors,
            warnings=warnings,
            reasons=reasons,
            summary=summary,
        )
