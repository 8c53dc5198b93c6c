# RepoSync Jobs Module
# Per-change results and progress recording for sync jobs

from reposync.jobs.progress import (
    DEFAULT_MAX_ERRORS,
    JobProgressRecorder,
    JobState,
    JobStatus,
    ProgressRecorder,
    TooManyErrorsError,
)
from reposync.jobs.results import JobResourceResult, QuotaExceededError

__all__ = [
    # Results
    "JobResourceResult",
    "QuotaExceededError",
    # Progress
    "ProgressRecorder",
    "JobProgressRecorder",
    "JobState",
    "JobStatus",
    "TooManyErrorsError",
    "DEFAULT_MAX_ERRORS",
]
