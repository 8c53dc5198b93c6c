# RepoSync Pull Condition
# Map a finished job to the repository's pull status condition

from dataclasses import dataclass

from reposync.jobs.progress import (
    REASON_COMPLETED_WITH_WARNINGS,
    REASON_FAILURE,
    REASON_QUOTA_EXCEEDED,
    REASON_SUCCESS,
    JobState,
)

CONDITION_TYPE_PULL_STATUS = "PullStatus"


@dataclass(frozen=True)
class Condition:
    """Status condition reported for a repository."""

    type: str
    status: bool
    reason: str
    message: str


def evaluate_pull_condition(state: JobState, reasons: list[str]) -> Condition:
    """
    Build the PullStatus condition for the outcome of a pull.

    Args:
        state: Final job state.
        reasons: Warning reasons collected while syncing.

    Returns:
        Condition describing the pull.
    """
    if state == JobState.SUCCESS:
        return Condition(
            type=CONDITION_TYPE_PULL_STATUS,
            status=True,
            reason=REASON_SUCCESS,
            message="Pull completed successfully",
        )

    if state == JobState.WARNING:
        reason, message = _resolve_warnings(reasons)
        return Condition(type=CONDITION_TYPE_PULL_STATUS, status=False, reason=reason, message=message)

    return Condition(
        type=CONDITION_TYPE_PULL_STATUS,
        status=False,
        reason=REASON_FAILURE,
        message="Pull completed with errors",
    )


def _resolve_warnings(reasons: list[str]) -> tuple[str, str]:
    """Quota warnings take precedence over generic ones."""
    if REASON_QUOTA_EXCEEDED in reasons:
        return REASON_QUOTA_EXCEEDED, "Pull completed with quota exceeded"
    return REASON_COMPLETED_WITH_WARNINGS, "Pull completed with warnings"
