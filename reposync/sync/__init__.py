# RepoSync Sync Module
# Incremental replay of repository diffs

from reposync.sync.condition import Condition, evaluate_pull_condition
from reposync.sync.incremental import (
    ACTION_PRIORITY,
    SyncCancelledError,
    SyncError,
    incremental_sync,
    sort_changes_by_action_priority,
)

__all__ = [
    # Engine
    "incremental_sync",
    "sort_changes_by_action_priority",
    "ACTION_PRIORITY",
    "SyncError",
    "SyncCancelledError",
    # Condition
    "Condition",
    "evaluate_pull_condition",
]
