# RepoSync Git Module
# Git operations for reading versioned repositories

from reposync.git.operations import (
    EMPTY_TREE,
    GitError,
    diff_name_status,
    get_repo_root,
    is_git_repo,
    ls_tree,
    object_exists,
    rev_parse,
    show_file,
)

__all__ = [
    "EMPTY_TREE",
    "GitError",
    "get_repo_root",
    "is_git_repo",
    "rev_parse",
    "diff_name_status",
    "ls_tree",
    "object_exists",
    "show_file",
]
