# RepoSync Git Operations
# Git command execution for reading revisions and diffs

import subprocess
from pathlib import Path
from typing import Optional

# Object id of git's empty tree, usable as the base of a first diff
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class GitError(Exception):
    """Exception raised for git operation errors."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def _run_git(
    *args: str,
    cwd: Optional[Path] = None,
    check: bool = True,
    text: bool = True,
) -> subprocess.CompletedProcess:
    """
    Run a git command.

    Args:
        *args: Git command arguments.
        cwd: Working directory.
        check: Whether to raise on non-zero exit.
        text: Decode stdout/stderr as text. Use False for blob content.

    Returns:
        CompletedProcess with result.

    Raises:
        GitError: If command fails and check is True.
    """
    cmd = ["git", *args]
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            capture_output=True,
            text=text,
        )
    except FileNotFoundError:
        raise GitError("git command not found. Is git installed?")

    if check and result.returncode != 0:
        stderr = result.stderr
        if isinstance(stderr, bytes):
            stderr = stderr.decode("utf-8", errors="replace")
        raise GitError(
            f"Git command failed: {' '.join(cmd)}",
            returncode=result.returncode,
            stderr=stderr.strip() if stderr else "",
        )
    return result


def get_repo_root(path: Optional[Path] = None) -> Optional[Path]:
    """
    Get the root directory of a git repository.

    Args:
        path: Starting path (defaults to current directory).

    Returns:
        Path to repo root, or None if not in a repo.
    """
    try:
        result = _run_git("rev-parse", "--show-toplevel", cwd=path)
        return Path(result.stdout.strip())
    except GitError:
        return None


def is_git_repo(path: Optional[Path] = None) -> bool:
    """
    Check if path is within a git repository.

    Args:
        path: Path to check (defaults to current directory).

    Returns:
        True if in a git repo.
    """
    return get_repo_root(path) is not None


def rev_parse(ref: str, path: Optional[Path] = None) -> str:
    """
    Resolve a ref to its object id.

    Args:
        ref: Branch, tag, commit or tree-ish.
        path: Repository path.

    Returns:
        Full object id.

    Raises:
        GitError: If the ref cannot be resolved.
    """
    result = _run_git("rev-parse", "--verify", "--quiet", f"{ref}^{{object}}", cwd=path)
    return result.stdout.strip()


def diff_name_status(base: str, ref: str, path: Optional[Path] = None) -> list[tuple[str, list[str]]]:
    """
    List file changes between two revisions with rename detection.

    Args:
        base: Base revision.
        ref: Target revision.
        path: Repository path.

    Returns:
        List of (status, paths) tuples. Renames and copies carry
        two paths (old, new), everything else one.
    """
    result = _run_git("diff", "--name-status", "-z", "-M", base, ref, cwd=path)

    tokens = result.stdout.split("\0")
    entries: list[tuple[str, list[str]]] = []
    i = 0
    while i < len(tokens):
        status = tokens[i]
        if not status:
            i += 1
            continue
        # R<score> and C<score> are followed by source and destination
        count = 2 if status[0] in ("R", "C") else 1
        paths = tokens[i + 1 : i + 1 + count]
        entries.append((status, paths))
        i += 1 + count

    return entries


def ls_tree(ref: str, tree_path: str, path: Optional[Path] = None) -> list[str]:
    """
    List entries below a directory at a revision.

    Args:
        ref: Revision to inspect.
        tree_path: Directory path, with trailing slash.
        path: Repository path.

    Returns:
        Entry names; empty if the directory does not exist.
    """
    result = _run_git("ls-tree", "--name-only", ref, "--", tree_path, cwd=path)
    return [line for line in result.stdout.splitlines() if line]


def object_exists(ref: str, file_path: str, path: Optional[Path] = None) -> bool:
    """Check whether a file exists at a revision."""
    result = _run_git("cat-file", "-e", f"{ref}:{file_path}", cwd=path, check=False)
    return result.returncode == 0


def show_file(ref: str, file_path: str, path: Optional[Path] = None) -> bytes:
    """
    Read file content at a revision.

    Args:
        ref: Revision to read from.
        file_path: Path of the file inside the repository.
        path: Repository path.

    Returns:
        Raw file content.

    Raises:
        GitError: If the object cannot be read.
    """
    result = _run_git("cat-file", "blob", f"{ref}:{file_path}", cwd=path, text=False)
    return result.stdout
