# RepoSync Path Utilities
# Atomic writes and glob pattern matching

import fnmatch
import os
import tempfile
from pathlib import Path


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path object.
    """
    path_str = str(path)
    # Expand ~ first, then environment variables
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(path_str).resolve()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def matches_pattern(path: str, pattern: str) -> bool:
    """
    Check if a repository path matches a glob pattern.

    Supports:
    - * for any characters
    - ** for any path components
    - ? for single character
    - a bare name (no "/") matches the last path segment

    Args:
        path: Slash separated repository path.
        pattern: Glob pattern.

    Returns:
        True if path matches pattern.
    """
    if "**" in pattern:
        parts = pattern.split("**")
        if len(parts) == 2:
            prefix, suffix = parts
            if prefix and not fnmatch.fnmatchcase(path, f"{prefix}*"):
                return False
            if suffix:
                suffix = suffix.lstrip("/")
                if not fnmatch.fnmatchcase(path, f"*{suffix}"):
                    return False
            return True

    if "/" not in pattern:
        name = path.rstrip("/").rsplit("/", 1)[-1]
        return fnmatch.fnmatchcase(name, pattern)

    return fnmatch.fnmatchcase(path, pattern)


def matches_any_pattern(path: str, patterns: list[str]) -> bool:
    """
    Check if path matches any of the given patterns.

    Args:
        path: Path to check.
        patterns: List of glob patterns.

    Returns:
        True if path matches any pattern.
    """
    return any(matches_pattern(path, p) for p in patterns)
