# RepoSync Safe Paths
# Slash separated repository path helpers


def split(path: str) -> list[str]:
    """Split a repository path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def is_dir(path: str) -> bool:
    """Directory paths carry a trailing slash."""
    return path.endswith("/")


def dir_of(path: str) -> str:
    """
    Return the parent directory of a path, with a trailing slash.

    ``dashboards/team/a.json`` -> ``dashboards/team/``. A directory path
    returns its own parent. Top level entries return ``""``.
    """
    segments = split(path)
    if len(segments) <= 1:
        return ""
    return "/".join(segments[:-1]) + "/"


def is_hidden(path: str) -> bool:
    """True when any segment of the path starts with a dot."""
    return any(segment.startswith(".") for segment in split(path))


def ancestors(path: str) -> list[str]:
    """
    List every directory on the way to ``path``, outermost first.

    ``a/b/c/`` -> ``["a/", "a/b/", "a/b/c/"]``. For a file path the
    file itself is not included.
    """
    segments = split(path)
    if not is_dir(path):
        segments = segments[:-1]
    return ["/".join(segments[: i + 1]) + "/" for i in range(len(segments))]
