# RepoSync Repository Workflows
# Decide whether a diff can be replayed incrementally

from reposync.repository import safepath

KEEP_FILE = ".keep"


def can_use_incremental_sync(deleted_paths: list[str]) -> bool:
    """
    Check whether an incremental sync can handle a set of deletions.

    A deleted ``.keep`` marker is not a resource, so its folder uid cannot be
    resolved from the diff. When no other file was deleted in the same
    directory the folder would be left behind and a full sync is needed.

    Args:
        deleted_paths: Paths deleted between the two revisions.

    Returns:
        False if a full sync is required.
    """
    dirs_with_keep_deletes: set[str] = set()
    dirs_with_other_deletes: set[str] = set()

    for path in deleted_paths:
        directory = safepath.dir_of(path)
        if path.endswith(KEEP_FILE):
            dirs_with_keep_deletes.add(directory)
        else:
            dirs_with_other_deletes.add(directory)

    return dirs_with_keep_deletes <= dirs_with_other_deletes
