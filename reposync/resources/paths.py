# RepoSync Resource Paths
# Which repository paths can hold resources and folders

from reposync.repository import safepath

SUPPORTED_EXTENSIONS = (".json", ".yaml", ".yml")


def is_path_supported(path: str) -> bool:
    """
    Check if a file path can define a resource.

    Args:
        path: Repository file path.

    Returns:
        True for json/yaml files outside hidden directories.
    """
    if safepath.is_dir(path) or safepath.is_hidden(path):
        return False
    return path.lower().endswith(SUPPORTED_EXTENSIONS)


def folder_path_for(path: str) -> str:
    """
    Return the directory a file should materialize as a folder.

    Args:
        path: Repository file path.

    Returns:
        Parent directory with trailing slash, or "" when the file sits at
        the repository root or below a hidden directory.
    """
    directory = safepath.dir_of(path)
    if not directory or safepath.is_hidden(directory):
        return ""
    return directory
