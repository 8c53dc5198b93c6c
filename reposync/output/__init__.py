# RepoSync Output Module
# Console display for sync plans and results

from reposync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
