# RepoSync Console Output
# Rich-based console output for user-friendly display

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from reposync.jobs.progress import JobState, JobStatus
from reposync.jobs.results import JobResourceResult
from reposync.repository.types import FileAction, VersionedFileChange
from reposync.resources.store import StoredResource
from reposync.sync.condition import Condition


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, console: Optional[RichConsole] = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            console: Optional Rich console to write to.
        """
        self.verbose = verbose
        self._console = console or RichConsole(no_color=not colored, highlight=False)

    @property
    def rich(self) -> RichConsole:
        """Underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def _get_action_icon(self, action: FileAction) -> str:
        """Get icon for a file action."""
        icons = {
            FileAction.CREATED: "[green]+[/green]",
            FileAction.UPDATED: "[yellow]~[/yellow]",
            FileAction.DELETED: "[red]×[/red]",
            FileAction.RENAMED: "[cyan]→[/cyan]",
            FileAction.IGNORED: "[dim]○[/dim]",
        }
        return icons.get(action, "?")

    def print_changes(self, changes: list[VersionedFileChange]) -> None:
        """
        Print a change list in the order it will be applied.

        Args:
            changes: Sorted changes.
        """
        if not changes:
            self._console.print("[dim]No changes[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("", justify="center")
        table.add_column("Action")
        table.add_column("Path", style="cyan")
        table.add_column("From", style="dim")

        for change in changes:
            table.add_row(
                self._get_action_icon(change.action),
                change.action.value,
                change.path,
                change.previous_path if change.action == FileAction.RENAMED else "",
            )

        self._console.print(table)

    def print_results(self, results: list[JobResourceResult]) -> None:
        """
        Print per-file results.

        Only failed and warned results are shown unless verbose.

        Args:
            results: Results in the order they were recorded.
        """
        for result in results:
            icon = self._get_action_icon(result.action)
            label = f"{result.kind}/{result.name}" if result.name else result.path

            if result.error is not None:
                self._console.print(f"    [red]✗[/red] {escape(result.path)}: {escape(str(result.error))}")
            elif result.warning is not None:
                self._console.print(f"    [yellow]⚠[/yellow] {escape(result.path)}: {escape(str(result.warning))}")
            elif self.verbose:
                self._console.print(f"    {icon} {escape(label)} [dim]({result.action.value})[/dim]")

    def print_job_status(self, status: JobStatus, condition: Optional[Condition] = None) -> None:
        """
        Print the job summary panel.

        Args:
            status: Aggregated job status.
            condition: Optional pull condition to show.
        """
        border = {
            JobState.SUCCESS: "green",
            JobState.WARNING: "yellow",
            JobState.ERROR: "red",
        }[status.state]

        counts = ", ".join(f"{count} {action}" for action, count in sorted(status.summary.items())) or "nothing"
        lines = [
            f"[{border}]{escape(status.message)}[/{border}]",
            f"Changes: {status.processed}/{status.total} processed ({counts})",
            f"Errors: {len(status.errors)}, Warnings: {len(status.warnings)}",
        ]
        if condition is not None:
            lines.append(f"Condition: {condition.reason} - {condition.message}")

        self._console.print()
        self._console.print(Panel("\n".join(lines), title="Sync Summary", border_style=border))

    def print_store_status(
        self,
        repository: str,
        last_ref: Optional[str],
        resources: list[StoredResource],
        limit: int,
    ) -> None:
        """
        Print what the resource store holds for a repository.

        Args:
            repository: Repository display name.
            last_ref: Last synced revision.
            resources: Stored resources.
            limit: Quota limit (0 = unlimited).
        """
        quota = f"{len(resources)}/{limit}" if limit else f"{len(resources)} (unlimited)"
        self._console.print(
            Panel(
                f"Repository: {repository}\nLast synced ref: {last_ref or 'never'}\nResources: {quota}",
                title="RepoSync Status",
                border_style="blue",
            )
        )

        if not self.verbose or not resources:
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Kind")
        table.add_column("Name", style="cyan")
        table.add_column("Path", style="dim")
        for resource in resources:
            table.add_row(resource.kind, resource.name, resource.path)
        self._console.print(table)


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
