"""Click-based CLI for RepoSync - incremental repository to resource store sync."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console as RichConsole
from rich.logging import RichHandler

from reposync import __version__
from reposync.config import (
    ReposyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from reposync.git import EMPTY_TREE, GitError
from reposync.jobs import JobProgressRecorder, JobState
from reposync.output import Console, create_console
from reposync.quotas import InMemoryQuotaTracker
from reposync.repository import FileAction, GitRepository, can_use_incremental_sync
from reposync.resources import LocalResourceStore
from reposync.sync import evaluate_pull_condition, incremental_sync, sort_changes_by_action_priority


def _setup_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=RichConsole(stderr=True), show_path=False)],
        force=True,
    )


def _load(ctx: click.Context) -> tuple[ReposyncConfig, Console]:
    """Load configuration or exit with a readable error."""
    console: Console = ctx.obj["console"]
    try:
        config = load_config(ctx.obj["config_path"])
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)
    except (ValidationError, yaml.YAMLError) as e:
        console.print_error(f"Invalid configuration: {e}")
        sys.exit(1)

    if not config.output.colored:
        console = create_console(verbose=console.verbose, colored=False)
        ctx.obj["console"] = console
    if config.output.verbose and not console.verbose:
        console.verbose = True
    return config, console


def _open(config: ReposyncConfig) -> tuple[GitRepository, LocalResourceStore]:
    repo = GitRepository(
        Path(config.repository.path),
        branch=config.repository.branch,
        ignore=config.sync.ignore,
    )
    return repo, LocalResourceStore(repo, Path(config.store.path))


@click.group()
@click.version_option(version=__version__, prog_name="reposync")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool, no_color: bool) -> None:
    """RepoSync - replicate a git repository into a resource store.

    Replays the diff between the last synced commit and the branch head,
    honoring the resource quota and cleaning up folders whose directory
    disappeared.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["console"] = create_console(verbose=verbose, colored=not no_color)
    _setup_logging(verbose)


@cli.command()
@click.option("--from", "from_ref", help="Previous revision (default: last synced revision)")
@click.option("--to", "to_ref", help="Target revision (default: branch head)")
@click.pass_context
def sync(ctx: click.Context, from_ref: Optional[str], to_ref: Optional[str]) -> None:
    """Synchronize the resource store with the repository.

    Only files changed since the last sync are replayed.
    """
    config, console = _load(ctx)
    repo, store = _open(config)

    try:
        current_ref = to_ref or repo.latest_ref()
    except GitError as e:
        console.print_error(f"Cannot resolve {config.repository.branch}: {e.stderr or e.message}")
        sys.exit(1)
    previous_ref = from_ref or store.last_ref or EMPTY_TREE

    console.print_info(f"Syncing {config.repository.display_name}: {previous_ref[:12]}..{current_ref[:12]}")

    quota = InMemoryQuotaTracker(store.count(), config.quota.max_resources)
    progress = JobProgressRecorder(max_errors=config.sync.max_errors)

    error: Optional[Exception] = None
    try:
        incremental_sync(repo, previous_ref, current_ref, store, progress, quota)
    except Exception as e:
        error = e

    status = progress.complete(error)
    if status.state != JobState.ERROR:
        store.set_last_ref(current_ref)

    console.print_results(progress.results)
    console.print_job_status(status, evaluate_pull_condition(status.state, status.reasons))

    if status.state == JobState.ERROR:
        sys.exit(1)


@cli.command()
@click.option("--from", "from_ref", help="Previous revision (default: last synced revision)")
@click.option("--to", "to_ref", help="Target revision (default: branch head)")
@click.pass_context
def plan(ctx: click.Context, from_ref: Optional[str], to_ref: Optional[str]) -> None:
    """Show the changes a sync would replay, in order."""
    config, console = _load(ctx)
    repo, store = _open(config)

    try:
        current_ref = to_ref or repo.latest_ref()
        previous_ref = from_ref or store.last_ref or EMPTY_TREE
        changes = [] if previous_ref == current_ref else repo.compare_files(previous_ref, current_ref)
    except GitError as e:
        console.print_error(e.stderr or e.message)
        sys.exit(1)

    console.print_changes(sort_changes_by_action_priority(changes))

    deleted = [c.path for c in changes if c.action == FileAction.DELETED]
    if not can_use_incremental_sync(deleted):
        console.print_warning("A folder marker was deleted on its own; its folder will not be cleaned up incrementally")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show what the resource store holds."""
    config, console = _load(ctx)
    _, store = _open(config)

    console.print_store_status(
        config.repository.display_name,
        store.last_ref,
        store.list_resources(),
        config.quota.max_resources,
    )


@cli.group()
def config() -> None:
    """Manage RepoSync configuration."""


@config.command("init")
@click.pass_context
def config_init(ctx: click.Context) -> None:
    """Create a default configuration file."""
    console: Console = ctx.obj["console"]
    path, created = ensure_config_exists(ctx.obj["config_path"])
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration."""
    cfg, console = _load(ctx)
    console.print(yaml.dump(cfg.model_dump(exclude_none=True, mode="json"), sort_keys=False), markup=False)


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file."""
    console: Console = ctx.obj["console"]
    path = ctx.obj["config_path"] or get_config_path()
    valid, errors = validate_config_file(path)

    if valid:
        console.print_success(f"Configuration is valid: {path}")
        return

    console.print_error(f"Configuration is invalid: {path}")
    for message in errors:
        console.print(f"  • {message}", markup=False)
    sys.exit(1)


if __name__ == "__main__":
    cli()
