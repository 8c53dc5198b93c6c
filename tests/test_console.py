# Tests for reposync.output.console
# Rich-based console output

from io import StringIO

from rich.console import Console as RichConsole

from reposync.jobs import JobResourceResult, JobState, JobStatus, QuotaExceededError
from reposync.output.console import Console, create_console
from reposync.repository import FileAction, VersionedFileChange
from reposync.resources import StoredResource
from reposync.sync import evaluate_pull_condition


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    return Console(verbose=verbose, console=RichConsole(file=StringIO(), no_color=True, width=200))


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console.rich.file.seek(0)
    return console.rich.file.read()


class TestConsoleBasic:
    """Tests for basic console methods."""

    def test_print(self):
        c = _make_console()
        c.print("hello world")
        assert "hello world" in _get_output(c)

    def test_print_error(self):
        c = _make_console()
        c.print_error("something failed")
        output = _get_output(c)
        assert "Error:" in output
        assert "something failed" in output

    def test_print_warning(self):
        c = _make_console()
        c.print_warning("be careful")
        output = _get_output(c)
        assert "Warning:" in output
        assert "be careful" in output

    def test_print_success(self):
        c = _make_console()
        c.print_success("all good")
        assert "all good" in _get_output(c)

    def test_create_console(self):
        c = create_console(verbose=True, colored=False)
        assert c.verbose is True
        assert c.rich.no_color is True


class TestConsoleActionIcons:
    """Tests for action icon mapping."""

    def test_all_actions_have_icons(self):
        c = _make_console()
        for action in FileAction:
            assert c._get_action_icon(action) != "?"


class TestConsoleChanges:
    """Tests for change list display."""

    def test_no_changes(self):
        c = _make_console()
        c.print_changes([])
        assert "No changes" in _get_output(c)

    def test_changes_table(self):
        c = _make_console()
        c.print_changes(
            [
                VersionedFileChange(action=FileAction.DELETED, path="dashboards/old.json"),
                VersionedFileChange(action=FileAction.RENAMED, path="b/x.json", previous_path="a/x.json"),
            ]
        )
        output = _get_output(c)
        assert "dashboards/old.json" in output
        assert "a/x.json" in output
        assert "renamed" in output


class TestConsoleResults:
    """Tests for per-file result display."""

    def test_shows_errors_and_warnings(self):
        c = _make_console()
        c.print_results(
            [
                JobResourceResult.path_only("ok.json", FileAction.CREATED),
                JobResourceResult.path_only("bad.json", FileAction.UPDATED, error=ValueError("parse [failed]")),
                JobResourceResult.path_only(
                    "full.json", FileAction.IGNORED, warning=QuotaExceededError("full.json")
                ),
            ]
        )
        output = _get_output(c)
        assert "ok.json" not in output
        assert "bad.json: parse [failed]" in output
        assert "resource quota exceeded" in output

    def test_verbose_shows_everything(self):
        c = _make_console(verbose=True)
        c.print_results([JobResourceResult.folder("team/", FileAction.CREATED)])
        assert "team/" in _get_output(c)


class TestConsoleJobStatus:
    """Tests for the summary panel."""

    def test_success_panel(self):
        c = _make_console()
        status = JobStatus(
            state=JobState.SUCCESS,
            message="versioned changes replicated",
            total=2,
            processed=2,
            summary={"created": 1, "updated": 1},
        )
        c.print_job_status(status, evaluate_pull_condition(status.state, status.reasons))
        output = _get_output(c)
        assert "Sync Summary" in output
        assert "versioned changes replicated" in output
        assert "2/2 processed" in output
        assert "Success" in output

    def test_error_panel(self):
        c = _make_console()
        status = JobStatus(state=JobState.ERROR, message="too many errors: 20", errors=["a", "b"])
        c.print_job_status(status)
        output = _get_output(c)
        assert "too many errors: 20" in output
        assert "Errors: 2" in output


class TestConsoleStoreStatus:
    """Tests for store status display."""

    def test_store_status(self):
        c = _make_console(verbose=True)
        resources = [StoredResource(name="abc", group="g", version="v1", kind="Dashboard", path="a.json")]
        c.print_store_status("provisioning", "abc123", resources, 10)
        output = _get_output(c)
        assert "provisioning" in output
        assert "abc123" in output
        assert "1/10" in output
        assert "Dashboard" in output

    def test_never_synced_unlimited(self):
        c = _make_console()
        c.print_store_status("provisioning", None, [], 0)
        output = _get_output(c)
        assert "never" in output
        assert "unlimited" in output
