# Tests for reposync.jobs
# Job results, progress recording and status aggregation

from reposync.jobs import (
    JobProgressRecorder,
    JobResourceResult,
    JobState,
    QuotaExceededError,
    TooManyErrorsError,
)
from reposync.jobs.progress import REASON_COMPLETED_WITH_WARNINGS, REASON_QUOTA_EXCEEDED
from reposync.repository import FileAction
from reposync.resources import FOLDER_KIND, GroupVersionKind

DASHBOARD = GroupVersionKind(group="dashboards", version="v1", kind="Dashboard")


class TestJobResourceResult:
    """Tests for JobResourceResult constructors."""

    def test_path_only(self):
        result = JobResourceResult.path_only("a/b.txt", FileAction.IGNORED)
        assert result.path == "a/b.txt"
        assert result.name == ""
        assert result.kind == ""
        assert not result.is_folder

    def test_folder(self):
        result = JobResourceResult.folder("a/", FileAction.CREATED)
        assert result.group == FOLDER_KIND.group
        assert result.kind == "Folder"
        assert result.is_folder

    def test_for_resource(self):
        result = JobResourceResult.for_resource("dash", DASHBOARD, "a/dash.json", FileAction.UPDATED)
        assert (result.name, result.group, result.kind) == ("dash", "dashboards", "Dashboard")

    def test_for_resource_without_gvk(self):
        result = JobResourceResult.for_resource("", None, "a/dash.json", FileAction.CREATED, error=ValueError("x"))
        assert result.group == ""
        assert str(result.error) == "x"

    def test_quota_warning_message(self):
        assert str(QuotaExceededError("dashboards/test.json")) == (
            "resource quota exceeded, skipping creation of dashboards/test.json"
        )


class TestJobProgressRecorder:
    """Tests for JobProgressRecorder."""

    def test_records_in_order(self):
        progress = JobProgressRecorder()
        progress.record(JobResourceResult.path_only("a.json", FileAction.CREATED))
        progress.record(JobResourceResult.path_only("b.json", FileAction.UPDATED))
        assert [r.path for r in progress.results] == ["a.json", "b.json"]

    def test_messages(self):
        progress = JobProgressRecorder()
        progress.set_total(3)
        progress.set_message("replicating versioned changes")
        progress.set_final_message("same commit as last time")
        assert progress.total == 3
        assert progress.message == "replicating versioned changes"
        assert progress.final_message == "same commit as last time"

    def test_too_many_errors(self):
        progress = JobProgressRecorder(max_errors=2)
        failed = JobResourceResult.path_only("a/x.json", FileAction.UPDATED, error=ValueError("boom"))

        progress.record(failed)
        assert progress.too_many_errors() is None

        progress.record(failed)
        err = progress.too_many_errors()
        assert isinstance(err, TooManyErrorsError)
        assert str(err) == "too many errors: 2"

    def test_warnings_do_not_count_as_errors(self):
        progress = JobProgressRecorder(max_errors=1)
        progress.record(
            JobResourceResult.path_only("a.json", FileAction.IGNORED, warning=QuotaExceededError("a.json"))
        )
        assert progress.too_many_errors() is None

    def test_failed_folder_creation(self):
        progress = JobProgressRecorder()
        progress.record(JobResourceResult.folder("team/", FileAction.CREATED, error=ValueError("denied")))

        assert progress.has_dir_path_failed_creation("team/a.json")
        assert progress.has_dir_path_failed_creation("team/nested/b.json")
        assert not progress.has_dir_path_failed_creation("other/a.json")

    def test_failed_creation_from_ignored_file(self):
        progress = JobProgressRecorder()
        progress.record(JobResourceResult.path_only("team/a.txt", FileAction.IGNORED, error=ValueError("denied")))

        assert progress.has_dir_path_failed_creation("team/b.json")

    def test_failed_write_does_not_mark_directory(self):
        progress = JobProgressRecorder()
        progress.record(JobResourceResult.for_resource("", None, "team/a.json", FileAction.CREATED, error=ValueError()))

        assert not progress.has_dir_path_failed_creation("team/b.json")

    def test_failed_deletion(self):
        progress = JobProgressRecorder()
        progress.record(
            JobResourceResult.for_resource("", None, "team/nested/a.json", FileAction.DELETED, error=ValueError())
        )

        assert progress.has_dir_path_failed_deletion("team/nested/")
        assert progress.has_dir_path_failed_deletion("team/")
        assert not progress.has_dir_path_failed_deletion("other/")

    def test_complete_success(self):
        progress = JobProgressRecorder()
        progress.set_total(1)
        progress.set_message("versioned changes replicated")
        progress.record(JobResourceResult.for_resource("dash", DASHBOARD, "a.json", FileAction.CREATED))

        status = progress.complete()
        assert status.state == JobState.SUCCESS
        assert status.message == "versioned changes replicated"
        assert status.processed == 1
        assert status.summary == {"created": 1}
        assert not status.has_issues

    def test_complete_final_message(self):
        progress = JobProgressRecorder()
        progress.set_final_message("same commit as last time")
        status = progress.complete()
        assert status.state == JobState.SUCCESS
        assert status.message == "same commit as last time"

    def test_complete_quota_warning(self):
        progress = JobProgressRecorder()
        progress.record(
            JobResourceResult.path_only("a.json", FileAction.IGNORED, warning=QuotaExceededError("a.json"))
        )
        progress.record(JobResourceResult.path_only("b.json", FileAction.IGNORED, warning=ValueError("odd")))

        status = progress.complete()
        assert status.state == JobState.WARNING
        assert status.reasons == [REASON_QUOTA_EXCEEDED, REASON_COMPLETED_WITH_WARNINGS]
        assert len(status.warnings) == 2

    def test_complete_with_errors(self):
        progress = JobProgressRecorder()
        progress.record(JobResourceResult.path_only("a.json", FileAction.UPDATED, error=ValueError("boom")))

        status = progress.complete()
        assert status.state == JobState.ERROR
        assert status.errors == ["a.json: boom"]

    def test_complete_with_abort_error(self):
        progress = JobProgressRecorder()
        status = progress.complete(RuntimeError("compare files error: bad ref"))
        assert status.state == JobState.ERROR
        assert status.message == "compare files error: bad ref"
        assert status.errors == ["compare files error: bad ref"]
