# RepoSync Test Fixtures
# Pytest fixtures for RepoSync tests

import subprocess
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

import pytest
import yaml

from reposync.repository.types import FileInfo, RepositoryFileNotFoundError


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("REPOSYNC_CONFIG", raising=False)
    return home


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)
    return result.stdout.strip()


@pytest.fixture
def git_repo(temp_dir: Path) -> Path:
    """Create an empty git repository with a committer identity."""
    repo = temp_dir / "repo"
    repo.mkdir()
    _git(repo, "init", "--quiet")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def commit(git_repo: Path) -> Callable[..., str]:
    """
    Commit file changes to ``git_repo``.

    Returns a function taking a mapping of path to content (``None``
    deletes the file) and returning the new commit id.
    """

    def _commit(files: dict[str, Optional[str]], message: str = "update") -> str:
        for rel_path, content in files.items():
            target = git_repo / rel_path
            if content is None:
                _git(git_repo, "rm", "--quiet", rel_path)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            _git(git_repo, "add", rel_path)
        _git(git_repo, "commit", "--quiet", "--allow-empty", "-m", message)
        return _git(git_repo, "rev-parse", "HEAD")

    return _commit


@pytest.fixture
def progress() -> MagicMock:
    """Progress recorder mock with an unspent error budget and no failed directories."""
    recorder = MagicMock()
    recorder.too_many_errors.return_value = None
    recorder.has_dir_path_failed_creation.return_value = False
    recorder.has_dir_path_failed_deletion.return_value = False
    return recorder


@pytest.fixture
def resources() -> MagicMock:
    """Resource store mock."""
    return MagicMock()


@pytest.fixture
def repo() -> MagicMock:
    """Versioned repository mock."""
    return MagicMock()


class FakeRepository:
    """In-memory versioned repository keyed by (ref, path)."""

    def __init__(self):
        self.files: dict[tuple[str, str], bytes] = {}
        self.changes = []

    def add(self, ref: str, path: str, content: str) -> None:
        self.files[(ref, path)] = content.encode("utf-8")

    def compare_files(self, base: str, ref: str):
        return list(self.changes)

    def read(self, path: str, ref: str = "") -> FileInfo:
        if path.endswith("/"):
            if any(p.startswith(path) for (r, p) in self.files if r == ref):
                return FileInfo(path=path, ref=ref)
            raise RepositoryFileNotFoundError(path, ref)
        data = self.files.get((ref, path))
        if data is None:
            raise RepositoryFileNotFoundError(path, ref)
        return FileInfo(path=path, ref=ref, data=data, hash=str(hash(data)))


@pytest.fixture
def fake_repo() -> FakeRepository:
    """In-memory repository for resource store tests."""
    return FakeRepository()


@pytest.fixture
def sample_config(temp_home: Path, git_repo: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "repository": {
            "path": str(git_repo),
            "branch": "HEAD",
            "name": "provisioning",
        },
        "store": {
            "path": str(temp_home / ".config" / "reposync" / "store.yaml"),
        },
        "quota": {"max_resources": 0},
        "sync": {"max_errors": 20, "ignore": ["*.md"]},
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "reposync"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
