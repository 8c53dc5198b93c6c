# RepoSync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class RepositoryConfig(BaseModel):
    """Git repository that resources are provisioned from."""

    path: str = Field(description="Local git checkout path")
    branch: str = Field(default="HEAD", description="Branch that represents the current state")
    name: str | None = Field(default=None, description="Repository name (defaults to the directory name)")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())

    @property
    def display_name(self) -> str:
        """Name shown in output."""
        return self.name or Path(self.path).name


class StoreConfig(BaseModel):
    """Local resource store settings."""

    path: str = Field(default="~/.config/reposync/store.yaml", description="YAML file holding the resource store")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class QuotaConfig(BaseModel):
    """Resource quota settings."""

    max_resources: int = Field(default=0, ge=0, description="Maximum resources per repository, 0 = unlimited")


class SyncSettings(BaseModel):
    """Incremental sync behavior."""

    max_errors: int = Field(default=20, ge=1, description="Stop the sync after this many failed files")
    ignore: list[str] = Field(
        default_factory=lambda: ["*.md", "LICENSE*", ".github/**"],
        description="Glob patterns of files reported as ignored",
    )


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class ReposyncConfig(BaseModel):
    """Root configuration model for RepoSync."""

    repository: RepositoryConfig = Field(description="Repository settings")
    store: StoreConfig = Field(default_factory=StoreConfig, description="Resource store settings")
    quota: QuotaConfig = Field(default_factory=QuotaConfig, description="Quota settings")
    sync: SyncSettings = Field(default_factory=SyncSettings, description="Sync settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
