"""Configuration for issue download and triage reporting.

Settings are read from an optional YAML file and validated with pydantic.
Anything not present in the file falls back to the defaults below.
"""

import os
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_ENDPOINT = "https://api.github.com/graphql"


class RepositoryRef(BaseModel):
    """A single repository to download issues from."""

    owner: str = Field(..., description="Repository owner (user or organization)")
    name: str = Field(..., description="Repository name")

    @classmethod
    def parse(cls, value: str) -> "RepositoryRef":
        """Parse an ``owner/name`` string."""
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(
                f"Invalid repository '{value}'. Expected format: owner/name"
            )
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class LabelRules(BaseModel):
    """Label naming conventions used to derive area and bug flags."""

    area_prefix: str = Field(
        "area/", description="Prefix identifying an area label (e.g. 'area/')"
    )
    bug_label: str = Field("t/bug", description="Exact name of the bug label")

    def is_area_label(self, name: str) -> bool:
        return name.startswith(self.area_prefix)

    def is_bug_label(self, name: str) -> bool:
        return name == self.bug_label


class MilestoneRules(BaseModel):
    """Rules for classifying milestones as GA (target) or future."""

    target_prefix: str | None = Field(
        "6.0", description="Observed milestones starting with this are GA targets"
    )
    target_exclude: list[str] = Field(
        default_factory=lambda: ["servicing"],
        description="Substrings that disqualify a milestone from the GA set",
    )
    target_names: list[str] = Field(
        default_factory=list, description="Milestones always treated as GA targets"
    )
    future_names: list[str] = Field(
        default_factory=lambda: [".NET 7", "Future"],
        description="Milestones treated as future work",
    )


class ReportSettings(BaseModel):
    """Settings for the analysis phase."""

    start_date: date = Field(
        date(2021, 6, 1), description="First day of the weekly open/closed buckets"
    )
    category_labels: list[str] = Field(
        default_factory=list,
        description="Labels to break down weekly opened counts by",
    )
    area_sort_case_sensitive: bool = True
    excel: bool = Field(True, description="Also render an .xlsx workbook")


class TriageConfig(BaseModel):
    """Top-level configuration."""

    repositories: list[RepositoryRef] = Field(default_factory=list)
    endpoint: str = DEFAULT_ENDPOINT
    page_size: int = Field(100, ge=1, le=100)
    retry_delay_seconds: float = Field(5.0, ge=0)
    max_retries: int = Field(25, ge=1)
    labels: LabelRules = Field(default_factory=LabelRules)
    milestones: MilestoneRules = Field(default_factory=MilestoneRules)
    report: ReportSettings = Field(default_factory=ReportSettings)

    @field_validator("repositories", mode="before")
    @classmethod
    def _parse_repository_strings(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [
                RepositoryRef.parse(item) if isinstance(item, str) else item
                for item in value
            ]
        return value


def load_config(path: str | Path | None = None) -> TriageConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to a YAML file. ``None`` returns the defaults.

    Returns:
        Validated configuration

    Raises:
        ValueError: If the file is missing, is not a mapping, or fails validation
    """
    if path is None:
        return TriageConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(
            f"Configuration file {config_path} must contain a mapping at top level"
        )

    # pydantic.ValidationError is a ValueError subclass
    return TriageConfig.model_validate(raw)


def get_github_token(token: str | None = None) -> str:
    """Return the GitHub token from the argument or GITHUB_TOKEN env var."""
    resolved = token or os.getenv("GITHUB_TOKEN")
    if not resolved:
        raise ValueError(
            "GitHub token is required. Set GITHUB_TOKEN environment variable."
        )
    return resolved
