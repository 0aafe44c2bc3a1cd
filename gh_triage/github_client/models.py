"""Pydantic models for GitHub GraphQL issue pages and flattened issue rows.

The page models map directly to the GraphQL v4 ``repository.issues`` connection.
API Reference: https://docs.github.com/en/graphql/reference/objects#issueconnection
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..config import LabelRules


class GitHubLabelNode(BaseModel):
    """Label node inside an issue's ``labels`` connection."""

    name: str = Field(..., description="Name of the label (string)")


class GitHubLabelConnection(BaseModel):
    """Connection of labels attached to an issue (first 10 only)."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: list[GitHubLabelNode] = Field(default_factory=list)
    total_count: int = Field(0, alias="totalCount")


class GitHubMilestone(BaseModel):
    """Milestone assigned to an issue."""

    title: str = Field(..., description="Milestone title (string)")


class GitHubIssueNode(BaseModel):
    """Single issue node as returned by the issues query."""

    model_config = ConfigDict(populate_by_name=True)

    number: int = Field(..., description="Issue number within the repository")
    title: str = Field(..., description="Issue title")
    created_at: datetime = Field(..., alias="createdAt")
    closed_at: datetime | None = Field(None, alias="closedAt")
    labels: GitHubLabelConnection = Field(default_factory=GitHubLabelConnection)
    milestone: GitHubMilestone | None = None


class GitHubPageInfo(BaseModel):
    """Cursor pagination info for a connection."""

    model_config = ConfigDict(populate_by_name=True)

    has_next_page: bool = Field(..., alias="hasNextPage")
    end_cursor: str | None = Field(None, alias="endCursor")


class GitHubIssueConnection(BaseModel):
    """One page of a repository's issues."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: list[GitHubIssueNode] = Field(default_factory=list)
    page_info: GitHubPageInfo = Field(..., alias="pageInfo")
    total_count: int = Field(..., alias="totalCount")


class GitHubRepositoryIssues(BaseModel):
    name: str
    issues: GitHubIssueConnection


class IssuePage(BaseModel):
    """Top-level ``data`` object of the issues query."""

    repository: GitHubRepositoryIssues

    @property
    def nodes(self) -> list[GitHubIssueNode]:
        return self.repository.issues.nodes

    @property
    def has_next_page(self) -> bool:
        return self.repository.issues.page_info.has_next_page

    @property
    def end_cursor(self) -> str | None:
        return self.repository.issues.page_info.end_cursor

    @property
    def total_count(self) -> int:
        return self.repository.issues.total_count


class IssueRow(BaseModel):
    """Flattened issue record written to and read from the issues CSV.

    ``is_open`` is derived from ``closed_at`` and cannot disagree with it.
    """

    model_config = ConfigDict(frozen=True)

    repository: str = Field(..., description="Repository name the issue belongs to")
    number: int = Field(..., description="Issue number, unique per repository")
    title: str
    created_at: datetime
    closed_at: datetime | None = None
    milestone_name: str | None = None
    primary_area: str | None = Field(
        None, description="First label matching the area naming convention"
    )
    is_bug: bool = False
    labels: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_open(self) -> bool:
        return self.closed_at is None

    @classmethod
    def from_node(
        cls, node: GitHubIssueNode, repository: str, rules: LabelRules
    ) -> "IssueRow":
        """Build a row from a GraphQL issue node."""
        label_names = [label.name for label in node.labels.nodes]
        primary_area = next(
            (name for name in label_names if rules.is_area_label(name)), None
        )
        return cls(
            repository=repository,
            number=node.number,
            title=node.title,
            created_at=node.created_at,
            closed_at=node.closed_at,
            milestone_name=node.milestone.title if node.milestone else None,
            primary_area=primary_area,
            is_bug=any(rules.is_bug_label(name) for name in label_names),
            labels=label_names,
        )
