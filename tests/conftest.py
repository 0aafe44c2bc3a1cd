"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from gh_triage.github_client.models import IssueRow


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def issue_node(
    number: int,
    created_at: str = "2021-06-01T10:00:00Z",
    closed_at: str | None = None,
    labels: list[str] | None = None,
    milestone: str | None = None,
    title: str | None = None,
) -> dict[str, Any]:
    """Build a GraphQL issue node as returned by the API."""
    label_names = labels or []
    return {
        "number": number,
        "title": title or f"Issue {number}",
        "createdAt": created_at,
        "closedAt": closed_at,
        "labels": {
            "nodes": [{"name": name} for name in label_names],
            "totalCount": len(label_names),
        },
        "milestone": {"title": milestone} if milestone else None,
    }


def issue_page(
    nodes: list[dict[str, Any]],
    has_next_page: bool = False,
    end_cursor: str | None = None,
    total_count: int | None = None,
    name: str = "testrepo",
) -> dict[str, Any]:
    """Build the ``data`` object of one issues query page."""
    return {
        "repository": {
            "name": name,
            "issues": {
                "nodes": nodes,
                "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
                "totalCount": total_count if total_count is not None else len(nodes),
            },
        }
    }


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True)
    return data_dir


@pytest.fixture
def make_row() -> Callable[..., IssueRow]:
    """Factory for issue rows with sensible defaults."""

    def _make_row(number: int = 1, **overrides: Any) -> IssueRow:
        values: dict[str, Any] = {
            "repository": "testrepo",
            "number": number,
            "title": f"Issue {number}",
            "created_at": utc(2021, 6, 1, 10, 0, 0),
        }
        values.update(overrides)
        return IssueRow(**values)

    return _make_row


@pytest.fixture
def make_node() -> Callable[..., dict[str, Any]]:
    """Factory for GraphQL issue nodes."""
    return issue_node


@pytest.fixture
def make_page() -> Callable[..., dict[str, Any]]:
    """Factory for GraphQL issue pages."""
    return issue_page
