"""Per-area triage counts for open bugs."""

from collections.abc import Iterable

from ..github_client.models import IssueRow
from .models import AreaTriageSummary


def open_bugs(rows: Iterable[IssueRow]) -> list[IssueRow]:
    return [row for row in rows if row.is_open and row.is_bug]


def in_milestones(row: IssueRow, milestones: Iterable[str]) -> bool:
    """Case-insensitive milestone membership. No milestone never matches."""
    if not row.milestone_name:
        return False
    name = row.milestone_name.casefold()
    return any(name == milestone.casefold() for milestone in milestones)


def is_untriaged(row: IssueRow) -> bool:
    return not row.milestone_name


def area_triage(
    rows: Iterable[IssueRow],
    target_milestones: Iterable[str],
    case_sensitive: bool = True,
) -> list[AreaTriageSummary]:
    """Group open bugs by primary area and count target/untriaged issues.

    Args:
        rows: All issue rows
        target_milestones: Milestone names counted as targets
        case_sensitive: Whether area names compare case-sensitively when
            breaking ties

    Returns:
        Summaries ordered by untriaged count descending, then area name
    """
    targets = list(target_milestones)
    groups: dict[str | None, list[IssueRow]] = {}
    for row in open_bugs(rows):
        groups.setdefault(row.primary_area or None, []).append(row)

    summaries = [
        AreaTriageSummary(
            area=area,
            count_in_target_milestones=sum(
                1 for row in group if in_milestones(row, targets)
            ),
            count_untriaged=sum(1 for row in group if is_untriaged(row)),
        )
        for area, group in groups.items()
    ]

    def sort_key(summary: AreaTriageSummary) -> tuple[int, str, str]:
        name = summary.display_area
        folded = name if case_sensitive else name.casefold()
        return (-summary.count_untriaged, folded, name)

    return sorted(summaries, key=sort_key)
