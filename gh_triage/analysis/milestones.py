"""Milestone classification for open bugs."""

from collections.abc import Iterable

from ..config import MilestoneRules
from ..github_client.models import IssueRow
from .models import MilestoneBreakdown
from .triage import in_milestones, is_untriaged, open_bugs


def is_target_milestone(name: str, rules: MilestoneRules) -> bool:
    """Check whether a milestone belongs to the GA release.

    A milestone qualifies when it is listed in ``target_names`` or when it
    starts with ``target_prefix`` and contains none of ``target_exclude``.
    Every comparison ignores case.
    """
    folded = name.casefold()
    if any(folded == explicit.casefold() for explicit in rules.target_names):
        return True
    if not rules.target_prefix or not folded.startswith(
        rules.target_prefix.casefold()
    ):
        return False
    return not any(word.casefold() in folded for word in rules.target_exclude)


def target_milestones(
    observed: Iterable[str | None], rules: MilestoneRules
) -> list[str]:
    """Pick the GA milestones out of the milestones seen in the data.

    Explicit ``target_names`` are always included, even when unobserved.
    """
    selected: list[str] = []
    seen: set[str] = set()
    for name in [*observed, *rules.target_names]:
        if not name or name in seen:
            continue
        seen.add(name)
        if is_target_milestone(name, rules):
            selected.append(name)
    return selected


def milestone_breakdown(
    rows: Iterable[IssueRow],
    targets: Iterable[str],
    future: Iterable[str],
) -> MilestoneBreakdown:
    """Split open bugs into target, future, untriaged and unknown buckets."""
    all_rows = list(rows)
    bugs = open_bugs(all_rows)
    target_list = list(targets)
    future_list = list(future)

    target_count = sum(1 for row in bugs if in_milestones(row, target_list))
    future_count = sum(1 for row in bugs if in_milestones(row, future_list))
    untriaged_count = sum(1 for row in bugs if is_untriaged(row))

    return MilestoneBreakdown(
        total_issues=len(all_rows),
        open_bugs=len(bugs),
        target=target_count,
        future=future_count,
        untriaged=untriaged_count,
        unknown=len(bugs) - target_count - future_count - untriaged_count,
    )
