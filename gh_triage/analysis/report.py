"""Assemble every aggregate for one analysis run."""

import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone

from ..config import TriageConfig
from ..github_client.models import IssueRow
from .milestones import milestone_breakdown, target_milestones
from .models import TriageReport
from .triage import area_triage
from .weekly import category_weeks, weekly_buckets

logger = logging.getLogger(__name__)


def build_triage_report(
    rows: Sequence[IssueRow],
    config: TriageConfig,
    now: datetime | None = None,
    start_date: date | None = None,
) -> TriageReport:
    """Compute weekly, area, category and milestone aggregates.

    Args:
        rows: Fully materialized issue rows
        config: Milestone and report settings
        now: Reference time for the last weekly bucket (defaults to now, UTC)
        start_date: Overrides ``config.report.start_date``
    """
    now = now or datetime.now(timezone.utc)
    start = start_date or config.report.start_date
    settings = config.report

    targets = target_milestones(
        (row.milestone_name for row in rows), config.milestones
    )
    logger.debug("Target milestones: %s", ", ".join(targets) or "none")

    report = TriageReport(
        generated_at=now,
        start_date=start,
        target_milestones=targets,
        weekly=weekly_buckets(rows, start, now),
        areas=area_triage(rows, targets, settings.area_sort_case_sensitive),
        category_labels=list(settings.category_labels),
        categories=(
            category_weeks(rows, settings.category_labels, start, now)
            if settings.category_labels
            else []
        ),
        breakdown=milestone_breakdown(
            rows, targets, config.milestones.future_names
        ),
    )

    breakdown = report.breakdown
    logger.info("Total issues: %d", breakdown.total_issues)
    logger.info("Open BUG issues: %d", breakdown.open_bugs)
    logger.info("GA BUG issues: %d", breakdown.target)
    logger.info("Future BUG issues: %d", breakdown.future)
    logger.info("Untriaged BUG issues: %d", breakdown.untriaged)
    logger.info("Unknown BUG issues: %d", breakdown.unknown)
    return report
