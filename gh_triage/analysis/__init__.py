"""Aggregation of downloaded issues into triage reports."""

from .milestones import milestone_breakdown, target_milestones
from .models import (
    NO_AREA_LABEL,
    AreaTriageSummary,
    CategoryWeek,
    MilestoneBreakdown,
    TriageReport,
    WeeklyBucket,
)
from .report import build_triage_report
from .triage import area_triage
from .weekly import category_weeks, weekly_buckets

__all__ = [
    "NO_AREA_LABEL",
    "AreaTriageSummary",
    "CategoryWeek",
    "MilestoneBreakdown",
    "TriageReport",
    "WeeklyBucket",
    "area_triage",
    "build_triage_report",
    "category_weeks",
    "milestone_breakdown",
    "target_milestones",
    "weekly_buckets",
]
