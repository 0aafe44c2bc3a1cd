"""Pydantic models for aggregated triage data."""

from datetime import date, datetime

from pydantic import BaseModel, Field

NO_AREA_LABEL = "(no area)"


class WeeklyBucket(BaseModel):
    """Issues opened and closed during one 7-day interval."""

    week_start: date = Field(..., description="First day of the interval")
    opened: int = 0
    closed: int = 0


class CategoryWeek(BaseModel):
    """Issues opened during one 7-day interval, per category label."""

    week_start: date
    counts: dict[str, int] = Field(default_factory=dict)


class AreaTriageSummary(BaseModel):
    """Open bug counts for one area."""

    area: str | None = Field(None, description="Area label, None when unlabeled")
    count_in_target_milestones: int = 0
    count_untriaged: int = 0

    @property
    def display_area(self) -> str:
        return self.area or NO_AREA_LABEL


class MilestoneBreakdown(BaseModel):
    """Open bug counts split by milestone classification."""

    total_issues: int = 0
    open_bugs: int = 0
    target: int = Field(0, description="Open bugs in a GA milestone")
    future: int = 0
    untriaged: int = Field(0, description="Open bugs with no milestone")
    unknown: int = Field(0, description="Open bugs in any other milestone")


class TriageReport(BaseModel):
    """Everything the analysis phase produces for one input file."""

    generated_at: datetime
    start_date: date
    target_milestones: list[str] = Field(default_factory=list)
    weekly: list[WeeklyBucket] = Field(default_factory=list)
    areas: list[AreaTriageSummary] = Field(default_factory=list)
    categories: list[CategoryWeek] = Field(default_factory=list)
    category_labels: list[str] = Field(default_factory=list)
    breakdown: MilestoneBreakdown = Field(default_factory=MilestoneBreakdown)
