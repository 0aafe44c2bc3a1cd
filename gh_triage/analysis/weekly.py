"""Weekly open/close bucketing."""

import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta, timezone

from ..github_client.models import IssueRow
from .models import CategoryWeek, WeeklyBucket

WEEK = timedelta(days=7)


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def week_count(start: date, now: datetime) -> int:
    """Number of 7-day buckets needed to cover ``[start, now]``.

    Partial trailing weeks get a bucket of their own.
    """
    start_dt = datetime.combine(start, time.min, tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    total_days = (now - start_dt).total_seconds() / 86400
    if total_days <= 0:
        return 0
    return math.ceil(total_days / 7)


def week_starts(start: date, now: datetime) -> list[date]:
    return [start + i * WEEK for i in range(week_count(start, now))]


def _bucket_index(day: date, start: date, weeks: int) -> int | None:
    # Half-open [from, to): a day equal to a bucket's end lands in the next one
    offset = (day - start).days
    if offset < 0:
        return None
    index = offset // 7
    return index if index < weeks else None


def weekly_buckets(
    rows: Iterable[IssueRow], start: date, now: datetime
) -> list[WeeklyBucket]:
    """Count issues opened and closed in each week from ``start`` to ``now``."""
    buckets = [WeeklyBucket(week_start=day) for day in week_starts(start, now)]
    weeks = len(buckets)

    for row in rows:
        opened = _bucket_index(_utc_date(row.created_at), start, weeks)
        if opened is not None:
            buckets[opened].opened += 1
        if row.closed_at is not None:
            closed = _bucket_index(_utc_date(row.closed_at), start, weeks)
            if closed is not None:
                buckets[closed].closed += 1

    return buckets


def category_weeks(
    rows: Iterable[IssueRow],
    categories: Sequence[str],
    start: date,
    now: datetime,
) -> list[CategoryWeek]:
    """Count issues opened per week for each category label."""
    weeks = [
        CategoryWeek(week_start=day, counts={label: 0 for label in categories})
        for day in week_starts(start, now)
    ]
    if not categories:
        return weeks

    wanted = set(categories)
    for row in rows:
        index = _bucket_index(_utc_date(row.created_at), start, len(weeks))
        if index is None:
            continue
        for label in wanted.intersection(row.labels):
            weeks[index].counts[label] += 1

    return weeks
