"""CSV storage for downloaded issue rows."""

import csv
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from ..github_client.models import IssueRow

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Repository",
    "Number",
    "Title",
    "CreatedAt",
    "ClosedAt",
    "MilestoneName",
    "IsOpen",
    "PrimaryArea",
    "IsBug",
    "Labels",
]

# Columns the reader cannot do without. Repository and Labels are optional so
# that files produced by older exports still load.
REQUIRED_COLUMNS = [
    "Number",
    "Title",
    "CreatedAt",
    "ClosedAt",
    "MilestoneName",
    "PrimaryArea",
    "IsBug",
]

LABEL_SEPARATOR = "|"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def sanitize_field(value: str) -> str:
    """Flatten a field to a single line with no double quotes.

    Carriage returns and newlines are dropped and ``"`` becomes ``'``.
    """
    return value.replace("\r", "").replace("\n", "").replace('"', "'")


def join_labels(labels: Iterable[str]) -> str:
    """Join label names with ``|``.

    A ``|`` inside a label name becomes ``-`` so the label reads back as one.
    Like ``sanitize_field`` this is lossy.
    """
    return LABEL_SEPARATOR.join(
        label.replace(LABEL_SEPARATOR, "-") for label in labels
    )


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return _as_utc(value).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp such as ``2021-06-01T10:00:00Z``."""
    value = value.strip()
    if not value:
        return None
    return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def sort_key(row: IssueRow) -> tuple[datetime, str, int]:
    """Composite output order: created time, then repository, then number."""
    return (_as_utc(row.created_at), row.repository, row.number)


def sort_issue_rows(rows: Iterable[IssueRow]) -> list[IssueRow]:
    return sorted(rows, key=sort_key)


def row_to_record(row: IssueRow) -> list[str]:
    """Convert a row to sanitized CSV field values in column order."""
    values = [
        row.repository,
        str(row.number),
        row.title,
        format_timestamp(row.created_at),
        format_timestamp(row.closed_at),
        row.milestone_name or "",
        str(row.is_open),
        row.primary_area or "",
        str(row.is_bug),
        join_labels(row.labels),
    ]
    return [sanitize_field(value) for value in values]


def record_to_row(record: dict[str, str]) -> IssueRow:
    """Parse a CSV record (as produced by ``csv.DictReader``) into a row.

    ``IsOpen`` is not read; it is re-derived from ``ClosedAt``.
    """
    created_at = parse_timestamp(record["CreatedAt"])
    if created_at is None:
        raise ValueError(f"Issue #{record['Number']} has no CreatedAt value")

    raw_labels = record.get("Labels") or ""
    return IssueRow(
        repository=record.get("Repository") or "",
        number=int(record["Number"]),
        title=record["Title"],
        created_at=created_at,
        closed_at=parse_timestamp(record["ClosedAt"]),
        milestone_name=record["MilestoneName"] or None,
        primary_area=record["PrimaryArea"] or None,
        is_bug=record["IsBug"].strip().lower() == "true",
        labels=[label for label in raw_labels.split(LABEL_SEPARATOR) if label],
    )


class IssueCsvStore:
    """Reads and writes the issues CSV shared by download and analysis."""

    def __init__(self, path: str | Path):
        """Initialize the store.

        Args:
            path: Location of the CSV file
        """
        self.path = Path(path)

    def ensure_writable(self) -> None:
        """Check the destination can be opened for writing.

        An existing file is left untouched.

        Raises:
            OSError: If the destination cannot be written
        """
        existed = self.path.exists()
        with open(self.path, "a", encoding="utf-8"):
            pass
        if not existed:
            self.path.unlink()

    def write_issues(self, rows: Iterable[IssueRow]) -> int:
        """Write rows sorted by creation time, repository and number.

        The file is UTF-8 with a byte-order mark and every field is quoted.

        Returns:
            Number of data rows written

        Raises:
            OSError: If the destination cannot be written
        """
        ordered = sort_issue_rows(rows)
        with open(self.path, "w", encoding="utf-8-sig", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
            writer.writerow(CSV_COLUMNS)
            for row in ordered:
                writer.writerow(row_to_record(row))

        logger.info("Wrote %d issues to %s", len(ordered), self.path)
        return len(ordered)

    def read_issues(self) -> list[IssueRow]:
        """Load every row from the CSV.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a required column is missing, a row has the wrong
                number of fields, or a value is malformed
        """
        with open(self.path, encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            columns = reader.fieldnames or []
            missing = [name for name in REQUIRED_COLUMNS if name not in columns]
            if missing:
                raise ValueError(
                    f"{self.path} is missing required columns: {', '.join(missing)}"
                )
            rows = []
            for record in reader:
                # DictReader pads short rows with None and files extra values
                # under the None key
                if None in record or None in record.values():
                    extra = record.pop(None, None) or []
                    values = [v for v in record.values() if v is not None]
                    fields = len(values) + len(extra)
                    raise ValueError(
                        f"{self.path}: row {reader.line_num} has {fields} "
                        f"fields, expected {len(columns)}"
                    )
                rows.append(record_to_row(record))

        logger.info("Loaded %d rows of data from %s", len(rows), self.path)
        return rows
