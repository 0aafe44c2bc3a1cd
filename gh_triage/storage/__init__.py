"""Storage of downloaded issues."""

from .csv_store import IssueCsvStore, sanitize_field, sort_issue_rows

__all__ = ["IssueCsvStore", "sanitize_field", "sort_issue_rows"]
