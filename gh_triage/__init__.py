"""GitHub issue download and triage reporting."""

__version__ = "0.1.0"
