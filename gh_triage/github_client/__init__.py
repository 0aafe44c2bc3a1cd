"""GitHub client package for GraphQL issue download."""

from .client import (
    AuthorizationError,
    GraphQLClient,
    GraphQLError,
    GraphQLResponseError,
)
from .fetcher import DownloadResult, FetchState, IssueFetcher, RepositoryFetchResult
from .models import IssuePage, IssueRow

__all__ = [
    "AuthorizationError",
    "DownloadResult",
    "FetchState",
    "GraphQLClient",
    "GraphQLError",
    "GraphQLResponseError",
    "IssueFetcher",
    "IssuePage",
    "IssueRow",
    "RepositoryFetchResult",
]
