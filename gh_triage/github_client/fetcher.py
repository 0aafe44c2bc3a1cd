"""Cursor-paginated issue download with fixed-delay retry."""

import logging
import time
from collections.abc import Callable, Iterable
from enum import Enum

from pydantic import BaseModel, Field

from ..config import LabelRules, RepositoryRef, TriageConfig
from .client import AuthorizationError, GraphQLClient
from .models import IssuePage, IssueRow

logger = logging.getLogger(__name__)

ISSUES_QUERY = """\
query ($owner: String!, $name: String!, $afterIssue: String, $pageSize: Int!) {
  repository(owner: $owner, name: $name) {
    name
    issues(
      after: $afterIssue
      first: $pageSize
      orderBy: {field: CREATED_AT, direction: DESC}
    ) {
      nodes {
        number
        title
        createdAt
        closedAt
        labels(first: 10) {
          nodes {
            name
          }
          totalCount
        }
        milestone {
          title
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
      totalCount
    }
  }
}
"""


class FetchState(str, Enum):
    """Pagination state for a single repository."""

    FETCHING = "fetching"
    BACKOFF = "backoff"
    ABANDONED = "abandoned"
    COMPLETE = "complete"
    FAILED = "failed"


class RepositoryFetchResult(BaseModel):
    """Outcome of draining one repository."""

    owner: str
    name: str
    rows: list[IssueRow] = Field(default_factory=list)
    total_count: int | None = Field(
        None, description="Server-reported totalCount from the first page"
    )
    state: FetchState = FetchState.FETCHING
    pages: int = 0

    @property
    def succeeded(self) -> bool:
        # Abandonment keeps partial rows and is not a failure
        return self.state in (FetchState.COMPLETE, FetchState.ABANDONED)


class DownloadResult(BaseModel):
    """Outcome of a multi-repository download run."""

    rows: list[IssueRow] = Field(default_factory=list)
    repositories: list[RepositoryFetchResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(result.succeeded for result in self.repositories)


class IssueFetcher:
    """Downloads every issue of a repository, one page at a time.

    A page that fails with anything other than an authorization error is
    retried with the same cursor after ``retry_delay`` seconds. After
    ``max_retries`` consecutive failures the repository is abandoned and the
    rows collected so far are kept. Rows are not deduplicated.
    """

    def __init__(
        self,
        client: GraphQLClient,
        rules: LabelRules | None = None,
        page_size: int = 100,
        retry_delay: float = 5.0,
        max_retries: int = 25,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.rules = rules or LabelRules()
        self.page_size = page_size
        self.retry_delay = retry_delay
        self.max_retries = max_retries
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        client: GraphQLClient,
        config: TriageConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "IssueFetcher":
        return cls(
            client,
            rules=config.labels,
            page_size=config.page_size,
            retry_delay=config.retry_delay_seconds,
            max_retries=config.max_retries,
            sleep=sleep,
        )

    def fetch_page(self, owner: str, name: str, cursor: str | None) -> IssuePage:
        """Request one page of issues, newest first, after ``cursor``."""
        data = self.client.execute(
            ISSUES_QUERY,
            {
                "owner": owner,
                "name": name,
                "afterIssue": cursor,
                "pageSize": self.page_size,
            },
        )
        return IssuePage.model_validate(data)

    def fetch_repository(
        self, owner: str, name: str, sink: list[IssueRow] | None = None
    ) -> RepositoryFetchResult:
        """Drain all pages of a repository's issues.

        Args:
            owner: Repository owner
            name: Repository name
            sink: Optional caller-owned list that receives each page's rows as
                soon as the page is accepted
        """
        logger.info("Getting all issues for %s/%s...", owner, name)
        result = RepositoryFetchResult(owner=owner, name=name)
        cursor: str | None = None
        failures = 0
        state = FetchState.FETCHING

        while state in (FetchState.FETCHING, FetchState.BACKOFF):
            if state is FetchState.BACKOFF:
                self._sleep(self.retry_delay)
                state = FetchState.FETCHING

            try:
                page = self.fetch_page(owner, name, cursor)
                if page.has_next_page and not page.end_cursor:
                    raise ValueError("Page reports more issues but no end cursor")
                rows = [
                    IssueRow.from_node(node, name, self.rules) for node in page.nodes
                ]
            except AuthorizationError as e:
                logger.error("%s", e)
                state = FetchState.FAILED
                break
            except Exception as e:
                failures += 1
                logger.warning(
                    "Page fetch for %s/%s failed (%d/%d consecutive): %s",
                    owner,
                    name,
                    failures,
                    self.max_retries,
                    e,
                    exc_info=True,
                )
                if failures >= self.max_retries:
                    logger.error(
                        "Retried %d consecutive times, skip and move on",
                        self.max_retries,
                    )
                    state = FetchState.ABANDONED
                else:
                    state = FetchState.BACKOFF
                continue

            failures = 0
            result.pages += 1
            if result.total_count is None:
                result.total_count = page.total_count
            result.rows.extend(rows)
            if sink is not None:
                sink.extend(rows)
            logger.info(
                "Processing %d/%d. Collected %d items from %s/%s",
                len(result.rows),
                page.total_count,
                len(rows),
                owner,
                name,
            )

            cursor = page.end_cursor
            state = FetchState.FETCHING if page.has_next_page else FetchState.COMPLETE

        result.state = state
        return result

    def fetch_repositories(
        self,
        repositories: Iterable[RepositoryRef],
        download: DownloadResult | None = None,
    ) -> DownloadResult:
        """Drain each repository in turn into one shared row list.

        Stops at the first repository that fails with an authorization error.
        Rows gathered before the failure are kept in the result. When
        ``download`` is given, rows land in it page by page, so a caller still
        holds them if the run is interrupted.
        """
        if download is None:
            download = DownloadResult()
        for repository in repositories:
            logger.info("Downloading issue records from %s.", repository)
            result = self.fetch_repository(
                repository.owner, repository.name, sink=download.rows
            )
            download.repositories.append(result)
            if not result.succeeded:
                break
        return download
