"""Tests for logging setup."""

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from gh_triage.utils.log_setup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def rich_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]


class TestSetupLogging:
    """Test setup_logging."""

    def test_info_by_default(self) -> None:
        setup_logging()

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING
        assert len(rich_handlers()) == 1

    def test_verbose_enables_debug(self) -> None:
        setup_logging(verbose=True)

        assert logging.getLogger().level == logging.DEBUG

    def test_repeated_calls_keep_one_handler(self) -> None:
        setup_logging()
        setup_logging(verbose=True)

        assert len(rich_handlers()) == 1
