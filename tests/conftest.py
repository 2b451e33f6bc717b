# File: tests/conftest.py
import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Union

import pytest

from sitemap_ping.logger import LOGGER_NAME


class FakeChecker:
    """In-memory FileChecker: records every path it is asked about."""

    def __init__(self, present=()) -> None:
        self.present = set(present)
        self.calls: List[str] = []

    def exists(self, root: Path, relative: str) -> bool:
        self.calls.append(relative)
        return relative in self.present


class FakeGetter:
    """
    In-memory HttpGetter. *responses* maps a URL substring to a status code
    or to an exception raised as a transport failure.
    """

    def __init__(self, responses: Dict[str, Union[int, BaseException]], delay: float = 0.0) -> None:
        self.responses = responses
        self.delay = delay
        self.urls: List[str] = []

    async def get(self, url: str) -> int:
        self.urls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        for key, value in self.responses.items():
            if key in url:
                if isinstance(value, BaseException):
                    raise value
                return value
        return 200


@pytest.fixture()
def build_dir(tmp_path) -> Path:
    """
    Create a publish directory with a sitemap-index.xml in it.
    """
    publish = tmp_path / "dist"
    publish.mkdir()
    (publish / "sitemap-index.xml").write_text("<sitemapindex/>", encoding="utf-8")
    return publish


@pytest.fixture()
def ping_log(caplog, monkeypatch):
    """
    Capture records of the hook logger, which does not propagate to root by default.
    """
    monkeypatch.setattr(logging.getLogger(LOGGER_NAME), "propagate", True)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    return caplog


@pytest.fixture()
def fake_checker():
    """Factory for FakeChecker instances."""
    return FakeChecker


@pytest.fixture()
def fake_getter():
    """Factory for FakeGetter instances."""
    return FakeGetter
