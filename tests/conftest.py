from __future__ import annotations

import logging

import pytest

from link_inspector.core.logging_setup import LOGGER_NAME
from link_inspector.domain.url.models import Origin, UrlCandidate


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def link():
    def _make(raw: str, text: str = "") -> UrlCandidate:
        return UrlCandidate(raw_text=raw, origin=Origin.HYPERLINK, text=text or raw)

    return _make


@pytest.fixture
def plain():
    def _make(raw: str) -> UrlCandidate:
        return UrlCandidate(raw_text=raw, origin=Origin.PLAIN_TEXT, text=raw)

    return _make
