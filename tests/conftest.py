"""Pytest fixtures for log2dashboard tests."""

from pathlib import Path
from typing import List

import pytest


MARKER_LOG = [
    "Run started",
    "Current Test Case : TC_001 Checkout ***",
    "*** Invoking Business Component : Login ***",
    "Entering user name",
    "step ok",
    "*** Invoking Business Component : Search Product ***",
    "verification failed: expected 3 results, got 0",
    "java.lang.IllegalStateException: stale element",
    "*** Invoking Business Component : Submit ***",
    "Error Type: TimeoutException",
    "waited 30s",
]

ASTERISK_LOG = [
    "preamble",
    "***** Open Browser *****",
    "browser started",
    "***** Fill Form *****",
    "AssertionError: field missing",
    "***** Close Browser *****",
    "NullPointerException at Page.close",
]


@pytest.fixture
def marker_lines() -> List[str]:
    return list(MARKER_LOG)


@pytest.fixture
def asterisk_lines() -> List[str]:
    return list(ASTERISK_LOG)


@pytest.fixture
def write_log(tmp_path: Path):
    """Write lines to a log file under tmp_path and return its path."""
    def _write(lines: List[str], name: str = "log.txt") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
