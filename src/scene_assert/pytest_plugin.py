"""pytest integration: a per-test assertion report."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from scene_assert.report import AssertionReport, collect


@pytest.fixture
def scene_report() -> Iterator[AssertionReport]:
    """Collect structural assertions for one test and fail it on any mismatch."""

    with collect() as report:
        yield report
    report.raise_for_failures()
