"""Shared test helpers."""

from tests.helpers.fakes import (
    FakeExecutionClient,
    FakePoolSearch,
    RecordingRefresh,
    make_pool,
)

__all__ = [
    "FakeExecutionClient",
    "FakePoolSearch",
    "RecordingRefresh",
    "make_pool",
]
