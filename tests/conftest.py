"""Pytest fixtures shared across the reference-sheet tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest
import requests

from gw2refs.helpers.config import Settings


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, payload: Any, status_code: int = 200, body_is_json: bool = True) -> None:
        self.payload = payload
        self.status_code = status_code
        self.body_is_json = body_is_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self) -> Any:
        if not self.body_is_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


@pytest.fixture
def settings() -> Settings:
    """Return settings pointing at a fake API root."""

    return Settings(base_url="https://api.example.test/v2", timeout=5.0)


@pytest.fixture
def fake_response():
    """Return the FakeResponse class for building canned HTTP answers."""

    return FakeResponse


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test carries the `unit` marker.

    The suite never touches the network; anything that would need it
    does not belong here.
    """

    missing = [item.nodeid for item in items if item.get_closest_marker("unit") is None]
    if missing:
        joined = "\n".join(f"- {nodeid}" for nodeid in missing)
        raise pytest.UsageError(f"Each test must be marked `@pytest.mark.unit`.\nOffending tests:\n{joined}")
