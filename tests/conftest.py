"""Shared fixtures for costmgr tests."""

from pathlib import Path
from typing import Any

import pytest
import requests

from costmgr.domain.models import RateTable
from costmgr.store.schema import StoreHandle, open_store


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class CountingRateSource:
    """Rate source that records how often it was asked."""

    def __init__(self, rates: RateTable) -> None:
        self.rates = rates
        self.calls = 0

    def fetch(self) -> RateTable:
        self.calls += 1
        return dict(self.rates)


@pytest.fixture
def rates() -> RateTable:
    return {"USD": 1, "GBP": 0.6, "EURO": 0.7, "ILS": 3.4}


@pytest.fixture
def counting_source(rates: RateTable) -> CountingRateSource:
    return CountingRateSource(rates)


@pytest.fixture
def store(tmp_path: Path) -> StoreHandle:
    return open_store(tmp_path / "costs.db")


@pytest.fixture
def fake_get(monkeypatch: pytest.MonkeyPatch):
    """Patch requests.get; returns the list of calls and a setter for the response."""
    state: dict[str, Any] = {"response": FakeResponse({"USD": 1, "GBP": 0.6, "EURO": 0.7, "ILS": 3.4})}
    calls: list[dict[str, Any]] = []

    def get(url: str, **kwargs: Any) -> FakeResponse:
        calls.append({"url": url, **kwargs})
        response = state["response"]
        if isinstance(response, Exception):
            raise response
        return response

    def respond_with(payload: Any, status_code: int = 200) -> None:
        if isinstance(payload, requests.RequestException):
            state["response"] = payload
        else:
            state["response"] = FakeResponse(payload, status_code)

    monkeypatch.setattr(requests, "get", get)
    get.calls = calls  # type: ignore[attr-defined]
    get.respond_with = respond_with  # type: ignore[attr-defined]
    return get

