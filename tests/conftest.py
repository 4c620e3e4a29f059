"""Shared fakes: an LLM client, an exchange-rate source, and fixed clocks.

No test touches the network or the wall clock.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest

from smart_converter.tools.rate_source import RateSourceError


class FakeLLMClient:
    model_name = "fake-model"

    def __init__(self, responses: Optional[List[str]] = None, error: Optional[Exception] = None) -> None:
        self.responses = list(responses or [])
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def generate_text(self, prompt, history=None, system_prompt=None):
        self.calls.append(
            {"prompt": prompt, "history": list(history or []), "system_prompt": system_prompt}
        )
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise AssertionError("FakeLLMClient ran out of responses")
        return self.responses.pop(0)


class FakeRateSource:
    def __init__(self, rates: Optional[Dict[str, Dict[str, float]]] = None, error: Optional[str] = None) -> None:
        self.rates = rates or {}
        self.error = error
        self.calls: List[str] = []

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:
        self.calls.append(base_currency)
        if self.error is not None:
            raise RateSourceError(self.error)
        if base_currency.upper() not in self.rates:
            raise RateSourceError(f"no rates for {base_currency}")
        return dict(self.rates[base_currency.upper()])


class MutableClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def make_llm():
    return FakeLLMClient


@pytest.fixture
def make_rate_source():
    return FakeRateSource


@pytest.fixture
def make_clock():
    return MutableClock


@pytest.fixture(autouse=True)
def no_gemini_key(monkeypatch):
    # Key line: a developer's real key must never turn a test into a network call.
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
