# tests/conftest.py
"""
Shared pytest fixtures for chat-tokens tests.
"""

from __future__ import annotations

import pytest

from chat_tokens.config import EstimatorConfig
from chat_tokens.engine.estimator import PromptEstimator


class CharEncoder:
    """Counts one token per character so overhead arithmetic is easy to follow."""

    encoding_name = "chars"

    def count(self, text: str) -> int:
        return len(text)


@pytest.fixture
def estimator():
    return PromptEstimator(EstimatorConfig())


@pytest.fixture
def char_encoder():
    return CharEncoder()


@pytest.fixture
def char_estimator(char_encoder):
    return PromptEstimator(EstimatorConfig(), encoder=char_encoder)  # type: ignore[arg-type]


@pytest.fixture
def foo_function():
    return {"name": "foo", "parameters": {"type": "object", "properties": {}}}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("CHAT_TOKENS_MODEL", raising=False)
    monkeypatch.delenv("CHAT_TOKENS_ENCODING", raising=False)
