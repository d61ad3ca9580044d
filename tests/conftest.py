"""
Shared fixtures.

Model calls go through a fake provider whose client exposes
``client.aio.models.generate_content`` as an AsyncMock.
"""

import json
from types import SimpleNamespace
from typing import Any

import pytest
from unittest.mock import AsyncMock

from chatty.interfaces.llm_provider import ILLMProvider
from chatty.interfaces.storage_provider import IStorageProvider
from chatty.services.llm_utils import CallPolicy


class FakeLLMProvider(ILLMProvider):
    """Provider backed by an AsyncMock generate_content."""

    def __init__(self, *outputs: Any, model: str = "fake-model"):
        self._model = model
        self.generate_content = AsyncMock(side_effect=[_as_response(o) for o in outputs])
        self._client = SimpleNamespace(
            aio=SimpleNamespace(models=SimpleNamespace(generate_content=self.generate_content))
        )

    def get_model(self) -> str:
        return self._model

    def get_model_name(self) -> str:
        return f"Fake ({self._model})"

    def get_client(self):
        return self._client

    def supports_vision(self) -> bool:
        return True


class MemoryStorageProvider(IStorageProvider):
    """Dict-backed storage."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    async def read(self, key: str):
        return self.data.get(key)

    async def write(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self.data


def _as_response(output: Any):
    """Wrap dicts/strings as a GenAI-like response; exceptions pass through."""
    if isinstance(output, BaseException):
        return output
    if isinstance(output, dict):
        output = json.dumps(output)
    return SimpleNamespace(text=output, prompt_feedback=None)


@pytest.fixture
def make_provider():
    """Build a fake provider returning the given outputs in order."""
    return FakeLLMProvider


@pytest.fixture
def memory_storage():
    return MemoryStorageProvider()


@pytest.fixture
def fast_policy():
    """One retry, no backoff delay."""
    return CallPolicy(timeout_seconds=1.0, max_retries=1, backoff_seconds=0.0)


@pytest.fixture
def no_retry_policy():
    return CallPolicy(timeout_seconds=1.0, max_retries=0, backoff_seconds=0.0)
