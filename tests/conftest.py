from __future__ import annotations

import os
import sys
from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import ConfigDict

# Add repository root to sys.path for `import greeting_mcp.*` in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from greeting_mcp.capabilities import build_registry  # noqa: E402
from greeting_mcp.core.dispatcher import Dispatcher  # noqa: E402
from greeting_mcp.engines.base_engine import GeneratedImage, ImageEngine  # noqa: E402
from greeting_mcp.settings import Settings  # noqa: E402

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)

# minimal 1x1 png base64
PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQAB/9k3WQAAAABJRU5ErkJggg=="


class FakeEngine(ImageEngine):
    """In-memory engine recording prompts; ``result`` may be an exception to raise."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = "fake"
    prompts: list[str] = []
    result: Any = None

    async def generate(self, prompt: str) -> GeneratedImage:
        self.prompts.append(prompt)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result or GeneratedImage(data=PNG_B64, mime_type="image/png")


@pytest.fixture
def settings() -> Settings:
    return Settings(hf_token=None)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def registry(settings, fake_engine):
    return build_registry(settings, engine=fake_engine, clock=lambda: FIXED_NOW)


@pytest.fixture
def dispatcher(registry) -> Dispatcher:
    return Dispatcher(registry)
