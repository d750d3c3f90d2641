"""Capability catalog served by the greeting server."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from ..core.registry import CapabilityRegistry
from ..engines import ImageEngine, create_engine
from ..settings import Settings
from .prompts import register_prompts
from .resources import register_resources
from .tools import register_tools


def build_registry(
    settings: Settings,
    *,
    engine: ImageEngine | None = None,
    clock: Callable[[], datetime] | None = None,
) -> CapabilityRegistry:
    """Register every tool, resource and prompt and return the frozen registry.

    Raises RegistrationError if the catalog declares a capability twice.
    """
    registry = CapabilityRegistry()
    register_tools(registry, engine or create_engine(settings), clock=clock)
    register_resources(registry, clock=clock)
    register_prompts(registry)
    return registry.freeze()


__all__ = ["build_registry"]
