from __future__ import annotations

from ..settings import Settings
from .base_engine import GeneratedImage, ImageEngine
from .huggingface import HuggingFaceEngine, normalize_provider_result


def create_engine(settings: Settings) -> ImageEngine:
    """Build the image engine configured by ``settings``."""
    return HuggingFaceEngine.from_settings(settings)


__all__ = ["GeneratedImage", "ImageEngine", "HuggingFaceEngine", "create_engine", "normalize_provider_result"]
