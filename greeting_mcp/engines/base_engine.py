from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class GeneratedImage(BaseModel):
    """Image returned by an engine, already base64-encoded for the wire."""

    data: str = Field(description="Base64-encoded image bytes.")
    mime_type: str = Field(description="MIME type of the image (e.g., 'image/png').")


class ImageEngine(ABC, BaseModel):
    """Abstract base for text-to-image engines."""

    name: str

    @abstractmethod
    async def generate(self, prompt: str) -> GeneratedImage:
        """Generate one image for ``prompt``.

        Implementations raise :class:`~greeting_mcp.exceptions.ImageGenerationError`
        subclasses for every failure they can anticipate.
        """
        raise NotImplementedError
