from __future__ import annotations

import asyncio
from typing import Any

from huggingface_hub import AsyncInferenceClient
from loguru import logger
from pydantic import Field

from ..exceptions import ConfigurationError, ImageGenerationError, ProviderError, UnexpectedImageShapeError
from ..settings import Settings
from ..shard import constants as C
from ..utils.image_utils import encode_base64, pil_image_to_bytes, read_image_bytes_and_mime, sniff_image_mime
from .base_engine import GeneratedImage, ImageEngine


async def normalize_provider_result(result: Any, *, timeout: float | None = None) -> GeneratedImage:
    """Turn whatever the provider returned into a base64 image.

    Recognized shapes: raw bytes, a PIL image, or a string holding an http(s)
    URL, a data URL or bare base64. Anything else is reported as an
    unexpected shape instead of being passed through.
    """
    if isinstance(result, bytes | bytearray):
        data = bytes(result)
        if not data:
            raise UnexpectedImageShapeError("Provider returned an empty image.")
        mime = sniff_image_mime(data) or C.DEFAULT_MIME
    elif isinstance(result, str):
        try:
            data, mime = await asyncio.to_thread(read_image_bytes_and_mime, result, timeout=timeout)
        except ValueError as e:
            raise UnexpectedImageShapeError(f"Provider returned an unusable image string: {e}") from e
        except OSError as e:
            raise ProviderError(f"Could not download the generated image: {e}") from e
    elif callable(getattr(result, "save", None)):
        data, mime = pil_image_to_bytes(result)
    else:
        raise UnexpectedImageShapeError(f"Unexpected image format from provider ({type(result).__name__}).")
    return GeneratedImage(data=encode_base64(data), mime_type=mime)


class HuggingFaceEngine(ImageEngine):
    """Hugging Face Inference Providers adapter for text-to-image.

    Makes exactly one provider call per invocation; callers that need retries
    compose them outside the dispatch path.
    """

    name: str = "huggingface"
    token: str | None = Field(default=None, repr=False)
    provider: str = C.DEFAULT_IMAGE_PROVIDER
    model: str = C.DEFAULT_IMAGE_MODEL
    num_inference_steps: int = C.DEFAULT_NUM_INFERENCE_STEPS
    timeout: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> HuggingFaceEngine:
        return cls(
            token=settings.hf_token,
            provider=settings.hf_provider,
            model=settings.image_model,
            num_inference_steps=settings.image_num_inference_steps,
            timeout=settings.image_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.token)

    def _client(self) -> AsyncInferenceClient:
        """Return an inference client; fails fast when no token is configured."""
        if not self.token:
            raise ConfigurationError("HF_TOKEN environment variable is not set.")
        return AsyncInferenceClient(provider=self.provider, token=self.token, timeout=self.timeout)

    async def generate(self, prompt: str) -> GeneratedImage:
        client = self._client()
        logger.debug(f"Requesting image from {self.provider}/{self.model}")
        try:
            async with client:
                result = await client.text_to_image(
                    prompt,
                    model=self.model,
                    num_inference_steps=self.num_inference_steps,
                )
        except ImageGenerationError:
            raise
        except Exception as e:  # network / auth / provider
            raise ProviderError(str(e) or type(e).__name__) from e

        return await normalize_provider_result(result, timeout=self.timeout)


__all__ = ["HuggingFaceEngine", "normalize_provider_result"]
