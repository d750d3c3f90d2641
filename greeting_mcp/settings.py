from __future__ import annotations

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .shard import constants as C


class Settings(BaseSettings):
    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_nested_delimiter="__")

    hf_token: str | None = Field(default=None, description="Hugging Face access token (HF_TOKEN)")
    hf_provider: str = Field(default=C.DEFAULT_IMAGE_PROVIDER, description="Inference provider routed by Hugging Face")
    image_model: str = Field(default=C.DEFAULT_IMAGE_MODEL, description="Text-to-image model id")
    image_num_inference_steps: int = Field(default=C.DEFAULT_NUM_INFERENCE_STEPS, ge=1, description="Denoising steps per image")
    image_timeout: float | None = Field(default=None, gt=0, description="Timeout in seconds for one inference call")

    log_level: str = Field(default="INFO", description="Minimum level written to stderr")

    @property
    def use_huggingface(self) -> bool:
        """Determine if image generation is configured based on available credentials."""
        return bool(self.hf_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
