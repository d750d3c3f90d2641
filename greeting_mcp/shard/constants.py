"""Project constants shared by the capability catalog and the inference adapter.

Keep values here provider-agnostic and small in scope; anything specific to
one capability belongs next to its handler.
"""

from __future__ import annotations

from typing import Final

# ------------------------------- Server identity ---------------------------- #

SERVER_NAME: Final[str] = "greeting-server"
SERVER_VERSION: Final[str] = "1.0.0"

# ------------------------------- Image defaults ----------------------------- #

# Normalized default mime type for returned images when the provider returns
# only bytes/base64 without saying what they are.
DEFAULT_MIME: Final[str] = "image/png"

DEFAULT_IMAGE_PROVIDER: Final[str] = "auto"
DEFAULT_IMAGE_MODEL: Final[str] = "black-forest-labs/FLUX.1-schnell"
DEFAULT_NUM_INFERENCE_STEPS: Final[int] = 5

# Rendering hints attached to generated images.
IMAGE_AUDIENCE: Final[tuple[str, ...]] = ("user",)
IMAGE_PRIORITY: Final[float] = 0.9

# ------------------------------ Resource identity --------------------------- #

FAKE_SERVER_INFO_URI: Final[str] = "server://fake-info"
FAKE_SERVER_INFO_NAME: Final[str] = "fake-server-info"
JSON_MIME: Final[str] = "application/json"
TEXT_MIME: Final[str] = "text/plain"

# --------------------------------- Error codes ------------------------------ #

ERROR_CODE_UNKNOWN_CAPABILITY: Final[str] = "unknown_capability"
ERROR_CODE_VALIDATION: Final[str] = "validation_error"
ERROR_CODE_BUSINESS: Final[str] = "business_error"
ERROR_CODE_INTERNAL: Final[str] = "internal_error"
ERROR_CODE_CONFIGURATION: Final[str] = "configuration_error"
ERROR_CODE_PROVIDER_ERROR: Final[str] = "provider_error"
ERROR_CODE_UNEXPECTED_SHAPE: Final[str] = "unexpected_image_shape"
