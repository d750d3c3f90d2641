"""Error taxonomy for the greeting server.

Every error carries a stable ``code`` and a human-readable ``user_message``
that is safe to show to the client. Only :class:`RegistrationError` is meant
to escape to the top level (it halts startup); everything else is converted
into an ``isError`` envelope by the dispatcher.
"""

from __future__ import annotations

from typing import Any

from .shard import constants as C


class GreetingServerError(Exception):
    """Base class for all errors raised by the server core and its handlers."""

    code: str = C.ERROR_CODE_INTERNAL

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}

    @property
    def user_message(self) -> str:
        return f"Error: {self}"


# ============================================================================
# Registration (startup) errors
# ============================================================================


class RegistrationError(GreetingServerError):
    """Raised when the capability catalog is assembled incorrectly."""


class DuplicateCapabilityError(RegistrationError):
    """Raised when a (kind, identifier) pair is registered twice."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} '{identifier}' is already registered.")


# ============================================================================
# Dispatch errors
# ============================================================================


class UnknownCapabilityError(GreetingServerError):
    """Raised when the client references a name or URI that is not registered."""

    code = C.ERROR_CODE_UNKNOWN_CAPABILITY

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unknown {kind}: '{identifier}'.")


class ArgumentValidationError(GreetingServerError):
    """Base class for malformed invocation arguments."""

    code = C.ERROR_CODE_VALIDATION

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, details={"field": field})

    @property
    def user_message(self) -> str:
        return f"Error: invalid arguments. {self}"


class MissingFieldError(ArgumentValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"Missing required field '{field}'.")


class TypeMismatchError(ArgumentValidationError):
    def __init__(self, field: str, expected: str, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(field, f"Field '{field}' must be a {expected}, got {actual!r}.")


class InvalidEnumValueError(ArgumentValidationError):
    def __init__(self, field: str, value: Any, allowed: tuple[Any, ...]):
        self.value = value
        self.allowed = allowed
        choices = ", ".join(repr(a) for a in allowed)
        super().__init__(field, f"Field '{field}' must be one of {choices}; got {value!r}.")


class EnvelopeError(GreetingServerError):
    """Raised when a handler result cannot be rendered for its capability kind."""


# ============================================================================
# Business errors
# ============================================================================


class BusinessError(GreetingServerError):
    """A semantic failure decided by a handler (division by zero, bad timezone...)."""

    code = C.ERROR_CODE_BUSINESS


class ImageGenerationError(BusinessError):
    """Base class for failures of the external image inference call."""

    @property
    def user_message(self) -> str:
        return f"Error: image generation failed. {self}"


class ConfigurationError(ImageGenerationError):
    """Raised when a required credential is not configured."""

    code = C.ERROR_CODE_CONFIGURATION

    @property
    def user_message(self) -> str:
        return f"Error: {self}"


class ProviderError(ImageGenerationError):
    """Raised when the inference provider or the network fails."""

    code = C.ERROR_CODE_PROVIDER_ERROR


class UnexpectedImageShapeError(ImageGenerationError):
    """Raised when the provider returns something that is not an image."""

    code = C.ERROR_CODE_UNEXPECTED_SHAPE


__all__ = [
    "GreetingServerError",
    "RegistrationError",
    "DuplicateCapabilityError",
    "UnknownCapabilityError",
    "ArgumentValidationError",
    "MissingFieldError",
    "TypeMismatchError",
    "InvalidEnumValueError",
    "EnvelopeError",
    "BusinessError",
    "ImageGenerationError",
    "ConfigurationError",
    "ProviderError",
    "UnexpectedImageShapeError",
]
