from __future__ import annotations

import inspect
from typing import Any

from loguru import logger

from ..exceptions import ArgumentValidationError, EnvelopeError, UnknownCapabilityError
from ..schema import CapabilityDescriptor, Envelope, InvocationRequest, InvocationResult
from ..shard.enums import CapabilityKind
from .envelope import build_envelope, error_envelope
from .registry import CapabilityRegistry, RegisteredCapability
from .validator import validate


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class Dispatcher:
    """Route decoded client requests to registered handlers.

    ``handle`` never raises for a single bad invocation: unknown capabilities,
    malformed arguments and handler crashes all come back as ``isError``
    envelopes so the server keeps serving the next request.
    """

    def __init__(self, registry: CapabilityRegistry) -> None:
        self._registry = registry.freeze()

    def describe(self, kind: CapabilityKind) -> list[CapabilityDescriptor]:
        return self._registry.list_all(kind)

    async def handle(self, request: InvocationRequest) -> Envelope:
        kind, identifier = request.kind, request.identifier
        logger.debug(f"Dispatching {kind.value} '{identifier}'")

        try:
            entry = self._registry.lookup(kind, identifier)
        except UnknownCapabilityError as e:
            logger.warning(f"{e}")
            return error_envelope(e.user_message)

        try:
            args = validate(entry.descriptor.input_shape, request.arguments)
        except ArgumentValidationError as e:
            logger.warning(f"Rejected {kind.value} '{identifier}': {e}")
            return error_envelope(e.user_message)

        result = await self._invoke(entry, args)
        try:
            return build_envelope(entry.descriptor, result)
        except EnvelopeError as e:
            logger.error(f"{e}")
            return error_envelope(e.user_message)

    async def _invoke(self, entry: RegisteredCapability, args: Any) -> InvocationResult:
        identifier = entry.descriptor.identifier
        try:
            result = await _maybe_await(entry.handler(args))
        except Exception as e:
            logger.exception(f"Unexpected error in {entry.descriptor.kind.value} '{identifier}'")
            return InvocationResult.error(f"Error: unexpected failure while running '{identifier}': {e}")

        if not isinstance(result, InvocationResult):
            logger.error(f"Handler for '{identifier}' returned {type(result).__name__}, expected InvocationResult")
            return InvocationResult.error(f"Error: '{identifier}' produced an invalid result.")

        if result.is_error:
            logger.info(f"{entry.descriptor.kind.value} '{identifier}' reported an error: {' '.join(result.texts())}")
        return result


__all__ = ["Dispatcher"]
