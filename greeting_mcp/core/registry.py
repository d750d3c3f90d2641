from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from ..exceptions import DuplicateCapabilityError, RegistrationError, UnknownCapabilityError
from ..schema import CapabilityDescriptor, CapabilityMetadata, InputShape, InvocationResult, ValidatedArguments
from ..shard.enums import CapabilityKind

Handler = Callable[[ValidatedArguments], InvocationResult | Awaitable[InvocationResult]]


@dataclass(frozen=True)
class RegisteredCapability:
    """A descriptor paired with the handler that serves it."""

    descriptor: CapabilityDescriptor
    handler: Handler


class CapabilityRegistry:
    """Process-wide map of (kind, identifier) to descriptor and handler.

    Capabilities are registered once during startup; :meth:`freeze` then turns
    the registry into a read-only snapshot that can be read concurrently
    without locks.
    """

    def __init__(self) -> None:
        self._entries: dict[CapabilityKind, dict[str, RegisteredCapability]] = {kind: {} for kind in CapabilityKind}
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(
        self,
        kind: CapabilityKind,
        identifier: str,
        description: str,
        input_shape: InputShape | None,
        handler: Handler,
        metadata: CapabilityMetadata | None = None,
    ) -> CapabilityDescriptor:
        if self._frozen:
            raise RegistrationError(f"Cannot register {kind.value} '{identifier}': registry is frozen.")
        if not identifier:
            raise RegistrationError(f"A {kind.value} identifier must be a non-empty string.")
        if kind == CapabilityKind.RESOURCE and input_shape is not None and input_shape.properties:
            raise RegistrationError(f"Resource '{identifier}' cannot declare input fields.")

        entries = self._entries[kind]
        if identifier in entries:
            raise DuplicateCapabilityError(kind.value, identifier)

        descriptor = CapabilityDescriptor(
            kind=kind,
            identifier=identifier,
            description=description,
            input_shape=None if kind == CapabilityKind.RESOURCE else (input_shape or InputShape()),
            metadata=metadata or CapabilityMetadata(),
        )
        entries[identifier] = RegisteredCapability(descriptor=descriptor, handler=handler)
        logger.debug(f"Registered {kind.value} '{identifier}'")
        return descriptor

    def tool(
        self,
        name: str,
        *,
        description: str = "",
        input_shape: InputShape | None = None,
        **metadata: Any,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a tool handler."""

        def decorator(fn: Handler) -> Handler:
            self.register(CapabilityKind.TOOL, name, description, input_shape, fn, CapabilityMetadata(**metadata))
            return fn

        return decorator

    def resource(self, uri: str, *, description: str = "", **metadata: Any) -> Callable[[Handler], Handler]:
        """Decorator registering a resource handler (no arguments)."""

        def decorator(fn: Handler) -> Handler:
            self.register(CapabilityKind.RESOURCE, uri, description, None, fn, CapabilityMetadata(**metadata))
            return fn

        return decorator

    def prompt(
        self,
        name: str,
        *,
        description: str = "",
        input_shape: InputShape | None = None,
        **metadata: Any,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a prompt template handler."""

        def decorator(fn: Handler) -> Handler:
            self.register(CapabilityKind.PROMPT, name, description, input_shape, fn, CapabilityMetadata(**metadata))
            return fn

        return decorator

    def freeze(self) -> CapabilityRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def lookup(self, kind: CapabilityKind, identifier: str) -> RegisteredCapability:
        try:
            return self._entries[kind][identifier]
        except KeyError:
            raise UnknownCapabilityError(kind.value, identifier) from None

    def list_all(self, kind: CapabilityKind) -> list[CapabilityDescriptor]:
        """Return descriptors of ``kind`` in registration order."""
        return [entry.descriptor for entry in self._entries[kind].values()]

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind, identifier = key
        return kind in self._entries and identifier in self._entries[kind]


__all__ = ["Handler", "RegisteredCapability", "CapabilityRegistry"]
