from __future__ import annotations

from ..exceptions import EnvelopeError
from ..schema import (
    CapabilityDescriptor,
    Envelope,
    ImagePart,
    InvocationResult,
    PromptEnvelope,
    PromptMessageItem,
    PromptTextContent,
    ResourceEnvelope,
    ResourceItem,
    TextPart,
    ToolEnvelope,
)
from ..shard import constants as C
from ..shard.enums import CapabilityKind, Role


def error_envelope(message: str) -> ToolEnvelope:
    """Envelope for failures that never reached a handler (unknown name, bad arguments)."""
    return ToolEnvelope(content=[TextPart(text=message)], isError=True)


def _tool_envelope(result: InvocationResult) -> ToolEnvelope:
    return ToolEnvelope(
        content=list(result.parts),
        isError=True if result.is_error else None,
        annotations=result.annotations,
    )


def _resource_envelope(descriptor: CapabilityDescriptor, result: InvocationResult) -> ResourceEnvelope:
    for part in result.parts:
        if isinstance(part, ImagePart):
            raise EnvelopeError(f"Resource '{descriptor.identifier}' returned an image part; resources are textual.")
    return ResourceEnvelope(
        contents=[
            ResourceItem(
                uri=descriptor.identifier,
                mimeType=descriptor.metadata.mime_type or C.TEXT_MIME,
                text="".join(result.texts()),
            )
        ]
    )


def _prompt_envelope(descriptor: CapabilityDescriptor, result: InvocationResult) -> PromptEnvelope:
    messages: list[PromptMessageItem] = []
    for part in result.parts:
        if not isinstance(part, TextPart):
            raise EnvelopeError(f"Prompt '{descriptor.identifier}' returned a non-text part.")
        messages.append(PromptMessageItem(role=Role.USER, content=PromptTextContent(text=part.text)))
    return PromptEnvelope(
        description=descriptor.metadata.message_description or descriptor.description,
        messages=messages,
    )


def build_envelope(descriptor: CapabilityDescriptor, result: InvocationResult) -> Envelope:
    """Translate a handler result into the wire shape for the capability's kind.

    Error results always use the tool-shaped ``{content, isError}`` envelope,
    whatever the kind.
    """
    if descriptor.kind == CapabilityKind.TOOL or result.is_error:
        return _tool_envelope(result)
    if descriptor.kind == CapabilityKind.RESOURCE:
        return _resource_envelope(descriptor, result)
    return _prompt_envelope(descriptor, result)


__all__ = ["build_envelope", "error_envelope"]
