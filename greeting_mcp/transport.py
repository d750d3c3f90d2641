"""Bridge between the capability registry and FastMCP's transports.

FastMCP owns framing, the handshake and the stdio/http loops. Each registry
entry is exposed as a FastMCP component whose only job is to hand the raw
arguments to the :class:`~greeting_mcp.core.Dispatcher` and translate the
envelope it returns.
"""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import PromptError, ResourceError, ToolError
from fastmcp.prompts.prompt import Prompt, PromptArgument
from fastmcp.resources import Resource
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import Annotations as MCPAnnotations
from mcp.types import ImageContent, PromptMessage, TextContent, ToolAnnotations
from pydantic import Field

from .core.dispatcher import Dispatcher
from .schema import (
    Annotations,
    CapabilityDescriptor,
    Envelope,
    ImagePart,
    InvocationRequest,
    PromptEnvelope,
    ResourceEnvelope,
    ToolEnvelope,
)
from .shard import constants as C
from .shard.enums import CapabilityKind


def _error_text(envelope: ToolEnvelope) -> str:
    return "\n".join(part.text for part in envelope.content if not isinstance(part, ImagePart))


def _to_mcp_annotations(annotations: Annotations | None) -> MCPAnnotations | None:
    if annotations is None:
        return None
    return MCPAnnotations(
        audience=[role.value for role in annotations.audience] if annotations.audience else None,
        priority=annotations.priority,
    )


def envelope_to_content(envelope: ToolEnvelope) -> list[TextContent | ImageContent]:
    """Convert a successful tool envelope into MCP content blocks."""
    annotations = _to_mcp_annotations(envelope.annotations)
    blocks: list[TextContent | ImageContent] = []
    for part in envelope.content:
        if isinstance(part, ImagePart):
            blocks.append(ImageContent(type="image", data=part.data, mimeType=part.mimeType, annotations=annotations))
        else:
            blocks.append(TextContent(type="text", text=part.text, annotations=annotations))
    return blocks


def _expect(envelope: Envelope, expected: type, error_cls: type[Exception]) -> Any:
    if isinstance(envelope, ToolEnvelope) and envelope.isError:
        raise error_cls(_error_text(envelope))
    if not isinstance(envelope, expected):
        raise error_cls(f"Unexpected response shape {type(envelope).__name__}.")
    return envelope


# ------------------------------ Components ---------------------------------- #


class RegistryTool(Tool):
    """FastMCP tool that forwards to the dispatcher."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        envelope = await self.dispatcher.handle(
            InvocationRequest(kind=CapabilityKind.TOOL, identifier=self.name, arguments=arguments or {})
        )
        tool_envelope: ToolEnvelope = _expect(envelope, ToolEnvelope, ToolError)
        return ToolResult(content=envelope_to_content(tool_envelope))


class RegistryResource(Resource):
    """FastMCP resource that forwards reads to the dispatcher."""

    dispatcher: Any = Field(exclude=True)
    identifier: str

    async def read(self) -> str:
        envelope = await self.dispatcher.handle(
            InvocationRequest(kind=CapabilityKind.RESOURCE, identifier=self.identifier)
        )
        resource_envelope: ResourceEnvelope = _expect(envelope, ResourceEnvelope, ResourceError)
        return resource_envelope.contents[0].text


class RegistryPrompt(Prompt):
    """FastMCP prompt that forwards renders to the dispatcher."""

    dispatcher: Any = Field(exclude=True)

    async def render(self, arguments: dict[str, Any] | None = None) -> list[PromptMessage]:
        envelope = await self.dispatcher.handle(
            InvocationRequest(kind=CapabilityKind.PROMPT, identifier=self.name, arguments=arguments or {})
        )
        prompt_envelope: PromptEnvelope = _expect(envelope, PromptEnvelope, PromptError)
        return [
            PromptMessage(role=message.role.value, content=TextContent(type="text", text=message.content.text))
            for message in prompt_envelope.messages
        ]


# ------------------------------- Mounting ----------------------------------- #


def _tool_component(descriptor: CapabilityDescriptor, dispatcher: Dispatcher) -> RegistryTool:
    meta = descriptor.metadata
    shape = descriptor.input_shape
    return RegistryTool(
        name=descriptor.identifier,
        description=descriptor.description,
        parameters=shape.to_json_schema() if shape else {"type": "object", "properties": {}},
        annotations=ToolAnnotations(
            title=meta.title,
            readOnlyHint=meta.read_only,
            idempotentHint=meta.idempotent,
            openWorldHint=meta.open_world,
        ),
        dispatcher=dispatcher,
    )


def _resource_component(descriptor: CapabilityDescriptor, dispatcher: Dispatcher) -> RegistryResource:
    meta = descriptor.metadata
    return RegistryResource(
        uri=descriptor.identifier,
        name=meta.title or descriptor.identifier,
        description=descriptor.description,
        mime_type=meta.mime_type or C.TEXT_MIME,
        identifier=descriptor.identifier,
        dispatcher=dispatcher,
    )


def _prompt_component(descriptor: CapabilityDescriptor, dispatcher: Dispatcher) -> RegistryPrompt:
    shape = descriptor.input_shape
    return RegistryPrompt(
        name=descriptor.identifier,
        description=descriptor.description,
        arguments=[PromptArgument(**arg) for arg in shape.to_prompt_arguments()] if shape else [],
        dispatcher=dispatcher,
    )


def mount_registry(app: FastMCP, dispatcher: Dispatcher) -> FastMCP:
    """Advertise every registered capability on ``app``, in registration order."""
    for descriptor in dispatcher.describe(CapabilityKind.TOOL):
        app.add_tool(_tool_component(descriptor, dispatcher))
    for descriptor in dispatcher.describe(CapabilityKind.RESOURCE):
        app.add_resource(_resource_component(descriptor, dispatcher))
    for descriptor in dispatcher.describe(CapabilityKind.PROMPT):
        app.add_prompt(_prompt_component(descriptor, dispatcher))
    return app


__all__ = [
    "RegistryPrompt",
    "RegistryResource",
    "RegistryTool",
    "envelope_to_content",
    "mount_registry",
]
