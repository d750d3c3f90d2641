from __future__ import annotations

import json

import pytest

from greeting_mcp.core.dispatcher import Dispatcher
from greeting_mcp.core.registry import CapabilityRegistry
from greeting_mcp.schema import (
    ImagePart,
    InvocationRequest,
    InvocationResult,
    PromptEnvelope,
    ResourceEnvelope,
    ToolEnvelope,
)
from greeting_mcp.shard.enums import CapabilityKind


def _tool(identifier: str, **arguments) -> InvocationRequest:
    return InvocationRequest(kind=CapabilityKind.TOOL, identifier=identifier, arguments=arguments)


@pytest.mark.asyncio
async def test_calc_success_envelope(dispatcher):
    envelope = await dispatcher.handle(_tool("calc", a=2, b=3, operator="+"))
    assert envelope.to_wire() == {"content": [{"type": "text", "text": "2 + 3 = 5"}]}


@pytest.mark.asyncio
async def test_divide_by_zero_is_business_error(dispatcher):
    envelope = await dispatcher.handle(_tool("calc", a=5, b=0, operator="/"))
    assert isinstance(envelope, ToolEnvelope)
    assert envelope.isError is True
    assert "divide by zero" in envelope.content[0].text


@pytest.mark.asyncio
async def test_unknown_tool_is_reported_not_raised(dispatcher):
    envelope = await dispatcher.handle(_tool("nope"))
    assert envelope.isError is True
    assert "Unknown tool" in envelope.content[0].text
    assert "nope" in envelope.content[0].text


@pytest.mark.asyncio
async def test_unknown_resource_gets_error_envelope(dispatcher):
    envelope = await dispatcher.handle(InvocationRequest(kind=CapabilityKind.RESOURCE, identifier="server://nope"))
    assert isinstance(envelope, ToolEnvelope)
    assert envelope.isError is True


@pytest.mark.asyncio
async def test_validation_error_names_field(dispatcher):
    envelope = await dispatcher.handle(_tool("calc", a="6", b=3, operator="/"))
    assert envelope.isError is True
    assert "'a'" in envelope.content[0].text


@pytest.mark.asyncio
async def test_invalid_enum_lists_allowed_values(dispatcher):
    envelope = await dispatcher.handle(_tool("greeting", name="Ada", language="xx"))
    assert envelope.isError is True
    text = envelope.content[0].text
    for code in ["ko", "en", "ja", "zh", "es", "fr", "de"]:
        assert f"'{code}'" in text


@pytest.mark.asyncio
async def test_prompt_validation_error(dispatcher):
    envelope = await dispatcher.handle(InvocationRequest(kind=CapabilityKind.PROMPT, identifier="code_review"))
    assert isinstance(envelope, ToolEnvelope)
    assert envelope.isError is True
    assert "'code'" in envelope.content[0].text


@pytest.mark.asyncio
async def test_resource_envelope(dispatcher):
    envelope = await dispatcher.handle(InvocationRequest(kind=CapabilityKind.RESOURCE, identifier="server://fake-info"))
    assert isinstance(envelope, ResourceEnvelope)
    item = envelope.contents[0]
    assert item.uri == "server://fake-info"
    assert item.mimeType == "application/json"
    assert json.loads(item.text)["status"] == "healthy"


@pytest.mark.asyncio
async def test_prompt_envelope(dispatcher):
    envelope = await dispatcher.handle(
        InvocationRequest(
            kind=CapabilityKind.PROMPT,
            identifier="code_review",
            arguments={"language": "Python", "code": "print(1)"},
        )
    )
    assert isinstance(envelope, PromptEnvelope)
    assert envelope.description == "User message requesting a code review"
    assert len(envelope.messages) == 1
    assert envelope.messages[0].role == "user"
    assert "print(1)" in envelope.messages[0].content.text


@pytest.mark.asyncio
async def test_image_envelope_carries_annotations(dispatcher, fake_engine):
    envelope = await dispatcher.handle(_tool("generateImage", prompt="a cat"))
    assert fake_engine.prompts == ["a cat"]
    wire = envelope.to_wire()
    assert "isError" not in wire
    assert wire["content"][0]["type"] == "image"
    assert wire["content"][0]["mimeType"] == "image/png"
    assert wire["annotations"] == {"audience": ["user"], "priority": 0.9}


def _registry_with(handler, kind=CapabilityKind.TOOL) -> Dispatcher:
    registry = CapabilityRegistry()
    registry.register(kind, "x" if kind != CapabilityKind.RESOURCE else "server://x", "", None, handler)
    return Dispatcher(registry)


@pytest.mark.asyncio
async def test_handler_crash_becomes_error_envelope():
    def boom(args):
        raise RuntimeError("kaboom")

    dispatcher = _registry_with(boom)
    envelope = await dispatcher.handle(_tool("x"))
    assert envelope.isError is True
    assert "kaboom" in envelope.content[0].text

    # the dispatcher keeps serving after a crash
    envelope = await dispatcher.handle(_tool("x"))
    assert envelope.isError is True


@pytest.mark.asyncio
async def test_async_handler_crash_becomes_error_envelope():
    async def boom(args):
        raise ConnectionError("provider unreachable")

    envelope = await _registry_with(boom).handle(_tool("x"))
    assert envelope.isError is True
    assert "provider unreachable" in envelope.content[0].text


@pytest.mark.asyncio
async def test_handler_returning_wrong_type_is_error():
    envelope = await _registry_with(lambda args: "plain string").handle(_tool("x"))
    assert envelope.isError is True


@pytest.mark.asyncio
async def test_resource_returning_image_is_error():
    def image_resource(args):
        return InvocationResult(parts=[ImagePart(data="AAAA", mimeType="image/png")])

    dispatcher = _registry_with(image_resource, CapabilityKind.RESOURCE)
    envelope = await dispatcher.handle(InvocationRequest(kind=CapabilityKind.RESOURCE, identifier="server://x"))
    assert isinstance(envelope, ToolEnvelope)
    assert envelope.isError is True


def test_dispatcher_freezes_registry():
    registry = CapabilityRegistry()
    Dispatcher(registry)
    assert registry.frozen


@pytest.mark.asyncio
async def test_pure_tools_are_idempotent(dispatcher):
    for request in [
        _tool("greeting", name="Ada", language="fr"),
        _tool("calc", a=7, b=2, operator="/"),
        _tool("calc", a=1, b=0, operator="/"),
    ]:
        first = await dispatcher.handle(request)
        second = await dispatcher.handle(request)
        assert first.to_wire() == second.to_wire()


@pytest.mark.asyncio
async def test_describe_lists_tools(dispatcher):
    names = [d.identifier for d in dispatcher.describe(CapabilityKind.TOOL)]
    assert names == ["greeting", "calc", "getCurrentTime", "generateImage"]
