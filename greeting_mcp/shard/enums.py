from __future__ import annotations

from enum import StrEnum


class CapabilityKind(StrEnum):
    """Kinds of client-invocable capabilities.

    The kind decides both the identity scheme (tools and prompts are looked up
    by name, resources by URI) and the envelope shape returned to the client.
    """

    TOOL = "tool"
    RESOURCE = "resource"
    PROMPT = "prompt"


class FieldKind(StrEnum):
    """Primitive kinds understood by the input-shape description language."""

    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"


class Language(StrEnum):
    """Languages supported by the greeting tool."""

    KO = "ko"
    EN = "en"
    JA = "ja"
    ZH = "zh"
    ES = "es"
    FR = "fr"
    DE = "de"


class Operator(StrEnum):
    """Binary operators accepted by the calc tool."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class Role(StrEnum):
    """Message roles and annotation audiences."""

    USER = "user"
    ASSISTANT = "assistant"


__all__ = ["CapabilityKind", "FieldKind", "Language", "Operator", "Role"]
