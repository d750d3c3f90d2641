from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .shard.enums import CapabilityKind, FieldKind, Role

# ------------------------------ Input shapes -------------------------------- #


class FieldSpec(BaseModel):
    """Declarative description of a single argument field.

    The same record drives validation and the schema advertised to the client,
    so adding a capability only adds data, never dispatch logic.
    """

    model_config = ConfigDict(frozen=True)

    kind: FieldKind = Field(description="Primitive kind of the field.")
    description: str = Field(default="", description="Human-readable description shown to the client.")
    required: bool = Field(default=True, description="Whether the field must be present.")
    choices: tuple[str, ...] = Field(default=(), description="Allowed literals for enum fields.")

    @model_validator(mode="after")
    def _check_choices(self) -> FieldSpec:
        if self.kind == FieldKind.ENUM and not self.choices:
            raise ValueError("enum fields must declare at least one choice")
        if self.kind != FieldKind.ENUM and self.choices:
            raise ValueError(f"{self.kind.value} fields cannot declare choices")
        return self

    @classmethod
    def string(cls, description: str = "", *, required: bool = True) -> FieldSpec:
        return cls(kind=FieldKind.STRING, description=description, required=required)

    @classmethod
    def number(cls, description: str = "", *, required: bool = True) -> FieldSpec:
        return cls(kind=FieldKind.NUMBER, description=description, required=required)

    @classmethod
    def enum(cls, choices: Any, description: str = "", *, required: bool = True) -> FieldSpec:
        return cls(
            kind=FieldKind.ENUM,
            description=description,
            required=required,
            choices=tuple(str(c) for c in choices),
        )

    def to_json_schema(self) -> dict[str, Any]:
        if self.kind == FieldKind.ENUM:
            schema: dict[str, Any] = {"type": "string", "enum": list(self.choices)}
        else:
            schema = {"type": self.kind.value}
        if self.description:
            schema["description"] = self.description
        return schema


class InputShape(BaseModel):
    """Ordered mapping of argument name to :class:`FieldSpec`."""

    model_config = ConfigDict(frozen=True)

    properties: dict[str, FieldSpec] = Field(default_factory=dict)

    @classmethod
    def of(cls, **specs: FieldSpec) -> InputShape:
        return cls(properties=specs)

    def to_json_schema(self) -> dict[str, Any]:
        """Return the JSON Schema advertised for this shape."""
        return {
            "type": "object",
            "properties": {name: spec.to_json_schema() for name, spec in self.properties.items()},
            "required": [name for name, spec in self.properties.items() if spec.required],
        }

    def to_prompt_arguments(self) -> list[dict[str, Any]]:
        """Return prompt-argument records (name, description, required)."""
        return [
            {"name": name, "description": spec.description or None, "required": spec.required}
            for name, spec in self.properties.items()
        ]


class ValidatedArguments(Mapping[str, Any]):
    """Read-only argument mapping produced by the schema validator.

    Handlers receive only this type; every value already satisfies its
    declared kind and required/optional constraint.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]):
        self._values = MappingProxyType(dict(values))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ValidatedArguments({dict(self._values)!r})"


# ------------------------------- Descriptors -------------------------------- #


class CapabilityMetadata(BaseModel):
    """Optional advertisement and rendering metadata for a capability."""

    model_config = ConfigDict(frozen=True)

    title: str | None = Field(default=None, description="Display name shown by clients.")
    mime_type: str | None = Field(default=None, description="MIME type of resource contents.")
    message_description: str | None = Field(default=None, description="Description attached to rendered prompt messages.")
    read_only: bool | None = Field(default=None, description="Tool hint: does not modify its environment.")
    idempotent: bool | None = Field(default=None, description="Tool hint: repeated calls give the same result.")
    open_world: bool | None = Field(default=None, description="Tool hint: talks to external systems.")


class CapabilityDescriptor(BaseModel):
    """Immutable advertisement record for one registered capability."""

    model_config = ConfigDict(frozen=True)

    kind: CapabilityKind
    identifier: str = Field(description="Tool/prompt name or resource URI.")
    description: str = ""
    input_shape: InputShape | None = Field(default=None, description="Declared arguments; None for resources.")
    metadata: CapabilityMetadata = Field(default_factory=CapabilityMetadata)


class InvocationRequest(BaseModel):
    """A decoded client request. ``arguments`` is untrusted."""

    kind: CapabilityKind
    identifier: str
    arguments: dict[str, Any] = Field(default_factory=dict)


# ------------------------------ Content parts ------------------------------- #


class Annotations(BaseModel):
    """Rendering hints for a result."""

    audience: list[Role] | None = Field(default=None, description="Who the content is intended for.")
    priority: float | None = Field(default=None, ge=0.0, le=1.0, description="Relative importance, 0..1.")


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    """Binary image carried as base64 text. The payload is never re-encoded."""

    type: Literal["image"] = "image"
    data: str = Field(description="Base64-encoded image bytes.")
    mimeType: str = Field(description="MIME type of the image (e.g., 'image/png').")


ContentPart = Annotated[TextPart | ImagePart, Field(discriminator="type")]


class InvocationResult(BaseModel):
    """What every handler returns; translated to the wire by the envelope builder."""

    parts: list[ContentPart] = Field(default_factory=list)
    is_error: bool = False
    annotations: Annotations | None = None

    @classmethod
    def text(cls, text: str, *, annotations: Annotations | None = None) -> InvocationResult:
        return cls(parts=[TextPart(text=text)], annotations=annotations)

    @classmethod
    def error(cls, message: str) -> InvocationResult:
        return cls(parts=[TextPart(text=message)], is_error=True)

    @classmethod
    def image(cls, data: str, mime_type: str, *, annotations: Annotations | None = None) -> InvocationResult:
        return cls(parts=[ImagePart(data=data, mimeType=mime_type)], annotations=annotations)

    def texts(self) -> list[str]:
        return [part.text for part in self.parts if isinstance(part, TextPart)]


# -------------------------------- Envelopes --------------------------------- #


class _Envelope(BaseModel):
    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready wire shape, omitting unset optional keys."""
        return self.model_dump(mode="json", exclude_none=True)


class ToolEnvelope(_Envelope):
    content: list[ContentPart] = Field(default_factory=list)
    isError: bool | None = None
    annotations: Annotations | None = None


class ResourceItem(BaseModel):
    uri: str
    mimeType: str
    text: str


class ResourceEnvelope(_Envelope):
    contents: list[ResourceItem] = Field(default_factory=list)


class PromptTextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class PromptMessageItem(BaseModel):
    role: Role = Role.USER
    content: PromptTextContent


class PromptEnvelope(_Envelope):
    description: str | None = None
    messages: list[PromptMessageItem] = Field(default_factory=list)


Envelope = ToolEnvelope | ResourceEnvelope | PromptEnvelope


__all__ = [
    # shapes
    "FieldSpec",
    "InputShape",
    "ValidatedArguments",
    # descriptors
    "CapabilityMetadata",
    "CapabilityDescriptor",
    "InvocationRequest",
    # results
    "Annotations",
    "TextPart",
    "ImagePart",
    "ContentPart",
    "InvocationResult",
    # envelopes
    "ToolEnvelope",
    "ResourceItem",
    "ResourceEnvelope",
    "PromptTextContent",
    "PromptMessageItem",
    "PromptEnvelope",
    "Envelope",
]
