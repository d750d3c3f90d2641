from __future__ import annotations

import math
from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from ..core.registry import CapabilityRegistry, Handler
from ..engines.base_engine import ImageEngine
from ..exceptions import ImageGenerationError
from ..schema import Annotations, FieldSpec, InputShape, InvocationResult, ValidatedArguments
from ..shard import constants as C
from ..shard.enums import Language, Operator, Role
from ..shard.instructions import TOOL_DESCRIPTIONS

GREETINGS: dict[Language, str] = {
    Language.KO: "안녕하세요, {name}님! 만나서 반갑습니다.",
    Language.EN: "Hello, {name}! Nice to meet you.",
    Language.JA: "こんにちは、{name}さん！はじめまして。",
    Language.ZH: "你好，{name}！很高兴认识你。",
    Language.ES: "¡Hola, {name}! Encantado de conocerte.",
    Language.FR: "Bonjour, {name} ! Enchanté de vous rencontrer.",
    Language.DE: "Hallo, {name}! Freut mich, Sie kennenzulernen.",
}

# ------------------------------ Input shapes -------------------------------- #

GREETING_SHAPE = InputShape.of(
    name=FieldSpec.string("Name of the person to greet."),
    language=FieldSpec.enum(
        Language,
        "Greeting language (ko: Korean, en: English, ja: Japanese, zh: Chinese, es: Spanish, fr: French, de: German).",
    ),
)

CALC_SHAPE = InputShape.of(
    a=FieldSpec.number("First operand."),
    b=FieldSpec.number("Second operand."),
    operator=FieldSpec.enum(Operator, "Operator (+: add, -: subtract, *: multiply, /: divide)."),
)

TIME_SHAPE = InputShape.of(
    timezone=FieldSpec.string("IANA timezone name (e.g., Asia/Seoul, America/New_York, Europe/London, UTC)."),
)

IMAGE_SHAPE = InputShape.of(
    prompt=FieldSpec.string("Text prompt describing the image to generate."),
)


# ------------------------------- Formatting --------------------------------- #


def format_number(value: int | float) -> str:
    """Render a number the way JavaScript prints it (``2`` rather than ``2.0``)."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return repr(value)


def format_current_time(timezone: str, now: datetime | None = None) -> str:
    """Format ``now`` in ``timezone``; raises ValueError for unknown zones."""
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ValueError(f"invalid timezone: {timezone}") from e
    current = (now or datetime.now(tz=UTC)).astimezone(zone)
    return f"Current time in {timezone}: {current:%Y-%m-%d %H:%M:%S} ({current.tzname() or timezone})"


# -------------------------------- Handlers ---------------------------------- #


def greeting(args: ValidatedArguments) -> InvocationResult:
    template = GREETINGS[Language(args["language"])]
    return InvocationResult.text(template.format(name=args["name"]))


def calc(args: ValidatedArguments) -> InvocationResult:
    a, b, operator = args["a"], args["b"], Operator(args["operator"])

    if operator == Operator.ADD:
        result = a + b
    elif operator == Operator.SUBTRACT:
        result = a - b
    elif operator == Operator.MULTIPLY:
        result = a * b
    else:
        if b == 0:
            return InvocationResult.error("Error: cannot divide by zero.")
        result = a / b

    return InvocationResult.text(f"{format_number(a)} {operator.value} {format_number(b)} = {format_number(result)}")


def make_get_current_time(clock: Callable[[], datetime] | None = None) -> Handler:
    def get_current_time(args: ValidatedArguments) -> InvocationResult:
        timezone = args["timezone"]
        try:
            text = format_current_time(timezone, clock() if clock else None)
        except ValueError:
            return InvocationResult.error(f"Error: invalid timezone ({timezone}).")
        return InvocationResult.text(text)

    return get_current_time


def make_generate_image(engine: ImageEngine) -> Handler:
    async def generate_image(args: ValidatedArguments) -> InvocationResult:
        try:
            image = await engine.generate(args["prompt"])
        except ImageGenerationError as e:
            logger.warning(f"Image generation failed ({e.code}): {e}")
            return InvocationResult.error(e.user_message)

        return InvocationResult.image(
            image.data,
            image.mime_type,
            annotations=Annotations(audience=[Role(a) for a in C.IMAGE_AUDIENCE], priority=C.IMAGE_PRIORITY),
        )

    return generate_image


def register_tools(
    registry: CapabilityRegistry,
    engine: ImageEngine,
    *,
    clock: Callable[[], datetime] | None = None,
) -> None:
    registry.tool(
        "greeting",
        description=TOOL_DESCRIPTIONS["greeting"],
        input_shape=GREETING_SHAPE,
        title="Greeting",
        read_only=True,
        idempotent=True,
        open_world=False,
    )(greeting)
    registry.tool(
        "calc",
        description=TOOL_DESCRIPTIONS["calc"],
        input_shape=CALC_SHAPE,
        title="Calculator",
        read_only=True,
        idempotent=True,
        open_world=False,
    )(calc)
    registry.tool(
        "getCurrentTime",
        description=TOOL_DESCRIPTIONS["getCurrentTime"],
        input_shape=TIME_SHAPE,
        title="Current Time",
        read_only=True,
        idempotent=False,
        open_world=False,
    )(make_get_current_time(clock))
    registry.tool(
        "generateImage",
        description=TOOL_DESCRIPTIONS["generateImage"],
        input_shape=IMAGE_SHAPE,
        title="Generate Image",
        read_only=False,
        idempotent=False,
        open_world=True,
    )(make_generate_image(engine))


__all__ = [
    "GREETINGS",
    "calc",
    "format_current_time",
    "format_number",
    "greeting",
    "make_generate_image",
    "make_get_current_time",
    "register_tools",
]
