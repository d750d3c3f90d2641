from __future__ import annotations

import re
from datetime import UTC, datetime

import pytest

from greeting_mcp.capabilities.tools import (
    GREETINGS,
    calc,
    format_current_time,
    format_number,
    greeting,
    make_generate_image,
    make_get_current_time,
)
from greeting_mcp.engines.huggingface import HuggingFaceEngine
from greeting_mcp.exceptions import ProviderError, UnexpectedImageShapeError
from greeting_mcp.schema import ImagePart, ValidatedArguments
from greeting_mcp.shard.enums import Language

NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


def _args(**values) -> ValidatedArguments:
    return ValidatedArguments(values)


# --------------------------------- greeting --------------------------------- #


def test_greeting_english():
    result = greeting(_args(name="Ada", language="en"))
    assert result.texts() == ["Hello, Ada! Nice to meet you."]
    assert result.is_error is False


def test_greeting_korean_template():
    result = greeting(_args(name="Ada", language="ko"))
    assert result.texts() == ["안녕하세요, Ada님! 만나서 반갑습니다."]


def test_every_language_has_a_template():
    assert set(GREETINGS) == set(Language)
    for language in Language:
        assert "Ada" in greeting(_args(name="Ada", language=language.value)).texts()[0]


def test_greeting_name_with_braces_is_literal():
    assert greeting(_args(name="{x}", language="en")).texts() == ["Hello, {x}! Nice to meet you."]


# ----------------------------------- calc ----------------------------------- #


@pytest.mark.parametrize(
    "a, b, op, expected",
    [
        (6, 3, "/", "6 / 3 = 2"),
        (2, 3, "+", "2 + 3 = 5"),
        (2, 3, "-", "2 - 3 = -1"),
        (4, 2.5, "*", "4 * 2.5 = 10"),
        (5, 2, "/", "5 / 2 = 2.5"),
        (0.1, 0.2, "+", "0.1 + 0.2 = 0.30000000000000004"),
    ],
)
def test_calc(a, b, op, expected):
    result = calc(_args(a=a, b=b, operator=op))
    assert result.texts() == [expected]
    assert result.is_error is False


@pytest.mark.parametrize("zero", [0, 0.0])
def test_calc_divide_by_zero(zero):
    result = calc(_args(a=5, b=zero, operator="/"))
    assert result.is_error is True
    assert "divide by zero" in result.texts()[0]


def test_format_number():
    assert format_number(2.0) == "2"
    assert format_number(-0.0) == "0"
    assert format_number(7) == "7"
    assert format_number(2.5) == "2.5"
    assert format_number(float("inf")) == "Infinity"
    assert format_number(float("-inf")) == "-Infinity"
    assert format_number(float("nan")) == "NaN"


# ------------------------------ getCurrentTime ------------------------------ #


def test_current_time_utc():
    result = make_get_current_time(lambda: NOW)(_args(timezone="UTC"))
    assert result.is_error is False
    assert result.texts() == ["Current time in UTC: 2026-01-02 03:04:05 (UTC)"]


def test_current_time_fixed_width_with_real_clock():
    text = make_get_current_time()(_args(timezone="UTC")).texts()[0]
    assert "UTC" in text
    assert re.search(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", text)


def test_current_time_converts_zone():
    assert format_current_time("Asia/Seoul", NOW) == "Current time in Asia/Seoul: 2026-01-02 12:04:05 (KST)"


@pytest.mark.parametrize("zone", ["Not/AZone", "", "../etc/passwd"])
def test_current_time_invalid_zone(zone):
    result = make_get_current_time(lambda: NOW)(_args(timezone=zone))
    assert result.is_error is True
    assert "invalid timezone" in result.texts()[0]


# ------------------------------- generateImage ------------------------------ #


@pytest.mark.asyncio
async def test_generate_image_returns_image_part(fake_engine):
    result = await make_generate_image(fake_engine)(_args(prompt="a red fox"))
    assert fake_engine.prompts == ["a red fox"]
    assert isinstance(result.parts[0], ImagePart)
    assert result.annotations is not None
    assert result.annotations.priority == 0.9


@pytest.mark.asyncio
async def test_generate_image_without_token_makes_no_network_call(monkeypatch):
    from greeting_mcp.engines import huggingface

    def _forbidden(*args, **kwargs):
        raise AssertionError("inference client must not be created without a token")

    monkeypatch.setattr(huggingface, "AsyncInferenceClient", _forbidden)

    result = await make_generate_image(HuggingFaceEngine(token=None))(_args(prompt="a red fox"))
    assert result.is_error is True
    assert "HF_TOKEN" in result.texts()[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [ProviderError("503 Service Unavailable"), UnexpectedImageShapeError("Unexpected image format")],
)
async def test_generate_image_provider_failures_are_business_errors(fake_engine, error):
    fake_engine.result = error
    result = await make_generate_image(fake_engine)(_args(prompt="x"))
    assert result.is_error is True
    assert str(error) in result.texts()[0]
    assert result.texts()[0].startswith("Error: image generation failed.")
