from __future__ import annotations

from ..core.registry import CapabilityRegistry
from ..schema import FieldSpec, InputShape, InvocationResult, ValidatedArguments
from ..shard.instructions import PROMPT_DESCRIPTIONS
from ..utils.prompt import render_code_review_prompt

CODE_REVIEW_SHAPE = InputShape.of(
    language=FieldSpec.string("Language of the code (e.g., TypeScript, Python).", required=False),
    code=FieldSpec.string("Code snippet to review."),
)


def code_review(args: ValidatedArguments) -> InvocationResult:
    return InvocationResult.text(render_code_review_prompt(code=args["code"], language=args.get("language")))


def register_prompts(registry: CapabilityRegistry) -> None:
    registry.prompt(
        "code_review",
        description=PROMPT_DESCRIPTIONS["code_review"],
        input_shape=CODE_REVIEW_SHAPE,
        title="Code Review",
        message_description="User message requesting a code review",
    )(code_review)


__all__ = ["CODE_REVIEW_SHAPE", "code_review", "register_prompts"]
