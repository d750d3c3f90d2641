from __future__ import annotations

import jinja2

# ---------------------------------------------------------------------------
# Jinja2 template for the code review prompt
# ---------------------------------------------------------------------------

_CODE_REVIEW_TEMPLATE = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=False,
).from_string(
    """Write a thorough code review of the {{ language_label }} code below.

Requirements:
1. Point out potential bugs and unhandled edge cases first.
2. Suggest improvements from the performance, security, readability and testing perspectives.
3. Include short code snippets where a suggestion needs supporting evidence.

Code:
```
{{ code }}
```"""
)


def render_code_review_prompt(*, code: str, language: str | None = None) -> str:
    """Render the review request; an empty or missing language reads as "provided"."""
    language_label = language if language else "provided"
    return _CODE_REVIEW_TEMPLATE.render(language_label=language_label, code=code)


__all__ = ["render_code_review_prompt"]
