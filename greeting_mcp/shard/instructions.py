from __future__ import annotations

# Capability descriptions advertised to the client. Keep short and clear.
TOOL_DESCRIPTIONS: dict[str, str] = {
    "greeting": "Return a greeting for the given name in the requested language.",
    "calc": "Apply an arithmetic operator to two numbers and return the result.",
    "getCurrentTime": "Return the current time in the given IANA timezone.",
    "generateImage": "Generate an image from a text prompt using a hosted inference provider.",
}

RESOURCE_DESCRIPTIONS: dict[str, str] = {
    "fake-server-info": "Return a synthetic server status record for testing.",
}

PROMPT_DESCRIPTIONS: dict[str, str] = {
    "code_review": "Build a prompt asking for a review of the supplied code snippet.",
}


# High-level, concise server instructions for agents.
SERVER_INSTRUCTIONS: str = (
    "Greeting MCP Server - Agent Instructions.\n"
    "Tools: greeting (localized greeting), calc (two-operand arithmetic), "
    "getCurrentTime (current time for an IANA timezone), generateImage (text-to-image).\n"
    "Resources: server://fake-info returns a JSON status record for a demo server.\n"
    "Prompts: code_review builds a review request for a code snippet.\n\n"
    "Failures (invalid arguments, division by zero, unknown timezone, missing HF_TOKEN, "
    "provider errors) are returned as isError results with an explanatory text part."
)


__all__ = ["TOOL_DESCRIPTIONS", "RESOURCE_DESCRIPTIONS", "PROMPT_DESCRIPTIONS", "SERVER_INSTRUCTIONS"]
