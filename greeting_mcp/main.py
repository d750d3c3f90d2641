from __future__ import annotations

import argparse

from fastmcp import FastMCP
from loguru import logger

from .capabilities import build_registry
from .core.dispatcher import Dispatcher
from .engines import ImageEngine
from .settings import Settings, get_settings
from .shard import constants as C
from .shard.instructions import SERVER_INSTRUCTIONS
from .transport import mount_registry
from .utils.logging import configure_logging


def create_app(settings: Settings | None = None, *, engine: ImageEngine | None = None) -> FastMCP:
    """Build the registry, freeze it behind a dispatcher and expose it via FastMCP.

    A duplicate capability raises RegistrationError here, before any transport
    starts accepting requests.
    """
    settings = settings or get_settings()
    dispatcher = Dispatcher(build_registry(settings, engine=engine))
    app = FastMCP(C.SERVER_NAME, version=C.SERVER_VERSION, instructions=SERVER_INSTRUCTIONS)
    return mount_registry(app, dispatcher)


def main() -> None:
    parser = argparse.ArgumentParser(description="Greeting MCP Server")
    # Only accept transports supported by FastMCP for server runs.
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        default="stdio",
        help="Transport to use (stdio, sse, http, streamable-http). Default: stdio",
    )
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--log-level", help="Log level (overrides LOG_LEVEL)")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if not settings.use_huggingface:
        logger.warning("HF_TOKEN is not set; generateImage will report an error when called")

    app = create_app(settings)
    logger.info(f"MCP Server running on {args.transport}")

    # FastMCP's stdio transport does not accept `host`/`port` kwargs.
    if args.transport == "stdio":
        app.run()
    else:
        app.run(transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
