# =============================================================================
# main.py  —  Entry Point for the Hotel Content MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads environment variables from .env (HOTEL_API_AUTH_TOKEN, ...)
#   2. Builds Settings and the HotelService (core/)
#   3. Starts the FastMCP server (tools/mcp_server.py) on the transport
#      chosen by MCP_TRANSPORT:
#        stdio  → an MCP client spawns this process and talks over pipes
#        sse    → http://MCP_HOST:MCP_PORT/sse
#        http   → streamable HTTP on http://MCP_HOST:MCP_PORT/mcp
# =============================================================================

import logging

from dotenv import load_dotenv

# Load .env into os.environ before anything reads LOG_LEVEL or settings.
load_dotenv()

from pydantic import ValidationError

from core.config import Settings, load_settings
from core.hotel_service import HotelService
from tools.mcp_server import close_service, mcp, set_service

logger = logging.getLogger("main")


def run_server(settings: Settings) -> None:
    """Wire the service from settings and block serving MCP requests."""
    server = settings.server
    logging.getLogger().setLevel(server.log_level)
    set_service(HotelService.from_settings(settings))

    logger.info("Upstream API: %s", settings.upstream.base_url)
    try:
        if server.transport == "stdio":
            logger.info("Serving MCP over stdio")
            mcp.run(transport="stdio")
        else:
            logger.info("Serving MCP over %s on %s:%s", server.transport, server.host, server.port)
            mcp.run(transport=server.transport, host=server.host, port=server.port)
    finally:
        close_service()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    try:
        settings = load_settings()
    except ValidationError as exc:
        raise SystemExit(f"Invalid configuration:\n{exc}")
    run_server(settings)
