# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL hotel tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the six MCP tools an agent can call.  Each tool is a thin
#   wrapper around a HotelService method in core/. It turns the flat MCP
#   arguments into a parameter dataclass, calls the service, and logs.
#
# HOW IT WORKS (the flow):
#   1. An agent discovers the tools over MCP and picks one by name
#   2. FastMCP routes the call to the decorated function below
#   3. The function builds e.g. HotelCodeParams and calls HotelService
#   4. HotelService talks to the vendor API and returns a STRING
#   5. The agent receives that string, success or failure alike
#
# TOOL CONTRACT:
#   Every tool returns a plain string (text or compact JSON) and never
#   raises.  Every argument is optional at the protocol level: a missing
#   hotel_code comes back as "…hotelCode is missing." rather than a schema
#   error, so the agent can read it and retry.
#
# RUNNING THIS SERVER:
#   a) python main.py                    (transport from MCP_TRANSPORT)
#   b) python -m tools.mcp_server        (stdio, still reads .env)
# =============================================================================

import json
import logging
import os
import sys
from typing import Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP

from core.config import load_settings, normalize_log_level
from core.hotel_service import HotelService
from core.models import HotelCodeParams, LocationSearchParams, RoomOccupancy

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP protocol when running over stdio, so every log line
# goes to STDERR.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_MAX_LOGGED_CHARS = 500

logging.basicConfig(
    level=normalize_log_level(os.environ.get("LOG_LEVEL")),
    format="%(asctime)s [MCP] %(name)s %(levelname)s %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: str) -> str:
    """Log the tool response (on one line, truncated) in GREEN, then return it."""
    shown = json.dumps(result, ensure_ascii=False)
    if len(shown) > _MAX_LOGGED_CHARS:
        shown = shown[:_MAX_LOGGED_CHARS] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {shown}{_RESET}")
    return result


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("hotel-content")

# The service is built on first use so importing this module never needs
# credentials.  Tests replace it with one wired to a fake transport.
_service: Optional[HotelService] = None


def get_service() -> HotelService:
    global _service
    if _service is None:
        _log_status("Building HotelService from environment settings")
        _service = HotelService.from_settings(load_settings())
    return _service


def set_service(service: Optional[HotelService]) -> None:
    global _service
    _service = service


def close_service() -> None:
    """Close the service's HTTP client (if one was built) on shutdown."""
    global _service
    if _service is not None:
        _service.close()
        _service = None


def _as_code(hotel_code: Optional[Union[str, int]]) -> Optional[str]:
    # Agents sometimes send the hotel code as a JSON number.
    return None if hotel_code is None else str(hotel_code)


# =============================================================================
# TOOL 1: hotel_search_by_location
# =============================================================================
# The only tool that needs two upstream calls: autocomplete (city → id),
# then the search itself.  The vendor's answer is passed through untouched.
# =============================================================================
@mcp.tool()
def hotel_search_by_location(
    city: Optional[str] = None,
    check_in: Optional[str] = None,
    check_out: Optional[str] = None,
    client_nationality: Optional[str] = None,
    rooms: Optional[list[RoomOccupancy]] = None,
    all_prices_flag: Optional[bool] = None,
) -> str:
    """Search hotels by city name, check-in/out dates and guest info.

    feedId, limit and offset are set internally; the city name is resolved
    to the vendor's location id automatically.

    Args:
        city: City name, e.g. "Kayseri".
        check_in: Check-in date, YYYY-MM-DD.
        check_out: Check-out date, YYYY-MM-DD.
        client_nationality: Guest nationality country code, e.g. "TR".
        rooms: One entry per room: {"adults": 2, "child_ages": [4, 9]}.
        all_prices_flag: Ask the vendor for every price option.

    Returns:
        The vendor's search response as compact JSON, or an error message.
    """
    _log_request("hotel_search_by_location",
                 city=city, check_in=check_in, check_out=check_out,
                 client_nationality=client_nationality, rooms=rooms,
                 all_prices_flag=all_prices_flag)

    params = LocationSearchParams(
        city=city,
        check_in=check_in,
        check_out=check_out,
        client_nationality=client_nationality,
        rooms=rooms,
        all_prices_flag=all_prices_flag,
    )
    return _log_response("hotel_search_by_location", get_service().search_by_location(params))


# =============================================================================
# TOOL 2: hotel_reservation
# =============================================================================
# No upstream call: returns the reservation link for the chosen hotel.
# =============================================================================
@mcp.tool()
def hotel_reservation(hotel_code: Optional[Union[str, int]] = None) -> str:
    """Reserve a hotel by hotel code and return the ETSTUR reservation link.

    Args:
        hotel_code: The hotel code from a search result.

    Returns:
        A message containing the reservation link, or an error message.
    """
    _log_request("hotel_reservation", hotel_code=hotel_code)
    params = HotelCodeParams(hotel_code=_as_code(hotel_code))
    return _log_response("hotel_reservation", get_service().hotel_reservation(params))


# =============================================================================
# TOOLS 3-6: hotel-detail backed tools
# =============================================================================
# All four read the same hotel-detail document; they differ only in which
# part of it they return.
# =============================================================================
@mcp.tool()
def hotel_details(hotel_code: Optional[Union[str, int]] = None) -> str:
    """Get hotel information by hotel code: name, location, address,
    coordinates, phone and star rating.

    Args:
        hotel_code: The hotel code from a search result.

    Returns:
        One "Label: value" line per known field, or an error message.
    """
    _log_request("hotel_details", hotel_code=hotel_code)
    params = HotelCodeParams(hotel_code=_as_code(hotel_code))
    return _log_response("hotel_details", get_service().hotel_details(params))


@mcp.tool()
def hotel_images(hotel_code: Optional[Union[str, int]] = None) -> str:
    """Get hotel and room image URLs by hotel code.

    Args:
        hotel_code: The hotel code from a search result.

    Returns:
        A list of image URLs, one per line, or a "No images found" message.
    """
    _log_request("hotel_images", hotel_code=hotel_code)
    params = HotelCodeParams(hotel_code=_as_code(hotel_code))
    return _log_response("hotel_images", get_service().hotel_images(params))


@mcp.tool()
def hotel_description(hotel_code: Optional[Union[str, int]] = None) -> str:
    """Get the hotel's description texts by hotel code.

    Args:
        hotel_code: The hotel code from a search result.

    Returns:
        The description paragraphs, or a "No description found" message.
    """
    _log_request("hotel_description", hotel_code=hotel_code)
    params = HotelCodeParams(hotel_code=_as_code(hotel_code))
    return _log_response("hotel_description", get_service().hotel_description(params))


@mcp.tool()
def hotel_facility_check(hotel_code: Optional[Union[str, int]] = None) -> str:
    """Check which facilities a hotel offers (pool, spa, Wi-Fi, ...) by hotel code.

    Args:
        hotel_code: The hotel code from a search result.

    Returns:
        A list of facility names, one per line, or a "No facilities found" message.
    """
    _log_request("hotel_facility_check", hotel_code=hotel_code)
    params = HotelCodeParams(hotel_code=_as_code(hotel_code))
    return _log_response("hotel_facility_check", get_service().hotel_facility_check(params))


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    load_dotenv()
    logging.getLogger().setLevel(normalize_log_level(os.environ.get("LOG_LEVEL")))
    try:
        mcp.run()
    finally:
        close_service()
