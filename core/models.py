# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the adapter)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows between the MCP tools and the vendor API:
#
#   Tool parameters   →  what the agent sends us (LocationSearchParams, ...)
#   Upstream request  →  what we send the vendor (LocationSearchRequest)
#   Upstream result   →  what the HTTP layer hands back (UpstreamResult)
#   Hotel summary     →  the flattened view of a hotel detail document
#
# Everything is request-scoped: built for one tool call, never shared,
# never mutated afterwards.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Tool parameters
# -----------------------------------------------------------------------------
# Required fields are still Optional here.  A missing field must come back to
# the agent as a readable error string, so the dispatcher checks them instead
# of letting schema validation reject the call.
# -----------------------------------------------------------------------------
@dataclass
class RoomOccupancy:
    """One room: how many adults, and the age of every child."""

    adults: int = 1
    child_ages: list[int] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"adults": self.adults, "childAges": list(self.child_ages)}


@dataclass
class LocationSearchParams:
    """Input of the hotel_search_by_location tool."""

    city: Optional[str] = None
    check_in: Optional[str] = None              # "2025-09-12"
    check_out: Optional[str] = None             # "2025-09-15"
    client_nationality: Optional[str] = None    # "TR"
    rooms: Optional[list[RoomOccupancy]] = None
    all_prices_flag: Optional[bool] = None      # forwarded untouched


@dataclass
class HotelCodeParams:
    """Input of every tool that targets a single hotel."""

    hotel_code: Optional[str] = None


# -----------------------------------------------------------------------------
# LocationSearchRequest: the body POSTed to the search endpoint
# -----------------------------------------------------------------------------
# Three values never come from the caller: feed_id, the (limit, offset)
# window, and location_id (resolved from the city name).
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LocationSearchRequest:
    check_in: str
    check_out: str
    client_nationality: str
    rooms: list[RoomOccupancy]
    all_prices_flag: Optional[bool]
    limit: int
    offset: int
    feed_id: str
    location_id: int

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the vendor's camelCase keys."""
        return {
            "checkIn": self.check_in,
            "checkOut": self.check_out,
            "clientNationality": self.client_nationality,
            "rooms": [room.to_payload() for room in self.rooms],
            "allPricesFlag": self.all_prices_flag,
            "limit": self.limit,
            "offset": self.offset,
            "feedId": self.feed_id,
            "locationId": self.location_id,
        }


# -----------------------------------------------------------------------------
# UpstreamResult: success/failure variant returned by the HTTP layer
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class UpstreamResult:
    """Outcome of one upstream call.

    ok=True   → body holds the raw response text.
    ok=False  → error holds a human-readable message; status_code and body
                are filled in when the server answered with a non-2xx status.
    """

    ok: bool
    body: str = ""
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, body: str, status_code: int = 200) -> "UpstreamResult":
        return cls(ok=True, body=body, status_code=status_code)

    @classmethod
    def failure(
        cls,
        error: str,
        status_code: Optional[int] = None,
        body: str = "",
    ) -> "UpstreamResult":
        return cls(ok=False, body=body, status_code=status_code, error=error)


# -----------------------------------------------------------------------------
# HotelSummary: the flattened hotel detail used by the hotel_details tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HotelSummary:
    """Display-ready fields pulled out of a hotel detail document.

    Empty strings mean "not in the document".  latitude/longitude are None
    unless the coordinate node exists at all.
    """

    name: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    address_line: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    phone: str = ""
    star_rating: str = ""
