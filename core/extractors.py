# =============================================================================
# core/extractors.py  —  Hotel Detail & Autocomplete Response Extraction
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the vendor's deeply nested JSON into flat, display-ready values:
#
#     parse_document()            raw body text → decoded JSON (or raise)
#     extract_hotel_summary()     name, location, address, coords, phone, star
#     format_hotel_summary()      HotelSummary → multi-line text
#     extract_image_urls()        hotel images first, then room images
#     extract_facility_names()    facility names, group by group
#     extract_description()       every description in every language
#     extract_city_location_id()  first CITY id from an autocomplete response
#
# THE ONE RULE:
#   A missing or oddly shaped node is normal and yields empty output.  Only a
#   body that is not JSON at all is an error, and it is reported exactly once,
#   by parse_document() raising DocumentParseError.  Every other function here
#   is pure and never raises.
# =============================================================================

import json
import logging
import re
from typing import Any, Optional

from core.models import HotelSummary
from core.tree import as_float, as_text, get_list, get_path, get_text, has_path

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Error parsing hotel details"

_INTEGER_ID = re.compile(r"[+-]?\d+")


class DocumentParseError(ValueError):
    """The upstream body could not be decoded as JSON."""


def parse_document(body: Optional[str]) -> Any:
    """Decode an upstream response body.

    Raises:
        DocumentParseError: if the body is empty or not valid JSON.
    """
    if body is None or not body.strip():
        raise DocumentParseError("empty response body")
    try:
        return json.loads(body)
    except ValueError as exc:
        raise DocumentParseError(str(exc)) from exc


# =============================================================================
# Hotel summary
# =============================================================================
def extract_hotel_summary(doc: Any) -> HotelSummary:
    """Flatten the headline fields of a hotel detail document.

    Args:
        doc: A decoded hotel detail document ({"detail": {...}}).

    Returns:
        A HotelSummary.  Fields missing from the document stay empty;
        latitude/longitude are only set when detail.location.location exists.
    """
    detail = get_path(doc, "detail", default={})
    location = get_path(detail, "location", default={})

    address_lines = [as_text(line) for line in get_list(detail, "contact", "addressLines")]

    latitude = longitude = None
    if has_path(location, "location"):
        coords = get_path(location, "location")
        latitude = as_float(get_path(coords, "lat"))
        longitude = as_float(get_path(coords, "lon"))

    summary = HotelSummary(
        name=get_text(detail, "hotelName"),
        city=get_text(location, "city"),
        state=get_text(location, "stateProvinceName"),
        country=get_text(location, "country"),
        address_line=", ".join(address_lines),
        latitude=latitude,
        longitude=longitude,
        phone=get_text(detail, "financialInfo", "tel"),
        star_rating=get_text(detail, "star"),
    )
    logger.debug("Extracted hotel details for: %s", summary.name)
    return summary


def format_hotel_summary(summary: HotelSummary) -> str:
    """Render a HotelSummary as labelled lines, skipping empty fields.

    Line order is fixed: Hotel, Location, Address, Coordinates, Phone, Star.
    """
    lines = []

    if summary.name:
        lines.append(f"Hotel: {summary.name}")

    place = ", ".join(part for part in (summary.city, summary.state, summary.country) if part)
    if place:
        lines.append(f"Location: {place}")

    if summary.address_line:
        lines.append(f"Address: {summary.address_line}")

    if summary.latitude is not None and summary.longitude is not None:
        lines.append(f"Coordinates: {summary.latitude}, {summary.longitude}")

    if summary.phone:
        lines.append(f"Phone: {summary.phone}")

    if summary.star_rating:
        lines.append(f"Star: {summary.star_rating}")

    return "".join(f"{line}\n" for line in lines)


# =============================================================================
# Images
# =============================================================================
def _urls_from_blocks(blocks: list) -> list[str]:
    urls = []
    for block in blocks:
        for url_node in get_list(block, "imageUrls"):
            url = get_text(url_node, "url")
            if url:
                urls.append(url)
    return urls


def extract_image_urls(doc: Any) -> list[str]:
    """Collect every image URL of a hotel, in document order.

    All detail.images blocks come first, then each room's imageLinks blocks
    room by room.  Empty URLs are dropped; duplicates are kept.
    """
    detail = get_path(doc, "detail", default={})

    urls = _urls_from_blocks(get_list(detail, "images"))
    for room in get_list(detail, "rooms"):
        urls.extend(_urls_from_blocks(get_list(room, "imageLinks")))

    logger.debug("Extracted %d image URLs", len(urls))
    return urls


# =============================================================================
# Facilities
# =============================================================================
def extract_facility_names(doc: Any) -> list[str]:
    """Flatten detail.facilityGroups[].facilities[].name, skipping blanks."""
    names = []
    for group in get_list(doc, "detail", "facilityGroups"):
        for facility in get_list(group, "facilities"):
            name = get_text(facility, "name")
            if name:
                names.append(name)

    logger.debug("Extracted %d facilities", len(names))
    return names


# =============================================================================
# Descriptions
# =============================================================================
def extract_description(doc: Any) -> str:
    """Join every non-empty description under every language key.

    Language keys are visited in the order the JSON decoder produced them,
    which for the standard json module is document order.  Fragments are
    separated by one blank line.
    """
    descriptions = get_path(doc, "detail", "descriptions")
    if not isinstance(descriptions, dict):
        logger.warning("detail.descriptions is missing or not an object")
        return ""

    fragments = []
    for entries in descriptions.values():
        if not isinstance(entries, list):
            continue
        for entry in entries:
            text = get_text(entry, "description")
            if text:
                fragments.append(text)

    text = "\n\n".join(fragments)
    logger.debug("Extracted %d characters of descriptions", len(text))
    return text


# =============================================================================
# Autocomplete
# =============================================================================
def _parse_location_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_ID.fullmatch(value):
        return int(value)
    return None


def extract_city_location_id(doc: Any) -> Optional[int]:
    """Pick the first CITY location id from an autocomplete response.

    All items[].locations[] arrays are flattened in document order, filtered
    to locationType == "CITY", and the first id that parses as an integer
    wins.  Ids that do not parse are skipped, not fatal.

    Returns:
        The location id, or None when no CITY entry has a usable id.
    """
    for item in get_list(doc, "items"):
        for location in get_list(item, "locations"):
            if get_path(location, "locationType") != "CITY":
                continue
            raw_id = get_path(location, "id")
            location_id = _parse_location_id(raw_id)
            if location_id is None:
                logger.error("Cannot parse location id: %r", raw_id)
                continue
            return location_id
    return None
