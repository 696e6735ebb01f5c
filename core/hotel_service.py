# =============================================================================
# core/hotel_service.py  —  Tool Dispatcher for the Hotel Content Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   HotelService has one method per MCP tool.  Each follows the same steps:
#
#     Validate → (Resolve) → Build request → Call upstream → Extract/Format
#
#   and every step may stop early with a failure string.  The methods ALWAYS
#   return a str and NEVER raise: the calling agent must get readable text
#   it can reason about, whatever went wrong.
#
# ONE FETCH, FOUR VIEWS:
#   hotel_details, hotel_images, hotel_description and hotel_facility_check
#   all read the same hotel-detail document.  _with_detail() performs that
#   fetch once and hands the parsed document to a per-tool renderer.
# =============================================================================

import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

from core.config import SearchDefaults, Settings
from core.extractors import (
    PARSE_ERROR_MESSAGE,
    DocumentParseError,
    extract_description,
    extract_facility_names,
    extract_hotel_summary,
    extract_image_urls,
    format_hotel_summary,
    parse_document,
)
from core.locations import LocationResolver
from core.models import HotelCodeParams, LocationSearchParams, LocationSearchRequest
from core.upstream import UpstreamClient

logger = logging.getLogger(__name__)

HOTEL_DETAIL_PATH = "/content-service/hotel-detail/{language}/{hotel_code}"
RESERVATION_PLACEHOLDER = "{hotel_code}"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _bullet_list(title: str, items: list[str]) -> str:
    return title + "\n" + "".join(f"- {item}\n" for item in items)


class HotelService:
    """Validates tool input, talks to the vendor, renders string results."""

    def __init__(
        self,
        client: UpstreamClient,
        resolver: LocationResolver,
        settings: Settings,
    ):
        self.client = client
        self.resolver = resolver
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "HotelService":
        """Wire the real httpx client and resolver from Settings."""
        client = UpstreamClient(settings.upstream)
        resolver = LocationResolver(
            client,
            language=settings.upstream.autocomplete_language,
            size=settings.upstream.autocomplete_size,
        )
        return cls(client, resolver, settings)

    @property
    def search_defaults(self) -> SearchDefaults:
        return self.settings.search

    def close(self) -> None:
        self.client.close()

    # =========================================================================
    # hotel_search_by_location
    # =========================================================================
    def search_by_location(self, params: LocationSearchParams) -> str:
        """Resolve the city, inject feed/window, return the vendor body verbatim."""
        missing = self._missing_search_field(params)
        if missing:
            return f"Hotel search failed: {missing} is missing."

        location_id = self.resolver.resolve(params.city)
        if location_id is None:
            return f"No location ID found for city: {params.city}"

        request = self.build_search_request(params, location_id)
        result = self.client.post_json(self.settings.upstream.search_path, request.to_payload())
        if not result.ok:
            logger.error("Hotel search failed: %s", result.error)
            return f"Error during hotel search: {result.error}"
        return result.body

    def build_search_request(
        self, params: LocationSearchParams, location_id: int
    ) -> LocationSearchRequest:
        defaults = self.search_defaults
        return LocationSearchRequest(
            check_in=params.check_in,
            check_out=params.check_out,
            client_nationality=params.client_nationality,
            rooms=list(params.rooms),
            all_prices_flag=params.all_prices_flag,
            limit=defaults.limit,
            offset=defaults.offset,
            feed_id=defaults.feed_id,
            location_id=location_id,
        )

    @staticmethod
    def _missing_search_field(params: LocationSearchParams) -> Optional[str]:
        for name in ("city", "check_in", "check_out", "client_nationality"):
            if _is_blank(getattr(params, name)):
                return name
        if not params.rooms:
            return "rooms"
        return None

    # =========================================================================
    # hotel_reservation
    # =========================================================================
    def hotel_reservation(self, params: HotelCodeParams) -> str:
        if _is_blank(params.hotel_code):
            return "Reservation failed: hotelCode is missing."
        # Only the literal {hotel_code} is substituted; other braces pass through.
        return self.settings.reservation_template.replace(
            RESERVATION_PLACEHOLDER, params.hotel_code
        )

    # =========================================================================
    # Hotel-detail backed tools
    # =========================================================================
    def hotel_details(self, params: HotelCodeParams) -> str:
        def render(code: str, doc: Any) -> str:
            text = format_hotel_summary(extract_hotel_summary(doc))
            return text or f"No details found for hotelCode {code}."

        return self._with_detail(
            params,
            missing="Hotel details failed: hotelCode is missing.",
            error="Error retrieving hotel details for {code}: {error}",
            render=render,
        )

    def hotel_images(self, params: HotelCodeParams) -> str:
        def render(code: str, doc: Any) -> str:
            urls = extract_image_urls(doc)
            if not urls:
                return f"No images found for hotelCode {code}."
            return _bullet_list(f"Images for hotelCode {code}:", urls)

        return self._with_detail(
            params,
            missing="Hotel images failed: hotelCode is missing.",
            error="Error retrieving hotel images for {code}: {error}",
            render=render,
        )

    def hotel_description(self, params: HotelCodeParams) -> str:
        def render(code: str, doc: Any) -> str:
            description = extract_description(doc)
            if not description:
                return f"No description found for hotelCode {code}."
            return f"Description for hotelCode {code}:\n{description}"

        return self._with_detail(
            params,
            missing="Hotel description failed: hotelCode is missing.",
            error="Error retrieving hotel description for {code}: {error}",
            render=render,
        )

    def hotel_facility_check(self, params: HotelCodeParams) -> str:
        def render(code: str, doc: Any) -> str:
            names = extract_facility_names(doc)
            if not names:
                return f"No facilities found for hotelCode {code}."
            return _bullet_list(f"Facilities for hotelCode {code}:", names)

        return self._with_detail(
            params,
            missing="Facility check failed: hotelCode is missing.",
            error="Error retrieving facilities for hotelCode {code}: {error}",
            render=render,
        )

    def detail_path(self, hotel_code: str) -> str:
        return HOTEL_DETAIL_PATH.format(
            language=quote(self.settings.upstream.detail_language, safe=""),
            hotel_code=quote(hotel_code, safe=""),
        )

    def _with_detail(
        self,
        params: HotelCodeParams,
        missing: str,
        error: str,
        render: Callable[[str, Any], str],
    ) -> str:
        """Validate → GET hotel detail → parse → render.

        Args:
            params: The tool input carrying hotel_code.
            missing: Reply when hotel_code is absent.
            error: Reply template ({code}, {error}) for upstream failures.
            render: Turns (hotel_code, parsed document) into the reply.
        """
        if _is_blank(params.hotel_code):
            return missing
        code = params.hotel_code

        result = self.client.get(self.detail_path(code))
        if not result.ok:
            logger.error("Failed to fetch hotel detail for %s: %s", code, result.error)
            return error.format(code=code, error=result.error)

        try:
            doc = parse_document(result.body)
        except DocumentParseError as exc:
            logger.error("Error parsing hotel detail for %s: %s", code, exc)
            return PARSE_ERROR_MESSAGE

        return render(code, doc)
