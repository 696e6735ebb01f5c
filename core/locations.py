# =============================================================================
# core/locations.py  —  Free-Text City → Vendor Location ID
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The search endpoint only understands the vendor's numeric locationId.
#   Agents speak in city names ("Kayseri").  LocationResolver bridges the two
#   by asking the autocomplete endpoint and taking the first CITY match.
#
# FAILURE MODEL:
#   Every kind of miss returns None: zero CITY matches, an upstream error,
#   an unparseable body.  The caller treats them all the same way.  No retry,
#   no caching: one autocomplete call per resolve().
# =============================================================================

import logging
from typing import Optional

from core.extractors import DocumentParseError, extract_city_location_id, parse_document
from core.tree import has_path
from core.upstream import UpstreamClient

logger = logging.getLogger(__name__)

AUTOCOMPLETE_PATH = "/content-service/autocomplete/search"


class LocationResolver:
    def __init__(self, client: UpstreamClient, language: str = "tr", size: int = 30):
        self.client = client
        self.language = language
        self.size = size

    def resolve(self, query: str) -> Optional[int]:
        """Return the first CITY-type location id matching the query.

        Args:
            query: City name or search keyword.

        Returns:
            The numeric location id, or None if none was found or the call
            failed.
        """
        body = {"query": query, "language": self.language, "size": self.size}
        logger.debug("⌕ [Autocomplete] POST %s – body: %s", AUTOCOMPLETE_PATH, body)

        result = self.client.post_json(AUTOCOMPLETE_PATH, body)
        if not result.ok:
            logger.error("✖ [Autocomplete] %s", result.error)
            return None

        try:
            doc = parse_document(result.body)
        except DocumentParseError as exc:
            logger.error("✖ [Autocomplete] Unparseable response: %s", exc)
            return None

        if not has_path(doc, "items"):
            logger.warning("⚠ [Autocomplete] Missing 'items' array in response")
            return None

        location_id = extract_city_location_id(doc)
        logger.debug("→ [Autocomplete] selected locationId=%s for query='%s'", location_id, query)
        return location_id
