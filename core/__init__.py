# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the adapter logic for the hotel content server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The modules here know how to
#   talk to the vendor API (httpx) and how to read its JSON, but not how the
#   results travel to the agent.  tools/ owns that.
#
#   config.py        → Settings from environment variables
#   models.py        → dataclasses shared by every layer
#   tree.py          → never-raising lookups into untyped JSON
#   extractors.py    → hotel detail / autocomplete projections
#   upstream.py      → httpx client returning UpstreamResult
#   locations.py     → city name → vendor locationId
#   hotel_service.py → one method per tool, always returns a string
# =============================================================================
