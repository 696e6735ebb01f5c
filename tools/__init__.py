# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and core/.  Each tool:
#     1. Accepts flat, optional MCP arguments
#     2. Packs them into a core.models parameter dataclass
#     3. Calls the matching HotelService method
#     4. Logs the call and returns the service's string unchanged
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate input (HotelService does)
#   - They do NOT call the vendor API (core/upstream.py does)
#   - They do NOT parse vendor JSON (core/extractors.py does)
# =============================================================================
