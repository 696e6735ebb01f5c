# =============================================================================
# core/upstream.py  —  HTTP Client for the Vendor Hotel-Content API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps one httpx.Client that is bound to the vendor base URL and carries
#   the static headers every call needs:
#
#     Authorization: Bearer <token>
#     Accept-Language: <language>
#     X-Currency: <currency>
#     Content-Type: application/json
#
#   get() and post_json() return an UpstreamResult instead of raising:
#     - 2xx                  → UpstreamResult.success(body)
#     - non-2xx              → UpstreamResult.failure(message, status, body)
#     - timeout / network    → UpstreamResult.failure(message)
#
#   Callers decide how a failure reads to the agent; this layer only logs
#   enough to reproduce it (method, path, status, response body).
#
# THREAD SAFETY:
#   httpx.Client is safe to share.  Nothing here is mutated after __init__.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import UpstreamSettings
from core.models import UpstreamResult

logger = logging.getLogger(__name__)


def _mask(value: str) -> str:
    if value.lower().startswith("bearer "):
        return "Bearer ***"
    return "***"


def _log_outgoing(request: httpx.Request) -> None:
    """httpx request hook: log method, URL and headers (token masked)."""
    logger.debug("[HOTEL-API] Request: %s %s", request.method, request.url)
    for name, value in request.headers.items():
        shown = _mask(value) if name.lower() == "authorization" else value
        logger.debug("[HOTEL-API] %s: %s", name, shown)


class UpstreamClient:
    """Thin, non-raising wrapper around a configured httpx.Client."""

    def __init__(
        self,
        settings: UpstreamSettings,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            settings: Base URL, credential, headers and timeout.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        self.settings = settings
        self._client = httpx.Client(
            base_url=settings.base_url,
            headers={
                "Authorization": f"Bearer {settings.auth_token}",
                "Accept-Language": settings.accept_language,
                "X-Currency": settings.currency,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(settings.timeout_seconds),
            event_hooks={"request": [_log_outgoing]},
            transport=transport,
        )

    def get(self, path: str) -> UpstreamResult:
        return self._send("GET", path)

    def post_json(self, path: str, payload: Any) -> UpstreamResult:
        return self._send("POST", path, json=payload)

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> UpstreamResult:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            message = f"Request timed out after {self.settings.timeout_seconds}s: {method} {path}"
            logger.error("✖ [HOTEL-API] %s (%s)", message, exc)
            return UpstreamResult.failure(message)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = str(exc) or type(exc).__name__
            logger.error("✖ [HOTEL-API] %s %s failed: %s", method, path, message)
            return UpstreamResult.failure(message)

        if response.is_success:
            logger.debug("✓ [HOTEL-API] %s %s → %s", method, path, response.status_code)
            return UpstreamResult.success(response.text, response.status_code)

        message = f"{response.status_code} {response.reason_phrase} from {method} {path}"
        logger.error("✖ [HOTEL-API] %s – body: %s", message, response.text)
        return UpstreamResult.failure(message, status_code=response.status_code, body=response.text)
