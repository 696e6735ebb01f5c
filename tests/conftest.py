import json

import httpx
import pytest

from core.config import SearchDefaults, ServerSettings, Settings, UpstreamSettings
from core.hotel_service import HotelService
from core.locations import LocationResolver
from core.upstream import UpstreamClient


SAMPLE_DETAIL = {
    "detail": {
        "hotelName": "Grand Erciyes Hotel",
        "location": {
            "city": "Kayseri",
            "stateProvinceName": "Melikgazi",
            "country": "Türkiye",
            "location": {"lat": 38.7205, "lon": 35.4826},
        },
        "contact": {"addressLines": ["Cumhuriyet Mah. 12", "38030 Kayseri"]},
        "financialInfo": {"tel": "+90 352 000 00 00"},
        "star": 5,
        "images": [
            {"imageUrls": [{"url": "https://img.test/lobby.jpg"}, {"url": ""}]},
            {"imageUrls": [{"url": "https://img.test/pool.jpg"}]},
        ],
        "rooms": [
            {"imageLinks": [{"imageUrls": [{"url": "https://img.test/room-1.jpg"}]}]},
            {"imageLinks": [{"imageUrls": [{"url": "https://img.test/lobby.jpg"}]}]},
        ],
        "facilityGroups": [
            {"facilities": [{"name": "Pool"}, {"name": ""}, {"name": "Spa"}]},
            {"facilities": [{"name": "Free Wi-Fi"}]},
        ],
        "descriptions": {
            "es": [{"description": "Hotel en el centro."}, {"description": ""}],
            "en": [{"description": "Hotel in the city centre."}],
        },
    }
}


class FakeVendor:
    """Stands in for the vendor API behind an httpx.MockTransport.

    Routes are keyed by (method, path).  Every request is recorded so tests
    can assert on what was sent, or that nothing was sent at all.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status=200, json_body=None, text=None, error=None):
        if json_body is not None:
            text = json.dumps(json_body)
        self.routes[(method, path)] = (status, text or "", error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no route")
        status, text, error = route
        if error is not None:
            raise error
        return httpx.Response(status, text=text)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def bodies(self, path):
        return [json.loads(r.content) for r in self.requests if r.url.path == path]


ENV_VARS = [
    "HOTEL_API_BASE_URL", "HOTEL_API_AUTH_TOKEN", "HOTEL_API_ACCEPT_LANGUAGE",
    "HOTEL_API_CURRENCY", "HOTEL_API_TIMEOUT", "HOTEL_DETAIL_LANGUAGE",
    "HOTEL_AUTOCOMPLETE_LANGUAGE", "HOTEL_AUTOCOMPLETE_SIZE", "HOTEL_SEARCH_PATH",
    "HOTEL_SEARCH_FEED_ID", "HOTEL_SEARCH_LIMIT", "HOTEL_SEARCH_OFFSET",
    "HOTEL_RESERVATION_TEMPLATE", "MCP_TRANSPORT", "MCP_HOST", "MCP_PORT", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def vendor():
    return FakeVendor()


@pytest.fixture
def settings():
    return Settings(
        upstream=UpstreamSettings(
            base_url="https://vendor.test",
            auth_token="secret-token",
            accept_language="tr",
            currency="TRY",
            timeout_seconds=5.0,
            _env_file=None,
        ),
        search=SearchDefaults(feed_id="feed-123", limit=5, offset=300, _env_file=None),
        server=ServerSettings(_env_file=None),
        _env_file=None,
    )


@pytest.fixture
def upstream(settings, vendor):
    client = UpstreamClient(settings.upstream, transport=vendor.transport())
    yield client
    client.close()


@pytest.fixture
def service(settings, upstream):
    resolver = LocationResolver(upstream, language="tr", size=30)
    return HotelService(upstream, resolver, settings)


@pytest.fixture
def sample_detail():
    return json.loads(json.dumps(SAMPLE_DETAIL))
