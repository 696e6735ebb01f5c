import json

import httpx
import pytest

from core.config import SearchDefaults, Settings
from core.hotel_service import HotelService
from core.locations import AUTOCOMPLETE_PATH, LocationResolver
from core.models import HotelCodeParams, LocationSearchParams, RoomOccupancy

SEARCH_PATH = "/generic-api-service/royal/hotel/search-by-location"
DETAIL_PATH = "/content-service/hotel-detail/es/H123"


def kayseri_params(**overrides):
    values = dict(
        city="Kayseri",
        check_in="2025-09-12",
        check_out="2025-09-15",
        client_nationality="TR",
        rooms=[RoomOccupancy(adults=2)],
        all_prices_flag=False,
    )
    values.update(overrides)
    return LocationSearchParams(**values)


# =============================================================================
# hotel_search_by_location
# =============================================================================
def test_search_injects_constants_and_passes_body_through(service, vendor):
    vendor.add("POST", AUTOCOMPLETE_PATH, json_body={
        "items": [{"locations": [{"locationType": "CITY", "id": "100"}]}]
    })
    upstream_body = '{"hotels":[{"code":"H123","price":{"amount":1500}}],"total":1}'
    vendor.add("POST", SEARCH_PATH, text=upstream_body)

    result = service.search_by_location(kayseri_params())

    assert result == upstream_body
    assert vendor.bodies(SEARCH_PATH) == [{
        "checkIn": "2025-09-12",
        "checkOut": "2025-09-15",
        "clientNationality": "TR",
        "rooms": [{"adults": 2, "childAges": []}],
        "allPricesFlag": False,
        "limit": 5,
        "offset": 300,
        "feedId": "feed-123",
        "locationId": 100,
    }]


def test_search_forwards_children_ages(service, vendor):
    vendor.add("POST", AUTOCOMPLETE_PATH, json_body={
        "items": [{"locations": [{"locationType": "CITY", "id": 7}]}]
    })
    vendor.add("POST", SEARCH_PATH, json_body={})

    service.search_by_location(kayseri_params(
        rooms=[RoomOccupancy(adults=2, child_ages=[4, 9]), RoomOccupancy(adults=1)]
    ))

    (body,) = vendor.bodies(SEARCH_PATH)
    assert body["rooms"] == [{"adults": 2, "childAges": [4, 9]}, {"adults": 1, "childAges": []}]


@pytest.mark.parametrize("field,value", [
    ("city", None),
    ("city", "  "),
    ("check_in", None),
    ("check_out", ""),
    ("client_nationality", None),
    ("rooms", None),
    ("rooms", []),
])
def test_search_missing_field_makes_no_call(service, vendor, field, value):
    result = service.search_by_location(kayseri_params(**{field: value}))

    assert result == f"Hotel search failed: {field} is missing."
    assert vendor.requests == []


def test_search_unknown_city(service, vendor):
    vendor.add("POST", AUTOCOMPLETE_PATH, json_body={"items": []})

    result = service.search_by_location(kayseri_params(city="Atlantis"))

    assert result == "No location ID found for city: Atlantis"
    assert [r.url.path for r in vendor.requests] == [AUTOCOMPLETE_PATH]


def test_search_upstream_error_is_a_message(service, vendor):
    vendor.add("POST", AUTOCOMPLETE_PATH, json_body={
        "items": [{"locations": [{"locationType": "CITY", "id": "100"}]}]
    })
    vendor.add("POST", SEARCH_PATH, status=400, text='{"error":"bad dates"}')

    result = service.search_by_location(kayseri_params())

    assert result == f"Error during hotel search: 400 Bad Request from POST {SEARCH_PATH}"


def test_search_window_comes_from_settings(upstream):
    settings = Settings(search=SearchDefaults(feed_id="other-feed", limit=20, offset=0))
    svc = HotelService(upstream, LocationResolver(upstream), settings)

    request = svc.build_search_request(kayseri_params(), location_id=9)

    assert (request.feed_id, request.limit, request.offset, request.location_id) == (
        "other-feed", 20, 0, 9,
    )


# =============================================================================
# Missing hotel code
# =============================================================================
@pytest.mark.parametrize("method,message", [
    ("hotel_details", "Hotel details failed: hotelCode is missing."),
    ("hotel_images", "Hotel images failed: hotelCode is missing."),
    ("hotel_description", "Hotel description failed: hotelCode is missing."),
    ("hotel_facility_check", "Facility check failed: hotelCode is missing."),
    ("hotel_reservation", "Reservation failed: hotelCode is missing."),
])
@pytest.mark.parametrize("code", [None, "", "   "])
def test_missing_hotel_code_makes_no_call(service, vendor, method, message, code):
    result = getattr(service, method)(HotelCodeParams(hotel_code=code))

    assert result == message
    assert "missing" in result and "hotelCode" in result
    assert vendor.requests == []


# =============================================================================
# Hotel-detail backed tools
# =============================================================================
def test_hotel_details(service, vendor, sample_detail):
    vendor.add("GET", DETAIL_PATH, json_body=sample_detail)

    result = service.hotel_details(HotelCodeParams("H123"))

    assert result.startswith("Hotel: Grand Erciyes Hotel\nLocation: Kayseri, Melikgazi, Türkiye\n")
    assert result.endswith("Star: 5\n")
    assert vendor.requests[0].method == "GET"


def test_hotel_details_empty_document(service, vendor):
    vendor.add("GET", DETAIL_PATH, json_body={"detail": {}})

    assert service.hotel_details(HotelCodeParams("H123")) == "No details found for hotelCode H123."


def test_hotel_images(service, vendor, sample_detail):
    vendor.add("GET", DETAIL_PATH, json_body=sample_detail)

    result = service.hotel_images(HotelCodeParams("H123"))

    assert result == (
        "Images for hotelCode H123:\n"
        "- https://img.test/lobby.jpg\n"
        "- https://img.test/pool.jpg\n"
        "- https://img.test/room-1.jpg\n"
        "- https://img.test/lobby.jpg\n"
    )


def test_hotel_images_none(service, vendor):
    vendor.add("GET", DETAIL_PATH, json_body={"detail": {"images": []}})

    assert service.hotel_images(HotelCodeParams("H123")) == "No images found for hotelCode H123."


def test_hotel_description(service, vendor, sample_detail):
    vendor.add("GET", DETAIL_PATH, json_body=sample_detail)

    result = service.hotel_description(HotelCodeParams("H123"))

    assert result == "Description for hotelCode H123:\nHotel en el centro.\n\nHotel in the city centre."


def test_hotel_description_none(service, vendor):
    vendor.add("GET", DETAIL_PATH, json_body={"detail": {}})

    assert service.hotel_description(HotelCodeParams("H123")) == (
        "No description found for hotelCode H123."
    )


def test_hotel_facility_check(service, vendor, sample_detail):
    vendor.add("GET", DETAIL_PATH, json_body=sample_detail)

    result = service.hotel_facility_check(HotelCodeParams("H123"))

    assert result == "Facilities for hotelCode H123:\n- Pool\n- Spa\n- Free Wi-Fi\n"


@pytest.mark.parametrize("detail", [{}, {"facilityGroups": []}])
def test_hotel_facility_check_none(service, vendor, detail):
    vendor.add("GET", DETAIL_PATH, json_body={"detail": detail})

    assert service.hotel_facility_check(HotelCodeParams("H123")) == (
        "No facilities found for hotelCode H123."
    )


@pytest.mark.parametrize("method", [
    "hotel_details", "hotel_images", "hotel_description", "hotel_facility_check",
])
def test_unparseable_detail_is_reported(service, vendor, method):
    vendor.add("GET", DETAIL_PATH, text="<html>gateway</html>")

    assert getattr(service, method)(HotelCodeParams("H123")) == "Error parsing hotel details"


@pytest.mark.parametrize("method,prefix", [
    ("hotel_details", "Error retrieving hotel details for H123: "),
    ("hotel_images", "Error retrieving hotel images for H123: "),
    ("hotel_description", "Error retrieving hotel description for H123: "),
    ("hotel_facility_check", "Error retrieving facilities for hotelCode H123: "),
])
def test_upstream_failure_is_reported(service, vendor, method, prefix):
    vendor.add("GET", DETAIL_PATH, status=404, text='{"message":"hotel not found"}')

    result = getattr(service, method)(HotelCodeParams("H123"))

    assert result == prefix + f"404 Not Found from GET {DETAIL_PATH}"


def test_network_failure_is_reported(service, vendor):
    vendor.add("GET", DETAIL_PATH, error=httpx.ConnectError("connection reset"))

    result = service.hotel_details(HotelCodeParams("H123"))

    assert result.startswith("Error retrieving hotel details for H123: ")
    assert "connection reset" in result


def test_detail_path_encodes_hotel_code(service):
    assert service.detail_path("A/B C") == "/content-service/hotel-detail/es/A%2FB%20C"


def test_all_detail_tools_share_one_endpoint(service, vendor, sample_detail):
    vendor.add("GET", DETAIL_PATH, json_body=sample_detail)
    code = HotelCodeParams("H123")

    service.hotel_details(code)
    service.hotel_images(code)
    service.hotel_description(code)
    service.hotel_facility_check(code)

    assert {(r.method, r.url.path) for r in vendor.requests} == {("GET", DETAIL_PATH)}


# =============================================================================
# hotel_reservation
# =============================================================================
def test_reservation_returns_fixed_link(service, vendor):
    result = service.hotel_reservation(HotelCodeParams("H123"))

    assert result.startswith("https://www.etstur.com/checkout/checkout/hotel/step1?bookingUuid=")
    assert "Have a wonderful stay" in result
    assert vendor.requests == []


def test_reservation_template_may_include_hotel_code(upstream):
    settings = Settings(reservation_template="https://book.test/{hotel_code}")
    svc = HotelService(upstream, LocationResolver(upstream), settings)

    assert svc.hotel_reservation(HotelCodeParams("H123")) == "https://book.test/H123"


def test_reservation_template_with_unknown_placeholder(upstream):
    settings = Settings(reservation_template="https://book.test/{booking}")
    svc = HotelService(upstream, LocationResolver(upstream), settings)

    assert svc.hotel_reservation(HotelCodeParams("H123")) == "https://book.test/{booking}"


def test_search_result_is_compact_json_string(service, vendor):
    vendor.add("POST", AUTOCOMPLETE_PATH, json_body={
        "items": [{"locations": [{"locationType": "CITY", "id": "100"}]}]
    })
    vendor.add("POST", SEARCH_PATH, text='{"hotels":[]}')

    result = service.search_by_location(kayseri_params())

    assert json.loads(result) == {"hotels": []}


@pytest.mark.parametrize("template", [
    "https://book.test/{hotel_code.upper}",
    "https://book.test/{0}?h={hotel_code!r:>99}",
])
def test_reservation_template_only_substitutes_plain_placeholder(upstream, template):
    settings = Settings(reservation_template=template)
    svc = HotelService(upstream, LocationResolver(upstream), settings)

    assert svc.hotel_reservation(HotelCodeParams("H123")) == template


def test_close_closes_http_client(service):
    service.close()

    assert service.client._client.is_closed
