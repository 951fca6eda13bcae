from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

from contact_availability.api import _parse_year, get_holiday_api, get_timezone_api_factory, get_today
from contact_availability.config import settings
from contact_availability.core.holiday_api import NagerDateApi
from contact_availability.core.timezone_api import AbstractTimezoneApi
from contact_availability.errors import InvalidRequestError
from contact_availability.main import app


def tz_payload(value: str, location: str = "Boston,MA,United States") -> dict:
    return {
        "datetime": value,
        "timezone_name": "Eastern Daylight Time",
        "timezone_location": "America/New_York",
        "timezone_abbreviation": "EDT",
        "gmt_offset": -4,
        "is_dst": True,
        "requested_location": location,
        "latitude": 42.36,
        "longitude": -71.06,
    }


def holiday(day: str, name: str) -> dict:
    return {
        "date": day,
        "localName": name,
        "name": name,
        "countryCode": "US",
        "fixed": False,
        "global": True,
        "counties": None,
        "launchYear": None,
        "types": ["Public"],
    }


US_HOLIDAYS = {
    2025: [holiday("2025-07-04", "Independence Day"), holiday("2025-12-25", "Christmas Day")],
    2026: [holiday("2026-01-01", "New Year's Day")],
}


def make_client(local_time: str = "2025-06-27 14:00:00", timezone_status: int = 200, seen: dict | None = None):
    seen = seen if seen is not None else {}

    def timezone_handler(request: httpx.Request) -> httpx.Response:
        seen["location"] = request.url.params.get("location")
        if timezone_status != 200:
            return httpx.Response(timezone_status, json={"error": {"message": "Quota exceeded"}})
        return httpx.Response(200, json=tz_payload(local_time, seen["location"]))

    def holiday_handler(request: httpx.Request) -> httpx.Response:
        year = int(request.url.path.split("/")[-2])
        seen.setdefault("years", []).append(year)
        if year not in US_HOLIDAYS:
            return httpx.Response(404)
        return httpx.Response(200, json=US_HOLIDAYS[year])

    timezone_api = AbstractTimezoneApi(api_key="test-key", transport=httpx.MockTransport(timezone_handler))
    holiday_api = NagerDateApi(transport=httpx.MockTransport(holiday_handler))

    app.dependency_overrides[get_timezone_api_factory] = lambda: (lambda: timezone_api)
    app.dependency_overrides[get_holiday_api] = lambda: holiday_api
    return TestClient(app)


def teardown_function():
    app.dependency_overrides.clear()


def test_contact_availability_in_office():
    seen = {}
    client = make_client("2025-06-27 14:00:00", seen=seen)
    response = client.get(
        "/api/contact-availability",
        params={"city": "Boston", "state": "MA", "country": "United States"},
    )
    assert response.status_code == 200
    body = response.json()
    assert seen["location"] == "Boston,MA,United States"
    assert body["availability"] == {"status": "in office", "recommendation": "free to call"}
    assert body["datetime"] == {
        "date": "Friday, June 27, 2025",
        "localTime": "02:00:00 PM",
        "timezone": "EDT",
    }
    assert [h["date"] for h in body["holidays"]] == ["2025-07-04"]
    assert body["holidays"][0]["localName"] == "Independence Day"
    assert body["holidays"][0]["global"] is True


def test_contact_availability_on_holiday():
    client = make_client("2025-07-04 10:00:00")
    response = client.get("/api/contact-availability", params={"city": "Boston", "country": "USA"})
    assert response.status_code == 200
    body = response.json()
    assert body["availability"] == {"status": "public holiday", "recommendation": "Call Monday at 9AM"}


def test_contact_availability_uses_contact_local_date_for_holiday_window():
    seen = {}
    client = make_client("2025-12-20 10:00:00", seen=seen)
    response = client.get("/api/contact-availability", params={"city": "Boston", "country": "United States"})
    assert response.status_code == 200
    assert seen["years"] == [2025, 2026]
    assert [h["date"] for h in response.json()["holidays"]] == ["2025-12-25", "2026-01-01"]
    assert response.json()["availability"]["status"] == "weekend"


def test_contact_availability_requires_city_and_country():
    client = make_client()
    response = client.get("/api/contact-availability", params={"city": "Boston"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("City and country parameters are required")

    response = client.get("/api/contact-availability", params={"country": "France", "city": ""})
    assert response.status_code == 400


def test_contact_availability_rejects_unknown_country():
    client = make_client()
    response = client.get("/api/contact-availability", params={"city": "Gotham", "country": "Gondor"})
    assert response.status_code == 400
    message = response.json()["error"]
    assert message.startswith('Unsupported country: "Gondor"')
    assert message.count(",") == 9


def test_contact_availability_upstream_failure_is_500():
    client = make_client(timezone_status=429)
    response = client.get("/api/contact-availability", params={"city": "Boston", "country": "United States"})
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to get current time for Boston,United States: API Error: Quota exceeded",
        "success": False,
    }


def test_contact_availability_missing_api_key_is_500():
    previous_key = settings.ABSTRACT_TIMEZONE_API_KEY
    try:
        settings.ABSTRACT_TIMEZONE_API_KEY = ""
        client = TestClient(app)
        response = client.get("/api/contact-availability", params={"city": "Boston", "country": "United States"})
        assert response.status_code == 500
        assert response.json()["error"] == "ABSTRACT_TIMEZONE_API_KEY environment variable is required"

        # Input validation still wins over configuration problems.
        response = client.get("/api/contact-availability", params={"city": "Boston"})
        assert response.status_code == 400
    finally:
        settings.ABSTRACT_TIMEZONE_API_KEY = previous_key


def test_abstract_timezone_route():
    client = make_client("2025-06-27 14:05:09")
    response = client.get("/api/abstract-timezone", params={"location": "Boston,MA"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["timezone_location"] == "America/New_York"
    assert body["formatted"] == {
        "date": "Friday, June 27, 2025",
        "time": "02:05:09 PM EDT",
        "timezoneOffset": "GMT-04:00",
    }


def test_abstract_timezone_requires_location():
    client = make_client()
    response = client.get("/api/abstract-timezone")
    assert response.status_code == 400
    assert "Location parameter is required" in response.json()["error"]


def test_abstract_timezone_upstream_failure():
    client = make_client(timezone_status=401)
    response = client.get("/api/abstract-timezone", params={"location": "Nowhere"})
    assert response.status_code == 500
    assert response.json()["success"] is False


def test_nager_date_for_year():
    client = make_client()
    response = client.get("/api/nager-date", params={"countryCode": "us", "year": "2025"})
    assert response.status_code == 200
    assert [h["name"] for h in response.json()["holidays"]] == ["Independence Day", "Christmas Day"]


def test_nager_date_requires_country_code():
    client = make_client()
    response = client.get("/api/nager-date", params={"year": "2025"})
    assert response.status_code == 400
    assert response.json()["error"] == "Missing countryCode parameter"


def test_nager_date_rejects_bad_year():
    client = make_client()
    response = client.get("/api/nager-date", params={"countryCode": "US", "year": "soon"})
    assert response.status_code == 400


def test_nager_date_upstream_failure_is_500():
    client = make_client()
    response = client.get("/api/nager-date", params={"countryCode": "US", "year": "1999"})
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch public holidays: HTTP error! status: 404"


def test_nager_date_next_30_days_spans_new_year():
    seen = {}
    client = make_client(seen=seen)
    app.dependency_overrides[get_today] = lambda: date(2025, 12, 20)
    response = client.get("/api/nager-date", params={"countryCode": "US", "range": "next30days"})
    assert response.status_code == 200
    assert seen["years"] == [2025, 2026]
    assert [h["date"] for h in response.json()["holidays"]] == ["2025-12-25", "2026-01-01"]


def test_nager_date_next_30_days_uses_configured_lookahead():
    previous_lookahead = settings.HOLIDAY_LOOKAHEAD_DAYS
    try:
        settings.HOLIDAY_LOOKAHEAD_DAYS = 5
        seen = {}
        client = make_client(seen=seen)
        app.dependency_overrides[get_today] = lambda: date(2025, 12, 20)
        response = client.get("/api/nager-date", params={"countryCode": "US", "range": "next30days"})
        assert response.status_code == 200
        assert seen["years"] == [2025]
        assert [h["date"] for h in response.json()["holidays"]] == ["2025-12-25"]
    finally:
        settings.HOLIDAY_LOOKAHEAD_DAYS = previous_lookahead


def test_nager_date_without_range_returns_whole_year():
    seen = {}
    client = make_client(seen=seen)
    app.dependency_overrides[get_today] = lambda: date(2025, 12, 20)
    response = client.get("/api/nager-date", params={"countryCode": "US"})
    assert response.status_code == 200
    assert seen["years"] == [2025]
    assert [h["date"] for h in response.json()["holidays"]] == ["2025-07-04", "2025-12-25"]


def test_invalid_year_error_is_not_chained():
    with pytest.raises(InvalidRequestError) as excinfo:
        _parse_year("soon", date(2025, 1, 1))
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__ is True


def test_supported_countries():
    client = TestClient(app)
    response = client.get("/api/supported-countries")
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == len(body["countries"])
    assert {"name": "Germany", "code": "DE"} in body["countries"]
