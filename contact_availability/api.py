from datetime import date
from typing import Callable, Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from .config import settings
from .core.countries import COUNTRY_CODES
from .core.holiday_api import NagerDateApi, create_holiday_api
from .core.timezone_api import AbstractTimezoneApi, create_timezone_api
from .errors import ContactAvailabilityError, InvalidRequestError
from .schemas import (
    ContactAvailabilityOut,
    HolidaysOut,
    SupportedCountriesOut,
    SupportedCountryOut,
    TimezoneLookupOut,
)
from .services import check_contact_availability, format_timezone_lookup, validate_contact_query

logger = structlog.get_logger("contact_availability.api")

router = APIRouter(prefix="/api")

NEXT_30_DAYS = "next30days"

TimezoneApiFactory = Callable[[], AbstractTimezoneApi]


def get_timezone_api_factory() -> TimezoneApiFactory:
    # The key is only checked when a route actually needs the client.
    return lambda: create_timezone_api(settings)


def get_holiday_api() -> NagerDateApi:
    return create_holiday_api(settings)


def get_today() -> date:
    return date.today()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "success": False})


def _handle_error(exc: Exception, endpoint: str) -> JSONResponse:
    if isinstance(exc, ContactAvailabilityError):
        if exc.status_code >= 500:
            logger.error("request_failed", endpoint=endpoint, error=exc.message)
        return _error_response(exc.status_code, exc.message)
    logger.exception("request_failed_unexpectedly", endpoint=endpoint)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or "An unexpected error occurred",
    )


def _parse_year(raw: Optional[str], today: date) -> int:
    if raw is None or not raw.strip():
        return today.year
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidRequestError(f"Invalid year parameter: {raw}") from None


@router.get("/abstract-timezone", response_model=TimezoneLookupOut)
def abstract_timezone(
    location: Optional[str] = Query(None),
    timezone_api_factory: TimezoneApiFactory = Depends(get_timezone_api_factory),
):
    if not (location or "").strip():
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Location parameter is required. Use ?location=City,State or ?location=City,Country",
        )
    try:
        info = timezone_api_factory().current_time(location)
        return TimezoneLookupOut(success=True, data=info, formatted=format_timezone_lookup(info))
    except Exception as exc:
        return _handle_error(exc, "abstract-timezone")


@router.get("/nager-date", response_model=HolidaysOut)
def nager_date(
    countryCode: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    range: Optional[str] = Query(None),
    holiday_api: NagerDateApi = Depends(get_holiday_api),
    today: date = Depends(get_today),
):
    if not (countryCode or "").strip():
        return _error_response(status.HTTP_400_BAD_REQUEST, "Missing countryCode parameter")
    try:
        if range == NEXT_30_DAYS:
            holidays = holiday_api.holidays_in_range(
                countryCode, today=today, days=int(settings.HOLIDAY_LOOKAHEAD_DAYS)
            )
        else:
            holidays = holiday_api.public_holidays(_parse_year(year, today), countryCode)
        return HolidaysOut(holidays=holidays)
    except Exception as exc:
        return _handle_error(exc, "nager-date")


@router.get("/contact-availability", response_model=ContactAvailabilityOut)
def contact_availability(
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    timezone_api_factory: TimezoneApiFactory = Depends(get_timezone_api_factory),
    holiday_api: NagerDateApi = Depends(get_holiday_api),
):
    try:
        country_code = validate_contact_query(city, country)
        return check_contact_availability(
            city=city,
            state=state,
            country=country,
            country_code=country_code,
            timezone_api=timezone_api_factory(),
            holiday_api=holiday_api,
            lookahead_days=int(settings.HOLIDAY_LOOKAHEAD_DAYS),
        )
    except Exception as exc:
        return _handle_error(exc, "contact-availability")


@router.get("/supported-countries", response_model=SupportedCountriesOut)
def supported_countries():
    countries = [SupportedCountryOut(name=name, code=code) for name, code in COUNTRY_CODES.items()]
    return SupportedCountriesOut(total=len(countries), countries=countries)
