from datetime import datetime

import structlog

from .core.availability import LocalMoment, classify
from .core.countries import get_country_code, get_supported_countries
from .core.holiday_api import NagerDateApi
from .core.timezone_api import AbstractTimezoneApi
from .errors import InvalidRequestError
from .schemas import (
    AvailabilityOut,
    ContactAvailabilityOut,
    FormattedTime,
    LocalDateTimeOut,
    TimezoneInfo,
)

logger = structlog.get_logger("contact_availability.services")

SUPPORTED_COUNTRY_EXAMPLES = 10


def local_datetime(info: TimezoneInfo) -> datetime:
    # Upstream sends local wall time, e.g. "2025-06-27 14:00:00".
    return datetime.fromisoformat(info.datetime.strip())


def local_moment_from_timezone(info: TimezoneInfo) -> LocalMoment:
    return LocalMoment.from_datetime(local_datetime(info))


def format_date(info: TimezoneInfo) -> str:
    value = local_datetime(info)
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_time(info: TimezoneInfo) -> str:
    value = local_datetime(info)
    return f"{value:%I:%M:%S %p} {info.timezone_abbreviation}".strip()


def format_date_time(info: TimezoneInfo) -> str:
    return f"{format_date(info)} at {format_time(info)}"


def format_timezone_offset(gmt_offset: float) -> str:
    total_minutes = round(abs(gmt_offset) * 60)
    hours, minutes = divmod(total_minutes, 60)
    sign = "+" if gmt_offset >= 0 else "-"
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


def format_timezone_lookup(info: TimezoneInfo) -> FormattedTime:
    return FormattedTime(
        date=format_date(info),
        time=format_time(info),
        timezoneOffset=format_timezone_offset(info.gmt_offset),
    )


def format_timezone_data(info: TimezoneInfo) -> LocalDateTimeOut:
    value = local_datetime(info)
    return LocalDateTimeOut(
        date=format_date(info),
        localTime=f"{value:%I:%M:%S %p}",
        timezone=info.timezone_abbreviation,
    )


def build_location(city: str, state: str | None, country: str) -> str:
    parts = [city.strip()]
    if state and state.strip():
        parts.append(state.strip())
    parts.append(country.strip())
    return ",".join(parts)


def resolve_country_code(country: str) -> str:
    code = get_country_code(country)
    if not code:
        examples = ", ".join(get_supported_countries()[:SUPPORTED_COUNTRY_EXAMPLES])
        raise InvalidRequestError(
            f'Unsupported country: "{country}". Please use a valid country name like: {examples}'
        )
    return code


def validate_contact_query(city: str | None, country: str | None) -> str:
    """Check the required query fields and return the contact's ISO2 country code."""
    if not (city or "").strip() or not (country or "").strip():
        raise InvalidRequestError(
            "City and country parameters are required. "
            "Use ?city=Boston&state=MA&country=United States"
        )
    return resolve_country_code(country)


def check_contact_availability(
    city: str,
    state: str | None,
    country: str,
    country_code: str,
    timezone_api: AbstractTimezoneApi,
    holiday_api: NagerDateApi,
    lookahead_days: int = 30,
) -> ContactAvailabilityOut:
    location = build_location(city, state, country)

    timezone_info = timezone_api.current_time(location)
    moment = local_moment_from_timezone(timezone_info)

    # Window starts at the contact's local date, not the server's.
    holidays = holiday_api.holidays_in_range(
        country_code, today=moment.calendar_date, days=lookahead_days
    )
    verdict = classify(moment, holidays)

    logger.info(
        "contact_availability_checked",
        location=location,
        country_code=country_code,
        status=verdict.status.value,
        holidays=len(holidays),
    )
    return ContactAvailabilityOut(
        datetime=format_timezone_data(timezone_info),
        availability=AvailabilityOut(status=verdict.status, recommendation=verdict.recommendation),
        holidays=holidays,
    )
