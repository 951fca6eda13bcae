from datetime import date, timedelta

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from ..config import Settings, settings as default_settings
from ..errors import HolidayApiError
from ..schemas import Holiday

logger = structlog.get_logger("upstream.nager_date")

DEFAULT_BASE_URL = "https://date.nager.at/api/v3"
DEFAULT_LOOKAHEAD_DAYS = 30

_holiday_list = TypeAdapter(list[Holiday])


class NagerDateApi:
    """Client for the Nager.Date public holiday API. No key required."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def public_holidays(self, year: int, country_code: str) -> list[Holiday]:
        url = f"{self.base_url}/PublicHolidays/{int(year)}/{country_code.strip().upper()}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url, headers={"Accept": "application/json"})
            if not response.is_success:
                raise HolidayApiError(f"HTTP error! status: {response.status_code}")
            return _holiday_list.validate_python(response.json())
        except (HolidayApiError, httpx.HTTPError, ValidationError, ValueError) as exc:
            detail = exc.message if isinstance(exc, HolidayApiError) else str(exc)
            raise HolidayApiError(f"Failed to fetch public holidays: {detail}") from exc

    def current_year_holidays(self, country_code: str, today: date | None = None) -> list[Holiday]:
        today = today or date.today()
        return self.public_holidays(today.year, country_code)

    def todays_holiday(self, country_code: str, today: date | None = None) -> Holiday | None:
        today = today or date.today()
        for holiday in self.current_year_holidays(country_code, today=today):
            if holiday.date == today:
                return holiday
        return None

    def holidays_in_range(
        self,
        country_code: str,
        today: date | None = None,
        days: int = DEFAULT_LOOKAHEAD_DAYS,
    ) -> list[Holiday]:
        """
        Holidays between `today` and `today + days`, both inclusive, oldest first.

        The window may cross into the next calendar year, in which case both
        years are fetched. A year that fails to load is logged and skipped so
        the caller still gets whatever the other year returned.
        """
        today = today or date.today()
        end = today + timedelta(days=days)

        years = [today.year]
        if end.year != today.year:
            years.append(end.year)

        collected: list[Holiday] = []
        for year in years:
            try:
                collected.extend(self.public_holidays(year, country_code))
            except HolidayApiError as exc:
                logger.warning(
                    "holiday_year_fetch_failed",
                    year=year,
                    country_code=country_code,
                    error=exc.message,
                )

        upcoming = [holiday for holiday in collected if today <= holiday.date <= end]
        upcoming.sort(key=lambda holiday: holiday.date)
        return upcoming

    def holidays_in_next_30_days(self, country_code: str, today: date | None = None) -> list[Holiday]:
        return self.holidays_in_range(country_code, today=today, days=30)


def create_holiday_api(
    config: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> NagerDateApi:
    config = config or default_settings
    return NagerDateApi(
        base_url=config.NAGER_DATE_BASE_URL,
        timeout=float(config.HTTP_TIMEOUT_SECONDS),
        transport=transport,
    )
