from calendar import day_name
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable

OFFICE_OPENS_AT = 9
OFFICE_CLOSES_AT = 17
LOOKAHEAD_DAYS = 7

FREE_TO_CALL = "free to call"


class AvailabilityStatus(str, Enum):
    IN_OFFICE = "in office"
    PUBLIC_HOLIDAY = "public holiday"
    WEEKEND = "weekend"
    OFF_HOURS = "off hours"


@dataclass(frozen=True)
class LocalMoment:
    calendar_date: date
    hour: int

    @property
    def weekday(self) -> int:
        """Monday is 0, Sunday is 6."""
        return self.calendar_date.weekday()

    @property
    def weekday_name(self) -> str:
        return day_name[self.weekday]

    @classmethod
    def from_datetime(cls, value: datetime) -> "LocalMoment":
        return cls(calendar_date=value.date(), hour=value.hour)


@dataclass(frozen=True)
class AvailabilityVerdict:
    status: AvailabilityStatus
    recommendation: str


def holiday_dates(holidays: Iterable) -> set[date]:
    """Accepts Holiday objects or plain dates."""
    return {item if isinstance(item, date) else item.date for item in holidays}


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def is_business_day(day: date, holidays: Iterable) -> bool:
    """Check if a day is Monday-Friday and not a public holiday."""
    if is_weekend(day):
        return False
    return day not in holiday_dates(holidays)


def is_office_hour(hour: int) -> bool:
    return OFFICE_OPENS_AT <= hour < OFFICE_CLOSES_AT


def next_available_slot(moment: LocalMoment, holidays: Iterable) -> str:
    """Find the next weekday, non-holiday 9AM calling opportunity."""
    days_off = holiday_dates(holidays)
    today = moment.calendar_date

    if moment.hour < OFFICE_OPENS_AT and is_business_day(today, days_off):
        return "Call today at 9AM"

    for offset in range(1, LOOKAHEAD_DAYS + 1):
        candidate = today + timedelta(days=offset)
        if not is_business_day(candidate, days_off):
            continue
        if offset == 1:
            return "Call tomorrow at 9AM"
        return f"Call {day_name[candidate.weekday()]} at 9AM"

    return "Call next weekday at 9AM"


def classify(moment: LocalMoment, holidays: Iterable) -> AvailabilityVerdict:
    """
    Decide whether a contact can be called at `moment` (their local time).

    Holidays win over weekends, weekends win over the hour check.
    """
    days_off = holiday_dates(holidays)

    if moment.calendar_date in days_off:
        return AvailabilityVerdict(
            status=AvailabilityStatus.PUBLIC_HOLIDAY,
            recommendation=next_available_slot(moment, days_off),
        )

    if is_weekend(moment.calendar_date):
        return AvailabilityVerdict(
            status=AvailabilityStatus.WEEKEND,
            recommendation=next_available_slot(moment, days_off),
        )

    if is_office_hour(moment.hour):
        return AvailabilityVerdict(status=AvailabilityStatus.IN_OFFICE, recommendation=FREE_TO_CALL)

    return AvailabilityVerdict(
        status=AvailabilityStatus.OFF_HOURS,
        recommendation=next_available_slot(moment, days_off),
    )
