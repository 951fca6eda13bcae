import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .core.availability import AvailabilityStatus


class Holiday(BaseModel):
    """A public holiday as published by Nager.Date (v3 wire format)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date: dt.date
    local_name: str = Field(alias="localName")
    name: str
    country_code: str = Field(alias="countryCode")
    fixed: bool = False
    is_global: bool = Field(default=True, alias="global")
    counties: list[str] | None = None
    launch_year: int | None = Field(default=None, alias="launchYear")
    types: list[str] = Field(default_factory=list)


class TimezoneInfo(BaseModel):
    """Abstract API current_time payload. `datetime` is local wall time."""

    model_config = ConfigDict(extra="ignore")

    datetime: str
    timezone_name: str
    timezone_location: str
    timezone_abbreviation: str
    gmt_offset: float
    is_dst: bool = False
    requested_location: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class FormattedTime(BaseModel):
    date: str
    time: str
    timezoneOffset: str


class TimezoneLookupOut(BaseModel):
    success: bool = True
    data: TimezoneInfo
    formatted: FormattedTime


class HolidaysOut(BaseModel):
    holidays: list[Holiday]


class LocalDateTimeOut(BaseModel):
    date: str
    localTime: str
    timezone: str


class AvailabilityOut(BaseModel):
    status: AvailabilityStatus
    recommendation: str


class ContactAvailabilityOut(BaseModel):
    datetime: LocalDateTimeOut
    availability: AvailabilityOut
    holidays: list[Holiday]


class SupportedCountryOut(BaseModel):
    name: str
    code: str


class SupportedCountriesOut(BaseModel):
    total: int
    countries: list[SupportedCountryOut]
