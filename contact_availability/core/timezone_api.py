import httpx
import structlog
from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..errors import ConfigurationError, TimezoneApiError
from ..schemas import TimezoneInfo

logger = structlog.get_logger("upstream.abstract_timezone")

DEFAULT_BASE_URL = "https://timezone.abstractapi.com/v1"


def _upstream_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


class AbstractTimezoneApi:
    """Client for the Abstract API timezone service."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def current_time(self, location: str) -> TimezoneInfo:
        """
        Current local time for a location.

        `location` may be "City,State,Country", "lat,lon" or an IP address;
        it is passed through to the upstream untouched.
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(
                    f"{self.base_url}/current_time",
                    params={"api_key": self.api_key, "location": location},
                )
            if not response.is_success:
                raise TimezoneApiError(f"API Error: {_upstream_error_message(response)}")
            return TimezoneInfo.model_validate(response.json())
        except (TimezoneApiError, httpx.HTTPError, ValidationError, ValueError) as exc:
            detail = exc.message if isinstance(exc, TimezoneApiError) else str(exc)
            logger.error("timezone_lookup_failed", location=location, error=detail)
            raise TimezoneApiError(f"Failed to get current time for {location}: {detail}") from exc

    def current_time_by_coordinates(self, latitude: float, longitude: float) -> TimezoneInfo:
        return self.current_time(f"{latitude},{longitude}")

    def current_time_by_ip(self, ip_address: str) -> TimezoneInfo:
        return self.current_time(ip_address)


def create_timezone_api(
    config: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> AbstractTimezoneApi:
    config = config or default_settings
    api_key = (config.ABSTRACT_TIMEZONE_API_KEY or "").strip()
    if not api_key:
        raise ConfigurationError("ABSTRACT_TIMEZONE_API_KEY environment variable is required")
    return AbstractTimezoneApi(
        api_key=api_key,
        base_url=config.ABSTRACT_TIMEZONE_BASE_URL,
        timeout=float(config.HTTP_TIMEOUT_SECONDS),
        transport=transport,
    )
