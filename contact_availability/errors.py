class ContactAvailabilityError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ContactAvailabilityError):
    status_code = 400


class ConfigurationError(ContactAvailabilityError):
    pass


class UpstreamError(ContactAvailabilityError):
    pass


class TimezoneApiError(UpstreamError):
    pass


class HolidayApiError(UpstreamError):
    pass
