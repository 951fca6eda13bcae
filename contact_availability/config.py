import os

from dotenv import load_dotenv

load_dotenv()


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except Exception:
        return int(default)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default)).strip()
    try:
        return float(raw)
    except Exception:
        return float(default)


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "1" if default else "0").strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _get_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    ABSTRACT_TIMEZONE_API_KEY = os.getenv("ABSTRACT_TIMEZONE_API_KEY", "").strip()
    ABSTRACT_TIMEZONE_BASE_URL = os.getenv(
        "ABSTRACT_TIMEZONE_BASE_URL", "https://timezone.abstractapi.com/v1"
    ).strip()
    NAGER_DATE_BASE_URL = os.getenv("NAGER_DATE_BASE_URL", "https://date.nager.at/api/v3").strip()

    HTTP_TIMEOUT_SECONDS = _get_float("HTTP_TIMEOUT_SECONDS", 10.0)
    HOLIDAY_LOOKAHEAD_DAYS = _get_int("HOLIDAY_LOOKAHEAD_DAYS", 30)

    CORS_ALLOW_ORIGINS = _get_list("CORS_ALLOW_ORIGINS", "*")
    SECURITY_HEADERS_ENABLED = _get_bool("SECURITY_HEADERS_ENABLED", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()


settings = Settings()
