import argparse
import sys

import requests

IN_OFFICE = "in office"
NO_HOLIDAYS = "No holidays coming up in the next 30 days"


def _format_location(city: str, state: str, country: str) -> str:
    parts = [city]
    if state:
        parts.append(state)
    parts.append(country)
    return ", ".join(parts)


def fetch_availability(base_url: str, city: str, state: str, country: str, timeout: float) -> dict:
    params = {"city": city, "country": country}
    if state:
        params["state"] = state
    response = requests.get(
        f"{base_url.rstrip('/')}/api/contact-availability", params=params, timeout=timeout
    )
    response.raise_for_status()
    return response.json()


def render_card(first_name: str, location: str, payload: dict) -> str:
    availability = payload["availability"]
    local = payload["datetime"]
    tag = "[OK]" if availability["status"] == IN_OFFICE else "[!!]"

    lines = [
        f"Availability for {first_name}",
        "-" * 40,
        "Local Information",
        f"  Status:     {tag} Currently {availability['status']}",
        f"  Location:   {location}",
        f"  Local Time: {local['date']}",
        f"              {local['localTime']} {local['timezone']}",
        "-" * 40,
        "Holiday Alerts",
        "  Holidays coming up in the next 30 days:",
    ]
    holidays = payload.get("holidays") or []
    if not holidays:
        lines.append(f"  {NO_HOLIDAYS}")
    for holiday in holidays:
        lines.append(f"  * {holiday['date']}: {holiday['name']}")
    lines.append("-" * 40)
    lines.append(f"Recommendation: {availability['recommendation']}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show whether a contact can be called right now")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--first-name", default="")
    parser.add_argument("--city", default="")
    parser.add_argument("--state", default="")
    parser.add_argument("--country", default="")
    parser.add_argument("--timeout", type=float, default=10.0)
    args = parser.parse_args(argv)

    if not args.first_name or not args.city or not args.country:
        print("Trouble fetching properties. Please try again soon.", file=sys.stderr)
        return 1

    try:
        payload = fetch_availability(args.base_url, args.city, args.state, args.country, args.timeout)
    except requests.RequestException as exc:
        print(f"Trouble fetching availability: {exc}", file=sys.stderr)
        return 1

    location = _format_location(args.city, args.state, args.country)
    print(render_card(args.first_name, location, payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
