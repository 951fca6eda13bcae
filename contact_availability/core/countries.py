import re

# Canonical English name -> ISO 3166-1 alpha-2.
COUNTRY_CODES = {
    # North America
    "United States": "US",
    "Canada": "CA",
    "Mexico": "MX",
    "Guatemala": "GT",
    "Honduras": "HN",
    "El Salvador": "SV",
    "Nicaragua": "NI",
    "Costa Rica": "CR",
    "Panama": "PA",
    "Cuba": "CU",
    "Dominican Republic": "DO",
    "Haiti": "HT",
    "Jamaica": "JM",
    "Bahamas": "BS",
    "Barbados": "BB",
    "Trinidad and Tobago": "TT",
    "Puerto Rico": "PR",
    "Belize": "BZ",
    "Grenada": "GD",
    "Greenland": "GL",
    # South America
    "Brazil": "BR",
    "Argentina": "AR",
    "Chile": "CL",
    "Colombia": "CO",
    "Peru": "PE",
    "Venezuela": "VE",
    "Ecuador": "EC",
    "Bolivia": "BO",
    "Paraguay": "PY",
    "Uruguay": "UY",
    "Guyana": "GY",
    "Suriname": "SR",
    # Europe - Western
    "United Kingdom": "GB",
    "Ireland": "IE",
    "France": "FR",
    "Germany": "DE",
    "Netherlands": "NL",
    "Belgium": "BE",
    "Luxembourg": "LU",
    "Switzerland": "CH",
    "Austria": "AT",
    "Liechtenstein": "LI",
    "Monaco": "MC",
    # Europe - Southern
    "Spain": "ES",
    "Portugal": "PT",
    "Italy": "IT",
    "Greece": "GR",
    "Malta": "MT",
    "Cyprus": "CY",
    "Andorra": "AD",
    "San Marino": "SM",
    "Vatican City": "VA",
    "Gibraltar": "GI",
    # Europe - Northern
    "Denmark": "DK",
    "Sweden": "SE",
    "Norway": "NO",
    "Finland": "FI",
    "Iceland": "IS",
    "Estonia": "EE",
    "Latvia": "LV",
    "Lithuania": "LT",
    "Faroe Islands": "FO",
    "Isle of Man": "IM",
    "Jersey": "JE",
    "Guernsey": "GG",
    # Europe - Central and Eastern
    "Poland": "PL",
    "Czech Republic": "CZ",
    "Slovakia": "SK",
    "Hungary": "HU",
    "Slovenia": "SI",
    "Croatia": "HR",
    "Bosnia and Herzegovina": "BA",
    "Serbia": "RS",
    "Montenegro": "ME",
    "North Macedonia": "MK",
    "Albania": "AL",
    "Kosovo": "XK",
    "Romania": "RO",
    "Bulgaria": "BG",
    "Moldova": "MD",
    "Ukraine": "UA",
    "Belarus": "BY",
    "Russia": "RU",
    "Georgia": "GE",
    "Armenia": "AM",
    "Azerbaijan": "AZ",
    "Turkey": "TR",
    # Asia
    "China": "CN",
    "Japan": "JP",
    "South Korea": "KR",
    "Mongolia": "MN",
    "Hong Kong": "HK",
    "Taiwan": "TW",
    "India": "IN",
    "Pakistan": "PK",
    "Bangladesh": "BD",
    "Sri Lanka": "LK",
    "Nepal": "NP",
    "Singapore": "SG",
    "Malaysia": "MY",
    "Indonesia": "ID",
    "Philippines": "PH",
    "Thailand": "TH",
    "Vietnam": "VN",
    "Kazakhstan": "KZ",
    # Middle East
    "Israel": "IL",
    "Saudi Arabia": "SA",
    "United Arab Emirates": "AE",
    "Qatar": "QA",
    "Kuwait": "KW",
    "Bahrain": "BH",
    "Oman": "OM",
    "Jordan": "JO",
    "Lebanon": "LB",
    # Africa
    "South Africa": "ZA",
    "Egypt": "EG",
    "Morocco": "MA",
    "Tunisia": "TN",
    "Nigeria": "NG",
    "Kenya": "KE",
    "Benin": "BJ",
    "Botswana": "BW",
    "Gabon": "GA",
    "Gambia": "GM",
    "Lesotho": "LS",
    "Madagascar": "MG",
    "Mozambique": "MZ",
    "Namibia": "NA",
    "Niger": "NE",
    "Republic of the Congo": "CG",
    "Zimbabwe": "ZW",
    # Oceania
    "Australia": "AU",
    "New Zealand": "NZ",
    "Papua New Guinea": "PG",
}

COUNTRY_ALIASES = {
    "usa": "US",
    "us": "US",
    "united states of america": "US",
    "america": "US",
    "uk": "GB",
    "great britain": "GB",
    "britain": "GB",
    "england": "GB",
    "scotland": "GB",
    "wales": "GB",
    "northern ireland": "GB",
    "uae": "AE",
    "czechia": "CZ",
    "korea": "KR",
    "republic of korea": "KR",
    "russian federation": "RU",
    "turkiye": "TR",
    "holland": "NL",
    "the netherlands": "NL",
    "macedonia": "MK",
    "viet nam": "VN",
    "congo": "CG",
    "the bahamas": "BS",
    "the gambia": "GM",
    "holy see": "VA",
}

_WHITESPACE = re.compile(r"\s+")
_BY_NAME = {name.casefold(): code for name, code in COUNTRY_CODES.items()}
_KNOWN_CODES = set(COUNTRY_CODES.values())


def _normalize(value: str) -> str:
    return _WHITESPACE.sub(" ", str(value or "").replace(".", "")).strip().casefold()


def get_country_code(country: str | None) -> str | None:
    """Resolve a free-text country name (or an ISO2 code) to ISO 3166-1 alpha-2."""
    key = _normalize(country)
    if not key:
        return None
    if key in _BY_NAME:
        return _BY_NAME[key]
    if key in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[key]
    if len(key) == 2 and key.upper() in _KNOWN_CODES:
        return key.upper()
    return None


def get_supported_countries() -> list[str]:
    return list(COUNTRY_CODES)
