"""Display formatting for the single display locale (es-ES)."""

from models.country import CountryDetail, CountrySummary

GROUP_SEPARATOR = "."
# es-ES leaves four-digit numbers ungrouped
MIN_GROUPING_VALUE = 10_000
NOT_AVAILABLE = "N/A"


def format_population(value: int) -> str:
    if value < MIN_GROUPING_VALUE:
        return str(value)
    return f"{value:,}".replace(",", GROUP_SEPARATOR)


def flag_alt_text(country: CountrySummary) -> str:
    return country.flag_alt_text or f"Flag of {country.common_name}"


def join_capitals(detail: CountryDetail) -> str:
    return ", ".join(detail.capitals) or NOT_AVAILABLE


def join_currencies(detail: CountryDetail) -> str:
    return ", ".join(c.name for c in detail.currencies.values())


def join_languages(detail: CountryDetail) -> str:
    return ", ".join(detail.languages.values())
