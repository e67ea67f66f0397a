import asyncio

from conftest import detail, summary
from models.country import Currency
from models.state import Mode, Phase
from services.detail_session import DetailSession
from services.navigation import NavigationController
from services.presenter import app_view, country_card, detail_info, detail_view
from utils.formatting import format_population, join_capitals, join_currencies, join_languages


def test_format_population_groups_in_display_locale() -> None:
    assert format_population(33000000) == "33.000.000"
    assert format_population(47351567) == "47.351.567"
    assert format_population(10000) == "10.000"
    assert format_population(9999) == "9999"
    assert format_population(0) == "0"


def test_country_card_falls_back_to_generated_alt_text() -> None:
    assert country_card(summary("Peru", "PER")).flag_alt == "Flag of Peru"
    assert country_card(summary("Peru", "PER", alt="Red and white")).flag_alt == "Red and white"


def test_detail_joins_collections() -> None:
    country = detail(
        "Switzerland",
        "CHE",
        population=8654622,
        capitals=["Bern"],
        currencies={"CHF": Currency(name="Swiss franc", symbol="Fr.")},
        languages={"fra": "French", "gsw": "Swiss German", "ita": "Italian", "roh": "Romansh"},
    )
    assert join_currencies(country) == "Swiss franc"
    assert join_languages(country) == "French, Swiss German, Italian, Romansh"

    info = detail_info(country)
    assert info.capital == "Bern"
    assert info.population == "8.654.622"


def test_missing_capital_renders_not_available() -> None:
    assert join_capitals(detail("Antarctica", "ATA", capitals=[])) == "N/A"
    assert join_capitals(detail("South Africa", "ZAF", capitals=["Pretoria", "Bloemfontein", "Cape Town"])) == (
        "Pretoria, Bloemfontein, Cape Town"
    )


def test_detail_view_reflects_failed_session(catalog) -> None:
    session = DetailSession(catalog)
    asyncio.run(session.open("Atlantis"))

    view = detail_view(session)
    assert view.phase is Phase.FAILED
    assert view.selected == "Atlantis"
    assert view.country is None
    assert view.error_message


def test_app_view_follows_mode(catalog) -> None:
    controller = NavigationController(catalog)

    async def scenario() -> None:
        await controller.start()
        controller.set_filter("p")
        directory = app_view(controller)
        await controller.select("Peru")
        return directory, app_view(controller)

    directory, detail_mode = asyncio.run(scenario())

    assert directory.mode is Mode.DIRECTORY
    assert directory.detail is None
    assert [c.name for c in directory.directory.countries] == ["Peru", "Spain"]
    assert directory.directory.total == 3

    assert detail_mode.mode is Mode.DETAIL
    assert detail_mode.directory is None
    assert detail_mode.detail.country.population == "33.000.000"
