from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
BACKEND = ROOT / "backend"
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from models.country import CountryDetail, CountrySummary, Currency  # noqa: E402
from services.catalog_client import NotFoundFailure  # noqa: E402

ALL = "__all__"


def summary(name: str, code: str, alt: str | None = None) -> CountrySummary:
    return CountrySummary(
        common_name=name,
        official_name=f"Official {name}",
        flag_image_ref=f"https://flags.test/{code.lower()}.svg",
        flag_alt_text=alt,
        id=code,
    )


def detail(name: str, code: str, population: int = 1000, **extra) -> CountryDetail:
    fields = {
        "common_name": name,
        "official_name": f"Official {name}",
        "flag_image_ref": f"https://flags.test/{code.lower()}.svg",
        "id": code,
        "capitals": [f"{name} City"],
        "region": "Somewhere",
        "subregion": "Somewhere Else",
        "population": population,
        "currencies": {"XXX": Currency(name="Test dollar", symbol="$")},
        "languages": {"tst": "Testish"},
    }
    fields.update(extra)
    return CountryDetail(**fields)


def rest_country(common: str, cca3: str, alt: str | None = "A flag", **extra) -> dict:
    """A catalog payload element as the remote service shapes it."""
    item = {
        "name": {"common": common, "official": f"Official {common}", "nativeName": {}},
        "flags": {"png": f"https://flags.test/{cca3}.png", "svg": f"https://flags.test/{cca3}.svg"},
        "cca3": cca3,
    }
    if alt is not None:
        item["flags"]["alt"] = alt
    item.update(extra)
    return item


class FakeCatalog:
    """Scriptable stand-in for CatalogClient.

    ``gates`` maps a country name (or ``ALL`` for the list call) to an
    ``asyncio.Event`` the fetch waits on before answering.
    """

    def __init__(self, summaries=None, details=None, list_error: Exception | None = None):
        self.summaries = list(summaries or [])
        self.details = dict(details or {})
        self.list_error = list_error
        self.list_calls = 0
        self.detail_calls: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch_all_summaries(self):
        self.list_calls += 1
        gate = self.gates.get(ALL)
        if gate is not None:
            await gate.wait()
        if self.list_error is not None:
            raise self.list_error
        return list(self.summaries)

    async def fetch_detail_by_name(self, name: str):
        self.detail_calls.append(name)
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        result = self.details.get(name)
        if result is None:
            raise NotFoundFailure(f"Country not found: {name}.")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog(
        summaries=[summary("Spain", "ESP"), summary("Peru", "PER"), summary("Åland Islands", "ALA")],
        details={
            "Peru": detail("Peru", "PER", population=33000000, capitals=["Lima"]),
            "Spain": detail("Spain", "ESP", population=47000000, capitals=["Madrid"]),
        },
    )
