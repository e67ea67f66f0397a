"""Client for the remote country catalog (REST Countries v3.1 shape)."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from config import settings
from models.country import CountryDetail, CountrySummary, Currency
from utils.http_client import get_client

logger = logging.getLogger(__name__)

# Only what the directory listing renders
SUMMARY_FIELDS = "name,flags,cca3"


class CatalogError(Exception):
    """Base for catalog failures; ``str(exc)`` is the user-facing message."""

    kind = "catalog"


class NetworkFailure(CatalogError):
    kind = "network"


class ParseFailure(CatalogError):
    kind = "parse"


class NotFoundFailure(CatalogError):
    kind = "not_found"


class _NamePayload(BaseModel):
    common: str
    official: str


class _FlagsPayload(BaseModel):
    png: str = ""
    svg: str = ""
    alt: str | None = None


class _CurrencyPayload(BaseModel):
    name: str
    symbol: str = ""


class _SummaryPayload(BaseModel):
    name: _NamePayload
    flags: _FlagsPayload
    cca3: str

    def to_summary_fields(self) -> dict:
        return {
            "common_name": self.name.common,
            "official_name": self.name.official,
            "flag_image_ref": self.flags.svg or self.flags.png,
            "flag_alt_text": self.flags.alt or None,
            "id": self.cca3,
        }


class _DetailPayload(_SummaryPayload):
    capital: list[str] = []
    region: str = ""
    subregion: str = ""
    population: int = 0
    currencies: dict[str, _CurrencyPayload] = {}
    languages: dict[str, str] = {}


_summary_list = TypeAdapter(list[_SummaryPayload])
_candidate_list = TypeAdapter(list[Any])


class CatalogClient:
    def __init__(self, client: httpx.AsyncClient | None = None, base_url: str | None = None):
        self._client = client
        self._base_url = (base_url or settings.catalog_base_url).rstrip("/")

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_client()

    async def fetch_all_summaries(self) -> list[CountrySummary]:
        url = f"{self._base_url}/all"
        response = await self._get(url, params={"fields": SUMMARY_FIELDS})
        if not response.is_success:
            logger.warning("Catalog list error %s: %.200s", response.status_code, response.text)
            raise NetworkFailure(
                f"Network error: the country catalog answered with status {response.status_code}."
            )

        payload = self._decode(response, _summary_list)
        return [CountrySummary(**p.to_summary_fields()) for p in payload]

    async def fetch_detail_by_name(self, name: str) -> CountryDetail:
        """Fetch a single country by (possibly partial) name.

        The catalog may answer with several candidates; the first one is
        taken as canonical.
        """
        url = f"{self._base_url}/name/{quote(name, safe='')}"
        response = await self._get(url)
        if response.status_code == 404:
            raise NotFoundFailure(f"Country not found: {name}.")
        if not response.is_success:
            logger.warning("Catalog detail error %s for %r: %.200s",
                           response.status_code, name, response.text)
            raise NetworkFailure(
                f"Network error: the country catalog answered with status {response.status_code}."
            )

        candidates = self._decode(response, _candidate_list)
        if not candidates:
            raise NotFoundFailure(f"Country not found: {name}.")

        try:
            first = _DetailPayload.model_validate(candidates[0])
            return CountryDetail(
                **first.to_summary_fields(),
                capitals=first.capital,
                region=first.region,
                subregion=first.subregion,
                population=first.population,
                currencies={
                    code: Currency(name=c.name, symbol=c.symbol)
                    for code, c in first.currencies.items()
                },
                languages=first.languages,
            )
        except ValidationError as e:
            logger.warning("Catalog detail for %r failed validation: %s", name, e)
            raise ParseFailure("Malformed response from the country catalog.") from e

    async def _get(self, url: str, params: dict | None = None) -> httpx.Response:
        try:
            return await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Catalog request to %s failed: %s", url, e)
            raise NetworkFailure(
                "Network error: could not reach the country catalog."
            ) from e

    @staticmethod
    def _decode(response: httpx.Response, adapter: TypeAdapter):
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            logger.warning("Catalog payload did not match the expected shape: %s", e)
            raise ParseFailure("Malformed response from the country catalog.") from e
