import asyncio
import logging
import unicodedata
from collections.abc import Coroutine
from typing import Any

from models.country import CountrySummary
from models.state import DirectoryState, Phase
from services.catalog_client import CatalogClient, CatalogError

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Loading was interrupted before the country catalog answered."


def collation_key(text: str) -> tuple[str, str, str]:
    """Sort key approximating locale collation: accents and case are
    secondary differences, so "Åland" sorts beside "Aland"."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.casefold(), text


async def _already_loading() -> None:
    return None


class DirectoryStore:
    def __init__(self, catalog: CatalogClient):
        self._catalog = catalog
        self._generation = 0
        self.state = DirectoryState()

    @property
    def entries(self) -> list[CountrySummary]:
        return self.state.entries

    @property
    def filter_text(self) -> str:
        return self.state.filter_text

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def generation(self) -> int:
        return self._generation

    def load(self) -> Coroutine[Any, Any, None]:
        """Enter Loading now and return the coroutine that performs the fetch.

        While a load is in flight this returns a coroutine that does nothing.
        """
        if self.state.phase is Phase.LOADING:
            logger.debug("Directory load already in flight, ignoring")
            return _already_loading()

        self._generation += 1
        self.state.phase = Phase.LOADING
        self.state.error_message = None
        return self._fetch(self._generation)

    def abandon(self, generation: int) -> None:
        """Leave Loading for a load that will never complete."""
        if generation != self._generation or self.state.phase is not Phase.LOADING:
            return
        logger.info("Directory load cancelled")
        self.state.phase = Phase.FAILED
        self.state.error_message = CANCELLED_MESSAGE

    async def _fetch(self, generation: int) -> None:
        try:
            summaries = await self._catalog.fetch_all_summaries()
        except CatalogError as e:
            logger.warning("Directory load failed (%s): %s", e.kind, e)
            self.state.phase = Phase.FAILED
            self.state.error_message = str(e)
            return
        except asyncio.CancelledError:
            self.abandon(generation)
            raise

        self.state.entries = sorted(summaries, key=lambda s: collation_key(s.common_name))
        self.state.phase = Phase.READY
        logger.info("Directory loaded with %d countries", len(self.state.entries))

    def set_filter(self, text: str) -> None:
        self.state.filter_text = text

    def visible_entries(self) -> list[CountrySummary]:
        needle = self.state.filter_text.casefold()
        if not needle:
            return list(self.state.entries)
        return [e for e in self.state.entries if needle in e.common_name.casefold()]
