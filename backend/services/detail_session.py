import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from models.country import CountryDetail
from models.state import DetailState, Phase
from services.catalog_client import CatalogClient, CatalogError

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "The request was interrupted before the country catalog answered."


class DetailSession:
    """Lifecycle of one on-demand detail fetch.

    Every ``open`` and ``close`` bumps a generation counter. A fetch that
    completes under an older generation, or for a name that is no longer
    selected, is dropped without touching state.
    """

    def __init__(self, catalog: CatalogClient):
        self._catalog = catalog
        self._generation = 0
        self.state = DetailState()

    @property
    def selected_id(self) -> str | None:
        return self.state.selected_id

    @property
    def detail(self) -> CountryDetail | None:
        return self.state.detail

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def generation(self) -> int:
        return self._generation

    def open(self, name: str) -> Coroutine[Any, Any, None]:
        """Select ``name`` now and return the coroutine that fetches it."""
        self._generation += 1
        self.state = DetailState(selected_id=name, phase=Phase.LOADING)
        return self._fetch(self._generation, name)

    def close(self) -> None:
        self._generation += 1
        self.state = DetailState()

    def abandon(self, generation: int) -> None:
        """Leave Loading for a fetch that will never complete."""
        if generation != self._generation or self.state.phase is not Phase.LOADING:
            return
        logger.info("Detail fetch for %r cancelled", self.state.selected_id)
        self.state.phase = Phase.FAILED
        self.state.error_message = CANCELLED_MESSAGE

    async def _fetch(self, generation: int, name: str) -> None:
        if self._is_stale(generation, name):
            logger.debug("Skipping detail fetch for %r, selection changed", name)
            return

        try:
            detail = await self._catalog.fetch_detail_by_name(name)
        except CatalogError as e:
            if self._is_stale(generation, name):
                logger.debug("Dropping stale %s failure for %r", e.kind, name)
                return
            logger.warning("Detail fetch for %r failed (%s): %s", name, e.kind, e)
            self.state.phase = Phase.FAILED
            self.state.error_message = str(e)
            return
        except asyncio.CancelledError:
            self.abandon(generation)
            raise

        if self._is_stale(generation, name):
            logger.debug("Dropping stale detail response for %r", name)
            return
        self.state.detail = detail
        self.state.phase = Phase.READY

    def _is_stale(self, generation: int, name: str) -> bool:
        return generation != self._generation or self.state.selected_id != name
