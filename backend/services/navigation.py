import asyncio
import logging
from collections.abc import Callable, Coroutine

from models.state import NavigationMode, Phase
from services.catalog_client import CatalogClient
from services.detail_session import DetailSession
from services.directory_store import DirectoryStore

logger = logging.getLogger(__name__)

RETRYABLE = (Phase.IDLE, Phase.FAILED)


class InvalidTransition(Exception):
    pass


class NavigationController:
    """Two-state machine: Directory <-> Detail(name).

    Transitions happen synchronously; the fetch a transition triggers runs as
    an ``asyncio.Task`` which is returned to the caller. A task cancelled
    before it finishes moves its component to Failed so it can be retried.
    """

    def __init__(self, catalog: CatalogClient):
        self._catalog = catalog
        self.directory = DirectoryStore(catalog)
        self.session: DetailSession | None = None
        self.mode = NavigationMode.directory()
        self._directory_task: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()

    def start(self) -> asyncio.Task:
        logger.info("Entering directory mode")
        return self._load_directory()

    def set_filter(self, text: str) -> None:
        if self.mode.is_detail:
            raise InvalidTransition("Filtering is only available in directory mode")
        self.directory.set_filter(text)

    def select(self, name: str) -> asyncio.Task:
        if self.mode.is_detail:
            raise InvalidTransition(f"Already viewing {self.mode.selected_id}")
        self.session = DetailSession(self._catalog)
        self.mode = NavigationMode.detail(name)
        logger.info("Entering detail mode for %r", name)
        return self._open_detail(name)

    def back(self) -> None:
        if not self.mode.is_detail:
            raise InvalidTransition("Already in directory mode")
        if self.session is not None:
            self.session.close()
        self.session = None
        self.mode = NavigationMode.directory()
        logger.info("Returning to directory mode")

    def retry(self) -> asyncio.Task | None:
        """Re-run the active component's fetch if it is Idle or Failed."""
        if self.mode.is_detail and self.session is not None:
            if self.session.phase not in RETRYABLE:
                return None
            return self._open_detail(self.mode.selected_id)
        if self.directory.phase not in RETRYABLE:
            return None
        return self._load_directory()

    def _load_directory(self) -> asyncio.Task:
        if self._directory_task is not None and not self._directory_task.done():
            return self._directory_task
        fetch = self.directory.load()
        self._directory_task = self._spawn(fetch, self.directory.abandon, self.directory.generation)
        return self._directory_task

    def _open_detail(self, name: str) -> asyncio.Task:
        session = self.session
        fetch = session.open(name)
        return self._spawn(fetch, session.abandon, session.generation)

    def _spawn(self, coro: Coroutine, abandon: Callable[[int], None], generation: int) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._pending.add(task)

        def finished(t: asyncio.Task) -> None:
            self._pending.discard(t)
            if t.cancelled():
                abandon(generation)

        task.add_done_callback(finished)
        return task
