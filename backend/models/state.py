from enum import Enum

from pydantic import BaseModel

from models.country import CountryDetail, CountrySummary


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Mode(str, Enum):
    DIRECTORY = "directory"
    DETAIL = "detail"


class DirectoryState(BaseModel):
    entries: list[CountrySummary] = []
    filter_text: str = ""
    phase: Phase = Phase.IDLE
    error_message: str | None = None


class DetailState(BaseModel):
    selected_id: str | None = None
    detail: CountryDetail | None = None
    phase: Phase = Phase.IDLE
    error_message: str | None = None


class NavigationMode(BaseModel):
    """`Directory`, or `Detail` carrying the selected name."""

    mode: Mode = Mode.DIRECTORY
    selected_id: str | None = None

    @classmethod
    def directory(cls) -> "NavigationMode":
        return cls()

    @classmethod
    def detail(cls, selected_id: str) -> "NavigationMode":
        return cls(mode=Mode.DETAIL, selected_id=selected_id)

    @property
    def is_detail(self) -> bool:
        return self.mode is Mode.DETAIL
