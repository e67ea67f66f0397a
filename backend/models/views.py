from pydantic import BaseModel

from models.state import Mode, Phase


class CountryCard(BaseModel):
    id: str
    name: str
    flag_src: str
    flag_alt: str


class DirectoryView(BaseModel):
    phase: Phase
    error_message: str | None = None
    filter_text: str = ""
    total: int = 0
    countries: list[CountryCard] = []


class DetailInfo(BaseModel):
    id: str
    name: str
    official_name: str
    flag_src: str
    flag_alt: str
    capital: str
    population: str
    region: str
    subregion: str
    currencies: str
    languages: str


class DetailView(BaseModel):
    phase: Phase
    selected: str | None = None
    error_message: str | None = None
    country: DetailInfo | None = None


class AppView(BaseModel):
    mode: Mode
    directory: DirectoryView | None = None
    detail: DetailView | None = None


class FilterRequest(BaseModel):
    text: str = ""
