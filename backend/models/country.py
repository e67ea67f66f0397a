from pydantic import BaseModel, ConfigDict, Field


class CountrySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    common_name: str
    official_name: str
    flag_image_ref: str
    flag_alt_text: str | None = None
    id: str


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str = ""


class CountryDetail(CountrySummary):
    capitals: list[str] = []
    region: str = ""
    subregion: str = ""
    population: int = Field(default=0, ge=0)
    currencies: dict[str, Currency] = {}
    languages: dict[str, str] = {}
