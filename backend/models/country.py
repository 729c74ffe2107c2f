from pydantic import BaseModel, ConfigDict, Field


class CountryName(BaseModel):
    model_config = ConfigDict(frozen=True)

    common: str
    official: str = ""


class Flags(BaseModel):
    model_config = ConfigDict(frozen=True)

    png: str = ""
    svg: str = ""
    alt: str = ""


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str = ""


class Country(BaseModel):
    """One nation's public profile, as served by the REST Countries API."""

    model_config = ConfigDict(frozen=True)

    name: CountryName
    flags: Flags = Flags()
    capital: list[str] = []
    population: int = Field(default=0, ge=0)
    region: str = ""
    subregion: str = ""
    languages: dict[str, str] = {}
    currencies: dict[str, Currency] = {}
    cca3: str

    @property
    def common_name(self) -> str:
        return self.name.common

    @property
    def primary_language(self) -> str | None:
        return next(iter(self.languages.values()), None)

    @property
    def primary_capital(self) -> str:
        return self.capital[0] if self.capital else "N/A"

    @property
    def languages_display(self) -> str:
        return ", ".join(self.languages.values()) or "N/A"

    @property
    def currencies_display(self) -> str:
        labels = [
            f"{c.name} ({c.symbol})" if c.symbol else c.name
            for c in self.currencies.values()
        ]
        return ", ".join(labels) or "N/A"

    @property
    def population_display(self) -> str:
        return f"{self.population:,}"

    @property
    def region_display(self) -> str:
        return f"{self.region or 'N/A'} ({self.subregion or 'N/A'})"

    @property
    def flag_alt_text(self) -> str:
        return self.flags.alt or f"Flag of {self.name.common}"
