from enum import Enum

from pydantic import BaseModel, computed_field

from models.country import Country
from models.tourist_info import TouristInfo


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class DetailStatus(str, Enum):
    NO_SELECTION = "no_selection"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class DetailState(BaseModel):
    status: DetailStatus = DetailStatus.NO_SELECTION
    country_code: str | None = None
    tourist_info: TouristInfo | None = None
    error: str | None = None


class SessionState(BaseModel):
    countries: list[Country] = []
    search_term: str = ""
    status: LoadStatus = LoadStatus.IDLE
    error: str | None = None
    selected: Country | None = None
    detail: DetailState = DetailState()

    @computed_field
    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING


class CountryListResponse(BaseModel):
    countries: list[Country] = []
    search_term: str = ""
    status: LoadStatus = LoadStatus.IDLE
    is_loading: bool = False
    error: str | None = None
    no_results: bool = False


class SelectionResponse(BaseModel):
    selected: Country | None = None
    detail: DetailState = DetailState()


class SearchTermRequest(BaseModel):
    term: str = ""
