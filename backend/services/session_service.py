"""Session state for one running instance of the country browser.

The controller owns a single ``SessionState`` and changes it only through
its transition methods. Two independent lifecycles live in it:

* the initial country-list load (``idle -> loading -> loaded | error``,
  where ``loaded`` and ``error`` are terminal), and
* the detail view for the selected country
  (``no_selection -> loading -> loaded | error``).

Travel info for the selected country is memoised by country code and the
memo is only dropped when a *different* country is selected. Every detail
fetch is tagged with its target code and a sequence number; a result is
applied only if both still match when it arrives, so a slow response for
a previous selection can never overwrite the current one.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from models.country import Country
from models.session import DetailState, DetailStatus, LoadStatus, SessionState
from models.tourist_info import TouristInfo
from services import country_service, travel_info_service
from services.cache_service import SelectionMemo
from services.errors import (
    CountriesNotLoadedError,
    CountryFinderError,
    CountryNotFoundError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

CountriesFetcher = Callable[[], Awaitable[list[Country]]]
TouristInfoFetcher = Callable[[Country], Awaitable[TouristInfo]]

_TERMINAL = (LoadStatus.LOADED, LoadStatus.ERROR)

LOAD_FAILED_MESSAGE = "Could not load the country list. Please try again later."


@dataclass
class Outcome(Generic[T]):
    value: T | None = None
    error: CountryFinderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def capture(awaitable: Awaitable[T]) -> Outcome[T]:
    """Await and fold application errors into an ``Outcome``."""
    try:
        return Outcome(value=await awaitable)
    except CountryFinderError as e:
        return Outcome(error=e)


class SessionController:
    def __init__(
        self,
        fetch_countries: CountriesFetcher | None = None,
        fetch_tourist_info: TouristInfoFetcher | None = None,
    ):
        self._fetch_countries = fetch_countries or country_service.fetch_all_countries
        self._fetch_tourist_info = (
            fetch_tourist_info or travel_info_service.fetch_tourist_info
        )
        self.state = SessionState()
        self._memo = SelectionMemo()
        self._filtered: tuple[tuple[int, str], list[Country]] | None = None
        self._load_task: asyncio.Task | None = None
        self._detail_task: asyncio.Task | None = None
        self._detail_target: str | None = None
        self._detail_seq = 0
        self._tasks: set[asyncio.Task] = set()

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # -- country list ------------------------------------------------------

    def start_initial_load(self) -> asyncio.Task | None:
        if self.state.status in _TERMINAL:
            return None
        if self._load_task is None:
            self._load_task = self._track(asyncio.create_task(self._load()))
        return self._load_task

    async def load_countries(self) -> SessionState:
        task = self.start_initial_load()
        if task is not None:
            await task
        return self.state

    async def _load(self) -> None:
        self.state.status = LoadStatus.LOADING
        self.state.error = None
        try:
            outcome = await capture(self._fetch_countries())
        except Exception:
            # The load is terminal, so it must not stay in LOADING
            logger.exception("Unexpected failure loading countries")
            outcome = Outcome(error=CountryFinderError(LOAD_FAILED_MESSAGE))
        self._finish_load(outcome)

    def _finish_load(self, outcome: Outcome[list[Country]]) -> None:
        if outcome.ok:
            self.state.countries = country_service.sort_by_name(outcome.value)
            self.state.status = LoadStatus.LOADED
            logger.info("Session loaded %d countries", len(self.state.countries))
        else:
            self.state.status = LoadStatus.ERROR
            self.state.error = outcome.error.message
            logger.warning("Initial country load failed: %s", outcome.error.message)

    # -- search ------------------------------------------------------------

    def set_search_term(self, term: str) -> list[Country]:
        self.state.search_term = term or ""
        return self.filtered_countries

    @property
    def filtered_countries(self) -> list[Country]:
        key = (id(self.state.countries), self.state.search_term)
        if self._filtered is None or self._filtered[0] != key:
            self._filtered = (
                key,
                country_service.filter_by_name(
                    self.state.countries, self.state.search_term
                ),
            )
        return self._filtered[1]

    # -- selection ---------------------------------------------------------

    def select_country(self, code: str) -> asyncio.Task | None:
        """Select a country and start fetching its travel info if needed.

        Returns the task that will settle the detail state, or ``None``
        when no request is necessary.
        """
        if self.state.status is not LoadStatus.LOADED:
            raise CountriesNotLoadedError()
        country = country_service.get_by_code(self.state.countries, code)
        if country is None:
            raise CountryNotFoundError(f"No country with code {code.upper()}")
        code = country.cca3

        detail = self.state.detail
        if self.state.selected is not None and self.state.selected.cca3 == code:
            if detail.status is DetailStatus.LOADED:
                return None
            if detail.status is DetailStatus.LOADING:
                return self._detail_task

        self.state.selected = country

        cached = self._memo.get(code)
        if cached is not None:
            self.state.detail = DetailState(
                status=DetailStatus.LOADED, country_code=code, tourist_info=cached
            )
            return None
        self._memo.invalidate()

        self.state.detail = DetailState(status=DetailStatus.LOADING, country_code=code)
        pending = self._detail_task
        if pending is not None and not pending.done() and self._detail_target == code:
            return pending

        self._detail_seq += 1
        self._detail_target = code
        self._detail_task = self._track(
            asyncio.create_task(self._load_detail(country, self._detail_seq))
        )
        return self._detail_task

    def clear_selection(self) -> None:
        self.state.selected = None
        self.state.detail = DetailState()

    def _is_current(self, code: str, seq: int) -> bool:
        selected = self.state.selected
        return seq == self._detail_seq and selected is not None and selected.cca3 == code

    async def _load_detail(self, country: Country, seq: int) -> DetailState:
        outcome = await capture(self._fetch_tourist_info(country))
        code = country.cca3
        if not self._is_current(code, seq):
            logger.debug("Discarding stale travel info for %s", code)
            return self.state.detail

        if outcome.ok:
            self._memo.set(code, outcome.value)
            self.state.detail = DetailState(
                status=DetailStatus.LOADED, country_code=code, tourist_info=outcome.value
            )
        else:
            self.state.detail = DetailState(
                status=DetailStatus.ERROR, country_code=code, error=outcome.error.message
            )
        return self.state.detail

    def snapshot(self) -> SessionState:
        return self.state.model_copy(deep=True)


_session: SessionController | None = None


def get_session() -> SessionController:
    global _session
    if _session is None:
        _session = SessionController()
    return _session
