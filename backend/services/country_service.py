import logging
import unicodedata
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from config import settings
from models.country import Country
from services.errors import ConnectivityError, FetchError, SearchError
from utils.llm_client import get_client

logger = logging.getLogger(__name__)

ALL_COUNTRIES_FIELDS = (
    "name,flags,capital,population,region,subregion,languages,currencies,cca3"
)


def _parse_countries(response: httpx.Response) -> list[Country]:
    payload = response.json()
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
    return [Country.model_validate(c) for c in payload]


async def fetch_all_countries(client: httpx.AsyncClient | None = None) -> list[Country]:
    """Fetch every country with the fixed field subset the UI needs."""
    client = client or get_client()
    try:
        response = await client.get(
            f"{settings.countries_base_url}/all",
            params={"fields": ALL_COUNTRIES_FIELDS},
        )
    except httpx.RequestError as e:
        logger.error("Error fetching all countries: %s", e)
        raise ConnectivityError() from e

    if not response.is_success:
        logger.error(
            "Country API error %s: %s", response.status_code, response.reason_phrase
        )
        raise FetchError(response.status_code, response.reason_phrase)

    try:
        countries = _parse_countries(response)
    except (ValueError, ValidationError) as e:
        logger.exception("Country API returned a malformed body")
        raise FetchError(response.status_code, "malformed response body") from e

    logger.info("Fetched %d countries", len(countries))
    return countries


async def search_country_by_name(
    name: str, client: httpx.AsyncClient | None = None
) -> list[Country]:
    """Search the remote API by name. A 404 means no match, not an error."""
    name = (name or "").strip()
    if not name:
        return []

    client = client or get_client()
    try:
        response = await client.get(
            f"{settings.countries_base_url}/name/{quote(name, safe='')}"
        )
    except httpx.RequestError as e:
        logger.error('Error searching for country "%s": %s', name, e)
        raise SearchError(reason=str(e)) from e

    if response.status_code == 404:
        return []
    if not response.is_success:
        logger.error(
            'Search for "%s" failed: %s %s',
            name, response.status_code, response.reason_phrase,
        )
        raise SearchError(response.status_code, response.reason_phrase)

    try:
        return _parse_countries(response)
    except (ValueError, ValidationError) as e:
        logger.exception('Search for "%s" returned a malformed body', name)
        raise SearchError(response.status_code, "malformed response body") from e


def _collation_key(name: str) -> tuple[str, str]:
    # Accents and case only break ties, as in a locale-aware compare
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def sort_by_name(countries: list[Country]) -> list[Country]:
    return sorted(countries, key=lambda c: _collation_key(c.name.common))


def filter_by_name(countries: list[Country], term: str) -> list[Country]:
    if not term:
        return countries
    needle = term.casefold()
    return [c for c in countries if needle in c.name.common.casefold()]


def get_by_code(countries: list[Country], code: str) -> Country | None:
    code = code.upper()
    return next((c for c in countries if c.cca3 == code), None)
