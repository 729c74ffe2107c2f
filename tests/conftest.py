"""Pytest configuration and shared fixtures."""

import asyncio
import json
from collections.abc import Callable
from typing import Any

import pytest

from config import settings
from models.country import Country
from models.tourist_info import TouristInfo


def _country_payload(
    common: str,
    cca3: str,
    languages: dict[str, str] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    payload = {
        "name": {
            "common": common,
            "official": f"Official {common}",
            "nativeName": {},
        },
        "flags": {
            "png": f"https://flagcdn.com/w320/{cca3.lower()}.png",
            "svg": f"https://flagcdn.com/{cca3.lower()}.svg",
            "alt": f"The flag of {common}.",
        },
        "capital": [f"{common} City"],
        "population": 1_000_000,
        "region": "Somewhere",
        "subregion": "Somewhere Central",
        "languages": languages if languages is not None else {"eng": "English"},
        "currencies": {"XXX": {"name": f"{common} dollar", "symbol": "$"}},
        "cca3": cca3,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def country_payload() -> Callable[..., dict[str, Any]]:
    """Factory for REST Countries style payloads."""
    return _country_payload


@pytest.fixture
def unsorted_payloads() -> list[dict[str, Any]]:
    return [
        _country_payload("Czechia", "CZE", {"ces": "Czech", "slk": "Slovak"}),
        _country_payload("Canada", "CAN", {"eng": "English", "fra": "French"}),
        _country_payload("Chad", "TCD", {"ara": "Arabic", "fra": "French"}),
    ]


@pytest.fixture
def countries(unsorted_payloads) -> list[Country]:
    return [Country.model_validate(p) for p in unsorted_payloads]


@pytest.fixture
def france(country_payload) -> Country:
    return Country.model_validate(
        country_payload(
            "France",
            "FRA",
            {"fra": "French"},
            currencies={"EUR": {"name": "Euro", "symbol": "€"}},
        )
    )


@pytest.fixture
def germany(country_payload) -> Country:
    return Country.model_validate(country_payload("Germany", "DEU", {"deu": "German"}))


def _tourist_info_payload(country_name: str) -> dict[str, Any]:
    return {
        "attractions": [
            {"name": f"{country_name} Old Town", "description": "Historic centre."},
            {"name": f"{country_name} National Park", "description": "Hiking trails."},
        ],
        "bestTimeToVisit": f"Spring is the best time to visit {country_name}.",
        "cuisine": [
            {"name": "Stew", "description": "Slow-cooked and hearty."},
            {"name": "Flatbread", "description": "Baked on hot stones."},
            {"name": "Pastry", "description": "Sweet and flaky."},
        ],
        "culturalEtiquette": [
            "Greet people with a handshake.",
            "Tipping around 10% is customary.",
            "Dress modestly at religious sites.",
        ],
        "commonPhrases": [
            {"phrase": "Hello", "translation": "Hallo"},
            {"phrase": "Thank you", "translation": "Danke"},
            {"phrase": "Goodbye", "translation": "Tschüss"},
        ],
    }


@pytest.fixture
def tourist_info_payload() -> Callable[[str], dict[str, Any]]:
    return _tourist_info_payload


@pytest.fixture
def gemini_response() -> Callable[[str], dict[str, Any]]:
    """Wrap raw text the way generateContent returns it."""

    def _wrap(text: str) -> dict[str, Any]:
        return {
            "candidates": [
                {
                    "content": {"role": "model", "parts": [{"text": text}]},
                    "finishReason": "STOP",
                }
            ]
        }

    return _wrap


@pytest.fixture
def gemini_json_response(gemini_response, tourist_info_payload):
    def _wrap(country_name: str) -> dict[str, Any]:
        return gemini_response(json.dumps(tourist_info_payload(country_name)))

    return _wrap


@pytest.fixture
def gemini_api_key(monkeypatch) -> str:
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    return "test-key"


class FakeCountries:
    """Stand-in for the country list fetcher."""

    def __init__(self, result: list[Country] | Exception):
        self.result = result
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def __call__(self) -> list[Country]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.result, Exception):
            raise self.result
        return list(self.result)


class FakeTravelInfo:
    """Stand-in for the travel info fetcher with per-country gates."""

    def __init__(self):
        self.calls: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.errors: dict[str, Exception] = {}

    def hold(self, code: str) -> asyncio.Event:
        self.gates[code] = asyncio.Event()
        return self.gates[code]

    async def __call__(self, country: Country) -> TouristInfo:
        self.calls.append(country.cca3)
        gate = self.gates.get(country.cca3)
        if gate is not None:
            await gate.wait()
        if country.cca3 in self.errors:
            raise self.errors[country.cca3]
        return TouristInfo.model_validate(_tourist_info_payload(country.name.common))


@pytest.fixture
def fake_countries() -> Callable[..., FakeCountries]:
    return FakeCountries


@pytest.fixture
def fake_travel_info() -> FakeTravelInfo:
    return FakeTravelInfo()
