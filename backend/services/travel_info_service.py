"""Travel guide generation for a single country via the Gemini API."""

import json
import logging

import httpx
from pydantic import ValidationError

from config import settings
from models.country import Country
from models.tourist_info import TouristInfo
from services.errors import GenerationError
from utils.json_helpers import loads_json_object
from utils.llm_client import generate_content

logger = logging.getLogger(__name__)

_NAMED_ITEM = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "description": {"type": "STRING"},
    },
    "required": ["name", "description"],
}

TOURIST_INFO_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "attractions": {
            "type": "ARRAY",
            "description": "A list of up to 5 must-visit cities or attractions.",
            "items": {
                **_NAMED_ITEM,
                "properties": {
                    "name": {"type": "STRING", "description": "Name of the attraction or city."},
                    "description": {
                        "type": "STRING",
                        "description": "A brief description of why it's a must-visit.",
                    },
                },
            },
        },
        "bestTimeToVisit": {
            "type": "STRING",
            "description": (
                "A summary of the best time of year to visit the country, "
                "considering weather and events."
            ),
        },
        "cuisine": {
            "type": "ARRAY",
            "description": "A list of 3-5 must-try local dishes.",
            "items": {
                **_NAMED_ITEM,
                "properties": {
                    "name": {"type": "STRING", "description": "Name of the dish."},
                    "description": {"type": "STRING", "description": "A brief description of the dish."},
                },
            },
        },
        "culturalEtiquette": {
            "type": "ARRAY",
            "description": "A list of 3-5 important cultural etiquette tips for tourists.",
            "items": {"type": "STRING"},
        },
        "commonPhrases": {
            "type": "ARRAY",
            "description": (
                "A list of 3-5 common and useful phrases for a tourist in the "
                "country's primary language."
            ),
            "items": {
                "type": "OBJECT",
                "properties": {
                    "phrase": {"type": "STRING", "description": "The phrase in English."},
                    "translation": {
                        "type": "STRING",
                        "description": "The translation in the local language.",
                    },
                },
                "required": ["phrase", "translation"],
            },
        },
    },
    "required": [
        "attractions",
        "bestTimeToVisit",
        "cuisine",
        "culturalEtiquette",
        "commonPhrases",
    ],
}

# (field, min, max) as requested in the schema descriptions
_INTENDED_LENGTHS = [
    ("attractions", 0, 5),
    ("cuisine", 3, 5),
    ("cultural_etiquette", 3, 5),
    ("common_phrases", 3, 5),
]


def build_prompt(country: Country) -> str:
    main_language = country.primary_language or "the local language"
    return (
        f"Generate a concise travel guide for a tourist visiting {country.name.common}. "
        "The guide should be helpful and practical. "
        f"Include common phrases in {main_language}."
    )


def _warn_on_lengths(country: Country, info: TouristInfo) -> None:
    for field, low, high in _INTENDED_LENGTHS:
        count = len(getattr(info, field))
        if not low <= count <= high:
            logger.warning(
                "Travel info for %s has %d %s (expected %d-%d)",
                country.cca3, count, field, low, high,
            )


async def fetch_tourist_info(
    country: Country, client: httpx.AsyncClient | None = None
) -> TouristInfo:
    name = country.name.common
    try:
        raw = await generate_content(
            prompt=build_prompt(country),
            response_schema=TOURIST_INFO_SCHEMA,
            temperature=settings.travel_info_temperature,
            client=client,
        )
    except Exception as e:
        logger.exception("Error fetching tourist info for %s", name)
        raise GenerationError(name) from e

    try:
        info = TouristInfo.model_validate(loads_json_object(raw))
    except (json.JSONDecodeError, ValueError, ValidationError) as e:
        logger.error(
            "Unusable travel info for %s: %s (raw: %.200s)", name, e, raw
        )
        raise GenerationError(name) from e

    _warn_on_lengths(country, info)
    return info
