"""Tests for configuration, JSON cleanup and the selection memo."""

import json

import pytest

from config import Settings
from services.cache_service import SelectionMemo
from utils.json_helpers import clean_json_response, loads_json_object


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.gemini_model == "gemini-2.5-flash"
        assert settings.travel_info_temperature == 0.5
        assert settings.countries_base_url == "https://restcountries.com/v3.1"
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize(
        "raw",
        ["http://a.test, http://b.test", '["http://a.test", "http://b.test"]'],
    )
    def test_cors_origins_accepts_csv_or_json(self, raw) -> None:
        settings = Settings(_env_file=None, cors_origins=raw)

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_base_urls_lose_trailing_slash(self) -> None:
        settings = Settings(
            _env_file=None,
            countries_base_url="https://example.test/v3.1/",
            gemini_base_url="https://gen.example.test/v1beta/",
        )

        assert settings.countries_base_url == "https://example.test/v3.1"
        assert settings.gemini_base_url == "https://gen.example.test/v1beta"


class TestJsonHelpers:
    def test_clean_plain_json(self) -> None:
        assert clean_json_response('  {"a": 1}\n') == '{"a": 1}'

    def test_clean_fenced_json(self) -> None:
        assert clean_json_response('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_loads_json_object(self) -> None:
        assert loads_json_object('```\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_loads_rejects_non_objects(self) -> None:
        with pytest.raises(ValueError):
            loads_json_object("[1, 2]")

    def test_loads_rejects_invalid_json(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            loads_json_object("{not json")


class TestSelectionMemo:
    def test_holds_one_entry(self) -> None:
        memo = SelectionMemo()
        memo.set("FRA", "guide-fr")

        assert memo.key == "FRA"
        assert memo.get("FRA") == "guide-fr"
        assert memo.get("DEU") is None

        memo.set("DEU", "guide-de")
        assert memo.get("FRA") is None
        assert memo.get("DEU") == "guide-de"

    def test_invalidate(self) -> None:
        memo = SelectionMemo()
        memo.set("FRA", "guide-fr")

        memo.invalidate()

        assert memo.key is None
        assert memo.get("FRA") is None
