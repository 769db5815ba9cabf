"""Tests for internationalization (i18n) module."""

import os

import pytest

from tleague.i18n import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    clear_cache,
    get_language_from_env,
    get_list,
    get_string,
    load_strings,
)


class TestI18n:
    """Test i18n functionality."""

    def setup_method(self):
        """Clear cache before each test."""
        clear_cache()
        if "TLEAGUE_LANG" in os.environ:
            del os.environ["TLEAGUE_LANG"]

    def teardown_method(self):
        """Clean up after each test."""
        clear_cache()
        if "TLEAGUE_LANG" in os.environ:
            del os.environ["TLEAGUE_LANG"]

    def test_load_strings_portuguese(self):
        strings = load_strings("pt")
        assert isinstance(strings, dict)
        assert strings["app"]["title"] == "Ranking de Tênis"

    def test_load_strings_english(self):
        strings = load_strings("en")
        assert strings["app"]["title"] == "Tennis Ranking"

    def test_load_strings_invalid_language(self):
        with pytest.raises(ValueError, match="not supported"):
            load_strings("fr")

    def test_load_strings_caching(self):
        assert load_strings("pt") is load_strings("pt")

    def test_get_string_nested_key(self):
        assert get_string("common.tbd", "pt") == "A definir"
        assert get_string("common.tbd", "en") == "TBD"

    def test_get_string_with_formatting(self):
        assert get_string("cli.advance.success", "en", month="Abril") == "Season advanced to Abril"
        result = get_string("cli.import.success", "pt", players=16, months=3)
        assert "16" in result
        assert "3" in result

    def test_get_string_missing_key(self):
        assert get_string("nonexistent.key", "pt") == "nonexistent.key"

    def test_get_string_unsupported_language_uses_default(self):
        assert get_string("app.title", "fr") == "Ranking de Tênis"

    def test_get_list(self):
        headers = get_list("csv.ranking_headers", "pt")
        assert len(headers) == 18
        assert headers[:3] == ["Rank", "Jogador", "Pontos (Geral)"]
        assert get_list("app.title", "pt") == []
        assert get_list("missing.list", "en") == []

    def test_every_key_has_both_languages(self):
        """Both string files define the same keys."""

        def keys(d, prefix=""):
            found = set()
            for key, value in d.items():
                full = f"{prefix}{key}"
                if isinstance(value, dict):
                    found |= keys(value, f"{full}.")
                else:
                    found.add(full)
            return found

        assert keys(load_strings("pt")) == keys(load_strings("en"))

    def test_get_language_from_env_default(self):
        assert get_language_from_env() == DEFAULT_LANGUAGE

    def test_get_language_from_env_set(self):
        os.environ["TLEAGUE_LANG"] = "en"
        assert get_language_from_env() == "en"

    def test_get_language_from_env_invalid(self):
        os.environ["TLEAGUE_LANG"] = "fr"
        assert get_language_from_env() == DEFAULT_LANGUAGE


def test_supported_languages():
    assert SUPPORTED_LANGUAGES == ["pt", "en"]
    assert DEFAULT_LANGUAGE == "pt"
