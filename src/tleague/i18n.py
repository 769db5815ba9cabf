"""Internationalization utilities."""

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from tleague.paths import get_i18n_dir

# Cache for loaded strings to avoid repeated file I/O
_strings_cache: Dict[str, Dict[str, Any]] = {}

# Supported languages
SUPPORTED_LANGUAGES = ["pt", "en"]
DEFAULT_LANGUAGE = "pt"


def _get_i18n_dir() -> Path:
    return get_i18n_dir()


def load_strings(lang: str) -> Dict[str, Any]:
    """
    Load strings from i18n/strings_{lang}.yaml.

    Args:
        lang: Language code (pt, en)

    Returns:
        Dictionary with all strings for the given language

    Raises:
        ValueError: If language is not supported
        FileNotFoundError: If the strings file doesn't exist
    """
    if lang not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Language '{lang}' not supported. Supported languages: {SUPPORTED_LANGUAGES}"
        )

    if lang in _strings_cache:
        return _strings_cache[lang]

    strings_file = _get_i18n_dir() / f"strings_{lang}.yaml"

    if not strings_file.exists():
        raise FileNotFoundError(f"Strings file not found: {strings_file}")

    with open(strings_file, "r", encoding="utf-8") as f:
        strings = yaml.safe_load(f)

    _strings_cache[lang] = strings or {}

    return _strings_cache[lang]


def _lookup(strings: Dict[str, Any], key: str) -> Any:
    """Follow a dot-notation key; None if any part is missing."""
    value = strings
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return None
    return value


def get_string(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Get a string by key for the specified language.

    Supports dot notation for nested keys (e.g., "cli.advance.success").
    Missing keys fall back to English, then to the key itself.

    Args:
        key: String key (supports dot notation for nested keys)
        lang: Language code (pt, en)
        **kwargs: Format variables to substitute in the string

    Returns:
        The translated string, or the key itself if not found

    Examples:
        >>> get_string("app.title", "pt")
        'Ranking de Tênis'
        >>> get_string("cli.advance.success", "en", month="March")
        'Season advanced to March'
    """
    try:
        strings = load_strings(lang)
    except (ValueError, FileNotFoundError):
        if lang == DEFAULT_LANGUAGE:
            return key
        try:
            lang = DEFAULT_LANGUAGE
            strings = load_strings(DEFAULT_LANGUAGE)
        except (ValueError, FileNotFoundError):
            return key

    value = _lookup(strings, key)
    if value is None and lang != "en":
        try:
            value = _lookup(load_strings("en"), key)
        except (ValueError, FileNotFoundError):
            return key

    if not isinstance(value, str):
        return key

    if kwargs:
        try:
            return value.format(**kwargs)
        except (KeyError, ValueError):
            # If formatting fails, return the unformatted string
            return value

    return value


def get_list(key: str, lang: str = DEFAULT_LANGUAGE) -> list[str]:
    """Get a list of strings (e.g. table headers); empty if missing."""
    try:
        value = _lookup(load_strings(lang), key)
    except (ValueError, FileNotFoundError):
        return []
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def clear_cache() -> None:
    """Clear the strings cache. Useful for testing or reloading strings."""
    _strings_cache.clear()


def get_language_from_env() -> str:
    """
    Get the language from environment variable TLEAGUE_LANG.

    Returns:
        Language code (defaults to DEFAULT_LANGUAGE if not set or invalid)
    """
    env_lang = os.environ.get("TLEAGUE_LANG", DEFAULT_LANGUAGE)
    if env_lang in SUPPORTED_LANGUAGES:
        return env_lang
    return DEFAULT_LANGUAGE
