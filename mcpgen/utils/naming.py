"""
Case conversion shared by the resolver and the renderer.

Every transform is a pure function of its input, so a symbol derived for a tool
or integration is spelled identically in every file that references it.
"""

import re
from typing import List

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_words(value: str) -> List[str]:
    """
    Split a string into lowercase words.

    Handles camelCase and PascalCase boundaries, acronyms ("HTTPRequest" ->
    ["http", "request"]) and any run of non-alphanumeric characters.

    Args:
        value: Arbitrary source string (tool name, integration id, env var)

    Returns:
        List[str]: Lowercase words, empty when the input has no alphanumerics
    """
    if not value:
        return []
    spaced = _ACRONYM_BOUNDARY.sub(r"\1 \2", value)
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", spaced)
    return [word.lower() for word in _SEPARATORS.split(spaced) if word]


def _identifier(value: str) -> str:
    if value and value[0].isdigit():
        return f"_{value}"
    return value


def camel_case(value: str) -> str:
    """'Get Weather' -> 'getWeather'"""
    words = split_words(value)
    if not words:
        return ""
    return _identifier(words[0] + "".join(word.capitalize() for word in words[1:]))


def pascal_case(value: str) -> str:
    """'get-weather' -> 'GetWeather'"""
    return _identifier("".join(word.capitalize() for word in split_words(value)))


def kebab_case(value: str) -> str:
    """'GetWeather' -> 'get-weather'"""
    return "-".join(split_words(value))


def snake_case(value: str) -> str:
    """'Get Weather' -> 'get_weather'"""
    return _identifier("_".join(split_words(value)))


def constant_case(value: str) -> str:
    """'fromEmail' -> 'FROM_EMAIL'"""
    return _identifier("_".join(word.upper() for word in split_words(value)))


def identity_key(name: str) -> str:
    """
    Case-insensitive identity of a tool name or integration id.

    The key is the lowercase letters and digits of the name with every word
    boundary removed. Every case transform above is built from the same words,
    so two names whose modules, classes or constants would coincide always share
    a key: 'Get Weather', 'get-weather', 'GetWeather' and 'getweather' collide,
    as do 'tool v2' and 'tool v 2'.
    """
    return "".join(split_words(name))


def slugify_server_name(summary: str, suffix: str, word_count: int = 3) -> str:
    """
    Derive a server name from an analysis summary.

    Takes the first ``word_count`` space-separated words, lowercases them, drops
    everything except letters, digits and hyphens, collapses repeated hyphens
    and appends ``suffix``.
    """
    words = summary.split()[:word_count]
    base = "-".join(words).lower()
    base = re.sub(r"[^a-z0-9-]", "", base)
    base = re.sub(r"-+", "-", base).strip("-")
    if not base:
        return suffix
    return f"{base}-{suffix}"


def environment_key(integration_id: str, property_name: str) -> str:
    """'aws-s3', 'accessKeyId' -> 'AWS_S3_ACCESSKEYID'"""
    key = f"{integration_id}_{property_name}".upper()
    return re.sub(r"[^A-Z0-9_]", "_", key)
