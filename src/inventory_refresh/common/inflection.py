"""Minimal English inflection used to derive collection names from model classes.

Only covers the shapes found in inventory model names (``Vm`` -> ``vms``,
``OrchestrationStack`` -> ``orchestration_stacks``, ``Flavor`` -> ``flavors``,
``CloudTenancy`` -> ``cloud_tenancies``).
"""

from __future__ import annotations

import re
from typing import Final

_ACRONYM_BOUNDARY: Final = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY: Final = re.compile(r"([a-z\d])([A-Z])")

_IRREGULAR_PLURALS: Final[dict[str, str]] = {
    "child": "children",
    "person": "people",
    "index": "indices",
}
_UNCOUNTABLE: Final[frozenset[str]] = frozenset({"equipment", "information", "metadata", "data"})
_SIBILANT_SUFFIXES: Final[tuple[str, ...]] = ("s", "x", "z", "ch", "sh")
_VOWELS: Final[str] = "aeiou"


def demodulize(path: str) -> str:
    """Strip module/namespace prefixes (``a.b.Vm`` or ``A::Vm``) from a class path."""

    return re.split(r"\.|::", path)[-1]


def underscore(word: str) -> str:
    """Convert ``CamelCase`` into ``snake_case``."""

    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def pluralize(word: str) -> str:
    """Pluralize the last ``_``-separated segment of ``word``."""

    head, sep, last = word.rpartition("_")
    return f"{head}{sep}{_pluralize_word(last)}"


def tableize(class_name: str) -> str:
    """Derive a table-style plural name from a class name."""

    return pluralize(underscore(demodulize(class_name)))


def _pluralize_word(word: str) -> str:
    if not word or word in _UNCOUNTABLE:
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word.endswith(_SIBILANT_SUFFIXES):
        return f"{word}es"
    if word.endswith("y") and len(word) > 1 and word[-2] not in _VOWELS:
        return f"{word[:-1]}ies"
    return f"{word}s"
