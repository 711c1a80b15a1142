"""
Naming utilities for safe code generation.

Handles case conversions, reserved identifier escaping and singularization
of generated type names.
"""

import re
from enum import Enum
from typing import Iterable, List, Optional

import inflect


class NamingCase(Enum):
    """Different naming case styles."""

    ORIGINAL = "original"  # user_id (unchanged)
    CAMEL_CASE = "camel"  # userId
    PASCAL_CASE = "pascal"  # UserId


_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")

_SINGULAR_SUFFIXES = ("ss", "is", "us")

_inflect_engine: Optional[inflect.engine] = None


def _get_inflect_engine() -> inflect.engine:
    global _inflect_engine
    if _inflect_engine is None:
        _inflect_engine = inflect.engine()
    return _inflect_engine


def split_words(name: str) -> List[str]:
    """
    Split an identifier into lowercase words.

    Word boundaries are runs of non-alphanumeric characters, lower-to-upper
    case transitions and the end of an uppercase run followed by a
    capitalized word ("HTTPServer" -> ["http", "server"]).
    """
    spaced = _ACRONYM_BOUNDARY_RE.sub(r"\1 \2", name)
    spaced = _CASE_BOUNDARY_RE.sub(r"\1 \2", spaced)
    spaced = _NON_ALNUM_RE.sub(" ", spaced)
    return [word.lower() for word in spaced.split()]


def singularize_word(word: str) -> str:
    """
    Singularize a single word, keeping its leading capital.

    inflect assumes its input is plural ("address" -> "addres"), so a result is
    only used when it pluralizes back to the word. Words ending in -ss, -is or
    -us are singular already.
    """
    lowered = word.lower()
    if lowered.endswith(_SINGULAR_SUFFIXES):
        return word

    engine = _get_inflect_engine()
    singular = engine.singular_noun(lowered)
    if not singular or engine.plural_noun(singular) != lowered:
        return word
    if word[:1].isupper():
        return singular[:1].upper() + singular[1:]
    return singular


class NameSanitizer:
    """Handles reserved identifier escaping and case conversion."""

    def __init__(self, reserved_words: Optional[Iterable[str]] = None, suffix: str = "_"):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Identifiers that cannot be used as symbol names
            suffix: Appended to a reserved identifier to make it safe
        """
        self.reserved_words = frozenset(reserved_words or ())
        self.suffix = suffix

    def is_reserved(self, name: str) -> bool:
        """Check whether a name is in the reserved set."""
        return name in self.reserved_words

    def safe_symbol_name(self, name: str) -> str:
        """
        Return a version of the name usable as a symbol, e.g. 'number' -> 'number_'.
        """
        if self.is_reserved(name):
            return f"{name}{self.suffix}"
        return name

    def convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.CAMEL_CASE:
            return self.to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self.to_pascal_case(name)
        else:
            return name

    def to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        words = split_words(name)
        if not words:
            return name

        # First word lowercase, rest capitalized
        return words[0] + "".join(word.capitalize() for word in words[1:])

    def to_pascal_case(self, name: str, singularize: bool = False) -> str:
        """
        Convert to PascalCase.

        Args:
            name: Identifier to convert
            singularize: Singularize the last word ("user_accounts" -> "UserAccount")
        """
        words = [word.capitalize() for word in split_words(name)]
        if singularize and words:
            words[-1] = singularize_word(words[-1])
        return "".join(words)
