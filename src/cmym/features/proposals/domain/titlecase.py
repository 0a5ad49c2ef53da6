"""Summary: Deterministic title-case normalization for tag values.
Why: Several stages suggest the same canonical casing for artists and titles.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

# Articles, conjunctions and short prepositions kept lower-case mid-phrase.
MINOR_WORDS: Final[frozenset[str]] = frozenset(
    {
        "a", "an", "the",
        "and", "but", "or", "nor", "for", "so", "yet",
        "as", "at", "by", "in", "of", "off", "on", "per", "to", "up", "via", "vs",
    }
)

# Two-word phrasal verbs whose particle is capitalized regardless of MINOR_WORDS.
PHRASAL_VERBS: Final[frozenset[tuple[str, str]]] = frozenset(
    {
        ("break", "up"), ("look", "out"), ("give", "up"), ("give", "in"),
        ("hold", "on"), ("hang", "on"), ("come", "on"), ("carry", "on"),
        ("move", "on"), ("turn", "on"), ("turn", "off"), ("take", "off"),
        ("get", "up"), ("get", "off"), ("get", "on"), ("shut", "up"),
        ("wake", "up"), ("stand", "up"), ("stand", "by"), ("pass", "by"),
        ("grow", "up"), ("show", "up"), ("light", "up"), ("hurry", "up"),
        ("back", "off"), ("run", "off"), ("set", "off"), ("let", "in"),
    }
)

_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\w'’]+|[^\w'’]+")
_WORD_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\w'’]+")
_APOSTROPHES: Final[str] = "'’"


@dataclass(slots=True)
class _Piece:
    """A word fragment (or separator run) of the string being normalized."""

    text: str
    is_word: bool
    starts_word: bool = True
    keep_case: bool = False


def _split_camel(word: str) -> list[str]:
    """Split ``word`` at lower-to-upper case boundaries."""

    parts: list[str] = []
    start = 0
    for index in range(1, len(word)):
        if word[index - 1].islower() and word[index].isupper():
            parts.append(word[start:index])
            start = index
    parts.append(word[start:])
    return parts


def _capitalize(word: str) -> str:
    """Lower-case ``word`` and upper-case its leading letter."""

    lowered = word.lower()
    for index, char in enumerate(lowered):
        if char.isalpha():
            return lowered[:index] + char.upper() + lowered[index + 1 :]
        if char not in _APOSTROPHES:
            break
    return lowered


class TextNormalizer:
    """Title-case normalizer used by the suggestion rules."""

    @staticmethod
    def normalize(text: str) -> str:
        """Return ``text`` in canonical title case.

        Empty input is returned unchanged.
        """

        if not text:
            return text

        collapsed = " ".join(text.split())
        pieces: list[_Piece] = []
        for token in _TOKEN_PATTERN.findall(collapsed):
            if not _WORD_PATTERN.fullmatch(token):
                pieces.append(_Piece(token, is_word=False))
                continue
            parts = _split_camel(token)
            for index, part in enumerate(parts):
                # iPhone, eBay: a single lower-case letter before a capital stays as is.
                keep = index == 0 and len(parts) > 1 and len(part) == 1 and part.islower()
                pieces.append(
                    _Piece(part, is_word=True, starts_word=index == 0, keep_case=keep)
                )

        words = [index for index, piece in enumerate(pieces) if piece.is_word]
        for index in words:
            piece = pieces[index]
            if piece.keep_case:
                continue
            if piece.starts_word and piece.text.lower() in MINOR_WORDS:
                piece.text = piece.text.lower()
            else:
                piece.text = _capitalize(piece.text)

        # First and last word of the whole string and of every slash/hyphen phrase.
        phrase: list[int] = []
        phrases: list[list[int]] = []
        for index, piece in enumerate(pieces):
            if piece.is_word:
                phrase.append(index)
            elif "/" in piece.text or "-" in piece.text:
                phrases.append(phrase)
                phrase = []
        phrases.append(phrase)
        if words:
            phrases.append([words[0], words[-1]])
        for members in phrases:
            for index in members[:1] + members[-1:]:
                if not pieces[index].keep_case:
                    pieces[index].text = _capitalize(pieces[index].text)

        # Phrasal verbs: two whole words separated only by whitespace.
        for position in range(len(words) - 1):
            first, second = words[position], words[position + 1]
            if second != first + 2 or not pieces[first + 1].text.isspace():
                continue
            if not (pieces[first].starts_word and pieces[second].starts_word):
                continue
            if second + 1 < len(pieces) and pieces[second + 1].is_word:
                continue
            pair = (pieces[first].text.lower(), pieces[second].text.lower())
            if pair in PHRASAL_VERBS:
                pieces[first].text = _capitalize(pieces[first].text)
                pieces[second].text = _capitalize(pieces[second].text)

        return "".join(piece.text for piece in pieces)


def normalize(text: str) -> str:
    """Module-level shortcut for :meth:`TextNormalizer.normalize`."""

    return TextNormalizer.normalize(text)


__all__ = ["MINOR_WORDS", "PHRASAL_VERBS", "TextNormalizer", "normalize"]
