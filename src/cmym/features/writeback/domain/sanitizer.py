"""File and folder name sanitization for the rename phase."""

import re
import unicodedata
from typing import ClassVar, final

from cmym.platform.logging import logger


@final
class Sanitizer:
    """Turn tag values into safe path components."""

    # Characters no common filesystem accepts in a name
    FORBIDDEN: ClassVar[re.Pattern[str]] = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

    # Runs of hyphens left behind by replacements
    MULTIPLE_HYPHENS: ClassVar[re.Pattern[str]] = re.compile(r"-{2,}")

    WHITESPACE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    # Maximum lengths (in bytes)
    MAX_COMPONENT_LENGTH: ClassVar[int] = 120

    @classmethod
    def _clean_string(cls, text: str) -> str:
        """Clean a string for use as one path component.

        Returns:
            str: Text with:
                - Normalized Unicode characters (NFKC)
                - Forbidden characters replaced with hyphens
                - Runs of hyphens and whitespace compressed
                - No leading dots, spaces or hyphens, no trailing dots or spaces
        """
        text = unicodedata.normalize("NFKC", text)
        text = cls.FORBIDDEN.sub("-", text)
        text = cls.MULTIPLE_HYPHENS.sub("-", text)
        text = cls.WHITESPACE.sub(" ", text)
        return text.lstrip(". -").rstrip(". ")

    @classmethod
    def sanitize_component(
        cls,
        text: str | int | None,
        fallback: str = "",
        max_length: int | None = None,
    ) -> str:
        """Sanitize one folder or file name.

        Args:
            text: Value to sanitize; numbers are converted to text.
            fallback: Returned when nothing usable remains.
            max_length: Byte limit, defaults to ``MAX_COMPONENT_LENGTH``.

        Returns:
            str: Safe component, truncated on a character boundary.
        """
        if text is None or text == "":
            return fallback

        cleaned = cls._clean_string(str(text))
        if not cleaned:
            logger.debug("Nothing left of %r after sanitizing, using %r", text, fallback)
            return fallback

        limit = max_length or cls.MAX_COMPONENT_LENGTH
        while len(cleaned.encode("utf-8")) > limit:
            cleaned = cleaned[:-1]
        return cleaned.rstrip(". -") or fallback


__all__ = ["Sanitizer"]
