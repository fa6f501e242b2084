"""URL slugs for catalog names."""

from __future__ import annotations

from slugify import slugify as _slugify

# Removed before transliteration so they do not turn into stray letters or hyphens.
STRIPPED_CHARACTERS = ("'", "’", "ь", "Ь", "(", ")")


def slugify(text: str) -> str:
    """Return a lower-case ASCII slug for ``text`` with words joined by hyphens.

    >>> slugify("Пальто (жіноче)")
    'palto-zhinoche'
    """

    cleaned = text
    for char in STRIPPED_CHARACTERS:
        cleaned = cleaned.replace(char, "")
    return _slugify(cleaned, separator="-", lowercase=True)
