"""Final clean-up of flattened article text."""

from __future__ import annotations

import re

MAX_TEXT_LENGTH = 10_000


def strip_title_echo(title: str, text: str) -> str:
    """Remove one leading, case-insensitive copy of *title* from *text*.

    The title is matched literally, so titles such as ``"C++ (part 2)?"``
    behave like any other string.  Whitespace following the echo goes too.
    """
    if not title:
        return text
    pattern = re.compile(re.escape(title) + r"\s*", re.IGNORECASE)
    match = pattern.match(text)
    return text[match.end():] if match else text


def normalize_text(title: str, text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Strip the title echo, trim, and hard-cap *text* at *max_length* characters.

    The cap ignores word boundaries; a cut may land mid-word.
    """
    return strip_title_echo(title, text).strip()[:max_length]
