"""Section locator shared by the skills, education and experience extractors."""

import logging
import re
from collections.abc import Sequence
from functools import lru_cache

logger = logging.getLogger(__name__)

SECTION_WINDOW = 1500

# A blank line followed by a capitalized header ending in a colon, e.g. "\n\nWork History:"
NEXT_SECTION_RE = re.compile(r"\n\s*\n[A-Z][A-Za-z \t]*:")


@lru_cache(maxsize=64)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def next_section_start(text: str, offset: int) -> int | None:
    """Return the index of the next section header at or after *offset*, or None."""
    match = NEXT_SECTION_RE.search(text, offset)
    return match.start() if match else None


def find_section(
    text: str,
    keywords: Sequence[str],
    window: int = SECTION_WINDOW,
) -> str | None:
    """Locate the first section introduced by one of *keywords*.

    Keywords are tried in the order given; the first one that occurs as a
    whole word (case-insensitive) anywhere in the text wins, even if a later
    keyword occurs earlier in the document.

    The section runs from the keyword occurrence up to the next header (a
    blank line followed by ``Capitalized Words:``) or, when there is none,
    *window* characters past the occurrence.

    Returns:
        The section text, or None when no keyword occurs.
    """
    for keyword in keywords:
        match = _keyword_pattern(keyword).search(text)
        if match is None:
            continue

        start = match.start()
        end = next_section_start(text, match.end())
        if end is None:
            end = start + window

        logger.debug(
            "Section keyword '%s' found at %d (span %d chars)",
            keyword,
            start,
            min(end, len(text)) - start,
        )
        return text[start:end]

    return None
