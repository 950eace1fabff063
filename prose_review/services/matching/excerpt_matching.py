"""
Lokalisierung von Excerpts im Referenzdokument.

Das LLM zitiert Textstellen "wörtlich", verschiebt dabei aber gelegentlich
Grenzen oder verschluckt/ergänzt einzelne Wörter. Deshalb zweistufig:

1. exakte Substring-Suche
2. Fallback (nur für Excerpts ab MIN_PARTIAL_LENGTH Zeichen): Präfix und
   Suffix des Excerpts werden getrennt gesucht. Zu jedem Präfix-Treffer wird
   das Suffix in einem Fenster von ±SEARCH_WINDOW Zeichen um die erwartete
   Position gesucht. Der erste passende Treffer gewinnt ("first viable",
   kein Best-Match).

Kein Edit-Distance-Aligner: gedacht für Drift um ein paar Wörter, nicht für
umformulierte Stellen.
"""

import logging

from prose_review.models.pydantic import LocatedSpan

logger = logging.getLogger(__name__)

MIN_PARTIAL_LENGTH = 20
MAX_ANCHOR_LENGTH = 50
ANCHOR_RATIO = 0.25
SEARCH_WINDOW = 50


def find_excerpt_exact(text: str, excerpt: str) -> tuple[int, int] | None:
    """Exakte Suche. Returns (index, length) oder None."""
    if not excerpt:
        return None
    index = text.find(excerpt)
    if index == -1:
        return None
    return index, len(excerpt)


def find_excerpt_partial_match(text: str, excerpt: str) -> tuple[int, int] | None:
    """
    Präfix/Suffix-Matching für Excerpts, die nicht exakt im Text stehen.

    Returns:
        (index, length) des gefundenen Bereichs im Text oder None.
        length entspricht in der Regel NICHT len(excerpt).
    """
    if len(excerpt) < MIN_PARTIAL_LENGTH:
        return None

    anchor = min(MAX_ANCHOR_LENGTH, int(len(excerpt) * ANCHOR_RATIO))
    prefix = excerpt[:anchor]
    suffix = excerpt[-anchor:]

    search_start = 0
    while True:
        prefix_index = text.find(prefix, search_start)
        if prefix_index == -1:
            return None

        expected_suffix_start = prefix_index + len(excerpt) - anchor
        for offset in range(-SEARCH_WINDOW, SEARCH_WINDOW + 1):
            suffix_index = expected_suffix_start + offset
            # Suffix darf nicht vor dem Präfix beginnen
            if suffix_index < prefix_index:
                continue
            if text[suffix_index : suffix_index + anchor] == suffix:
                return prefix_index, suffix_index + anchor - prefix_index

        # nächstes (auch überlappendes) Vorkommen des Präfix
        search_start = prefix_index + 1


def locate_excerpt(text: str, excerpt: str) -> LocatedSpan:
    """Exakt, sonst fuzzy, sonst unlocated (0, 0)."""
    exact = find_excerpt_exact(text, excerpt)
    if exact is not None:
        index, length = exact
        return LocatedSpan(kind="exact", start_char=index, end_char=index + length)

    partial = find_excerpt_partial_match(text, excerpt)
    if partial is not None:
        index, length = partial
        logger.debug(
            "Excerpt located by partial match at %d (+%d): %r", index, length, excerpt[:60]
        )
        return LocatedSpan(kind="fuzzy", start_char=index, end_char=index + length)

    logger.debug("Excerpt not found: %r", excerpt[:60])
    return LocatedSpan(kind="unlocated", start_char=0, end_char=0)
