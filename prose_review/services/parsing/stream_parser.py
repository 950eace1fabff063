"""
Inkrementeller Parser für den gestreamten Review-Report.

Das LLM liefert den Report fragmentweise, in beliebig großen Stücken. Eine
Fragmentgrenze kann überall liegen: mitten in einem Feld, mitten in einem
Zitat oder mitten im Marker. Der Parser wird nach jedem Fragment mit dem
aktuellen Buffer aufgerufen und liefert

- die neu abgeschlossenen Issues
- den Rest-Buffer ab dem ersten nicht konsumierten Block

Regeln:
- jeder Block außer dem letzten ist abgeschlossen (ein Marker folgt) und wird
  geparst und konsumiert
- der letzte Block wird nur geparst, wenn er durch eine Delimiter-Zeile
  abgeschlossen ist UND der Completeness-Detector zustimmt
- fehlerhafte Blöcke (fehlendes Pflichtfeld, unbekannte Severity, falsche
  Feldreihenfolge) werden still verworfen, blockieren aber nichts

Am Stream-Ende hängt der Aufrufer einmal STREAM_TERMINATOR an, damit auch ein
letzter Block ohne nachfolgenden Marker geprüft wird (siehe `finalize_buffer`).
"""

import logging
import re

from prose_review.services.parsing.blocks import is_block_complete, segment_blocks
from prose_review.services.parsing.fields import scan_fields
from prose_review.services.parsing.issue_models import SEVERITIES, IssueSuggestion

logger = logging.getLogger(__name__)

STREAM_TERMINATOR = "\n---"

_FIRST_ISSUE_RE = re.compile(r"^---[ \t]*\r?\n[ \t]*ISSUE[ \t]+\d+", re.IGNORECASE | re.MULTILINE)


def parse_issue_block(block: str) -> IssueSuggestion | None:
    """Baut aus einem vollständigen Block-Body ein IssueSuggestion (oder None)."""
    fields = scan_fields(block)
    if fields is None:
        logger.debug("Dropping block: fields out of order: %r", block[:80])
        return None

    excerpt = fields.get("EXCERPT")
    category = fields.get("CATEGORY")
    severity_raw = fields.get("SEVERITY")
    problem = fields.get("PROBLEM")

    if not excerpt or not category or not severity_raw or not problem:
        logger.debug("Dropping block: missing required fields: %r", block[:80])
        return None

    severity = severity_raw.lower()
    if severity not in SEVERITIES:
        logger.debug("Dropping block: invalid severity %r", severity_raw)
        return None

    return IssueSuggestion(
        comment=problem,
        target_excerpt=excerpt,
        category=category,
        severity=severity,
        explanation=problem,
        rewrite=fields.get("FIX", ""),
    )


def parse_partial_buffer(buffer: str) -> tuple[list[IssueSuggestion], str]:
    """
    Parst alle fertigen Blöcke im Buffer.

    Returns:
        (parsed, remainder): neue Issues in Buffer-Reihenfolge und der Buffer
        ab dem ersten nicht konsumierten Block
    """
    blocks = segment_blocks(buffer)
    parsed: list[IssueSuggestion] = []
    consumed_until: int | None = None

    for i, block in enumerate(blocks):
        is_last = i == len(blocks) - 1
        if is_last and not (block.terminated and is_block_complete(block.body)):
            break

        suggestion = parse_issue_block(block.body)
        if suggestion is not None:
            parsed.append(suggestion)
        consumed_until = block.end

    if consumed_until is not None:
        return parsed, buffer[consumed_until:]
    if blocks:
        # Präambel vor dem ersten Marker wird nicht mehr gebraucht
        return parsed, buffer[blocks[0].start :]
    return parsed, buffer


def finalize_buffer(buffer: str) -> list[IssueSuggestion]:
    """Letzter Aufruf am Stream-Ende; der verbleibende Rest wird verworfen."""
    if not buffer.strip():
        return []
    parsed, _ = parse_partial_buffer(buffer + STREAM_TERMINATOR)
    return parsed


def parse_complete_issue_blocks(text: str) -> list[IssueSuggestion]:
    """Nicht-gestreamte Variante: parst einen vollständig vorliegenden Report."""
    return finalize_buffer(text)


def extract_summary(text: str) -> str:
    """Freitext vor dem ersten Issue (die Zusammenfassung des LLM)."""
    first_issue = _FIRST_ISSUE_RE.search(text)
    if not first_issue:
        return text.strip()

    summary = text[: first_issue.start()].strip()
    return summary or "Review complete."
