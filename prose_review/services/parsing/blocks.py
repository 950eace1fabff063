"""
Block-Segmentierung und Vollständigkeitsprüfung für den Review-Stream.

Ein Record beginnt mit einem Marker aus zwei Zeilen:

    ---
    ISSUE <n>

Der Body läuft bis zur nächsten Delimiter-Zeile (`---`) oder bis zum Ende des
Buffers. Der Segmenter ist rein und zustandslos: auf einem längeren Buffer,
der den alten als Präfix enthält, liefert er alle bisherigen Blöcke
unverändert plus eventuell neue.
"""

import re

from prose_review.services.parsing.fields import FIELD_ORDER, has_field, raw_field
from prose_review.services.parsing.issue_models import IssueBlock
from prose_review.services.parsing.quotes import closes_quote, opening_quote

# Marker zählt erst, wenn die ISSUE-Zeile vollständig (mit Zeilenumbruch) da ist
MARKER_RE = re.compile(
    r"^---[ \t]*\r?\n[ \t]*ISSUE[ \t]+(\d+)[ \t]*\r?\n",
    re.IGNORECASE | re.MULTILINE,
)
DELIMITER_RE = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)


def segment_blocks(buffer: str) -> list[IssueBlock]:
    """Zerlegt den Buffer in (ordinal, body)-Blöcke in Buffer-Reihenfolge."""
    blocks: list[IssueBlock] = []

    for marker in MARKER_RE.finditer(buffer):
        body_start = marker.end()
        delimiter = DELIMITER_RE.search(buffer, body_start)
        end = delimiter.start() if delimiter else len(buffer)

        blocks.append(
            IssueBlock(
                ordinal=int(marker.group(1)),
                body=buffer[body_start:end],
                start=marker.start(),
                end=end,
                terminated=delimiter is not None,
            )
        )

    return blocks


def is_block_complete(block: str) -> bool:
    """
    Prüft, ob ein Block vollständig empfangen wurde.

    Bedingungen:
    - alle fünf Pflichtfelder sind vorhanden
    - beginnt FIX mit einem Anführungszeichen, muss es auch mit dem passenden
      Gegenstück enden (sonst ist das Zitat noch unterwegs)
    - FIX ohne Anführungszeichen gilt als vollständig, ein leeres FIX ebenso
    """
    if not all(has_field(block, name) for name in FIELD_ORDER):
        return False

    fix_value = raw_field(block, "FIX")
    if fix_value is None:
        return False

    opener = opening_quote(fix_value)
    if opener is not None:
        return closes_quote(fix_value, opener)

    return True
