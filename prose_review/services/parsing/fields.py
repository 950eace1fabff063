"""
Feld-Extraktion aus einem Issue-Block.

Ein Block hat die feste Form

    EXCERPT: "<wörtlicher Auszug>"
    CATEGORY: <token>
    SEVERITY: high|moderate|low
    PROBLEM: <Freitext, ggf. mehrzeilig>
    FIX: <Freitext oder Zitat, darf leer sein>

Feldnamen werden nur am Zeilenanfang erkannt (case-insensitive). Ein Feldname,
der mitten im Wert auftaucht ("... the FIX: is ..."), beendet den Wert also
nicht.

Zwei Zugänge:
- `extract_field` / `raw_field`: gezielter Zugriff auf ein einzelnes Feld bis
  zum nächsten Stop-Feld (wird vom Completeness-Detector genutzt).
- `scan_fields`: kleiner Zustandsautomat über alle Felder in fester
  Reihenfolge. Taucht ein Feld außerhalb dieser Reihenfolge auf, gilt der
  Block als fehlerhaft.
"""

import re

from prose_review.services.parsing.quotes import strip_quotes

FIELD_ORDER: tuple[str, ...] = ("EXCERPT", "CATEGORY", "SEVERITY", "PROBLEM", "FIX")

_HEADER_RE = re.compile(
    r"^[ \t]*(" + "|".join(FIELD_ORDER) + r")[ \t]*:[ \t]*(.*)$",
    re.IGNORECASE,
)


def _field_pattern(field_name: str, stop_at: str | None) -> re.Pattern[str]:
    field = re.escape(field_name.rstrip(":").strip())
    if stop_at:
        stop = re.escape(stop_at.rstrip(":").strip())
        end = rf"(?=^[ \t]*{stop}[ \t]*:|\Z)"
    else:
        end = r"\Z"
    return re.compile(
        rf"^[ \t]*{field}[ \t]*:[ \t]*(.*?)\s*{end}",
        re.IGNORECASE | re.MULTILINE | re.DOTALL,
    )


def raw_field(block: str, field_name: str, stop_at: str | None = None) -> str | None:
    """Wert eines Feldes, getrimmt, aber mit eventuellen Anführungszeichen."""
    match = _field_pattern(field_name, stop_at).search(block)
    if not match:
        return None
    return match.group(1).strip()


def extract_field(block: str, field_name: str, stop_at: str | None = None) -> str | None:
    """
    Extrahiert den Wert von `field_name` bis zum Feld `stop_at` (oder Blockende).

    Returns:
        getrimmter, quote-bereinigter Wert oder None, wenn das Feld fehlt
    """
    value = raw_field(block, field_name, stop_at)
    if value is None:
        return None
    return strip_quotes(value)


def has_field(block: str, field_name: str) -> bool:
    """True, wenn irgendeine Zeile mit `FIELD:` beginnt."""
    return _field_pattern(field_name, None).search(block) is not None


def scan_fields(block: str) -> dict[str, str] | None:
    """
    Liest alle Felder eines Blocks in fester Reihenfolge (FIELD_ORDER).

    Zustandsautomat:
    - vor dem ersten Header: Zeilen werden ignoriert
    - Header des nächsten erwarteten Feldes: Feld wird geöffnet
    - jeder andere Header (Wiederholung, Rücksprung, Überspringen): fehlerhaft
    - sonstige Zeilen: Fortsetzung des aktuellen Feldwerts

    Returns:
        dict FIELD -> quote-bereinigter Wert (nur vorhandene Felder)
        oder None bei Reihenfolge-Verletzung
    """
    values: dict[str, list[str]] = {}
    current: str | None = None
    next_index = 0

    for line in block.splitlines():
        header = _HEADER_RE.match(line)
        if header:
            name = header.group(1).upper()
            if next_index >= len(FIELD_ORDER) or name != FIELD_ORDER[next_index]:
                return None
            current = name
            next_index += 1
            values[current] = [header.group(2)]
            continue

        if current is not None:
            values[current].append(line)

    return {name: strip_quotes("\n".join(lines)) for name, lines in values.items()}
