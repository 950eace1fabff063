"""
Quote-Normalisierung für Feldwerte aus dem Review-Report.

Das LLM setzt EXCERPT- und FIX-Werte häufig in Anführungszeichen, mal gerade
("..."), mal typografisch („...“, “...”, ‘...’). Für das Mapping auf den
Dokumenttext und für den Quick-Fix brauchen wir den Inhalt ohne diese
äußere Klammer.

Es wird immer genau EINE Schicht entfernt, und nur wenn der gesamte Wert von
einem passenden Paar umschlossen ist. Anführungszeichen im Inneren bleiben
unangetastet.
"""

# Öffnendes Zeichen -> erlaubte schließende Zeichen
QUOTE_PAIRS: dict[str, tuple[str, ...]] = {
    '"': ('"',),
    "'": ("'",),
    "“": ("”", "“"),  # “ … ” (oder “ … “)
    "”": ("”",),  # ” … ”
    "„": ("“", "”"),  # „ … “
    "‘": ("’", "‘"),  # ‘ … ’
    "’": ("’",),  # ’ … ’
    "‚": ("‘", "’"),  # ‚ … ‘
}

QUOTE_CHARS = tuple(QUOTE_PAIRS)


def opening_quote(text: str) -> str | None:
    """Liefert das öffnende Anführungszeichen, mit dem `text` beginnt (oder None)."""
    if text and text[0] in QUOTE_PAIRS:
        return text[0]
    return None


def closes_quote(text: str, opener: str) -> bool:
    """
    True, wenn `text` mit einem zu `opener` passenden Zeichen endet.

    Ein einzelnes Zeichen zählt nie als geschlossen (Öffner == Schließer).
    """
    if len(text) <= 1:
        return False
    return text[-1] in QUOTE_PAIRS.get(opener, ())


def strip_quotes(text: str) -> str:
    """
    Entfernt genau eine äußere Schicht passender Anführungszeichen.

    Beispiele:
        '"The cat"'     -> 'The cat'
        '""a""'         -> '"a"'
        'a "quoted" b'  -> 'a "quoted" b'
    """
    text = text.strip()

    opener = opening_quote(text)
    if opener is not None and closes_quote(text, opener):
        return text[1:-1].strip()

    return text
