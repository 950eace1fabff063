"""
Datenmodelle des Parsing-Kerns.

`IssueSuggestion` ist die atomare Einheit des Reviews: ein einzelnes,
vollständig empfangenes Issue aus dem LLM-Report. Die Modelle enthalten
ausschließlich textuelle Informationen; die Abbildung auf Positionen im
Dokument (LocatedSpan) und die Darstellung (AssignedDiagnostic) passieren
außerhalb, in der Assignment-Policy.

`IssueBlock` beschreibt einen Roh-Block zwischen zwei Record-Markern, so wie
ihn der Segmenter liefert.
"""

from dataclasses import dataclass
from typing import Literal

Severity = Literal["high", "moderate", "low"]

SEVERITIES: tuple[str, ...] = ("high", "moderate", "low")


@dataclass
class IssueSuggestion:
    comment: str
    target_excerpt: str
    category: str
    severity: Severity
    # In diesem Format identisch mit comment (PROBLEM-Feld)
    explanation: str
    # Leer = kein sicherer automatischer Ersatz
    rewrite: str = ""


@dataclass
class IssueBlock:
    ordinal: int  # nur informativ, nicht für die Korrektheit verwendet
    body: str
    start: int  # Offset des Markers (---) im Buffer
    end: int  # Offset direkt hinter dem Body
    terminated: bool  # True, wenn eine Delimiter-Zeile den Body abschließt
