"""
Assignment-Policy: aus einem fertigen IssueSuggestion wird ein Diagnostic.

Pro Issue (in Ankunftsreihenfolge):
1. Excerpt im Dokument lokalisieren (exakt -> fuzzy -> unlocated)
2. schneidet der Bereich einen bereits vergebenen Quick-Fix-Bereich, wird das
   Issue nur angezeigt (Hint), egal wie gut sein eigener Fix ist
3. sonst entscheidet `is_quick_fixable` über die Quick-Fix-Eignung
4. Quick-Fix-fähige Issues bekommen eine fortlaufende ID und ihr Bereich wird
   vergeben (first come, first served)

Unlocated Issues landen als (0, 0) am Dokumentanfang und sind nie Quick-Fix-fähig.

Der Zustand (vergebene Bereiche, Zähler, ID -> Suggestion) lebt in einem
expliziten `ReviewState` pro Review, nicht in globalen Maps.
"""

import logging
from typing import Iterable

from prose_review.models.pydantic import AssignedDiagnostic, LocatedSpan
from prose_review.services.matching.excerpt_matching import locate_excerpt
from prose_review.services.parsing.issue_models import IssueSuggestion

logger = logging.getLogger(__name__)

HINT_ONLY_CATEGORIES: tuple[str, ...] = ("consistency", "structure", "word_choice")
QUICK_FIX_MAX_LENGTH = 100

DISPLAY_SEVERITY = {
    "high": "error",
    "moderate": "warning",
    "low": "information",
}


def is_quick_fixable(
    suggestion: IssueSuggestion,
    hint_only_categories: Iterable[str] = HINT_ONLY_CATEGORIES,
    max_rewrite_length: int = QUICK_FIX_MAX_LENGTH,
) -> bool:
    """
    Kann der Vorschlag ohne menschliche Entscheidung direkt angewendet werden?
    """
    rewrite = suggestion.rewrite or ""

    # leer -> nichts zu ersetzen
    if not rewrite.strip():
        return False

    # mehrere Alternativen ("x or y")
    if " or " in rewrite:
        return False

    # sehr lang -> eher struktureller Umbau
    if len(rewrite) > max_rewrite_length:
        return False

    if suggestion.category.lower() in {c.lower() for c in hint_only_categories}:
        return False

    return True


def ranges_overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """Halboffene Intervalle [start, end); bloßes Aneinanderstoßen zählt nicht."""
    return a[0] < b[1] and b[0] < a[1]


class ReviewState:
    """
    Zustand einer einzelnen Review: vergebene Quick-Fix-Bereiche, Zähler und
    die Zuordnung Diagnostic-ID -> ursprüngliches IssueSuggestion.
    """

    def __init__(
        self,
        hint_only_categories: Iterable[str] = HINT_ONLY_CATEGORIES,
        max_rewrite_length: int = QUICK_FIX_MAX_LENGTH,
    ):
        self.hint_only_categories = tuple(hint_only_categories)
        self.max_rewrite_length = max_rewrite_length

        self.committed_ranges: list[tuple[int, int]] = []
        self.diagnostics: list[AssignedDiagnostic] = []
        self.suggestions_by_id: dict[str, IssueSuggestion] = {}
        self._counter = 0

    def reset(self) -> None:
        self.committed_ranges.clear()
        self.diagnostics.clear()
        self.suggestions_by_id.clear()
        self._counter = 0

    def assign(self, suggestion: IssueSuggestion, document_text: str) -> AssignedDiagnostic:
        span = locate_excerpt(document_text, suggestion.target_excerpt)

        overlaps = False
        quick_fix = False
        if span.located:
            candidate = (span.start_char, span.end_char)
            overlaps = any(ranges_overlap(candidate, used) for used in self.committed_ranges)
            if not overlaps:
                quick_fix = is_quick_fixable(
                    suggestion, self.hint_only_categories, self.max_rewrite_length
                )

        diagnostic_id = None
        if quick_fix:
            self.committed_ranges.append((span.start_char, span.end_char))
            self._counter += 1
            diagnostic_id = str(self._counter)
            self.suggestions_by_id[diagnostic_id] = suggestion

        diagnostic = AssignedDiagnostic(
            diagnostic_id=diagnostic_id,
            span=span,
            display_severity=DISPLAY_SEVERITY[suggestion.severity] if quick_fix else "hint",
            quick_fix=quick_fix,
            overlaps_committed=overlaps,
            message=suggestion.comment,
            category=suggestion.category,
            severity=suggestion.severity,
            target_excerpt=suggestion.target_excerpt,
            rewrite=suggestion.rewrite,
        )
        self.diagnostics.append(diagnostic)

        logger.debug(
            "Assigned %s diagnostic id=%s span=%s(%d-%d) overlap=%s",
            diagnostic.display_severity,
            diagnostic_id,
            span.kind,
            span.start_char,
            span.end_char,
            overlaps,
        )
        return diagnostic

    # ---------- Aktionen auf vergebenen Diagnostics ---------- #

    def get(self, diagnostic_id: str) -> IssueSuggestion:
        try:
            return self.suggestions_by_id[diagnostic_id]
        except KeyError:
            raise KeyError(f"Unknown diagnostic id: {diagnostic_id}") from None

    def dismiss(self, diagnostic_id: str) -> IssueSuggestion:
        """Entfernt ein Diagnostic; der vergebene Bereich bleibt reserviert."""
        suggestion = self.get(diagnostic_id)
        del self.suggestions_by_id[diagnostic_id]
        self.diagnostics = [d for d in self.diagnostics if d.diagnostic_id != diagnostic_id]
        return suggestion

    def apply_fix(self, document_text: str, diagnostic_id: str) -> str:
        """
        Ersetzt den Bereich des Diagnostics durch dessen Rewrite.

        Nachfolgende Bereiche werden um die Längendifferenz verschoben.
        Returns:
            neuer Dokumenttext
        """
        diagnostic = next(
            (d for d in self.diagnostics if d.diagnostic_id == diagnostic_id), None
        )
        if diagnostic is None or not diagnostic.quick_fix:
            raise KeyError(f"Unknown diagnostic id: {diagnostic_id}")

        start, end = diagnostic.span.start_char, diagnostic.span.end_char
        rewrite = diagnostic.rewrite
        new_text = document_text[:start] + rewrite + document_text[end:]
        delta = len(rewrite) - (end - start)

        self.dismiss(diagnostic_id)
        self.committed_ranges = [
            (start, start + len(rewrite)) if used == (start, end) else used
            for used in self.committed_ranges
        ]
        if delta:
            self._shift_after(end, delta)
        return new_text

    def _shift_after(self, position: int, delta: int) -> None:
        self.committed_ranges = [
            (s + delta, e + delta) if s >= position else (s, e)
            for s, e in self.committed_ranges
        ]
        for d in self.diagnostics:
            if d.span.located and d.span.start_char >= position:
                d.span = LocatedSpan(
                    kind=d.span.kind,
                    start_char=d.span.start_char + delta,
                    end_char=d.span.end_char + delta,
                )
