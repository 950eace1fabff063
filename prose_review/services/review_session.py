"""
ReviewSession: orchestriert eine einzelne Review über einen Fragment-Stream.

- hält den Stream-Buffer (einzige Zustandsgröße des Parsers)
- ruft nach jedem Fragment den inkrementellen Parser auf
- weist neue Issues in Ankunftsreihenfolge über den ReviewState zu
- prüft zwischen zwei Fragmenten das Abbruch-Prädikat

Bei Abbruch (Benutzer oder geänderte Quelle) wird nichts mehr angefordert,
nichts mehr zugewiesen und der Rest-Buffer verworfen. Teilweise empfangene
Issues werden nicht gerettet.

Fehler der Fragment-Quelle werden nicht behandelt (kein Retry), sondern
nach oben durchgereicht.
"""

from dataclasses import dataclass, field
import logging
import time
from typing import AsyncIterator, Callable

from prose_review.models.pydantic import AssignedDiagnostic, ReviewStatus
from prose_review.services.diagnostics.assignment import ReviewState
from prose_review.services.diagnostics.dictionary import (
    UserDictionary,
    extract_misspelled_word,
    is_spelling_error,
)
from prose_review.services.parsing.issue_models import IssueSuggestion
from prose_review.services.parsing.stream_parser import (
    extract_summary,
    finalize_buffer,
    parse_partial_buffer,
)

logger = logging.getLogger(__name__)


@dataclass
class ReviewOutcome:
    status: ReviewStatus
    summary: str
    diagnostics: list[AssignedDiagnostic] = field(default_factory=list)
    full_response: str = ""
    fragment_count: int = 0


class ReviewSession:
    def __init__(
        self,
        document_text: str,
        state: ReviewState | None = None,
        dictionary: UserDictionary | None = None,
    ):
        # Snapshot des Dokuments, unveränderlich für die Dauer der Review
        self.document_text = document_text
        self.state = state or ReviewState()
        self.dictionary = dictionary if dictionary is not None else UserDictionary()

        self.buffer = ""
        self.fragment_count = 0
        self.aborted = False
        self.finished = False
        self._parts: list[str] = []
        self._parse_seconds = 0.0

    @property
    def full_response(self) -> str:
        return "".join(self._parts)

    def feed(self, fragment: str) -> list[AssignedDiagnostic]:
        """Hängt ein Fragment an und weist alle dadurch fertigen Issues zu."""
        if self.aborted or self.finished:
            raise RuntimeError("Review session is no longer accepting fragments")

        self.fragment_count += 1
        self._parts.append(fragment)
        self.buffer += fragment

        started = time.perf_counter()
        parsed, self.buffer = parse_partial_buffer(self.buffer)
        self._parse_seconds += time.perf_counter() - started

        return self._assign_all(parsed)

    def finish(self) -> list[AssignedDiagnostic]:
        """Stream-Ende: letzter Parse mit Terminator, danach ist der Buffer leer."""
        if self.aborted:
            raise RuntimeError("Review session was aborted")

        parsed = finalize_buffer(self.buffer)
        self.buffer = ""
        self.finished = True
        return self._assign_all(parsed)

    def abort(self) -> None:
        self.aborted = True
        self.buffer = ""

    def add_to_dictionary(self, diagnostic_id: str) -> str:
        """
        Nimmt das falsch geschriebene Wort eines Spelling-Diagnostics ins
        Wörterbuch auf und entfernt das Diagnostic.

        Spätere Issues zum selben Wort werden danach nicht mehr zugewiesen.

        Raises:
            KeyError: unbekannte Diagnostic-ID
            ValueError: kein Spelling-Issue oder Wort nicht erkennbar
        """
        suggestion = self.state.get(diagnostic_id)
        if not is_spelling_error(suggestion):
            raise ValueError(f"Diagnostic {diagnostic_id} is not a spelling error")

        word = extract_misspelled_word(suggestion.comment)
        if word is None:
            raise ValueError(f"No misspelled word found in diagnostic {diagnostic_id}")

        self.dictionary.add(word)
        self.state.dismiss(diagnostic_id)
        logger.info("Added %r to dictionary", word)
        return word

    def outcome(self) -> ReviewOutcome:
        if self.aborted:
            status, summary = "aborted", "Review did not complete."
        else:
            status, summary = "completed", extract_summary(self.full_response)

        return ReviewOutcome(
            status=status,
            summary=summary,
            diagnostics=list(self.state.diagnostics),
            full_response=self.full_response,
            fragment_count=self.fragment_count,
        )

    async def run(
        self,
        fragments: AsyncIterator[str],
        should_abort: Callable[[], bool] = lambda: False,
    ) -> ReviewOutcome:
        started = time.perf_counter()

        try:
            async for fragment in fragments:
                if should_abort():
                    self.abort()
                    break
                self.feed(fragment)
        except BaseException:
            # Quelle fehlgeschlagen oder Task abgebrochen: Rest verwerfen
            self.abort()
            await self._close_source(fragments)
            raise

        if not self.aborted and should_abort():
            self.abort()

        if self.aborted:
            await self._close_source(fragments)
            logger.warning(
                "Review aborted after %d fragments (%d diagnostics kept)",
                self.fragment_count,
                len(self.state.diagnostics),
            )
            return self.outcome()

        self.finish()

        logger.debug(
            "Stream done: %d fragments, %.1fms total, %.1fms parsing",
            self.fragment_count,
            (time.perf_counter() - started) * 1000,
            self._parse_seconds * 1000,
        )
        logger.info(
            "Review complete: %d diagnostics (%d quick fixes)",
            len(self.state.diagnostics),
            len(self.state.suggestions_by_id),
        )
        return self.outcome()

    # ---------- intern ---------- #

    @staticmethod
    async def _close_source(fragments: AsyncIterator[str]) -> None:
        aclose = getattr(fragments, "aclose", None)
        if aclose is not None:
            await aclose()

    def _assign_all(self, parsed: list[IssueSuggestion]) -> list[AssignedDiagnostic]:
        assigned: list[AssignedDiagnostic] = []
        for suggestion in parsed:
            if self.dictionary.suppresses(suggestion):
                logger.debug("Skipping spelling issue for dictionary word: %r", suggestion.comment)
                continue
            assigned.append(self.state.assign(suggestion, self.document_text))
        return assigned
