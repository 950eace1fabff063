"""
Tests für die ReviewSession (Fragment-Stream -> Diagnostics).

Die Fragment-Quelle wird durch einen async Generator simuliert, der einen
aufgezeichneten Report in festen Stücken liefert (kein echter LLM-Call).
"""

import asyncio

import pytest

from prose_review.services.diagnostics.dictionary import UserDictionary
from prose_review.services.review_session import ReviewSession


class FragmentSource:
    """Async Fragment-Quelle mit optionalem Fehler nach N Fragmenten."""

    def __init__(self, text: str, size: int = 3, fail_after: int | None = None):
        self.text = text
        self.size = size
        self.fail_after = fail_after
        self.delivered = 0
        self.closed = False

    async def _gen(self):
        try:
            for i in range(0, len(self.text), self.size):
                if self.fail_after is not None and self.delivered >= self.fail_after:
                    raise ConnectionError("Network error")
                self.delivered += 1
                yield self.text[i : i + self.size]
        finally:
            self.closed = True

    def __aiter__(self):
        self._it = self._gen()
        return self

    async def __anext__(self):
        return await self._it.__anext__()

    async def aclose(self):
        await self._it.aclose()


def test_end_to_end_three_char_fragments():
    report = """---
ISSUE 1
EXCERPT: "The cat sat on mat"
CATEGORY: grammar
SEVERITY: high
PROBLEM: Missing article
FIX: The cat sat on the mat"""
    session = ReviewSession("The cat sat on mat.")

    outcome = asyncio.run(session.run(FragmentSource(report, size=3)))

    assert outcome.status == "completed"
    assert len(outcome.diagnostics) == 1
    diag = outcome.diagnostics[0]
    assert diag.target_excerpt == "The cat sat on mat"
    assert diag.rewrite == "The cat sat on the mat"
    assert diag.severity == "high"
    assert (diag.span.kind, diag.span.start_char, diag.span.end_char) == ("exact", 0, 18)
    assert diag.quick_fix is True
    assert session.buffer == ""


def test_full_report_against_document(load_response, load_document):
    session = ReviewSession(load_document("real-session.txt"))

    outcome = asyncio.run(session.run(FragmentSource(load_response("real-session.txt"), size=5)))

    assert outcome.status == "completed"
    assert outcome.summary.startswith("Strong, vivid opening.")
    assert [d.category for d in outcome.diagnostics] == ["grammar", "grammar", "word_choice"]
    # word_choice ist nie Quick-Fix-fähig
    assert [d.quick_fix for d in outcome.diagnostics] == [True, True, False]
    assert [d.diagnostic_id for d in outcome.diagnostics] == ["1", "2", None]
    assert outcome.full_response == load_response("real-session.txt")


def test_abort_stops_reading_and_discards_buffer(load_response):
    report = load_response("complete-valid.txt")
    source = FragmentSource(report, size=4)
    session = ReviewSession("The cat sat on mat. She runned quickly.")

    outcome = asyncio.run(session.run(source, should_abort=lambda: source.delivered >= 60))

    assert outcome.status == "aborted"
    assert outcome.summary == "Review did not complete."
    assert source.delivered == 60
    assert source.closed is True
    assert session.buffer == ""
    # nur was vor dem Abbruch fertig war
    assert len(outcome.diagnostics) < 3
    with pytest.raises(RuntimeError):
        session.feed("more")


def test_abort_after_last_fragment_skips_finalization(load_response):
    session = ReviewSession("The cat sat on mat. She runned quickly.")
    source = FragmentSource(load_response("complete-valid.txt"), size=1000)
    calls = {"n": 0}

    def should_abort():
        calls["n"] += 1
        return calls["n"] > 1

    outcome = asyncio.run(session.run(source, should_abort))

    assert outcome.status == "aborted"
    # ISSUE 3 hätte erst der Terminator-Parse geliefert
    assert len(outcome.diagnostics) == 2


def test_source_error_propagates_and_discards_buffer(load_response):
    session = ReviewSession("doc")
    source = FragmentSource(load_response("complete-valid.txt"), size=10, fail_after=3)

    with pytest.raises(ConnectionError):
        asyncio.run(session.run(source))

    assert session.aborted is True
    assert session.buffer == ""


def test_dictionary_words_are_skipped(load_response, load_document):
    session = ReviewSession(
        load_document("simple-test.txt"),
        dictionary=UserDictionary(["fabic"]),
    )

    outcome = asyncio.run(session.run(FragmentSource(load_response("complete-valid.txt"), size=8)))

    assert [d.target_excerpt for d in outcome.diagnostics] == [
        "The cat sat on mat",
        "She runned quickly",
    ]


def test_feed_and_finish_primitives(load_response):
    session = ReviewSession("The cat sat on mat.")
    report = load_response("complete-valid.txt")

    first = session.feed(report)
    rest = session.finish()

    assert len(first) == 2
    assert len(rest) == 1
    # ISSUE 2/3 stehen nicht im Dokument
    assert [d.span.kind for d in first + rest] == ["exact", "unlocated", "unlocated"]
    with pytest.raises(RuntimeError):
        session.feed("x")


def test_cancellation_closes_source(load_response):
    session = ReviewSession("The cat sat on mat.")
    source = FragmentSource(load_response("complete-valid.txt"), size=10)

    def cancel_after_five():
        if source.delivered > 5:
            raise asyncio.CancelledError()
        return False

    async def scenario():
        with pytest.raises(asyncio.CancelledError):
            await session.run(source, cancel_after_five)
        # noch innerhalb der Loop prüfen, bevor asyncio.run Generatoren aufräumt
        return source.closed

    assert asyncio.run(scenario()) is True
    assert session.aborted is True
    assert session.buffer == ""


def test_caller_dictionary_is_used_even_when_empty():
    dictionary = UserDictionary()
    session = ReviewSession("doc", dictionary=dictionary)

    assert session.dictionary is dictionary


SPELLING_FIRST = """---
ISSUE 1
EXCERPT: "the sodden fabic away"
CATEGORY: spelling
SEVERITY: low
PROBLEM: Spelling error - "fabic" should be "fabric"
FIX: the sodden fabric away
---
ISSUE 2
"""

SPELLING_AGAIN = """EXCERPT: "more fabic here"
CATEGORY: spelling
SEVERITY: low
PROBLEM: Spelling error - "fabic" should be "fabric"
FIX: more fabric here
---
ISSUE 3
EXCERPT: "The cat sat on mat"
CATEGORY: grammar
SEVERITY: high
PROBLEM: Missing article
FIX: The cat sat on the mat"""


class TestAddToDictionary:
    DOC = "The cat sat on mat, peeling the sodden fabic away. There is more fabic here."

    def test_adds_word_dismisses_and_suppresses_later_issues(self):
        dictionary = UserDictionary()
        session = ReviewSession(self.DOC, dictionary=dictionary)

        first = session.feed(SPELLING_FIRST)
        assert [d.diagnostic_id for d in first] == ["1"]

        assert session.add_to_dictionary("1") == "fabic"
        assert "fabic" in dictionary
        assert session.state.diagnostics == []

        rest = session.feed(SPELLING_AGAIN) + session.finish()
        assert [d.target_excerpt for d in rest] == ["The cat sat on mat"]

    def test_rejects_non_spelling_diagnostic(self):
        session = ReviewSession(self.DOC)
        session.feed("---\n" + SPELLING_AGAIN.split("---\n", 1)[1])
        session.finish()

        with pytest.raises(ValueError):
            session.add_to_dictionary("1")
        assert len(session.dictionary) == 0
        assert len(session.state.diagnostics) == 1

    def test_unknown_id(self):
        with pytest.raises(KeyError):
            ReviewSession(self.DOC).add_to_dictionary("7")
