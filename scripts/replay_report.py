"""
Spielt einen aufgezeichneten LLM-Report gegen ein Dokument ein.

Der Report wird in festen Stücken durch eine ReviewSession geschickt, genau
wie ein echter Stream. Kein LLM-Call, kein Server nötig.

Zeigt:
- Summary und Status
- alle Diagnostics mit Span, Anzeige-Severity und Quick-Fix-ID
- optional das Dokument nach Anwendung eines Quick Fixes (--apply)

Beispiel:
    python scripts/replay_report.py tests/fixtures/responses/real-session.txt \
        tests/fixtures/documents/real-session.txt --chunk-size 3
"""

import argparse
import asyncio
import json
from pathlib import Path
import sys

from prose_review.core.config import configure_logging
from prose_review.services.diagnostics.dictionary import UserDictionary
from prose_review.services.review_service import replay_fragments
from prose_review.services.review_session import ReviewSession


def print_table(outcome) -> None:
    print(f"Status:  {outcome.status}")
    print(f"Summary: {outcome.summary}")
    print(f"Fragments: {outcome.fragment_count}")
    print("=" * 70)

    if not outcome.diagnostics:
        print("Keine Diagnostics.")
        return

    for d in outcome.diagnostics:
        span = d.span
        ident = d.diagnostic_id or "-"
        print(
            f"[{ident:>3}] {d.display_severity:<11} {span.kind:<9} "
            f"{span.start_char:>5}-{span.end_char:<5} {d.category}"
        )
        print(f"      Excerpt: {d.target_excerpt[:60]}")
        print(f"      Problem: {d.message[:60]}")
        if d.rewrite:
            print(f"      Fix:     {d.rewrite[:60]}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a recorded review report against a document")
    parser.add_argument("report", type=str, help="Path to the recorded report text")
    parser.add_argument("document", type=str, help="Path to the reviewed document")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=64,
        help="Fragment size in characters (default: 64)",
    )
    parser.add_argument(
        "--dictionary",
        nargs="*",
        default=[],
        help="Words whose spelling issues are suppressed",
    )
    parser.add_argument(
        "--apply",
        type=str,
        default=None,
        help="Quick-fix id to apply; prints the resulting document",
    )
    parser.add_argument("--json", action="store_true", help="Print diagnostics as JSON")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    report_path = Path(args.report)
    document_path = Path(args.document)
    for p in (report_path, document_path):
        if not p.exists():
            print(f"FEHLER: Datei nicht gefunden: {p}")
            return 1

    document_text = document_path.read_text(encoding="utf-8")
    session = ReviewSession(document_text, dictionary=UserDictionary(args.dictionary))
    outcome = asyncio.run(
        session.run(replay_fragments(report_path.read_text(encoding="utf-8"), args.chunk_size))
    )

    if args.json:
        payload = {
            "status": outcome.status,
            "summary": outcome.summary,
            "diagnostics": [d.model_dump() for d in outcome.diagnostics],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_table(outcome)

    if args.apply is not None:
        try:
            new_text = session.state.apply_fix(document_text, args.apply)
        except KeyError as e:
            print(f"FEHLER: {e}")
            return 1
        print("=" * 70)
        print(new_text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
