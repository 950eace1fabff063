"""
Parsing-Kern für den gestreamten Review-Report.

Unterstützt:
- Block-Segmentierung über `---` / `ISSUE <n>` Marker
- Feld-Extraktion in fester Reihenfolge (EXCERPT, CATEGORY, SEVERITY, PROBLEM, FIX)
- Vollständigkeitsprüfung für noch laufende Blöcke
- Inkrementelles Parsen mit Rest-Buffer
"""

from prose_review.services.parsing.blocks import is_block_complete, segment_blocks
from prose_review.services.parsing.issue_models import IssueSuggestion
from prose_review.services.parsing.quotes import strip_quotes
from prose_review.services.parsing.stream_parser import (
    STREAM_TERMINATOR,
    extract_summary,
    finalize_buffer,
    parse_complete_issue_blocks,
    parse_issue_block,
    parse_partial_buffer,
)

__all__ = [
    "IssueSuggestion",
    "STREAM_TERMINATOR",
    "extract_summary",
    "finalize_buffer",
    "is_block_complete",
    "parse_complete_issue_blocks",
    "parse_issue_block",
    "parse_partial_buffer",
    "segment_blocks",
    "strip_quotes",
]
