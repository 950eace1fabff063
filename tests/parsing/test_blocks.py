"""
Tests für Block-Segmentierung und Completeness-Detector.
"""

from prose_review.services.parsing.blocks import is_block_complete, segment_blocks

HEAD = """EXCERPT: "I was trying not squint"
CATEGORY: grammar
SEVERITY: high
PROBLEM: Missing "to" before infinitive verb
"""


class TestSegmentBlocks:
    def test_splits_on_record_markers(self):
        buffer = "Summary.\n\n---\nISSUE 1\nA\n---\nISSUE 2\nB\n"
        blocks = segment_blocks(buffer)

        assert [b.ordinal for b in blocks] == [1, 2]
        assert blocks[0].body == "A\n"
        assert blocks[0].terminated is True
        assert blocks[1].body == "B\n"
        assert blocks[1].terminated is False
        assert buffer[blocks[1].start :].startswith("---\nISSUE 2")

    def test_incomplete_marker_is_not_a_block(self):
        assert segment_blocks("Summary\n---\nISSUE 1") == []
        assert segment_blocks("Summary\n---\nISS") == []

    def test_ordinals_do_not_matter(self):
        buffer = "---\nISSUE 7\nA\n---\nISSUE 7\nB\n---\nISSUE 2\nC"
        blocks = segment_blocks(buffer)

        assert [b.ordinal for b in blocks] == [7, 7, 2]
        assert [b.body for b in blocks] == ["A\n", "B\n", "C"]

    def test_trailing_delimiter_terminates_last_block(self):
        blocks = segment_blocks("---\nISSUE 1\nFIX: x\n---")
        assert len(blocks) == 1
        assert blocks[0].terminated is True
        assert blocks[0].body == "FIX: x\n"

    def test_segmenter_is_monotonic(self):
        """Längerer Buffer reproduziert alle bisherigen (abgeschlossenen) Blöcke."""
        full = "---\nISSUE 1\nA\n---\nISSUE 2\nB\n---\nISSUE 3\nC\n"
        for cut in range(len(full) + 1):
            short = segment_blocks(full[:cut])
            longer = segment_blocks(full)
            for old in short:
                if old.terminated:
                    assert any(
                        new.start == old.start and new.body == old.body for new in longer
                    )


class TestIsBlockComplete:
    def test_unterminated_quoted_fix_is_incomplete(self):
        assert is_block_complete(HEAD + 'FIX: "I was') is False

    def test_closed_quoted_fix_is_complete(self):
        assert is_block_complete(HEAD + 'FIX: "trying not to squint"') is True

    def test_curly_quoted_fix(self):
        assert is_block_complete(HEAD + "FIX: “trying not to squint”") is True
        assert is_block_complete(HEAD + "FIX: “trying not to") is False

    def test_unquoted_fix_is_complete(self):
        assert is_block_complete(HEAD + "FIX: partial") is True

    def test_empty_fix_is_complete(self):
        assert is_block_complete(HEAD + "FIX: ") is True
        assert is_block_complete(HEAD + "FIX:") is True

    def test_single_quote_character_is_incomplete(self):
        assert is_block_complete(HEAD + 'FIX: "') is False

    def test_missing_field_is_incomplete(self):
        assert is_block_complete(HEAD) is False
        block = 'EXCERPT: "a"\nCATEGORY: b\nPROBLEM: c\nFIX: d'
        assert is_block_complete(block) is False
