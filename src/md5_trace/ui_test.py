import io

import pytest
from rich.console import Console
from rich.panel import Panel

from md5_trace.constants import ROUND_CONSTANTS, SHIFT_AMOUNTS
from md5_trace.tracer import build_trace
from md5_trace.ui import constants_table, event_title, format_bytes, render, rounds_table


def render_text(renderable) -> str:
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


@pytest.fixture(scope="module")
def trace():
    return build_trace("abc")


class TestEventTitle:
    """Test suite for event titles"""

    def test_titles(self, trace):
        """Test each event kind gets its description"""
        assert event_title(None) == "No step selected"
        assert event_title(trace.events[0]) == "Preprocess input and apply MD5 padding"
        assert event_title(trace.events[1]) == "Chunk 1: load M[0..15] and initialize A, B, C, D"
        assert event_title(trace.events[2]) == "Chunk 1 round 1/64 using function F"
        assert event_title(trace.events[65]) == "Chunk 1 round 64/64 using function I"
        assert event_title(trace.events[66]) == "Chunk 1: add working registers back into hash state"
        assert event_title(trace.events[67]) == "Final digest assembled from A, B, C, D"

    def test_unknown_event(self):
        """Test objects that are not events are rejected"""
        with pytest.raises(ValueError):
            event_title(object())


class TestRender:
    """Test suite for rendering single steps"""

    def test_every_step_renders(self, trace):
        """Test each event of a trace renders with its digest preview"""
        for step in range(len(trace)):
            panel = render(trace, step)
            assert isinstance(panel, Panel)
            assert trace.events[step].digest_preview in render_text(panel)

    def test_round_details(self, trace):
        """Test a round shows its constant, function and step counter"""
        text = render_text(render(trace, 2))
        assert "0xd76aa478" in text
        assert "(B & C) | (~B & D)" in text
        assert "Step 2 / 67" in text

    def test_clamped_step(self, trace):
        """Test steps past the end render the final digest"""
        text = render_text(render(trace, 500))
        assert "Final digest assembled" in text
        assert "900150983cd24fb0d6963f7d28e17f72" in text
        assert "Step 67 / 67" in text


class TestFormatBytes:
    """Test suite for the byte dump helper"""

    def test_empty(self):
        assert format_bytes(b"") == "(empty)"

    def test_short(self):
        assert format_bytes(b"ab") == "61 62"

    def test_truncated(self):
        """Test bytes past the limit are replaced by an ellipsis"""
        assert format_bytes(bytes(range(10)), 4) == "00 01 02 03 ..."

    def test_exact_limit(self):
        assert format_bytes(bytes(4), 4) == "00 00 00 00"

    def test_preprocess_shows_bytes(self, trace):
        """Test the preprocess step dumps the input and padded bytes"""
        text = render_text(render(trace, 0))
        assert "Input bytes" in text
        assert "61 62 63 80" in text

    def test_empty_input(self):
        text = render_text(render(build_trace(""), 0))
        assert "(empty)" in text

    def test_chunk_start_shows_bytes(self, trace):
        """Test the chunk start step dumps the chunk bytes"""
        text = render_text(render(trace, 1))
        assert "Chunk bytes" in text
        assert "61 62 63 80 00" in text


class TestTables:
    """Test suite for the round and constant tables"""

    def test_rounds_table(self, trace):
        """Test one row per round of the chunk"""
        table = rounds_table(trace, 0)
        assert table.row_count == 64

    def test_rounds_table_other_chunk(self):
        """Test rows are filtered to the requested chunk"""
        trace = build_trace("x" * 100)
        assert rounds_table(trace, 1).row_count == 64

    def test_constants_table(self):
        """Test the constant table lists all 64 rounds"""
        table = constants_table(ROUND_CONSTANTS, SHIFT_AMOUNTS)
        assert table.row_count == 64
        assert "0xeb86d391" in render_text(table)
