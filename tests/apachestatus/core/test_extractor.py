"""Line extractor test suite.

Covers the three independent scans (workers, throughput, scoreboard) over
well-formed, partial and malformed status pages.
"""
import pytest

from apachestatus.core.extractor import (
    extract_scoreboard,
    extract_throughput,
    extract_workers,
    parse_status_page,
)
from apachestatus.core.types import ParsedCounters, ThroughputMetrics


# ═══════════════════════════════════════════════════════════════════════════
# WORKER COUNTS
# ═══════════════════════════════════════════════════════════════════════════

class TestWorkers:
    """Busy/idle worker line."""

    def test_apache2_line(self):
        counters = extract_workers(["5 requests currently being processed, 10 idle workers"])
        assert counters == ParsedCounters(busy_workers=5, idle_workers=10)

    def test_descriptive_text_between_numbers(self):
        line = "<dt>12 requests currently being processed, and apparently 143 idle workers</dt>"
        counters = extract_workers([line])
        assert counters.busy_workers == 12
        assert counters.idle_workers == 143

    def test_missing_line_defaults_to_zero(self):
        assert extract_workers(["<html>", "no counters here"]) == ParsedCounters()

    def test_first_match_wins(self):
        lines = [
            "1 requests currently being processed, 2 idle workers",
            "7 requests currently being processed, 8 idle workers",
        ]
        assert extract_workers(lines) == ParsedCounters(busy_workers=1, idle_workers=2)


# ═══════════════════════════════════════════════════════════════════════════
# THROUGHPUT
# ═══════════════════════════════════════════════════════════════════════════

class TestThroughput:
    """requests/sec - B/second - B/request line."""

    def test_kilobyte_figures_unchanged(self):
        metrics = extract_throughput(["12.3 requests/sec - 45.6 kB/second - 3.2 kB/request"])
        assert metrics.requests_per_second == pytest.approx(12.3)
        assert metrics.kilobytes_per_second == pytest.approx(45.6)
        assert metrics.kilobytes_per_request == pytest.approx(3.2)

    def test_plain_bytes_converted(self):
        metrics = extract_throughput(["1.0 requests/sec - 512 B/second - 64 B/request"])
        assert metrics.kilobytes_per_second == 0.5
        assert metrics.kilobytes_per_request == 0.0625

    def test_mixed_units(self):
        metrics = extract_throughput(["<dt>.5 requests/sec - 2 MB/second - 900 B/request</dt>"])
        assert metrics.requests_per_second == 0.5
        assert metrics.kilobytes_per_second == 2048.0
        assert metrics.kilobytes_per_request == pytest.approx(900 / 1024)

    def test_trailing_duration_ignored(self):
        line = "1.24 requests/sec - 4.5 kB/second - 3.6 kB/request - .0828 ms/request"
        assert extract_throughput([line]).is_complete

    def test_unknown_unit_marks_metric_absent(self):
        metrics = extract_throughput(["3 requests/sec - 1 TB/second - 2 kB/request"])
        assert metrics.requests_per_second == 3.0
        assert metrics.kilobytes_per_second is None
        assert metrics.kilobytes_per_request == 2.0

    def test_missing_line_leaves_all_absent(self):
        assert extract_throughput(["nothing"]) == ThroughputMetrics()


# ═══════════════════════════════════════════════════════════════════════════
# SCOREBOARD
# ═══════════════════════════════════════════════════════════════════════════

class TestScoreboard:
    """<pre> block extraction."""

    def test_single_line_block(self):
        assert extract_scoreboard(["</dl><pre>..WW.._SS</pre>"]) == "..WW.._SS"

    def test_multi_line_block_concatenated(self):
        lines = ["<pre>__W_", "KK..", "R.</pre><p>Key"]
        assert extract_scoreboard(lines) == "__W_KK..R."

    def test_tags_case_insensitive(self):
        assert extract_scoreboard(["<PRE>_W.</Pre>"]) == "_W."

    def test_missing_close_tag(self):
        assert extract_scoreboard(["<pre>____", "...."]) == ""

    def test_missing_open_tag(self):
        assert extract_scoreboard(["____</pre>"]) == ""

    def test_close_tag_before_open_on_same_line(self):
        lines = ["</pre><pre>__", "..</pre>"]
        assert extract_scoreboard(lines) == "__.."

    def test_close_marker_needs_full_tag(self):
        lines = ["<pre>__</preview>..", "W</pre>"]
        assert extract_scoreboard(lines) == "__</preview>..W"

    def test_only_first_block_used(self):
        lines = ["<pre>W.</pre>", "<pre>____</pre>"]
        assert extract_scoreboard(lines) == "W."


# ═══════════════════════════════════════════════════════════════════════════
# FULL PAGE
# ═══════════════════════════════════════════════════════════════════════════

def test_parse_status_page(status_page_body):
    page = parse_status_page(status_page_body)

    assert page.counters == ParsedCounters(busy_workers=5, idle_workers=10)
    assert page.throughput.requests_per_second == pytest.approx(1.24)
    assert page.throughput.kilobytes_per_second == pytest.approx(4.5)
    assert page.throughput.kilobytes_per_request == pytest.approx(3.6)
    assert page.scoreboard == "..WW.._SS"


def test_parse_is_idempotent(status_page_body):
    assert parse_status_page(status_page_body) == parse_status_page(status_page_body)


def test_parse_empty_body():
    page = parse_status_page("")
    assert page.counters == ParsedCounters()
    assert page.throughput == ThroughputMetrics()
    assert page.scoreboard == ""
