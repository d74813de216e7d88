"""Extract counters, throughput and the scoreboard from a mod_status page.

The page is scanned line by line with three independent patterns. Each scan
is a pure function over the split lines and only the first matching line is
used. A scan that finds nothing yields its zero/absent default instead of
failing, so a partially rendered page still produces a complete report.
"""

import re
from typing import Optional, Sequence

from apachestatus.core.logging_config import get_logger
from apachestatus.core.types import ParsedCounters, StatusPage, ThroughputMetrics
from apachestatus.core.units import to_kilobytes

logger = get_logger(__name__)

_NUMBER = r"([0-9]*\.?[0-9]+)"

WORKERS_PATTERN = re.compile(
    r"(\d+)\s+requests\s+currently\s+being\s+processed,.*\s+(\d+)\s+idle\s+workers"
)
THROUGHPUT_PATTERN = re.compile(
    _NUMBER + r"\s+requests/sec\s+-\s+"
    + _NUMBER + r"\s+(\w)?B/second\s+-\s+"
    + _NUMBER + r"\s+(\w)?B/request"
)
PRE_OPEN_PATTERN = re.compile(r"<pre>", re.IGNORECASE)
PRE_CLOSE_PATTERN = re.compile(r"</pre>", re.IGNORECASE)


def _first_match(pattern: re.Pattern, lines: Sequence[str]) -> Optional[re.Match]:
    for line in lines:
        match = pattern.search(line)
        if match:
            return match
    return None


def extract_workers(lines: Sequence[str]) -> ParsedCounters:
    """Read ``<N> requests currently being processed, <M> idle workers``."""
    match = _first_match(WORKERS_PATTERN, lines)
    if match is None:
        logger.debug("worker count line not found")
        return ParsedCounters()
    busy, idle = match.groups()
    return ParsedCounters(busy_workers=int(busy), idle_workers=int(idle))


def extract_throughput(lines: Sequence[str]) -> ThroughputMetrics:
    """Read ``<r> requests/sec - <s> kB/second - <q> kB/request``.

    Byte figures are converted to kilobytes. A figure whose unit suffix is not
    recognized is reported as absent.
    """
    match = _first_match(THROUGHPUT_PATTERN, lines)
    if match is None:
        logger.debug("throughput line not found")
        return ThroughputMetrics()
    requests, per_sec, sec_unit, per_req, req_unit = match.groups()
    metrics = ThroughputMetrics(
        requests_per_second=float(requests),
        kilobytes_per_second=to_kilobytes(float(per_sec), sec_unit),
        kilobytes_per_request=to_kilobytes(float(per_req), req_unit),
    )
    if not metrics.is_complete:
        logger.debug("throughput unit not recognized", per_sec_unit=sec_unit, per_request_unit=req_unit)
    return metrics


def extract_scoreboard(lines: Sequence[str]) -> str:
    """Return the text between the first ``<pre>`` and the next ``</pre>``.

    The lines spanning both tags are joined without separators before the
    tags and everything outside them are cut away. Returns an empty string if
    either tag is missing.
    """
    begin = end = None
    for index, line in enumerate(lines):
        if begin is None and PRE_OPEN_PATTERN.search(line):
            begin = index
        if begin is None or not PRE_CLOSE_PATTERN.search(line):
            continue
        # The closing tag must follow the opening one on a shared line.
        start = PRE_OPEN_PATTERN.search(line).end() if index == begin else 0
        if PRE_CLOSE_PATTERN.search(line, start):
            end = index
            break
    if begin is None or end is None:
        logger.debug("scoreboard block not found", pre_begin=begin)
        return ""

    block = "".join(lines[begin:end + 1])
    block = block[PRE_OPEN_PATTERN.search(block).end():]
    close = PRE_CLOSE_PATTERN.search(block)
    return block[:close.start()] if close else block


def parse_status_page(body: str) -> StatusPage:
    """Run all three scans over a raw status page body."""
    lines = body.split("\n")
    page = StatusPage(
        counters=extract_workers(lines),
        throughput=extract_throughput(lines),
        scoreboard=extract_scoreboard(lines),
    )
    logger.debug(
        "status page parsed",
        busy=page.counters.busy_workers,
        idle=page.counters.idle_workers,
        scoreboard_length=len(page.scoreboard),
    )
    return page
