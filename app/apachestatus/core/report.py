"""Render the single output line read by the monitoring framework.

The line is a human-readable summary followed by ``|`` and the perfdata
segment. All perfdata pairs are always emitted so graphing tools see a
stable series set even when the page was only partially parsed.
"""

from typing import Optional

from apachestatus.core.scoreboard import SCOREBOARD_STATES
from apachestatus.core.types import StateTallies, StatusPage, Verdict

# Rendered value of a throughput figure missing from the page.
MISSING_METRIC = 0.0


def _metric(value: Optional[float]) -> float:
    return MISSING_METRIC if value is None else value


def format_perfdata(page: StatusPage, tallies: StateTallies) -> str:
    """Return the perfdata segment: scoreboard states, then throughput."""
    pairs = [f"'{label}'={getattr(tallies, field)}" for _, field, label in SCOREBOARD_STATES]
    throughput = page.throughput
    pairs.append(f"'Requests/sec'={_metric(throughput.requests_per_second):0.1f}")
    pairs.append(f"'kB per sec'={_metric(throughput.kilobytes_per_second):0.1f}KB")
    pairs.append(f"'kB per Request'={_metric(throughput.kilobytes_per_request):0.1f}KB")
    return " ".join(pairs)


def format_report(
    verdict: Verdict,
    elapsed: float,
    page: StatusPage,
    tallies: StateTallies,
) -> str:
    """Return the report line for a successfully fetched page.

    Example:
        >>> format_report(Verdict.OK, 0.01, StatusPage(), StateTallies())[:45]
        'OK 0.010000 seconds response time. Idle 0, bu'
    """
    counters = page.counters
    return (
        f"{verdict.value} {elapsed:f} seconds response time. "
        f"Idle {counters.idle_workers}, busy {counters.busy_workers}, "
        f"open slots {tallies.open_slots} | {format_perfdata(page, tallies)}"
    )


def format_failure(verdict: Verdict, status_line: str) -> str:
    return f"{verdict.value} {status_line}"
