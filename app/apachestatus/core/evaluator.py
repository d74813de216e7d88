"""Classify server availability against the operator's thresholds.

Availability is the number of workers that could take a new request right
now: open scoreboard slots plus idle workers. Lower is worse.
"""

from typing import Optional

from apachestatus.core.logging_config import get_logger
from apachestatus.core.types import ParsedCounters, StateTallies, Thresholds, Verdict

logger = get_logger(__name__)


def availability(tallies: StateTallies, counters: ParsedCounters) -> int:
    return tallies.open_slots + counters.idle_workers


def evaluate(
    tallies: StateTallies,
    counters: ParsedCounters,
    thresholds: Optional[Thresholds],
) -> Verdict:
    """Return the verdict for a successfully fetched status page.

    The critical rule is checked before the warning rule and a threshold
    triggers when availability is less than or equal to it. Without
    thresholds every successful fetch is OK.

    Args:
        tallies: Scoreboard state counts.
        counters: Busy/idle worker counts.
        thresholds: Configured thresholds, or None when the probe runs without.

    Returns:
        The verdict.
    """
    if thresholds is None:
        return Verdict.OK

    available = availability(tallies, counters)
    if thresholds.critical_enabled and available <= thresholds.critical:
        verdict = Verdict.CRITICAL
    elif thresholds.warning_enabled and available <= thresholds.warning:
        verdict = Verdict.WARNING
    else:
        verdict = Verdict.OK

    logger.debug(
        "availability evaluated",
        available=available,
        warning=thresholds.warning,
        critical=thresholds.critical,
        verdict=verdict.value,
    )
    return verdict


def verdict_for_transport_failure(thresholds: Optional[Thresholds]) -> Verdict:
    """Return the verdict when the status page could not be fetched.

    Without thresholds the probe is a plain reachability check, so an
    unreachable page is CRITICAL. With thresholds the probe could not measure
    availability at all, which is UNKNOWN.
    """
    return Verdict.UNKNOWN if thresholds is not None else Verdict.CRITICAL
