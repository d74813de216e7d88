"""Tally mod_status scoreboard characters per worker state."""

from collections import Counter

from apachestatus.core.types import StateTallies

# (scoreboard symbol, StateTallies field, perfdata label), in report order.
SCOREBOARD_STATES: tuple[tuple[str, str, str], ...] = (
    ("_", "waiting", "Waiting for Connection"),
    ("S", "starting", "Starting Up"),
    ("R", "reading", "Reading Request"),
    ("W", "sending", "Sending Reply"),
    ("K", "keepalive", "Keepalive (read)"),
    ("D", "dns_lookup", "DNS Lookup"),
    ("C", "closing", "Closing Connection"),
    ("L", "logging", "Logging"),
    ("G", "finishing", "Gracefully finishing"),
    ("I", "idle_cleanup", "Idle cleanup"),
    (".", "open_slots", "Open slot"),
)


def tally_scoreboard(scoreboard: str) -> StateTallies:
    """Count each known state symbol in ``scoreboard``.

    Matching is case-sensitive and characters outside the alphabet are
    ignored, so ``tallies.total <= len(scoreboard)``.
    """
    histogram = Counter(scoreboard)
    return StateTallies(**{field: histogram[symbol] for symbol, field, _ in SCOREBOARD_STATES})
