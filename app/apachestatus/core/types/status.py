"""Defines the values flowing through the status-page pipeline.

A probe invocation produces, in order: a `FetchResult` from the transport, a
`StatusPage` from the line extractor, `StateTallies` from the scoreboard
analyzer and finally a `Verdict` from the availability evaluator.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, model_validator

from .base import CanonicalModel


# Value of a threshold that switches its rule off.
DISABLED_THRESHOLD = -1


# ═══════════════════════════════════════════════════════════════════════════
# VERDICT
# ═══════════════════════════════════════════════════════════════════════════

class Verdict(str, Enum):
    """Severity of a probe run, named the way the monitoring framework prints it."""
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"


# ═══════════════════════════════════════════════════════════════════════════
# PARSED VALUES
# ═══════════════════════════════════════════════════════════════════════════

class ParsedCounters(CanonicalModel):
    """Busy and idle worker counts from the status page.

    Both default to zero when the worker-count line is missing.
    """
    busy_workers: int = Field(default=0, ge=0)
    idle_workers: int = Field(default=0, ge=0)


class ThroughputMetrics(CanonicalModel):
    """Throughput figures, byte values normalized to kilobytes.

    ``None`` marks a figure the page did not provide (or provided with a unit
    suffix that could not be converted).
    """
    requests_per_second: Optional[float] = None
    kilobytes_per_second: Optional[float] = None
    kilobytes_per_request: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return None not in (
            self.requests_per_second,
            self.kilobytes_per_second,
            self.kilobytes_per_request,
        )


class StatusPage(CanonicalModel):
    """Everything the line extractor pulls out of one status page body.

    Attributes:
        counters: Busy/idle worker counts.
        throughput: Requests and byte rates.
        scoreboard: Raw scoreboard characters between the ``<pre>`` tags.
    """
    model_config = ConfigDict(str_strip_whitespace=False)

    counters: ParsedCounters = Field(default_factory=ParsedCounters)
    throughput: ThroughputMetrics = Field(default_factory=ThroughputMetrics)
    scoreboard: str = ""


class StateTallies(CanonicalModel):
    """Per-state occurrence counts of a scoreboard.

    Field order matches the perfdata order of the report line.
    """
    waiting: int = Field(default=0, ge=0, description="_ Waiting for Connection")
    starting: int = Field(default=0, ge=0, description="S Starting Up")
    reading: int = Field(default=0, ge=0, description="R Reading Request")
    sending: int = Field(default=0, ge=0, description="W Sending Reply")
    keepalive: int = Field(default=0, ge=0, description="K Keepalive (read)")
    dns_lookup: int = Field(default=0, ge=0, description="D DNS Lookup")
    closing: int = Field(default=0, ge=0, description="C Closing Connection")
    logging: int = Field(default=0, ge=0, description="L Logging")
    finishing: int = Field(default=0, ge=0, description="G Gracefully finishing")
    idle_cleanup: int = Field(default=0, ge=0, description="I Idle cleanup")
    open_slots: int = Field(default=0, ge=0, description=". Open slot")

    @property
    def total(self) -> int:
        """Number of scoreboard characters that mapped to a known state."""
        return sum(self.model_dump().values())


# ═══════════════════════════════════════════════════════════════════════════
# PROBE INPUTS
# ═══════════════════════════════════════════════════════════════════════════

class Thresholds(CanonicalModel):
    """Warning/critical availability thresholds.

    Availability at or below a threshold triggers it. ``-1`` disables a rule.

    Raises:
        ValueError: If neither threshold is disabled and warning does not
            exceed critical.
    """
    warning: int = Field(ge=DISABLED_THRESHOLD)
    critical: int = Field(ge=DISABLED_THRESHOLD)

    @model_validator(mode='after')
    def validate_ordering(self) -> 'Thresholds':
        if DISABLED_THRESHOLD in (self.warning, self.critical):
            return self
        if self.warning <= self.critical:
            raise ValueError(
                f"warning threshold ({self.warning}) must exceed "
                f"critical threshold ({self.critical})"
            )
        return self

    @property
    def warning_enabled(self) -> bool:
        return self.warning != DISABLED_THRESHOLD

    @property
    def critical_enabled(self) -> bool:
        return self.critical != DISABLED_THRESHOLD


class FetchResult(CanonicalModel):
    """Outcome of one GET of the status page.

    Attributes:
        success: True for a 2xx response.
        body: Decoded response body, empty on failure.
        status_line: ``<code> <reason>`` of the response or the connection error.
        elapsed: Wall-clock seconds spent on the request.
    """
    model_config = ConfigDict(str_strip_whitespace=False)

    success: bool
    body: str = ""
    status_line: str
    elapsed: float = Field(ge=0.0)
