# app/apachestatus/core/types/__init__.py
"""
Public API for the probe's type system.

Pipeline stages import their inputs and outputs from here rather than from
the individual modules.
"""

# ═══════════════════════════════════════════════════════════════════════════
# 1. BASE MODELS
# ═══════════════════════════════════════════════════════════════════════════
from .base import CanonicalModel

# ═══════════════════════════════════════════════════════════════════════════
# 2. STATUS PIPELINE VALUES
# ═══════════════════════════════════════════════════════════════════════════
from .status import (
    DISABLED_THRESHOLD,
    Verdict,
    ParsedCounters,
    ThroughputMetrics,
    StatusPage,
    StateTallies,
    Thresholds,
    FetchResult,
)

__all__ = [
    "CanonicalModel",
    "DISABLED_THRESHOLD",
    "Verdict",
    "ParsedCounters",
    "ThroughputMetrics",
    "StatusPage",
    "StateTallies",
    "Thresholds",
    "FetchResult",
]
