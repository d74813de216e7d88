"""
Probe error types.

None of these escape the CLI entry point: ``healthcheck.main`` maps each one
to a verdict and an exit code.
"""


class ProbeError(Exception):
    """Generic probe failure."""

    def __init__(self, detail: str = "Probe failed"):
        super().__init__(detail)
        self.detail = detail


class TransportFailure(ProbeError):
    """The status page could not be fetched. ``detail`` is the status line."""

    def __init__(self, detail: str = "500 Can't connect"):
        super().__init__(detail)


class ConfigurationError(ProbeError):
    """Inconsistent or missing command-line options."""

    def __init__(self, detail: str = "Check warn and crit!"):
        super().__init__(detail)


class HardTimeout(ProbeError):
    """The wall-clock alarm fired before the probe finished."""

    def __init__(self, detail: str = "ERROR: Alarm signal (Nagios time-out)"):
        super().__init__(detail)
