"""Nagios probe for the Apache mod_status page.

Fetch ``http://<host>[:<port>]/server-status``, parse worker counts,
throughput and the scoreboard, and print one report line with perfdata.

Exit Codes:
    0: OK - Page fetched and availability above the thresholds.
    1: WARNING - Availability at or below the warning threshold.
    2: CRITICAL - Availability at or below the critical threshold, page
       unreachable without thresholds, or the hard alarm fired.
    3: UNKNOWN - Page unreachable with thresholds, bad options, help/version.

Environment Variables:
    APACHESTATUS_DEFAULT_TIMEOUT: Timeout when ``-t`` is omitted (default: 15).
    APACHESTATUS_LOG_LEVEL: Log verbosity on stderr (default: warning).
"""

import argparse
import signal
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from pydantic import Field, ValidationError

from apachestatus.config import Settings, get_settings
from apachestatus.core.errors import ConfigurationError, HardTimeout
from apachestatus.core.evaluator import evaluate, verdict_for_transport_failure
from apachestatus.core.extractor import parse_status_page
from apachestatus.core.logging_config import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
)
from apachestatus.core.report import format_failure, format_report
from apachestatus.core.scoreboard import SCOREBOARD_STATES, tally_scoreboard
from apachestatus.core.types import CanonicalModel, FetchResult, Thresholds, Verdict
from apachestatus.transport import build_status_url, fetch_status_page

logger = get_logger(__name__)

PROG = "check_apachestatus"

EXIT_CODES: dict[Verdict, int] = {
    Verdict.OK: 0,
    Verdict.WARNING: 1,
    Verdict.CRITICAL: 2,
    Verdict.UNKNOWN: 3,
}

Fetcher = Callable[[str, float, Optional[str]], FetchResult]


# ==============================================================================
# OPTIONS
# ==============================================================================


class ProbeOptions(CanonicalModel):
    """Validated per-invocation options."""
    hostname: str = Field(min_length=1)
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    user_agent: Optional[str] = None
    timeout: int = Field(gt=0)
    thresholds: Optional[Thresholds] = None


class _ProbeArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports errors as UNKNOWN instead of exiting with 2."""

    def error(self, message: str):
        raise ConfigurationError(message)


def usage() -> str:
    return (
        f"Usage: {PROG} -H <host> [-p <port>] [-a <agent>] [-t <timeout>] "
        "[-w <warn_level> -c <crit_level>] [-V]"
    )


def help_text(settings: Settings) -> str:
    legend = "\n".join(f"{symbol} : {label}" for symbol, _, label in SCOREBOARD_STATES)
    return f"""{settings.PROJECT_NAME} version {settings.VERSION}
GPL licence

{usage()}
-h, --help
   print this help message
-H, --hostname=HOST
   name or IP address of host to check
-p, --port=PORT
   Http port
-a, --agent=USERAGENT
   User-Agent to use in HTTP request
-t, --timeout=INTEGER
   timeout in seconds (Default: {settings.DEFAULT_TIMEOUT})
-w, --warn=MIN
   number of available slots that will cause a warning
   -1 for no warning
-c, --critical=MIN
   number of available slots that will cause an error
   -1 for no error
-v, --verbose
   debug logging on stderr
-V, --version
   prints version number
Note :
  The script will return
    * Without warn and critical options:
        OK       if we are able to connect to the apache server's status page,
        CRITICAL if we aren't able to connect to the apache server's status page,
    * With warn and critical options:
        OK       if we are able to connect to the apache server's status page and #available slots > <warn_level>,
        WARNING  if we are able to connect to the apache server's status page and #available slots <= <warn_level>,
        CRITICAL if we are able to connect to the apache server's status page and #available slots <= <crit_level>,
        UNKNOWN  if we aren't able to connect to the apache server's status page

Perfdata legend:
{legend}
1 : Requests per sec
2 : kB per sec
3 : kB per Request
"""


def build_parser() -> argparse.ArgumentParser:
    parser = _ProbeArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-H", "--hostname")
    parser.add_argument("-p", "--port", type=int)
    parser.add_argument("-a", "--agent")
    parser.add_argument("-t", "--timeout", type=int)
    parser.add_argument("-w", "--warn", type=int)
    parser.add_argument("-c", "--critical", type=int)
    parser.add_argument("-V", "--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def resolve_thresholds(warn: Optional[int], critical: Optional[int]) -> Optional[Thresholds]:
    """Combine ``-w``/``-c`` into `Thresholds`.

    Raises:
        ConfigurationError: If only one is given or the pair is inverted.
    """
    if warn is None and critical is None:
        return None
    if warn is None or critical is None:
        raise ConfigurationError()
    try:
        return Thresholds(warning=warn, critical=critical)
    except ValidationError as e:
        raise ConfigurationError() from e


def build_options(args: argparse.Namespace, settings: Settings) -> ProbeOptions:
    """Validate parsed arguments.

    Threshold errors are checked before the hostname, matching the order in
    which operators usually fix their command lines.

    Raises:
        ConfigurationError: With the message to print above the usage line.
    """
    thresholds = resolve_thresholds(args.warn, args.critical)
    if not args.hostname:
        raise ConfigurationError("")
    try:
        return ProbeOptions(
            hostname=args.hostname,
            port=args.port,
            user_agent=args.agent or settings.DEFAULT_USER_AGENT,
            timeout=args.timeout if args.timeout is not None else settings.DEFAULT_TIMEOUT,
            thresholds=thresholds,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid option: {e.errors()[0]['loc'][0]}") from e


# ==============================================================================
# PIPELINE
# ==============================================================================


def run_probe(
    options: ProbeOptions,
    settings: Settings,
    fetch: Optional[Fetcher] = None,
) -> tuple[Verdict, str]:
    """Fetch, parse and evaluate the status page.

    Args:
        options: Validated probe options.
        settings: Probe settings (status path).
        fetch: Transport callable, defaults to `fetch_status_page`.

    Returns:
        The verdict and the report line to print.
    """
    fetch = fetch or fetch_status_page
    url = build_status_url(options.hostname, options.port, settings.STATUS_PATH)
    result = fetch(url, options.timeout, options.user_agent)

    if not result.success:
        verdict = verdict_for_transport_failure(options.thresholds)
        logger.info("status page unreachable", status=result.status_line, verdict=verdict.value)
        return verdict, format_failure(verdict, result.status_line)

    page = parse_status_page(result.body)
    tallies = tally_scoreboard(page.scoreboard)
    verdict = evaluate(tallies, page.counters, options.thresholds)
    return verdict, format_report(verdict, result.elapsed, page, tallies)


# ==============================================================================
# HARD TIMEOUT
# ==============================================================================


def _on_alarm(signum, frame):
    raise HardTimeout()


@contextmanager
def alarm_guard(seconds: int) -> Iterator[None]:
    """Raise `HardTimeout` if the block runs longer than ``seconds``.

    A no-op on platforms without SIGALRM.
    """
    if not hasattr(signal, "SIGALRM"):
        yield
        return

    previous = signal.signal(signal.SIGALRM, _on_alarm)
    signal.alarm(seconds)
    try:
        yield
    finally:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, previous)


# ==============================================================================
# ENTRY POINT
# ==============================================================================


def main(argv: Optional[list[str]] = None, settings: Optional[Settings] = None) -> int:
    """Run the probe and return the exit code.

    Every outcome, including unexpected errors, is printed as one line on
    stdout and mapped to an exit code.
    """
    try:
        settings = settings or get_settings()
    except ValidationError as e:
        print(format_failure(Verdict.UNKNOWN, f"Invalid configuration: {e.errors()[0]['loc'][0]}"))
        return EXIT_CODES[Verdict.UNKNOWN]

    try:
        args = build_parser().parse_args(argv)
    except ConfigurationError as e:
        print(e.detail)
        print(usage())
        return EXIT_CODES[Verdict.UNKNOWN]

    configure_logging(settings, verbose=args.verbose)

    if args.help:
        print(help_text(settings))
        return EXIT_CODES[Verdict.UNKNOWN]
    if args.version:
        print(f"{PROG} version : {settings.VERSION}")
        return EXIT_CODES[Verdict.UNKNOWN]

    try:
        options = build_options(args, settings)
    except ConfigurationError as e:
        if e.detail:
            print(e.detail)
        print(usage())
        return EXIT_CODES[Verdict.UNKNOWN]

    clear_contextvars()
    bind_contextvars(host=options.hostname)

    try:
        with alarm_guard(options.timeout + settings.ALARM_GRACE_SECONDS):
            verdict, line = run_probe(options, settings)
    except HardTimeout as e:
        print(e.detail)
        return EXIT_CODES[Verdict.CRITICAL]
    except Exception as e:
        logger.error("Unhandled exception during probe", error=str(e), exc_info=True)
        print(format_failure(Verdict.UNKNOWN, f"Internal error: {e}"))
        return EXIT_CODES[Verdict.UNKNOWN]

    print(line)
    return EXIT_CODES[verdict]


if __name__ == "__main__":
    sys.exit(main())
