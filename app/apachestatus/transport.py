"""HTTP fetch of the mod_status page.

Execute a single plain-HTTP GET with a socket timeout. Network errors and
non-2xx responses are reported through `FetchResult` rather than raised, so
the caller can map them to a verdict. No retries are attempted.
"""

import codecs
import http.client
import socket
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Optional

from apachestatus.core.errors import TransportFailure
from apachestatus.core.logging_config import get_logger
from apachestatus.core.types import FetchResult

logger = get_logger(__name__)

DEFAULT_STATUS_PATH = "/server-status"
FALLBACK_CHARSET = "latin-1"


def build_status_url(host: str, port: Optional[int] = None, path: str = DEFAULT_STATUS_PATH) -> str:
    """Return ``http://<host>[:<port>]<path>``."""
    authority = host if port is None else f"{host}:{port}"
    return f"http://{authority}{path}"


def _decode(payload: bytes, charset: Optional[str]) -> str:
    """Decode with the declared charset, falling back to latin-1 if Python does not know it."""
    try:
        codecs.lookup(charset or FALLBACK_CHARSET)
    except LookupError:
        logger.debug("unknown charset, decoding as latin-1", charset=charset)
        charset = None
    return payload.decode(charset or FALLBACK_CHARSET, errors="replace")


def _single_line(text: str) -> str:
    return " ".join(text.split())


def _get(url: str, timeout: float, user_agent: Optional[str]) -> tuple[str, str]:
    """Perform the request and return ``(status_line, body)``.

    Raises:
        TransportFailure: On any non-2xx response, connection failure or
            malformed HTTP exchange.
    """
    request = urllib.request.Request(url, method="GET")
    if user_agent:
        request.add_header("User-Agent", user_agent)
    host = urllib.parse.urlsplit(url).netloc

    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            status_line = f"{response.status} {response.reason}"
            if not 200 <= response.status < 300:
                raise TransportFailure(status_line)
            return status_line, _decode(response.read(), response.headers.get_content_charset())
    except urllib.error.HTTPError as e:
        raise TransportFailure(f"{e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise TransportFailure(f"500 Can't connect to {host} ({e.reason})") from e
    except socket.timeout as e:
        raise TransportFailure(f"500 Can't connect to {host} (read timeout)") from e
    except (http.client.HTTPException, OSError) as e:
        reason = _single_line(str(e)) or type(e).__name__
        raise TransportFailure(f"500 Can't connect to {host} ({reason})") from e


def fetch_status_page(url: str, timeout: float, user_agent: Optional[str] = None) -> FetchResult:
    """GET the status page and time the request.

    Args:
        url: Full status page URL, see `build_status_url`.
        timeout: Socket timeout in seconds.
        user_agent: Optional User-Agent header value.

    Returns:
        FetchResult: ``success`` is False for any failure; ``status_line``
        then describes it.
    """
    if not url.startswith("http://"):
        # Only plain HTTP is probed.
        return FetchResult(success=False, status_line=f"501 Protocol scheme not supported: {url}", elapsed=0.0)

    started = time.perf_counter()
    try:
        status_line, body = _get(url, timeout, user_agent)
    except TransportFailure as e:
        elapsed = time.perf_counter() - started
        logger.debug("status page fetch failed", url=url, status=e.detail, elapsed=elapsed)
        return FetchResult(success=False, status_line=_single_line(e.detail), elapsed=elapsed)

    elapsed = time.perf_counter() - started
    logger.debug("status page fetched", url=url, status=status_line, elapsed=elapsed, size=len(body))
    return FetchResult(success=True, body=body, status_line=_single_line(status_line), elapsed=elapsed)
