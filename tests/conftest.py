"""Test configuration and shared fixtures.

Provide isolated probe settings, a realistic mod_status page and a fake
transport. No test touches the network or a real `.env` file.
"""
from typing import Callable, Optional

import pytest

from apachestatus.config import Settings
from apachestatus.core.types import FetchResult

# ==============================================================================
# STATUS PAGE FIXTURES
# ==============================================================================

STATUS_PAGE = """<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 3.2 Final//EN">
<html><head>
<title>Apache Status</title>
</head><body>
<h1>Apache Server Status for localhost (via 127.0.0.1)</h1>

<dl><dt>Server Version: Apache/2.4.58 (Ubuntu)</dt>
<dt>Server MPM: event</dt>
</dl><hr /><dl>
<dt>Current Time: Saturday, 17-Oct-2026 10:12:01 UTC</dt>
<dt>Server uptime:  3 hours 2 minutes 11 seconds</dt>
<dt>Total accesses: 13523 - Total Traffic: 48.1 MB - Total Duration: 1120</dt>
<dt>CPU Usage: u4.12 s1.8 cu0 cs0 - .0542% CPU load</dt>
<dt>1.24 requests/sec - 4.5 kB/second - 3.6 kB/request - .0828 ms/request</dt>
<dt>5 requests currently being processed, 10 idle workers</dt>
</dl><pre>..WW.._SS</pre>
<p>Scoreboard Key:<br />
"<b><code>_</code></b>" Waiting for Connection,
"<b><code>.</code></b>" Open slot with no current process<br />
</p>
</body></html>
"""


@pytest.fixture
def status_page_body() -> str:
    """Provide a trimmed but structurally real mod_status page."""
    return STATUS_PAGE


# ==============================================================================
# CONFIGURATION FIXTURES
# ==============================================================================

@pytest.fixture
def mock_settings() -> Settings:
    """Provide isolated probe configuration.

    Returns:
        Settings: Development environment, debug logging, no `.env` file.
    """
    return Settings(
        ENVIRONMENT="development",
        LOG_LEVEL="debug",
        _env_file=None,
    )


# ==============================================================================
# TRANSPORT HELPERS
# ==============================================================================

@pytest.fixture
def fake_fetch() -> Callable[..., Callable]:
    """Build a transport stand-in returning a fixed `FetchResult`.

    The returned fetcher records its calls on ``fetcher.calls``.
    """
    def factory(result: FetchResult):
        def fetcher(url: str, timeout: float, user_agent: Optional[str] = None) -> FetchResult:
            fetcher.calls.append((url, timeout, user_agent))
            return result
        fetcher.calls = []
        return fetcher
    return factory
