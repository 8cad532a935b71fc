"""
Pooled client for the GitHub REST API.

The client carries the API base URL and the media type GitHub expects, so
callers pass paths such as ``/repos/octo/repo`` and add only their own
``Authorization`` header.
"""

import httpx

from devsuite import __version__
from devsuite.config import get_verify_ssl

GITHUB_REST_API = "https://api.github.com"
GITHUB_MEDIA_TYPE = "application/vnd.github.v3+json"
USER_AGENT = f"GitHub-DevSuite/{__version__}"
REQUEST_TIMEOUT = 15

# (client, verify flag it was opened with)
_client_state: tuple[httpx.Client, bool] | None = None


def _get_http_client() -> httpx.Client:
    """Return the shared API client, reopened when the SSL setting changes."""
    global _client_state
    verify = get_verify_ssl()

    if _client_state is not None:
        client, opened_with = _client_state
        if not client.is_closed and opened_with == verify:
            return client
        client.close()

    client = httpx.Client(
        base_url=GITHUB_REST_API,
        verify=verify,
        timeout=REQUEST_TIMEOUT,
        headers={"Accept": GITHUB_MEDIA_TYPE, "User-Agent": USER_AGENT},
    )
    _client_state = (client, verify)
    return client


def close_http_client():
    """Close the shared client; the next request opens a new one."""
    global _client_state
    if _client_state is not None:
        _client_state[0].close()
        _client_state = None
