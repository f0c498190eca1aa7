"""
HTTP log source backed by a pooled ``requests`` session.

Talks to the ``GET {host}/logs/{name}?n={n}&skip={skip}`` endpoint and maps
its status codes onto the exceptions in :mod:`pyqt_logtail.io.exceptions`.
"""

import logging
from typing import Optional
from urllib.parse import quote, urlparse

import requests
from requests.adapters import HTTPAdapter

from pyqt_logtail.io.exceptions import RemoteFailure, TransportFailure, Unauthorized

logger = logging.getLogger(__name__)

# --- Module-level constants ---
DEFAULT_TIMEOUT_S = 10.0
POOL_MAXSIZE = 4  # refresh, poll and backfill can be in flight together
BEARER_PREFIX = "Bearer "
DEFAULT_ENCODING = "utf-8"  # servers send text/plain without a charset


def normalize_host(host: str) -> str:
    """Strip whitespace and trailing slashes, default the scheme to https."""
    trimmed = host.strip().rstrip("/")
    if not trimmed:
        return ""
    if urlparse(trimmed).scheme in ("http", "https"):
        return trimmed
    return f"https://{trimmed}"


def build_auth_header(secret: str) -> str:
    """Return the Authorization value, accepting secrets already prefixed."""
    secret = secret.strip()
    if secret.startswith(BEARER_PREFIX):
        return secret
    return f"{BEARER_PREFIX}{secret}"


class HttpLogSource:
    """
    Reads pages of a remote log over HTTP.

    Usage:
        source = HttpLogSource("logs.example.com", "s3cret")
        text = source.read("app", n=70, skip=0)

    Error mapping:
        401 -> Unauthorized
        404 -> "" (log not created yet)
        other non-2xx -> RemoteFailure carrying the status text
        connection errors and timeouts -> TransportFailure

    Thread Safety:
        ``read`` is called from worker threads. A single session is shared
        by concurrent reads; ``requests`` sessions tolerate that for plain
        GETs on a pooled adapter.
    """

    def __init__(
        self,
        host: str,
        secret: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = normalize_host(host)
        if not self.base_url:
            raise ValueError("host must not be empty")
        self._auth_header = build_auth_header(secret)
        self._timeout_s = timeout_s

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=1, pool_maxsize=POOL_MAXSIZE)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self._session = session

    def url_for(self, file_name: str) -> str:
        return f"{self.base_url}/logs/{quote(file_name, safe='')}"

    def read(self, file_name: str, n: int, skip: int) -> str:
        """
        Fetch ``n`` lines of ``file_name`` ending ``skip`` lines before the tail.

        Args:
            file_name: Name of the remote log
            n: Number of lines to request
            skip: Number of most recent lines to skip

        Returns:
            Newline-joined log text, possibly empty

        Raises:
            Unauthorized: Secret rejected by the server
            RemoteFailure: Any other non-2xx status
            TransportFailure: No response was received
        """
        url = self.url_for(file_name)
        try:
            response = self._session.get(
                url,
                params={"n": n, "skip": skip},
                headers={"Authorization": self._auth_header},
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            logger.debug(f"GET {url} failed: {e}")
            raise TransportFailure(str(e)) from e

        status = response.status_code
        if status == 401:
            raise Unauthorized()
        if status == 404:
            logger.debug(f"Log {file_name!r} not found on server, treating as empty")
            return ""
        if not 200 <= status < 300:
            raise RemoteFailure(status, response.reason)
        if "charset=" not in response.headers.get("Content-Type", "").lower():
            # requests would fall back to ISO-8859-1 for text/* bodies
            response.encoding = DEFAULT_ENCODING
        return response.text

    def close(self) -> None:
        """Close pooled connections."""
        self._session.close()
