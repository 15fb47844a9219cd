"""HTTP adapter for the Transport port, built on requests.

Single attempt per call: no retry and no backoff. Timeouts and HTTP error
statuses are reported as NetworkError like any other transport failure.
"""

from __future__ import annotations

import logging

import requests

from domain.elevation.errors import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0


class RequestsTransport:
    """Fetch URL contents with a shared requests.Session.

    Parameters
    ----------
    session: requests.Session | None
        Session to reuse (connection pooling, proxies, auth). A new one is
        created when omitted.
    timeout_s: float
        Connect/read timeout for each request.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout_s = timeout_s

    def get(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self.timeout_s)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            logger.error("Error retrieving %s: %s", url, e)
            raise NetworkError(url, str(e)) from e

