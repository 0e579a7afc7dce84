"""Plain HTTP GET client for the Daikin wireless adapter."""
import logging
from typing import Callable

import requests

from .const import DEFAULT_HOST, DEFAULT_TIMEOUT

_LOGGER = logging.getLogger(__name__)


def normalize_host(host: str | None) -> str:
    """Return the base URL for a host, adding a scheme when none is given."""
    host = (host or DEFAULT_HOST).strip()
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


class Requester:
    """
    Issues GET requests against the adapter and hands the body to a callback.

    Transport failures never propagate: they are logged, the requester is
    marked unavailable and the callback receives an empty body.

    Parameters
    ----------
    host : str
        Hostname, IP address or base URL of the adapter.
    timeout : float, optional
        Per-request timeout in seconds.
    """

    def __init__(self, host: str, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the requester."""
        self.base_url = normalize_host(host)
        self.timeout = timeout
        self._available = True

    @property
    def available(self) -> bool:
        """Return if the last request reached the adapter."""
        return self._available

    def get(
        self,
        path: str,
        callback: Callable[[str], None],
        idempotent: bool = True,
    ) -> None:
        """Perform a GET request and pass the response body to ``callback``."""
        url = f"{self.base_url}{path}"
        if idempotent:
            _LOGGER.debug("GET %s", url)
        else:
            _LOGGER.info("GET %s", url)

        try:
            r = requests.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            self._available = False
            _LOGGER.error("GET request to %s failed: %s", url, e)
            callback("")
            return

        self._available = True
        callback(r.text)
