"""HTTP client for the remote state endpoint (GET/PUT <base>/state)."""
import logging
from typing import Any, Optional

import httpx

from mealrota.utilities.config import REMOTE_TIMEOUT

logger = logging.getLogger(__name__)


class RemoteStateClient:
    """Talks to a server exposing ``GET /state`` and ``PUT /state``.

    Errors are not handled here: transport failures raise ``httpx.HTTPError``
    and non-2xx answers raise ``httpx.HTTPStatusError``, so the caller decides
    how to fall back.
    """

    def __init__(self, base_url: str, client: Optional[httpx.Client] = None, timeout: float = REMOTE_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def state_url(self) -> str:
        return f"{self.base_url}/state"

    def fetch(self) -> Any:
        """Return the decoded JSON document (may be None)."""
        resp = self._client.get(self.state_url, headers={"Content-Type": "application/json"})
        resp.raise_for_status()
        if resp.status_code == 204:
            return None
        return resp.json()

    def store(self, document: dict) -> None:
        resp = self._client.put(self.state_url, json=document)
        resp.raise_for_status()
        logger.debug("Remote state stored (%s)", resp.status_code)

    def close(self) -> None:
        self._client.close()
