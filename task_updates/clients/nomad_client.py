import logging
import os
from typing import Any

import requests

from task_updates.errors import SchedulerError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
DEFAULT_ADDRESS = "http://127.0.0.1:4646"
ALL_NAMESPACES = "*"


class NomadClient:
    def __init__(self, address: str = DEFAULT_ADDRESS, token: str | None = None, timeout: float = REQUEST_TIMEOUT):
        self.address: str = (address or DEFAULT_ADDRESS).rstrip("/")
        self.timeout: float = timeout
        self.session: requests.Session = requests.Session()

        token = token or os.getenv("NOMAD_TOKEN")
        if token:
            self.session.headers["X-Nomad-Token"] = token

    def list_allocations(self, namespace: str) -> list[dict[str, Any]]:
        return self._get("/v1/allocations", namespace or ALL_NAMESPACES)

    def get_allocation(self, alloc_id: str, namespace: str) -> dict[str, Any]:
        return self._get(f"/v1/allocation/{alloc_id}", namespace or ALL_NAMESPACES)

    def _get(self, path: str, namespace: str) -> Any:
        url = f"{self.address}{path}"
        try:
            response = self.session.get(url, params={"namespace": namespace}, timeout=self.timeout)
        except requests.RequestException as e:
            raise SchedulerError(f"Error requesting {url}: {e}") from e

        if response.status_code != 200:
            raise SchedulerError(f"Nomad API request {path} failed (status code {response.status_code}): {response.text}")
        try:
            return response.json()
        except ValueError as e:
            raise SchedulerError(f"Malformed response from {url}: {e}") from e
