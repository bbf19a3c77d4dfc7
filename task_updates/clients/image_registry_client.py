import ipaddress
import logging
import re
from urllib.parse import urljoin

import requests

from task_updates.errors import (
    RegistryError,
    RegistryNotFoundError,
    RegistryTransportError,
    RegistryUnauthorizedError,
)

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
DOCKER_HUB_DOMAIN = "docker.io"
DOCKER_HUB_REGISTRY = "index.docker.io"

_CHALLENGE_PARAM = re.compile(r'(\w+)="([^"]*)"')


class ImageRegistryClient:
    """Anonymous Docker Registry HTTP API v2 client."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout: float = timeout

    @staticmethod
    def split_repository(name: str) -> tuple[str, str]:
        registry, _, path = name.partition("/")
        if not path:
            raise RegistryError(f"Repository name {name} has no registry domain")
        if registry == DOCKER_HUB_DOMAIN:
            registry = DOCKER_HUB_REGISTRY
        return registry, path

    @staticmethod
    def scheme_for(registry: str) -> str:
        if registry.startswith("[") and "]" in registry:
            host = registry[1:registry.index("]")]
        else:
            host = registry.split(":", 1)[0]
        if host == "localhost" or host.endswith(".localhost") or host.endswith(".local"):
            return "http"
        try:
            address = ipaddress.ip_address(host)
        except ValueError:
            return "https"
        return "http" if address.is_private or address.is_loopback else "https"

    def list_tags(self, name: str) -> list[str]:
        registry, path = self.split_repository(name)
        url = f"{self.scheme_for(registry)}://{registry}/v2/{path}/tags/list"
        scope = f"repository:{path}:pull"

        tags: list[str] = []
        headers: dict[str, str] = {}
        while url:
            response = self._get(url, headers)
            if response.status_code == 401 and "Authorization" not in headers:
                token = self._anonymous_token(response, scope)
                if token:
                    headers["Authorization"] = f"Bearer {token}"
                    response = self._get(url, headers)
            self._check_response(response, name)

            try:
                tags.extend(response.json().get("tags") or [])
            except (ValueError, AttributeError) as e:
                raise RegistryError(f"Malformed tag list for {name}: {e}") from e

            next_link = response.links.get("next", {}).get("url")
            url = urljoin(url, next_link) if next_link else None

        logger.debug(f"Listed {len(tags)} tags for {name}")
        return tags

    def _get(self, url: str, headers: dict[str, str], params: dict[str, str] | None = None) -> requests.Response:
        try:
            return requests.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RegistryTransportError(f"Error requesting {url}: {e}") from e

    def _anonymous_token(self, response: requests.Response, scope: str) -> str | None:
        challenge = response.headers.get("WWW-Authenticate", "")
        if not challenge.lower().startswith("bearer "):
            return None

        params = dict(_CHALLENGE_PARAM.findall(challenge))
        realm = params.pop("realm", None)
        if not realm:
            return None
        params.setdefault("scope", scope)

        token_response = self._get(realm, {}, params=params)
        if token_response.status_code != 200:
            logger.warning(f"Token request to {realm} failed with status code {token_response.status_code}")
            return None
        try:
            body = token_response.json()
        except ValueError as e:
            raise RegistryError(f"Malformed token response from {realm}: {e}") from e
        return body.get("token") or body.get("access_token")

    @staticmethod
    def _check_response(response: requests.Response, name: str) -> None:
        if response.status_code == 200:
            return
        message = f"Listing tags for {name} failed (status code {response.status_code})"
        if response.status_code == 404:
            raise RegistryNotFoundError(message)
        if response.status_code in (401, 403):
            raise RegistryUnauthorizedError(message)
        raise RegistryError(message)
