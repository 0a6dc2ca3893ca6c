"""
npm registry handler.
Looks up the ``latest`` dist-tag of a package without downloading it.
"""

import json
import logging
import time
from typing import Optional
from urllib.parse import quote

import requests

from .base_handler import BaseHandler
from ..models.check_result import PackageOutcome, PackageUpdate
from ..models.package_spec import NpmSpec
from ..utils.version import is_newer

DEFAULT_REGISTRY_URL = 'https://registry.npmjs.org'
DEFAULT_TIMEOUT = 4.5
DEFAULT_USER_AGENT = 'pinwatch/1.0'
# small reads return as bytes arrive, so the deadline is checked between them
READ_CHUNK_SIZE = 1

logger = logging.getLogger(__name__)


def _read_body(response: requests.Response, deadline: float) -> Optional[bytes]:
    """Read the streamed body, giving up once ``deadline`` has passed."""
    chunks = []
    for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
        if time.monotonic() > deadline:
            return None
        chunks.append(chunk)
    return b''.join(chunks)


def fetch_latest_npm_version(
    name: str,
    timeout: float = DEFAULT_TIMEOUT,
    registry_url: str = DEFAULT_REGISTRY_URL,
    user_agent: str = DEFAULT_USER_AGENT
) -> Optional[str]:
    """
    Fetch the latest published version of an npm package.

    ``timeout`` bounds the whole call, body included; a registry that
    trickles its response is abandoned once the deadline passes.

    Args:
        name: Package name, optionally scoped (``@scope/pkg``)
        timeout: Seconds before the request is abandoned
        registry_url: Registry base URL
        user_agent: User-Agent header value

    Returns:
        Version string, or None when it could not be determined
    """
    url = f"{registry_url.rstrip('/')}/{quote(name, safe='')}/latest"
    deadline = time.monotonic() + timeout
    try:
        logger.debug(f"GET {url}")
        response = requests.get(
            url,
            headers={'User-Agent': user_agent, 'Accept': 'application/json'},
            timeout=timeout,
            stream=True
        )
        try:
            if not response.ok:
                logger.warning(f"Registry returned {response.status_code} for {name}")
                return None

            body = _read_body(response, deadline)
        finally:
            response.close()

        if body is None:
            logger.warning(f"Request for {name} timed out after {timeout}s")
            return None

        version = json.loads(body).get('version')
    except requests.exceptions.RequestException as e:
        logger.warning(f"Request for {name} failed: {e}")
        return None
    except (ValueError, AttributeError) as e:
        logger.warning(f"Unreadable registry response for {name}: {e}")
        return None

    return version if isinstance(version, str) and version else None


class NpmHandler(BaseHandler):
    """Handler for specs pinned to an npm registry version."""

    def get_kind(self) -> str:
        return "npm"

    def fetch_latest_version(self, name: str) -> Optional[str]:
        return fetch_latest_npm_version(
            name,
            timeout=self.get_setting('npm', 'timeout', DEFAULT_TIMEOUT),
            registry_url=self.get_setting('npm', 'registry_url', DEFAULT_REGISTRY_URL),
            user_agent=self.get_setting('npm', 'user_agent', DEFAULT_USER_AGENT),
        )

    def check(self, spec: NpmSpec) -> PackageOutcome:
        if not spec.version:
            return PackageOutcome.unpinned(spec.name)

        latest = self.fetch_latest_version(spec.name)
        if not latest:
            self.handle_error(spec.name)
            return PackageOutcome.failed(spec.name, f"Failed to check {spec.name}")

        if is_newer(latest, spec.version):
            self.logger.info(f"{spec.name}: {spec.version} -> {latest}")
            return PackageOutcome.updated(PackageUpdate(
                name=spec.name,
                current=spec.version,
                latest=latest,
                source=spec.source,
            ))

        return PackageOutcome.up_to_date(spec.name)
