from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Iterable, List, Sequence, Tuple, TypeVar

from .errors import ResponseFormatError, ServerUnreachableError
from .models import (
    OsIdentity,
    Repository,
    ServerStatus,
    SystemRequirement,
    repositories_from_api,
    requirements_from_api,
)

LOG = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_TIMEOUT = 10  # seconds
SYSREQS_TIMEOUT = 60  # seconds


class ServerClient:
    """Read-only wrapper around the package manager `__api__` endpoints."""

    def __init__(self, server: str, *, status_timeout: float = STATUS_TIMEOUT, sysreqs_timeout: float = SYSREQS_TIMEOUT):
        self.server = server
        self.status_timeout = status_timeout
        self.sysreqs_timeout = sysreqs_timeout

    def status(self) -> ServerStatus:
        url = f"{self.server}/__api__/status"
        return self._get(url, ServerStatus.from_api, timeout=self.status_timeout)

    def repositories(self) -> List[Repository]:
        url = f"{self.server}/__api__/repos"
        return self._get(url, repositories_from_api, timeout=self.status_timeout)

    def system_requirements(
        self,
        identity: OsIdentity,
        repo_id: int,
        packages: Sequence[str],
    ) -> List[SystemRequirement]:
        url = sysreqs_url(self.server, repo_id, identity, packages)
        return self._get(url, requirements_from_api, timeout=self.sysreqs_timeout)

    def _get(self, url: str, parse: Callable[[Any], T], *, timeout: float) -> T:
        LOG.debug("GET %s (timeout %ss)", url, timeout)
        try:
            req = urllib.request.Request(url, method="GET")
            req.add_header("Accept", "application/json")
            with urllib.request.urlopen(req, timeout=timeout) as resp:  # noqa: S310
                if resp.status < 200 or resp.status > 299:
                    raise ServerUnreachableError(url, f"HTTP {resp.status}")
                body = resp.read()
        except urllib.error.HTTPError as exc:
            raise ServerUnreachableError(url, f"HTTP {exc.code}") from exc
        except urllib.error.URLError as exc:
            raise ServerUnreachableError(url, str(exc.reason)) from exc
        except (TimeoutError, OSError) as exc:
            raise ServerUnreachableError(url, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            # malformed server URL, e.g. no scheme
            raise ServerUnreachableError(url, str(exc)) from exc

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise ResponseFormatError(url, str(exc)) from exc
        try:
            return parse(payload)
        except KeyError as exc:
            raise ResponseFormatError(url, f"missing field {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise ResponseFormatError(url, str(exc)) from exc


def sysreqs_url(server: str, repo_id: int, identity: OsIdentity, packages: Iterable[str]) -> str:
    params: List[Tuple[str, str]] = [
        ("distribution", identity.distribution),
        ("release", identity.release),
    ]
    params.extend(("pkgname", name) for name in packages)
    return f"{server}/__api__/repos/{repo_id}/sysreqs?{urllib.parse.urlencode(params)}"
