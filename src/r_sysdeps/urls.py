from __future__ import annotations

import logging
from typing import Iterable, Optional

from .errors import BinariesDisabledError, UnsupportedOsError
from .models import Distro, OsIdentity, ServerStatus

LOG = logging.getLogger(__name__)


def source_url(server: str, repo_name: str) -> str:
    return f"{server}/{repo_name}/latest"


def match_distro(identity: OsIdentity, distros: Iterable[Distro]) -> Optional[Distro]:
    """Return the first distro serving this OS.

    The server may list a coarser release than the host reports ("20" for
    "20.04"), so the detected release must start with the distro release.
    """
    for distro in distros:
        if distro.distribution == identity.distribution and identity.release.startswith(distro.release):
            return distro
    return None


def binary_url(server: str, repo_name: str, identity: OsIdentity, status: ServerStatus) -> str:
    distro = match_distro(identity, status.distros)
    if distro is None:
        raise UnsupportedOsError(identity)
    LOG.debug("Matched %s to server distro %s (%s)", identity.label, distro.display_name, distro.binary_url_segment)
    if not status.binaries_enabled:
        raise BinariesDisabledError()
    if not distro.binaries_supported:
        raise BinariesDisabledError(identity)
    return f"{server}/{repo_name}/__linux__/{distro.binary_url_segment}/latest"
