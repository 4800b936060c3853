from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from .errors import DetectionError, OsReleaseReadError
from .models import OsIdentity

LOG = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


def detect_os(
    os_name: Optional[str] = None,
    os_version: Optional[str] = None,
    *,
    os_release_path: Path = OS_RELEASE_PATH,
) -> OsIdentity:
    """Return the distribution and release to ask the server about.

    Explicit overrides are returned verbatim; otherwise ID and VERSION_ID are
    read from the os-release file.
    """
    if os_name is not None and os_version is not None:
        LOG.debug("Using OS override %s-%s", os_name, os_version)
        return OsIdentity(distribution=os_name, release=os_version)
    if os_name is not None or os_version is not None:
        LOG.warning("Both --os-name and --os-version are needed to override detection; reading %s", os_release_path)

    try:
        text = Path(os_release_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise OsReleaseReadError(os_release_path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise OsReleaseReadError(os_release_path, str(exc)) from exc

    attributes = parse_os_release(text)
    distribution = attributes.get("ID")
    release = attributes.get("VERSION_ID")
    if distribution is None or release is None:
        missing = [key for key, value in (("ID", distribution), ("VERSION_ID", release)) if value is None]
        raise DetectionError(os_release_path, missing)

    LOG.debug("Detected OS %s-%s from %s", distribution, release, os_release_path)
    return OsIdentity(distribution=distribution, release=release)


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse KEY=value lines, skipping anything that is not exactly one assignment."""
    attributes: Dict[str, str] = {}
    for line in text.splitlines():
        parts = line.split("=")
        if len(parts) != 2:
            continue
        key, value = parts
        attributes[_unquote(key)] = _unquote(value)
    return attributes


def _unquote(value: str) -> str:
    return value.strip("\"'")
