from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from .models import OsIdentity


class SysdepsError(RuntimeError):
    """Base class for every failure that ends an r-sysdeps invocation."""


class OsReleaseReadError(SysdepsError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class DetectionError(SysdepsError):
    def __init__(self, path: Path, missing: Iterable[str]):
        self.path = path
        self.missing = list(missing)
        super().__init__(
            f"failed to detect linux distribution and/or version: {', '.join(self.missing)} not found in {path}"
        )


class ServerUnreachableError(SysdepsError):
    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"failed to reach {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
        self.reason = reason


class ResponseFormatError(SysdepsError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"failed to parse JSON response from {url}: {reason}")
        self.url = url
        self.reason = reason


class RepositoryNotFoundError(SysdepsError):
    def __init__(self, name: str):
        super().__init__(f"Specified repository '{name}' does not exist on the server")
        self.name = name


class UnsupportedOsError(SysdepsError):
    def __init__(self, identity: OsIdentity):
        super().__init__(f"server does not support OS {identity.label}")
        self.identity = identity


class BinariesDisabledError(SysdepsError):
    """Binary repositories are off, either server-wide (identity is None) or for one OS."""

    def __init__(self, identity: Optional[OsIdentity] = None):
        if identity is None:
            message = "binary repositories not enabled on server"
        else:
            message = f"binary repositories not enabled for {identity.label}"
        super().__init__(message)
        self.identity = identity
