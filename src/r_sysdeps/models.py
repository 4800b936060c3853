from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class OsIdentity:
    distribution: str
    release: str

    @property
    def label(self) -> str:
        return f"{self.distribution}-{self.release}"


@dataclass
class Distro:
    binary_display_name: str
    binary_url_segment: str
    display_name: str
    distribution: str
    release: str
    sys_reqs_supported: bool
    binaries_supported: bool

    @classmethod
    def from_api(cls, payload: dict) -> "Distro":
        return cls(
            binary_display_name=_string(payload, "binaryDisplay"),
            binary_url_segment=_string(payload, "binaryURL"),
            display_name=_string(payload, "display"),
            distribution=_string(payload, "distribution"),
            release=_string(payload, "release"),
            sys_reqs_supported=_flag(payload, "sysReqs"),
            binaries_supported=_flag(payload, "binaries"),
        )


@dataclass
class BiocVersion:
    bioc_version: str
    r_version: str
    cran_snapshot: str

    @classmethod
    def from_api(cls, payload: dict) -> "BiocVersion":
        return cls(
            bioc_version=_string(payload, "bioc_version"),
            r_version=_string(payload, "r_version"),
            cran_snapshot=_string(payload, "cran_snapshot"),
        )


@dataclass
class ServerStatus:
    version: str
    build_date: str
    r_configured: bool
    binaries_enabled: bool
    default_repo: str
    distros: List[Distro] = field(default_factory=list)
    bioc_versions: List[BiocVersion] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict) -> "ServerStatus":
        return cls(
            version=_string(payload, "version"),
            build_date=_string(payload, "build_date"),
            r_configured=_flag(payload, "r_configured"),
            binaries_enabled=_flag(payload, "binaries_enabled"),
            default_repo=_string(payload, "cran_repo"),
            distros=[Distro.from_api(item) for item in _items(payload, "distros")],
            bioc_versions=[BiocVersion.from_api(item) for item in _items(payload, "bioc_versions")],
        )


@dataclass
class Repository:
    id: int
    name: str
    kind: str
    description: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "Repository":
        repo_id = payload["id"]
        if isinstance(repo_id, bool) or not isinstance(repo_id, int) or repo_id < 0:
            raise ValueError(f"invalid repository id {repo_id!r}")
        description = payload.get("description")
        if description is not None and not isinstance(description, str):
            raise TypeError("field 'description' must be a string")
        return cls(
            id=repo_id,
            name=_string(payload, "name"),
            kind=_string(payload, "type"),
            description=description,
        )


@dataclass
class Script:
    command: str
    script_body: str

    @classmethod
    def from_api(cls, payload: dict) -> "Script":
        return cls(command=_string(payload, "command"), script_body=_string(payload, "script"))


@dataclass
class SystemRequirement:
    package_name: str
    system_libraries: List[str] = field(default_factory=list)
    pre_install: List[Script] = field(default_factory=list)
    install_scripts: List[str] = field(default_factory=list)
    post_install: List[Script] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict) -> "SystemRequirement":
        details = payload["requirements"]
        if not isinstance(details, dict):
            raise TypeError("field 'requirements' must be an object")
        return cls(
            package_name=_string(payload, "name"),
            system_libraries=_strings(details, "packages"),
            # pre/post install lists are optional on the wire
            pre_install=[Script.from_api(item) for item in details.get("pre_install") or []],
            install_scripts=_strings(details, "install_scripts"),
            post_install=[Script.from_api(item) for item in details.get("post_install") or []],
        )


def requirements_from_api(payload: dict) -> List[SystemRequirement]:
    if not isinstance(payload, dict):
        raise TypeError("expected a JSON object")
    return [SystemRequirement.from_api(item) for item in _items(payload, "requirements")]


def repositories_from_api(payload: list) -> List[Repository]:
    if not isinstance(payload, list):
        raise TypeError("expected a JSON array of repositories")
    return [Repository.from_api(item) for item in payload]


def _string(payload: dict, key: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise TypeError(f"field '{key}' must be a string")
    return value


def _flag(payload: dict, key: str) -> bool:
    value = payload[key]
    if not isinstance(value, bool):
        raise TypeError(f"field '{key}' must be a boolean")
    return value


def _items(payload: dict, key: str) -> list:
    value = payload[key]
    if not isinstance(value, list):
        raise TypeError(f"field '{key}' must be a list")
    return value


def _strings(payload: dict, key: str) -> List[str]:
    values = _items(payload, key)
    if not all(isinstance(value, str) for value in values):
        raise TypeError(f"field '{key}' must be a list of strings")
    return list(values)
