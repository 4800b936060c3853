from __future__ import annotations

from typing import List

from packaging.version import InvalidVersion, Version

from .models import BiocVersion, OsIdentity, ServerStatus
from .urls import match_distro


def sorted_bioc_versions(versions: List[BiocVersion]) -> List[BiocVersion]:
    """Newest Bioconductor release first; unparseable versions keep server order at the end."""
    parsed = []
    unparsed = []
    for entry in versions:
        try:
            parsed.append((Version(entry.bioc_version), entry))
        except InvalidVersion:
            unparsed.append(entry)
    parsed.sort(key=lambda item: item[0], reverse=True)
    return [entry for _, entry in parsed] + unparsed


def format_status(server: str, status: ServerStatus, identity: OsIdentity) -> List[str]:
    lines = [
        f"Server: {server}",
        f"Version: {status.version} (built {status.build_date})",
        f"R configured: {_yes_no(status.r_configured)}",
        f"Binaries enabled: {_yes_no(status.binaries_enabled)}",
        f"Default repository: {status.default_repo}",
        f"Distributions (local OS {identity.label}):",
    ]
    matched = match_distro(identity, status.distros)
    for distro in status.distros:
        marker = "*" if distro is matched else "-"
        lines.append(
            f"  {marker} {distro.distribution} {distro.release} ({distro.display_name}) "
            f"binaries={_yes_no(distro.binaries_supported)} sysreqs={_yes_no(distro.sys_reqs_supported)}"
        )
    if status.bioc_versions:
        lines.append("Bioconductor versions:")
        for entry in sorted_bioc_versions(status.bioc_versions):
            lines.append(f"  - {entry.bioc_version} (R {entry.r_version}, CRAN snapshot {entry.cran_snapshot})")
    return lines


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"
