from __future__ import annotations

from typing import Iterable, Iterator, List

from .models import SystemRequirement


def render_requirement(requirement: SystemRequirement) -> List[str]:
    """Lines for one package: header, libraries, then pre-install, install and post-install scripts."""
    lines = [
        f"# R package: {requirement.package_name}",
        f"## System libraries: {', '.join(requirement.system_libraries)}",
    ]
    lines.extend(script.script_body for script in requirement.pre_install)
    lines.extend(requirement.install_scripts)
    lines.extend(script.script_body for script in requirement.post_install)
    lines.append("")
    return lines


def render_requirements(requirements: Iterable[SystemRequirement]) -> Iterator[str]:
    for requirement in requirements:
        yield from render_requirement(requirement)
