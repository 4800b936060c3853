from __future__ import annotations

import logging
from typing import Iterable, Optional

from .errors import RepositoryNotFoundError
from .models import Repository

LOG = logging.getLogger(__name__)


def resolve_repository(requested: Optional[str], catalog: Iterable[Repository], default_name: str) -> Repository:
    """Pick the requested repository, or the server default, by exact (case-sensitive) name."""
    name = requested if requested is not None else default_name
    if requested is None:
        LOG.debug("No repository requested; using server default %s", default_name)
    for repo in catalog:
        if repo.name == name:
            return repo
    raise RepositoryNotFoundError(name)
