from __future__ import annotations

import hashlib
import logging
from typing import List, Mapping, Optional

from .common import PortResult, env_var_name
from .constants import DIGEST_PREFIX_CHARS
from .identity import (
    VersionControl,
    build_seed,
    resolve_branch_name,
    resolve_repository_identity,
)

logger = logging.getLogger(__name__)


def compute_offset(seed: str, range_size: int) -> int:
    """Map ``seed`` onto ``[0, range_size)``.

    The first 32 bits of the md5 digest are reduced modulo the range. Changing
    the digest would move every existing checkout to new ports.
    """
    if isinstance(range_size, bool) or not isinstance(range_size, int):
        raise TypeError("range_size must be an integer")
    if range_size <= 0:
        raise ValueError("range_size must be positive")

    digest = hashlib.md5(seed.encode("utf-8")).hexdigest()
    return int(digest[:DIGEST_PREFIX_CHARS], 16) % range_size


def apply_offset(base_ports: Mapping[str, int], offset: int) -> List[PortResult]:
    return [
        PortResult(service=service, port=base + offset, env_var=env_var_name(service))
        for service, base in base_ports.items()
    ]


def generate_port_numbers(
    base_ports: Mapping[str, int],
    offset_range: int,
    vcs: Optional[VersionControl] = None,
) -> List[PortResult]:
    repository = resolve_repository_identity(vcs)
    branch = resolve_branch_name(vcs)
    seed = build_seed(repository, branch)

    logger.info("repository", {"identity": repository})
    logger.info("branch", {"branch": branch or "(unknown)"})
    logger.info("seed", {"seed": seed})

    offset = compute_offset(seed, offset_range)
    logger.info("offset", {"offset": offset, "range": offset_range})
    return apply_offset(base_ports, offset)
