from __future__ import annotations

import logging
import os
from typing import Sequence

from .common import PortResult, format_table

logger = logging.getLogger(__name__)


def generate_env_content(results: Sequence[PortResult]) -> str:
    # An empty result set still renders the trailing newline.
    return "\n".join(result.to_env_line() for result in results) + "\n"


def write_ports_to_file(results: Sequence[PortResult], output_path: str) -> str:
    content = generate_env_content(results)
    full_path = os.path.abspath(output_path)
    with open(full_path, "w", encoding="utf-8") as handle:
        handle.write(content)

    for result in results:
        logger.debug("port", result.to_dict())
    rows = [[result.env_var, str(result.port), result.service] for result in results]
    logger.info(
        "ports_written\n%s",
        format_table(["env_var", "port", "service"], rows),
    )
    logger.info("output", {"path": output_path, "count": len(results)})
    return full_path
