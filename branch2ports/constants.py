from __future__ import annotations

from typing import Dict

DEFAULT_CONFIG_FILE = ".branch2ports"
DEFAULT_OUTPUT_FILE = ".env"
DEFAULT_OFFSET_RANGE = 1000

DEFAULT_BASE_PORTS: Dict[str, int] = {
    "frontend": 3000,
    "backend": 5000,
    "database": 5432,
}

MIN_PORT = 1
MAX_PORT = 65535

SEED_SEPARATOR = "-"
ENV_VAR_SUFFIX = "_PORT"

# Width of the digest prefix interpreted as the unsigned offset source.
DIGEST_PREFIX_CHARS = 8

GIT_TIMEOUT_SEC = 5.0
