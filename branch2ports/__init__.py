from .common import PortResult
from .identity import (
    GitVersionControl,
    StaticVersionControl,
    VersionControl,
    VersionControlError,
    build_seed,
    resolve_branch_name,
    resolve_repository_identity,
)
from .ports import apply_offset, compute_offset, generate_port_numbers

__version__ = "1.0.0"

__all__ = [
    "GitVersionControl",
    "PortResult",
    "StaticVersionControl",
    "VersionControl",
    "VersionControlError",
    "apply_offset",
    "build_seed",
    "compute_offset",
    "generate_port_numbers",
    "resolve_branch_name",
    "resolve_repository_identity",
]
