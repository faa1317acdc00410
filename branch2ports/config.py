from __future__ import annotations

import logging
import os
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .common import json_dumps, json_loads
from .constants import (
    DEFAULT_BASE_PORTS,
    DEFAULT_OFFSET_RANGE,
    DEFAULT_OUTPUT_FILE,
    MAX_PORT,
    MIN_PORT,
)

logger = logging.getLogger(__name__)

UNSAFE_PATH_CHARS = frozenset('<>|;$`&"\'')


class ConfigError(Exception):
    """Raised for configuration that cannot be used to compute ports."""


def validate_file_path(value: str) -> str:
    if not value or not value.strip():
        raise ConfigError("file path must not be empty")
    if value.startswith("~"):
        raise ConfigError(f"home-relative paths are not allowed: {value}")
    if os.path.isabs(value) or value.startswith(("/", "\\")):
        raise ConfigError(f"absolute paths are not allowed: {value}")
    parts = value.replace("\\", "/").split("/")
    if ".." in parts:
        raise ConfigError(f"parent directory references are not allowed: {value}")
    bad = sorted({ch for ch in value if ch in UNSAFE_PATH_CHARS or ord(ch) < 32})
    if bad:
        raise ConfigError(f"unsafe characters {''.join(bad)!r} in file path: {value}")
    return value


class Config(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_port: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_BASE_PORTS), alias="basePort"
    )
    output_file: str = Field(default=DEFAULT_OUTPUT_FILE, alias="outputFile")
    offset_range: int = Field(default=DEFAULT_OFFSET_RANGE, alias="offsetRange", gt=0)

    @field_validator("base_port")
    @classmethod
    def _check_ports(cls, value: Dict[str, int]) -> Dict[str, int]:
        for service, port in value.items():
            if not service.strip():
                raise ValueError("service names must not be empty")
            if not MIN_PORT <= port <= MAX_PORT:
                raise ValueError(
                    f"port for {service!r} must be between {MIN_PORT} and {MAX_PORT}, got {port}"
                )
        return value

    @field_validator("output_file")
    @classmethod
    def _check_output_file(cls, value: str) -> str:
        try:
            return validate_file_path(value)
        except ConfigError as exc:
            raise ValueError(str(exc)) from exc

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def default_config() -> Config:
    return Config()


def merge_config(user_config: Dict[str, Any]) -> Config:
    merged = default_config().to_dict()
    for key, value in user_config.items():
        if key == "basePort" and isinstance(value, dict):
            merged["basePort"] = {**merged["basePort"], **value}
        else:
            merged[key] = value
    try:
        return Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


def load_config(config_path: str) -> Config:
    full_path = os.path.abspath(config_path)
    if not os.path.exists(full_path):
        logger.info("config_not_found", {"path": config_path, "using": "defaults"})
        return default_config()

    try:
        with open(full_path, "r", encoding="utf-8") as handle:
            user_config = json_loads(handle.read())
    except (OSError, ValueError) as exc:
        logger.error("config_load_failed", {"path": config_path, "error": str(exc)})
        logger.info("Using default settings.")
        return default_config()
    if not isinstance(user_config, dict):
        logger.error(
            "config_load_failed",
            {"path": config_path, "error": "top-level JSON value must be an object"},
        )
        logger.info("Using default settings.")
        return default_config()

    config = merge_config(user_config)
    logger.debug("config_loaded", {"path": config_path, **config.to_dict()})
    return config


def save_config(config: Config, config_path: str) -> None:
    with open(config_path, "w", encoding="utf-8") as handle:
        handle.write(json_dumps(config.to_dict()))


def create_default_config(config_path: str) -> Config:
    config = default_config()
    save_config(config, config_path)
    logger.info("config_created", {"path": config_path})
    return config
