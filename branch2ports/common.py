from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .constants import ENV_VAR_SUFFIX


@dataclass(frozen=True)
class PortResult:
    service: str
    port: int
    env_var: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service": self.service,
            "port": self.port,
            "env_var": self.env_var,
        }

    def to_env_line(self) -> str:
        return f"{self.env_var}={self.port}"


def env_var_name(service: str) -> str:
    return f"{service.upper()}{ENV_VAR_SUFFIX}"


def json_dumps(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2)


def json_loads(payload: str) -> Any:
    return json.loads(payload)


def configure_logger(
    name: str,
    level: int = logging.INFO,
    pretty: bool = True,
    log_file: Optional[str] = None,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)

    class JsonFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            data = {
                "ts": time.time(),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
            }
            if record.args and isinstance(record.args, dict):
                data.update(record.args)
            return json.dumps(data)

    class PrettyFormatter(logging.Formatter):
        @staticmethod
        def _format_value(value: Any) -> str:
            if value is None:
                return "null"
            if isinstance(value, (int, float, bool)):
                return str(value)
            if isinstance(value, str):
                if value and all(
                    ch.isalnum() or ch in {"-", "_", ".", ":", "/", "@"} for ch in value
                ):
                    return value
                return json.dumps(value, ensure_ascii=True)
            return json.dumps(value, ensure_ascii=True)

        def format(self, record: logging.LogRecord) -> str:
            timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
            millis = int(record.msecs)
            base = f"{timestamp}.{millis:03d} {record.levelname:<5} {record.name} {record.getMessage()}"
            if record.args and isinstance(record.args, dict):
                extras = " ".join(
                    f"{key}={self._format_value(value)}" for key, value in record.args.items()
                )
                if extras:
                    return f"{base} {extras}"
            return base

    formatter: logging.Formatter = PrettyFormatter() if pretty else JsonFormatter()
    if not any(
        isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.FileHandler)
        for handler in logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if log_file and not any(
        isinstance(handler, logging.FileHandler) and getattr(handler, "baseFilename", None) == log_file
        for handler in logger.handlers
    ):
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    for handler in logger.handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logger.propagate = False
    return logger


def resolve_log_file(log_dir: str, log_prefix: str, name: str) -> Optional[str]:
    if not log_dir:
        return None
    os.makedirs(log_dir, exist_ok=True)
    prefix = log_prefix or ""
    if prefix and not prefix.endswith(("-", "_")):
        prefix = f"{prefix}-"
    filename = f"{prefix}{name}.log"
    return os.path.abspath(os.path.join(log_dir, filename))


def format_table(headers: List[str], rows: List[List[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for index, value in enumerate(row):
            widths[index] = max(widths[index], len(value))
    sep = "+-" + "-+-".join("-" * width for width in widths) + "-+"
    lines = [
        sep,
        "| " + " | ".join(f"{header:<{widths[i]}}" for i, header in enumerate(headers)) + " |",
        sep,
    ]
    for row in rows:
        lines.append(
            "| " + " | ".join(f"{value:<{widths[i]}}" for i, value in enumerate(row)) + " |"
        )
    lines.append(sep)
    return "\n".join(lines)
