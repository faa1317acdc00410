from __future__ import annotations

import os
from typing import Callable, Dict, Optional

from .config import Config, ConfigError, save_config, validate_file_path
from .constants import (
    DEFAULT_BASE_PORTS,
    DEFAULT_CONFIG_FILE,
    DEFAULT_OFFSET_RANGE,
    DEFAULT_OUTPUT_FILE,
    MAX_PORT,
    MIN_PORT,
)

Prompt = Callable[[str], str]
Output = Callable[[str], None]


class _Answers:
    def __init__(self, prompt: Prompt) -> None:
        self.prompt = prompt
        self.exhausted = False

    def ask(self, question: str) -> str:
        if self.exhausted:
            return ""
        try:
            return self.prompt(question).strip()
        except EOFError:
            self.exhausted = True
            return ""


def _is_yes(answer: str) -> bool:
    return answer.lower() in {"y", "yes"}


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def _parse_port(value: str) -> Optional[int]:
    port = _parse_int(value)
    if port is None or not MIN_PORT <= port <= MAX_PORT:
        return None
    return port


def init_config(
    config_path: str = DEFAULT_CONFIG_FILE,
    prompt: Prompt = input,
    out: Output = print,
) -> bool:
    validate_file_path(config_path)
    answers = _Answers(prompt)
    out("Creating branch2ports configuration file\n")

    if os.path.exists(config_path):
        overwrite = answers.ask(
            f"Configuration file {config_path} already exists. Overwrite? (y/N): "
        )
        if not _is_yes(overwrite):
            out("Configuration file creation cancelled.")
            return False

    output_file = answers.ask(f"Specify output file name ({DEFAULT_OUTPUT_FILE}): ")
    output_file = validate_file_path(output_file) if output_file else DEFAULT_OUTPUT_FILE

    offset_range = _parse_int(answers.ask(f"Specify offset range ({DEFAULT_OFFSET_RANGE}): "))
    if offset_range is None or offset_range <= 0:
        offset_range = DEFAULT_OFFSET_RANGE

    out("\nConfigure service ports")
    out("Press Enter without input to use default values\n")

    base_port: Dict[str, int] = {}
    for name, port in DEFAULT_BASE_PORTS.items():
        service = answers.ask(f"Service name ({name}): ") or name
        base_port[service] = _parse_port(answers.ask(f"Port number ({port}): ")) or port

    while _is_yes(answers.ask("\nAdd another service? (y/N): ")):
        service = answers.ask("Service name: ")
        if not service:
            out("No service name entered. Skipping.")
            continue
        port = _parse_port(answers.ask("Port number: "))
        if port is None:
            out("Invalid port number. Skipping.")
            continue
        base_port[service] = port

    try:
        config = Config(base_port=base_port, output_file=output_file, offset_range=offset_range)
    except ValueError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
    save_config(config, config_path)

    out(f"\nConfiguration file {config_path} created!")
    out("\nConfiguration:")
    out(f"  Output file: {config.output_file}")
    out(f"  Offset range: {config.offset_range}")
    out("  Services:")
    for service, port in config.base_port.items():
        out(f"    {service}: {port}")
    out("\nReady! Run branch2ports to generate port numbers.")
    return True
