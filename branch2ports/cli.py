from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .common import configure_logger, resolve_log_file
from .config import ConfigError, load_config
from .constants import DEFAULT_CONFIG_FILE
from .identity import VersionControl
from .init import init_config
from .ports import generate_port_numbers
from .writer import write_ports_to_file

COMMANDS = {"generate", "init"}
GLOBAL_FLAGS = {"--debug", "--json-logs"}
GLOBAL_OPTIONS = {"--log-dir", "--log-prefix"}


def generate_ports(
    config_path: str = DEFAULT_CONFIG_FILE,
    output: Optional[str] = None,
    vcs: Optional[VersionControl] = None,
) -> str:
    config = load_config(config_path)
    output_file = output or config.output_file
    results = generate_port_numbers(config.base_port, config.offset_range, vcs=vcs)
    return write_ports_to_file(results, output_file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branch2ports",
        description=(
            "Generate port numbers from the current repository and branch "
            "and write them to an env file"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--json-logs", action="store_true")
    parser.add_argument("--log-dir", default="")
    parser.add_argument("--log-prefix", default="")

    subparsers = parser.add_subparsers(dest="command")
    generate = subparsers.add_parser(
        "generate", help="Generate port numbers and write to output file"
    )
    generate.add_argument("-c", "--config", default=DEFAULT_CONFIG_FILE)
    generate.add_argument("-o", "--output", default=None)

    init = subparsers.add_parser("init", help="Create configuration file interactively")
    init.add_argument("-c", "--config", default=DEFAULT_CONFIG_FILE)

    parser.set_defaults(command="generate", config=DEFAULT_CONFIG_FILE, output=None)
    return parser


def _with_default_command(argv: List[str]) -> List[str]:
    index = 0
    while index < len(argv):
        token = argv[index]
        if token in GLOBAL_FLAGS:
            index += 1
        elif token in GLOBAL_OPTIONS:
            index += 2
        elif token.split("=", 1)[0] in GLOBAL_OPTIONS:
            index += 1
        elif token in COMMANDS or token in {"-h", "--help", "--version"}:
            return argv
        else:
            return [*argv[:index], "generate", *argv[index:]]
    return argv


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(_with_default_command(list(argv)))
    try:
        log_file = resolve_log_file(args.log_dir, args.log_prefix, "branch2ports")
        logger = configure_logger(
            "branch2ports",
            logging.DEBUG if args.debug else logging.INFO,
            pretty=not args.json_logs,
            log_file=log_file,
        )
    except OSError as exc:
        print(f"branch2ports: cannot open log file: {exc}", file=sys.stderr)
        return 1

    try:
        if args.command == "init":
            init_config(args.config)
        else:
            generate_ports(args.config, args.output)
            logger.info("port generation completed")
    except (ConfigError, ValueError, OSError) as exc:
        logger.error("error", {"command": args.command, "error": str(exc)})
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
