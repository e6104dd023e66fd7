"""Command line entry point for the FSM interpreter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from fsm_interpreter.app.driver import SEPARATOR, ConsoleDriver, format_table
from fsm_interpreter.config import Config, default_config, load_config
from fsm_interpreter.infra import DefinitionError, configure_logging, install_exception_hook
from fsm_interpreter.state_machine import check_definition, create_engine
from fsm_interpreter.utils.names import NameRegistry

logger = logging.getLogger("app.main")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fsm-interpreter",
        description="Walk a finite state machine with event names read from stdin.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML/JSON machine configuration (default: built-in traffic light).",
    )
    parser.add_argument(
        "--variant",
        choices=("table", "objects"),
        default="table",
        help="Engine implementation: table lookup or one object per state.",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("run", help="Print the table, then apply events read from stdin.")
    subparsers.add_parser("table", help="Print the transition table and exit.")
    subparsers.add_parser("check", help="Report problems in the machine definition.")
    parser.set_defaults(command="run")
    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> Config:
    if args.config is None:
        return default_config()
    return load_config(args.config)


def run(config: Config, variant: str, stdin: TextIO, stdout: TextIO) -> int:
    definition = config.machine
    registry = NameRegistry.from_definition(definition)
    engine = create_engine(definition, variant=variant)
    driver = ConsoleDriver(engine, registry, stdout)

    logger.info("Starting machine '%s' with the %s engine", definition.name, variant)
    stdout.write(format_table(definition.table, registry) + "\n")
    stdout.write(SEPARATOR + "\n")
    driver.announce()
    stdout.write(SEPARATOR + "\n")
    try:
        driver.run(stdin)
    except KeyboardInterrupt:
        logger.info("Interrupted by user (Ctrl+C).")
    return 0


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        config = _load(args)
    except DefinitionError as exc:
        if args.command == "check":
            for diagnostic in exc.diagnostics:
                stdout.write(f"{diagnostic}\n")
            return 1
        print(f"Cannot load configuration: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"Cannot load configuration: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.logging)
    install_exception_hook()
    logger.info("Configuration loaded from %s", args.config or "built-in defaults")

    if args.command == "table":
        registry = NameRegistry.from_definition(config.machine)
        stdout.write(format_table(config.machine.table, registry) + "\n")
        return 0

    if args.command == "check":
        diagnostics = check_definition(config.machine)
        for diagnostic in diagnostics:
            stdout.write(f"{diagnostic}\n")
        return 1 if any(diagnostic.is_error for diagnostic in diagnostics) else 0

    return run(config, args.variant, stdin, stdout)


if __name__ == "__main__":
    sys.exit(main())
