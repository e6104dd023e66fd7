"""Configuration loader utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, TextIO

import yaml

from fsm_interpreter.infra.exceptions import DefinitionError
from fsm_interpreter.state_machine.model import MachineDefinition, TransitionTable
from fsm_interpreter.state_machine.validation import check_definition

from .defaults import traffic_light_definition
from .models import Config, LoggingConfig

logger = logging.getLogger("fsm.config")

_PARSERS: Dict[str, Callable[[TextIO], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _read_document(path: Path) -> Dict[str, Any]:
    """Parse a YAML or JSON machine file into its top-level mapping.

    Syntax errors from either parser surface as ``ValueError`` so callers
    handle one exception type for every malformed file.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found at {path}")
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise ValueError(f"Unsupported config format: {path.suffix}")

    with path.open("r", encoding="utf-8") as stream:
        try:
            document = parser(stream)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValueError(f"Cannot parse {path.name}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"{path.name} must hold a mapping with 'machine' and 'logging' sections.")
    return document


def default_config() -> Config:
    """Return the built-in traffic light with default logging."""
    return Config(machine=traffic_light_definition())


def load_config(config_path: Path | str) -> Config:
    """Load a machine definition and logging settings from a YAML or JSON file."""

    config_path = Path(config_path)
    raw = _read_document(config_path)

    machine_raw = raw.get("machine")
    machine = traffic_light_definition() if machine_raw is None else load_machine(machine_raw)
    logging_config = _load_logging(raw.get("logging") or {}, config_path.parent)

    logger.debug("Loaded machine '%s' from %s", machine.name, config_path)
    return Config(machine=machine, logging=logging_config)


def _load_logging(raw: Mapping[str, Any], base_dir: Path) -> LoggingConfig:
    if not isinstance(raw, Mapping):
        raise ValueError("The 'logging' section must be a mapping.")
    options = dict(raw)

    # an explicit null keeps logging on the console only
    if options.get("filepath") is not None:
        # Relative log paths follow the config file, not the working directory.
        options["filepath"] = (base_dir / str(options["filepath"])).resolve()

    loggers = options.get("loggers")
    if loggers is not None:
        if not isinstance(loggers, Mapping):
            raise ValueError("'logging.loggers' must map logger names to levels.")
        options["loggers"] = {str(name): str(level).upper() for name, level in loggers.items()}

    try:
        return LoggingConfig(**options)
    except TypeError as exc:
        raise ValueError(f"Invalid logging section: {exc}") from exc


def load_machine(raw: Mapping[str, Any]) -> MachineDefinition:
    """Build and check a machine definition from its raw config section.

    Raises :class:`DefinitionError` carrying the error diagnostics when the
    definition is inconsistent; warnings and hints are only logged.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("The 'machine' section must be a mapping.")

    try:
        initial_state = str(raw["initial_state"])
    except KeyError as exc:
        raise ValueError("The 'machine' section must name an 'initial_state'.") from exc

    table = _load_table(raw.get("transitions") or {}).freeze()
    definition = MachineDefinition.build(
        name=str(raw.get("name", "StateMachine")),
        initial_state=initial_state,
        table=table,
        states=_name_list(raw, "states"),
        events=_name_list(raw, "events"),
    )

    diagnostics = check_definition(definition)
    errors = [diagnostic for diagnostic in diagnostics if diagnostic.is_error]
    if errors:
        raise DefinitionError(
            f"Machine '{definition.name}' is invalid: " + "; ".join(d.message for d in errors),
            errors,
        )
    for diagnostic in diagnostics:
        logger.info("%s", diagnostic)
    return definition


def _name_list(raw: Mapping[str, Any], key: str) -> list[str] | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list of names.")
    return [str(item) for item in value]


def _load_table(raw_transitions: Any) -> TransitionTable:
    if isinstance(raw_transitions, Mapping):
        table = TransitionTable()
        for state, edges in raw_transitions.items():
            if edges is None:
                continue
            if not isinstance(edges, Mapping):
                raise ValueError(f"Transitions of state '{state}' must be a mapping of event to state.")
            for event, next_state in edges.items():
                table.define(str(state), str(event), str(next_state))
        return table

    if isinstance(raw_transitions, list):
        table = TransitionTable()
        for entry in raw_transitions:
            if not isinstance(entry, (list, tuple)) or len(entry) != 3:
                raise ValueError(f"Transition entry {entry!r} must be [state, event, next_state].")
            state, event, next_state = entry
            table.define(str(state), str(event), str(next_state))
        return table

    raise ValueError("'transitions' must be a mapping or a list of triples.")
