"""Finite state machine interpreter package."""

from __future__ import annotations

from importlib import import_module
from typing import Any

from .state_machine import (
    MachineDefinition,
    Rejected,
    TableEngine,
    Transitioned,
    TransitionTable,
    check_definition,
    create_engine,
)

__all__ = [
    "MachineDefinition",
    "Rejected",
    "StateObjectEngine",
    "TableEngine",
    "Transitioned",
    "TransitionTable",
    "check_definition",
    "create_engine",
]


def __getattr__(name: str) -> Any:
    """Lazily import the python-statemachine backed engine."""
    if name == "StateObjectEngine":
        module = import_module("fsm_interpreter.state_machine.state_objects")
        return getattr(module, "StateObjectEngine")
    raise AttributeError(name)
