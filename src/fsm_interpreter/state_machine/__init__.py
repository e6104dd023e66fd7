"""State machine implementation."""

from .machine import BaseEngine, TableEngine, create_engine
from .model import (
    Event,
    MachineDefinition,
    Outcome,
    Rejected,
    State,
    Transitioned,
    TransitionTable,
    name_of,
)
from .validation import Diagnostic, check_definition

__all__ = [
    "BaseEngine",
    "Diagnostic",
    "Event",
    "MachineDefinition",
    "Outcome",
    "Rejected",
    "State",
    "TableEngine",
    "Transitioned",
    "TransitionTable",
    "check_definition",
    "create_engine",
    "name_of",
]
