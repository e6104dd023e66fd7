"""Static checks over a machine definition."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Literal

from .model import MachineDefinition, name_of

Severity = Literal["error", "warning", "hint"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One finding about a definition."""

    severity: Severity
    code: str
    message: str
    subject: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        return f"{self.severity}: {self.message}"


def check_definition(definition: MachineDefinition) -> List[Diagnostic]:
    """Return every diagnostic for ``definition``; an empty list means it is clean."""
    diagnostics: List[Diagnostic] = []
    states = set(definition.states)
    events = set(definition.events)
    table = definition.table

    if definition.initial_state not in states:
        diagnostics.append(
            Diagnostic(
                "error",
                "unknown-initial-state",
                f"Initial state '{name_of(definition.initial_state)}' is not a declared state",
                name_of(definition.initial_state),
            )
        )

    for state in table.states():
        if state not in states:
            diagnostics.append(
                Diagnostic(
                    "error",
                    "undeclared-state",
                    f"Transition table references undeclared state '{name_of(state)}'",
                    name_of(state),
                )
            )

    for event in table.events():
        if event not in events:
            diagnostics.append(
                Diagnostic(
                    "error",
                    "undeclared-event",
                    f"Transition table references undeclared event '{name_of(event)}'",
                    name_of(event),
                )
            )

    # states and events share one namespace
    occurrences = Counter(name_of(symbol) for symbol in (*definition.states, *definition.events))
    for name, count in occurrences.items():
        if count > 1:
            diagnostics.append(
                Diagnostic("error", "duplicate-identifier", f"Duplicate identifier name: {name}", name)
            )

    for state in definition.states:
        name = name_of(state)
        if name and name[0].upper() != name[0]:
            diagnostics.append(
                Diagnostic(
                    "warning",
                    "state-name-uppercase",
                    f"State name '{name}' should start with a capital letter",
                    name,
                )
            )

    reachable = set(table.reachable_from(definition.initial_state))
    for state in definition.states:
        if state not in reachable:
            diagnostics.append(
                Diagnostic("hint", "unreached-state", f"Unreached state: {name_of(state)}", name_of(state))
            )

    used_events = set(table.events())
    for event in definition.events:
        if event not in used_events:
            diagnostics.append(
                Diagnostic("warning", "unreached-event", f"Unreached event: {name_of(event)}", name_of(event))
            )

    return diagnostics
