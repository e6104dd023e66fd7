"""Line-oriented console driver feeding events into an engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO, Union

from fsm_interpreter.state_machine.machine import BaseEngine
from fsm_interpreter.state_machine.model import Outcome, TransitionTable
from fsm_interpreter.utils.names import NameRegistry

logger = logging.getLogger("fsm.driver")

SEPARATOR = "-" * 36


@dataclass(frozen=True, slots=True)
class UnknownEventName:
    """A token that does not name any event of the machine."""

    token: str

    @property
    def message(self) -> str:
        return f"Event {self.token} is not determined for the statemachine."


LineResult = Union[Outcome, UnknownEventName]


def format_table(table: TransitionTable, registry: NameRegistry) -> str:
    """Render the table as one block per source state."""
    lines: list[str] = []
    for state in table.sources():
        lines.append(f"{registry.state_name(state)} :: ")
        for event, next_state in table.transitions_from(state).items():
            lines.append(f"    {registry.event_name(event)} -> {registry.state_name(next_state)}")
    return "\n".join(lines)


class ConsoleDriver:
    """Resolve one event name per line, apply it and report the result."""

    def __init__(self, engine: BaseEngine, registry: NameRegistry, output: TextIO) -> None:
        self._engine = engine
        self._registry = registry
        self._output = output

    @property
    def engine(self) -> BaseEngine:
        return self._engine

    def announce(self) -> None:
        """Write the current state."""
        state = self._registry.state_name(self._engine.current_state)
        self._write(f"Your current state is {state}.")

    def handle_line(self, line: str) -> Optional[LineResult]:
        """Process one input line; blank lines are ignored and return None."""
        token = line.strip()
        if not token:
            return None

        event = self._registry.resolve_event(token)
        if event is None:
            result = UnknownEventName(token)
            logger.info("Unknown event name %r", token)
            self._write(result.message)
            return result

        outcome = self._engine.apply(event)
        if outcome.accepted:
            self._write(f"New state is {self._registry.state_name(outcome.next_state)}.")
        else:
            self._write(
                f"There is no event {self._registry.event_name(outcome.event)} "
                f"for the state {self._registry.state_name(outcome.state)}."
            )
        return outcome

    def run(self, lines: Iterable[str]) -> int:
        """Feed every line to the engine and return the number of events applied."""
        applied = 0
        for line in lines:
            result = self.handle_line(line)
            if result is not None and not isinstance(result, UnknownEventName):
                applied += 1
        logger.info(
            "Input exhausted after %d events; final state %s",
            applied,
            self._registry.state_name(self._engine.current_state),
        )
        return applied

    def _write(self, text: str) -> None:
        self._output.write(text + "\n")
        self._output.flush()
