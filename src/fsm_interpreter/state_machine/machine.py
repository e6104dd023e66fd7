"""Core state-machine implementation."""

from __future__ import annotations

import abc
import logging
from collections import deque
from typing import Callable, Deque, Iterable, Literal, MutableSequence, Optional, Union

from .model import (
    Event,
    MachineDefinition,
    Outcome,
    Rejected,
    State,
    Transitioned,
    TransitionTable,
)

Listener = Callable[[Outcome], None]
Variant = Literal["table", "objects"]

logger = logging.getLogger("fsm.engine")


class BaseEngine(abc.ABC):
    """Bookkeeping shared by every engine: listeners, history and reset.

    The table is frozen on construction, so every engine built from it sees
    the same transitions for its whole lifetime.
    """

    def __init__(self, table: TransitionTable, initial_state: State, history_size: int = 64) -> None:
        self._table = table.freeze()
        self._initial_state = initial_state
        self._listeners: MutableSequence[Listener] = []
        self._history: Deque[Outcome] = deque(maxlen=history_size)

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def initial_state(self) -> State:
        return self._initial_state

    @property
    @abc.abstractmethod
    def current_state(self) -> State:
        """Return the state the machine is in."""

    @abc.abstractmethod
    def apply(self, event: Event) -> Outcome:
        """Apply one event and report the outcome."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Return to the initial state."""

    def add_listener(self, listener: Listener) -> None:
        """Register a listener that receives every outcome."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def history(self) -> Iterable[Outcome]:
        """Return an iterable snapshot of the most recent outcomes."""
        return tuple(self._history)

    def _record(self, outcome: Outcome) -> Outcome:
        if outcome.accepted:
            logger.debug("Transition %s", outcome.message)
        else:
            logger.debug("Rejected: %s", outcome.message)
        self._history.append(outcome)
        for listener in tuple(self._listeners):
            listener(outcome)
        return outcome


class TableEngine(BaseEngine):
    """Finite state machine driven by a :class:`TransitionTable`.

    The engine never checks that events or states belong to a declared set:
    any pair without a table entry, including one that names an unknown event,
    is rejected and leaves the current state untouched.
    """

    def __init__(
        self,
        table: TransitionTable,
        initial_state: State,
        history_size: int = 64,
    ) -> None:
        super().__init__(table, initial_state, history_size)
        self._current_state = initial_state

    @property
    def current_state(self) -> State:
        return self._current_state

    def apply(self, event: Event) -> Outcome:
        """Apply one event to the current state."""
        previous_state = self._current_state
        next_state = self._table.lookup(previous_state, event)

        if next_state is None:
            return self._record(Rejected(event=event, state=previous_state))

        self._current_state = next_state
        return self._record(
            Transitioned(event=event, previous_state=previous_state, next_state=next_state)
        )

    def reset(self) -> None:
        """Reset the machine to the initial state."""
        self._current_state = self._initial_state


def create_engine(
    source: Union[MachineDefinition, TransitionTable],
    initial_state: Optional[State] = None,
    variant: Variant = "table",
    history_size: int = 64,
) -> BaseEngine:
    """Build an engine of the requested variant from a definition or a bare table.

    The table is frozen as a side effect; see :class:`BaseEngine`.
    """
    if isinstance(source, MachineDefinition):
        table = source.table
        if initial_state is None:
            initial_state = source.initial_state
    else:
        table = source
        if initial_state is None:
            raise ValueError("initial_state is required when building from a bare table")

    if variant == "table":
        return TableEngine(table, initial_state, history_size=history_size)
    if variant == "objects":
        from .state_objects import StateObjectEngine

        return StateObjectEngine(table, initial_state, history_size=history_size)
    raise ValueError(f"Unknown engine variant '{variant}'")
