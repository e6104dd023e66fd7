"""Data structures representing the state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from fsm_interpreter.infra.exceptions import TableFrozenError

State = str
Event = str
Triple = Tuple[State, Event, State]


def name_of(identifier: object) -> str:
    """Return the display name of a state or event identifier."""
    if isinstance(identifier, Enum):
        return str(identifier.value)
    return str(identifier)


class TransitionTable:
    """Two-level mapping ``state -> (event -> next_state)``.

    The table may be partial: a missing ``(state, event)`` entry is a normal
    condition and :meth:`lookup` reports it as ``None``. Once :meth:`freeze`
    has been called the table is read-only and may be shared by any number
    of engines.
    """

    def __init__(self) -> None:
        self._edges: Dict[State, Dict[Event, State]] = {}
        self._frozen = False

    @classmethod
    def from_triples(cls, triples: Iterable[Triple]) -> "TransitionTable":
        """Build a table from ``(state, event, next_state)`` triples."""
        table = cls()
        for state, event, next_state in triples:
            table.define(state, event, next_state)
        return table

    @classmethod
    def from_mapping(cls, mapping: Mapping[State, Mapping[Event, State]]) -> "TransitionTable":
        """Build a table from a nested ``{state: {event: next_state}}`` mapping."""
        table = cls()
        for state, edges in mapping.items():
            for event, next_state in edges.items():
                table.define(state, event, next_state)
        return table

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "TransitionTable":
        """Make the table read-only and return it."""
        self._frozen = True
        return self

    def define(self, state: State, event: Event, next_state: State) -> None:
        """Register one transition. Redefining a pair replaces its target."""
        if self._frozen:
            raise TableFrozenError(
                f"Cannot define {name_of(state)} --{name_of(event)}--> {name_of(next_state)}: table is frozen"
            )
        self._edges.setdefault(state, {})[event] = next_state

    def lookup(self, state: State, event: Event) -> Optional[State]:
        """Return the destination for ``(state, event)`` or ``None``."""
        edges = self._edges.get(state)
        if edges is None:
            return None
        return edges.get(event)

    def transitions_from(self, state: State) -> Mapping[Event, State]:
        """Return a read-only view of the outgoing edges of ``state``."""
        return MappingProxyType(self._edges.get(state, {}))

    def events_for(self, state: State) -> Tuple[Event, ...]:
        """Return the events accepted in ``state``, in definition order."""
        return tuple(self._edges.get(state, ()))

    def sources(self) -> Tuple[State, ...]:
        return tuple(self._edges)

    def states(self) -> Tuple[State, ...]:
        """Return every state mentioned as a source or a target."""
        seen: Dict[State, None] = {}
        for state, edges in self._edges.items():
            seen.setdefault(state)
            for next_state in edges.values():
                seen.setdefault(next_state)
        return tuple(seen)

    def events(self) -> Tuple[Event, ...]:
        seen: Dict[Event, None] = {}
        for edges in self._edges.values():
            for event in edges:
                seen.setdefault(event)
        return tuple(seen)

    def reachable_from(self, state: State) -> Tuple[State, ...]:
        """Return ``state`` and every state reachable from it, breadth first."""
        seen: Dict[State, None] = {state: None}
        frontier = [state]
        while frontier:
            next_frontier = []
            for current in frontier:
                for target in self._edges.get(current, {}).values():
                    if target not in seen:
                        seen[target] = None
                        next_frontier.append(target)
            frontier = next_frontier
        return tuple(seen)

    def __iter__(self) -> Iterator[Triple]:
        for state, edges in self._edges.items():
            for event, next_state in edges.items():
                yield state, event, next_state

    def __len__(self) -> int:
        return sum(len(edges) for edges in self._edges.values())

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        state, event = item
        return self.lookup(state, event) is not None

    def __repr__(self) -> str:
        return f"TransitionTable({len(self)} transitions, frozen={self._frozen})"


@dataclass(frozen=True, slots=True)
class Transitioned:
    """Outcome of an event that moved the machine."""

    event: Event
    previous_state: State
    next_state: State

    @property
    def accepted(self) -> bool:
        return True

    @property
    def changed(self) -> bool:
        """Return True if the transition left the previous state."""
        return self.previous_state != self.next_state

    @property
    def message(self) -> str:
        return f"{name_of(self.previous_state)} -> {name_of(self.next_state)} on {name_of(self.event)}."


@dataclass(frozen=True, slots=True)
class Rejected:
    """Outcome of an event with no transition from the current state."""

    event: Event
    state: State

    @property
    def accepted(self) -> bool:
        return False

    @property
    def changed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"Event '{name_of(self.event)}' is not valid in state '{name_of(self.state)}'."


Outcome = Union[Transitioned, Rejected]


@dataclass(frozen=True, slots=True)
class MachineDefinition:
    """A complete machine: closed state and event sets, initial state, table."""

    name: str
    initial_state: State
    table: TransitionTable
    states: Tuple[State, ...] = field(default=())
    events: Tuple[Event, ...] = field(default=())

    @classmethod
    def build(
        cls,
        name: str,
        initial_state: State,
        table: TransitionTable,
        states: Optional[Iterable[State]] = None,
        events: Optional[Iterable[Event]] = None,
    ) -> "MachineDefinition":
        """Create a definition, inferring undeclared state and event sets from the table."""
        if states is None:
            inferred: Dict[State, None] = {initial_state: None}
            inferred.update(dict.fromkeys(table.states()))
            states = inferred
        if events is None:
            events = table.events()
        return cls(
            name=name,
            initial_state=initial_state,
            table=table,
            states=tuple(states),
            events=tuple(events),
        )
