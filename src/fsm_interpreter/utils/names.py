"""Translation between textual names and state/event identifiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from fsm_interpreter.state_machine.model import Event, MachineDefinition, State, name_of


def _index(identifiers: Iterable[object]) -> Mapping[str, object]:
    return MappingProxyType({name_of(identifier): identifier for identifier in identifiers})


@dataclass(frozen=True)
class NameRegistry:
    """Immutable name maps for one machine definition.

    Built once by whoever reads user input and handed to it explicitly.
    Matching is exact and case-sensitive after trimming whitespace.
    """

    states_by_name: Mapping[str, State] = field(default_factory=dict)
    events_by_name: Mapping[str, Event] = field(default_factory=dict)

    @classmethod
    def from_definition(cls, definition: MachineDefinition) -> "NameRegistry":
        return cls(
            states_by_name=_index(definition.states),
            events_by_name=_index(definition.events),
        )

    def resolve_event(self, token: str) -> Optional[Event]:
        """Return the event named by ``token``, or None if no such event exists."""
        return self.events_by_name.get(token.strip())

    def resolve_state(self, token: str) -> Optional[State]:
        return self.states_by_name.get(token.strip())

    def state_name(self, state: State) -> str:
        return name_of(state)

    def event_name(self, event: Event) -> str:
        return name_of(event)

    @property
    def event_names(self) -> tuple[str, ...]:
        return tuple(self.events_by_name)
