"""State-per-object engine generated with python-statemachine."""

from __future__ import annotations

import logging
import re
import warnings
from dataclasses import dataclass
from typing import Dict, Optional, Type

from statemachine import State as MachineState
from statemachine import StateMachine
from statemachine.exceptions import TransitionNotAllowed

from .machine import BaseEngine
from .model import Event, Outcome, Rejected, State, Transitioned, TransitionTable, name_of

logger = logging.getLogger("fsm.engine")

_UNSAFE_CHARS = re.compile(r"\W")


@dataclass(frozen=True)
class MachineBlueprint:
    """A generated StateMachine subclass plus the id maps needed to drive it."""

    machine_class: Type[StateMachine]
    states_by_id: Dict[str, State]
    event_ids: Dict[Event, str]


def _attribute_name(prefix: str, index: int, identifier: object) -> str:
    return f"{prefix}{index}_{_UNSAFE_CHARS.sub('_', name_of(identifier))}"


def build_machine_class(
    table: TransitionTable,
    initial_state: State,
    class_name: str = "TableStateMachine",
) -> Optional[MachineBlueprint]:
    """Generate one ``State`` object per reachable state and one event per event name.

    States that cannot be reached from ``initial_state`` are left out since
    they can never become current. Returns ``None`` when no transition is
    reachable at all, which python-statemachine refuses to model.
    """
    reachable = table.reachable_from(initial_state)

    machine_states: Dict[State, MachineState] = {}
    states_by_id: Dict[str, State] = {}
    attrs: Dict[str, object] = {"__module__": __name__}
    for index, state in enumerate(reachable):
        attr = _attribute_name("s", index, state)
        machine_states[state] = MachineState(name=name_of(state), initial=state == initial_state)
        states_by_id[attr] = state
        attrs[attr] = machine_states[state]

    transitions: Dict[Event, object] = {}
    for source in reachable:
        for event, target in table.transitions_from(source).items():
            transition = machine_states[source].to(machine_states[target])
            transitions[event] = transition if event not in transitions else transitions[event] | transition

    if not transitions:
        return None

    event_ids: Dict[Event, str] = {}
    for index, (event, transition_list) in enumerate(transitions.items()):
        attr = _attribute_name("e", index, event)
        event_ids[event] = attr
        attrs[attr] = transition_list

    with warnings.catch_warnings():
        # trap states (no outgoing edge) are legal terminal states here
        warnings.simplefilter("ignore")
        machine_class = type(StateMachine)(class_name, (StateMachine,), attrs)

    return MachineBlueprint(
        machine_class=machine_class,
        states_by_id=states_by_id,
        event_ids=event_ids,
    )


class StateObjectEngine(BaseEngine):
    """Engine whose states are python-statemachine ``State`` objects.

    Each state carries its own outgoing edges and the library decides whether
    an event is allowed. Outcomes match :class:`TableEngine` for the same
    table. The machine class is generated once from the table, which the
    base class freezes first.
    """

    def __init__(
        self,
        table: TransitionTable,
        initial_state: State,
        history_size: int = 64,
    ) -> None:
        super().__init__(table, initial_state, history_size)
        self._generated = build_machine_class(self._table, initial_state)
        if self._generated is None:
            logger.info(
                "No transition reachable from '%s'; every event will be rejected.",
                name_of(initial_state),
            )
        self._machine = self._new_machine()

    def _new_machine(self) -> Optional[StateMachine]:
        if self._generated is None:
            return None
        return self._generated.machine_class()

    @property
    def machine(self) -> Optional[StateMachine]:
        """The underlying python-statemachine instance, if any."""
        return self._machine

    @property
    def current_state(self) -> State:
        if self._machine is None:
            return self._initial_state
        return self._generated.states_by_id[self._machine.current_state.id]

    def apply(self, event: Event) -> Outcome:
        """Delegate the event to the current state object."""
        previous_state = self.current_state
        event_id = self._generated.event_ids.get(event) if self._generated else None
        if self._machine is None or event_id is None:
            return self._record(Rejected(event=event, state=previous_state))

        try:
            self._machine.send(event_id)
        except TransitionNotAllowed:
            return self._record(Rejected(event=event, state=previous_state))

        return self._record(
            Transitioned(event=event, previous_state=previous_state, next_state=self.current_state)
        )

    def reset(self) -> None:
        """Reset the machine to the initial state."""
        self._machine = self._new_machine()
