"""Built-in traffic light machine used when no definition is configured."""

from __future__ import annotations

from enum import Enum

from fsm_interpreter.state_machine.model import MachineDefinition, TransitionTable


class LightState(str, Enum):
    POWER_OFF = "PowerOff"
    RED = "Red"
    YELLOW = "Yellow"
    GREEN = "Green"


class LightEvent(str, Enum):
    NEXT = "Next"
    SWITCH_CAPACITY = "SwitchCapacity"


TRAFFIC_LIGHT_TRANSITIONS = (
    (LightState.POWER_OFF, LightEvent.SWITCH_CAPACITY, LightState.RED),
    (LightState.RED, LightEvent.NEXT, LightState.GREEN),
    (LightState.RED, LightEvent.SWITCH_CAPACITY, LightState.POWER_OFF),
    (LightState.YELLOW, LightEvent.NEXT, LightState.RED),
    (LightState.YELLOW, LightEvent.SWITCH_CAPACITY, LightState.POWER_OFF),
    (LightState.GREEN, LightEvent.NEXT, LightState.YELLOW),
    (LightState.GREEN, LightEvent.SWITCH_CAPACITY, LightState.POWER_OFF),
)


def traffic_light_definition() -> MachineDefinition:
    """Return a fresh, frozen traffic light definition."""
    table = TransitionTable.from_triples(TRAFFIC_LIGHT_TRANSITIONS).freeze()
    return MachineDefinition.build(
        name="TrafficLight",
        initial_state=LightState.POWER_OFF,
        table=table,
        states=tuple(LightState),
        events=tuple(LightEvent),
    )
