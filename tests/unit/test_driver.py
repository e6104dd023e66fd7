import io

import pytest

from fsm_interpreter.app import ConsoleDriver, UnknownEventName, format_table
from fsm_interpreter.state_machine import Rejected, Transitioned, create_engine
from fsm_interpreter.utils import NameRegistry


def _driver(definition, variant: str = "table") -> tuple[ConsoleDriver, io.StringIO]:
    output = io.StringIO()
    engine = create_engine(definition, variant=variant)
    return ConsoleDriver(engine, NameRegistry.from_definition(definition), output), output


@pytest.mark.parametrize("variant", ["table", "objects"])
def test_run_reports_each_line(traffic_light, variant: str) -> None:
    driver, output = _driver(traffic_light, variant)

    driver.announce()
    applied = driver.run(["Next\n", "Jump\n", "\n", "SwitchCapacity\n", "Next\n"])

    assert applied == 3
    assert output.getvalue().splitlines() == [
        "Your current state is PowerOff.",
        "There is no event Next for the state PowerOff.",
        "Event Jump is not determined for the statemachine.",
        "New state is Red.",
        "New state is Green.",
    ]


def test_handle_line_returns_results(traffic_light) -> None:
    driver, _ = _driver(traffic_light)

    assert driver.handle_line("   ") is None
    assert driver.handle_line("Bogus") == UnknownEventName("Bogus")
    assert isinstance(driver.handle_line("Next"), Rejected)
    assert isinstance(driver.handle_line("SwitchCapacity"), Transitioned)
    assert driver.engine.current_state == "Red"


def test_unknown_event_never_reaches_engine(traffic_light) -> None:
    driver, _ = _driver(traffic_light)

    driver.handle_line("Bogus")

    assert tuple(driver.engine.history()) == ()


def test_format_table_lists_edges_per_state(traffic_light) -> None:
    registry = NameRegistry.from_definition(traffic_light)

    rendered = format_table(traffic_light.table, registry)

    assert rendered.splitlines() == [
        "PowerOff :: ",
        "    SwitchCapacity -> Red",
        "Red :: ",
        "    Next -> Green",
        "    SwitchCapacity -> PowerOff",
        "Yellow :: ",
        "    Next -> Red",
        "    SwitchCapacity -> PowerOff",
        "Green :: ",
        "    Next -> Yellow",
        "    SwitchCapacity -> PowerOff",
    ]
