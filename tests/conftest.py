import pytest

from fsm_interpreter.config import traffic_light_definition


@pytest.fixture
def traffic_light():
    return traffic_light_definition()


@pytest.fixture
def traffic_light_yaml(tmp_path):
    path = tmp_path / "machine.yaml"
    log_path = tmp_path / "logs" / "fsm.log"
    path.write_text(
        "machine:\n"
        "  name: TrafficLight\n"
        "  initial_state: PowerOff\n"
        "  transitions:\n"
        "    PowerOff: {SwitchCapacity: Red}\n"
        "    Red: {Next: Green, SwitchCapacity: PowerOff}\n"
        "    Green: {Next: Yellow, SwitchCapacity: PowerOff}\n"
        "    Yellow: {Next: Red, SwitchCapacity: PowerOff}\n"
        "logging:\n"
        f"  filepath: {log_path.as_posix()}\n"
        "  console: false\n",
        encoding="utf-8",
    )
    return path
