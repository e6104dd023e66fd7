import pytest

from fsm_interpreter.infra import TableFrozenError
from fsm_interpreter.state_machine import TransitionTable


def test_lookup_returns_defined_target() -> None:
    table = TransitionTable()
    table.define("Red", "Next", "Green")

    assert table.lookup("Red", "Next") == "Green"


def test_lookup_missing_state_and_missing_event_both_return_none() -> None:
    table = TransitionTable()
    table.define("Red", "Next", "Green")

    assert table.lookup("Blue", "Next") is None
    assert table.lookup("Red", "SwitchCapacity") is None


def test_lookup_is_idempotent() -> None:
    table = TransitionTable.from_triples([("Red", "Next", "Green")])

    results = {table.lookup("Red", "Next") for _ in range(5)}
    misses = {table.lookup("Red", "Other") for _ in range(5)}

    assert results == {"Green"}
    assert misses == {None}


def test_define_last_write_wins() -> None:
    table = TransitionTable()
    table.define("Red", "Next", "Green")
    table.define("Red", "Next", "Yellow")

    assert table.lookup("Red", "Next") == "Yellow"
    assert len(table) == 1


def test_introspection_helpers() -> None:
    table = TransitionTable.from_mapping(
        {
            "PowerOff": {"SwitchCapacity": "Red"},
            "Red": {"Next": "Green", "SwitchCapacity": "PowerOff"},
        }
    )

    assert table.events_for("Red") == ("Next", "SwitchCapacity")
    assert table.events_for("Green") == ()
    assert table.sources() == ("PowerOff", "Red")
    assert table.states() == ("PowerOff", "Red", "Green")
    assert table.events() == ("SwitchCapacity", "Next")
    assert dict(table.transitions_from("PowerOff")) == {"SwitchCapacity": "Red"}
    assert ("Red", "Next") in table
    assert ("Green", "Next") not in table
    assert list(table) == [
        ("PowerOff", "SwitchCapacity", "Red"),
        ("Red", "Next", "Green"),
        ("Red", "SwitchCapacity", "PowerOff"),
    ]


def test_transitions_from_is_read_only() -> None:
    table = TransitionTable.from_triples([("Red", "Next", "Green")])

    view = table.transitions_from("Red")
    with pytest.raises(TypeError):
        view["Next"] = "Yellow"  # type: ignore[index]


def test_reachable_from_follows_edges_breadth_first() -> None:
    table = TransitionTable.from_triples(
        [
            ("A", "go", "B"),
            ("B", "go", "C"),
            ("B", "back", "A"),
            ("D", "go", "A"),
        ]
    )

    assert table.reachable_from("A") == ("A", "B", "C")
    assert table.reachable_from("Unknown") == ("Unknown",)


def test_frozen_table_rejects_define() -> None:
    table = TransitionTable.from_triples([("Red", "Next", "Green")]).freeze()

    assert table.frozen is True
    with pytest.raises(TableFrozenError):
        table.define("Red", "Next", "Yellow")
    assert table.lookup("Red", "Next") == "Green"
