"""
Input Loader Tests

Tests value coercion, scenario file loading and command-line parsing.
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.consumer import Consumer, pad_consumers
from models.resource import ResourceKind
from models.system_state import ResourceSnapshot
from utils.input_loader import (
    ScenarioLoadError,
    build_inline_scenario,
    coerce_count,
    load_scenario,
    parse_assignments,
    parse_request_argument,
    parse_scenario,
)


SCENARIOS_DIR = project_root / "tests" / "scenarios"


class RecordingLogger:
    """Collects log calls instead of printing them."""

    def __init__(self):
        self.messages = []

    def log(self, message, level="info"):
        self.messages.append((level, message))


def test_coerce_count():
    assert coerce_count(7) == 7
    assert coerce_count(-3) == -3
    assert coerce_count("12") == 12
    assert coerce_count(" 4 ") == 4
    assert coerce_count("2.9") == 2
    assert coerce_count(-2.9) == -2
    assert coerce_count("") == 0
    assert coerce_count("   ") == 0
    assert coerce_count(None) == 0
    assert coerce_count("abc") == 0
    assert coerce_count(True) == 0
    assert coerce_count(float("nan")) == 0
    assert coerce_count("inf") == 0
    assert coerce_count([1]) == 0
    assert coerce_count(np.int64(5)) == 5


def test_load_scenario_coerces_form_values():
    logger = RecordingLogger()
    snapshot, consumers = load_scenario(str(SCENARIOS_DIR / "form_input.json"), logger=logger)

    assert snapshot.total == {"printers": 8, "faxes": 0, "scanners": 3, "tapeDrives": 0}
    assert [c.name for c in consumers] == ["Kashyap", "Mandeep", "Sharath", "AJ"]
    assert consumers[0].request == {"printers": 6, "faxes": 0, "scanners": 0, "tapeDrives": 0}
    assert consumers[1].request == {"printers": 1, "faxes": 0, "scanners": 0, "tapeDrives": 0}
    assert consumers[3].total_requested() == 0
    assert snapshot.num_consumers == 4
    assert ("warning", "Ignoring unknown resource kinds in resources: plotters") in logger.messages


def test_load_scenario_with_custom_kinds():
    snapshot, consumers = load_scenario(str(SCENARIOS_DIR / "custom_kinds.json"), consumer_count=2)

    assert [kind.key for kind in snapshot.kinds] == ["cpu", "disk"]
    assert [kind.label for kind in snapshot.kinds] == ["CPU", "Disk"]
    assert list(snapshot.total_vector) == [4, 2]
    assert snapshot.request_matrix.tolist() == [[2, 1], [1, 0]]
    assert [c.name for c in consumers] == ["build", "deploy"]


def test_example_scenarios_load():
    for path in sorted((project_root / "scenarios").glob("*.json")):
        snapshot, consumers = load_scenario(str(path))
        assert snapshot.num_kinds == 4
        assert len(consumers) == 4


def test_load_scenario_errors():
    try:
        load_scenario(str(SCENARIOS_DIR / "does_not_exist.json"))
        assert False, "Should have raised ScenarioLoadError"
    except ScenarioLoadError as e:
        assert "not found" in str(e)

    try:
        load_scenario(str(SCENARIOS_DIR / "broken.json"))
        assert False, "Should have raised ScenarioLoadError"
    except ScenarioLoadError as e:
        assert "Invalid JSON" in str(e)


def test_parse_scenario_rejects_malformed_structure():
    bad_inputs = [
        [],
        {},
        {"resources": [1, 2]},
        {"resources": {}, "consumers": {"a": 1}},
        {"resources": {}, "consumers": [3]},
        {"resources": {}, "consumers": [{"request": [1]}]},
        {"resources": {}, "kinds": "printers"},
        {"resources": {}, "kinds": [{"label": "No key"}]},
        {"resources": {}, "kinds": [{"key": "a"}, {"key": "a"}]},
    ]
    for data in bad_inputs:
        try:
            parse_scenario(data)
            assert False, f"Should have rejected {data!r}"
        except ScenarioLoadError:
            pass


def test_parse_assignments_and_requests():
    assert parse_assignments("printers=10, faxes = 2,,") == {"printers": "10", "faxes": "2"}
    assert parse_request_argument("Kashyap:printers=2") == ("Kashyap", {"printers": "2"})
    assert parse_request_argument("printers=2,faxes=1") == ("", {"printers": "2", "faxes": "1"})

    for text in ["printers", "=3"]:
        try:
            parse_assignments(text)
            assert False, f"Should have rejected {text!r}"
        except ScenarioLoadError:
            pass


def test_build_inline_scenario_pads_to_consumer_count():
    snapshot, consumers = build_inline_scenario(
        "printers=10,faxes=10,scanners=10,tapeDrives=10",
        ["Kashyap:printers=2,faxes=2", "scanners=x"],
    )

    assert snapshot.total == {"printers": 10, "faxes": 10, "scanners": 10, "tapeDrives": 10}
    assert snapshot.request_matrix.tolist() == [
        [2, 2, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    assert consumers[0].name == "Kashyap"
    assert consumers[1].name == "Mandeep"


def test_pad_consumers_keeps_longer_lists():
    consumers = [Consumer(index=i) for i in range(6)]
    assert pad_consumers(consumers, 4) == consumers
    assert consumers[5].name == "Employee 6"
    assert consumers[5].number == 6


def test_snapshot_is_read_only_and_validated():
    snapshot = ResourceSnapshot.from_counts({"printers": 1}, [{"printers": 1}])
    try:
        snapshot.total_vector[0] = 5
        assert False, "Total vector should be read-only"
    except ValueError:
        pass

    kinds = (ResourceKind("a"), ResourceKind("b"))
    try:
        ResourceSnapshot(total_vector=[1, 2, 3], request_matrix=np.zeros((1, 2)), kinds=kinds)
        assert False, "Should reject mismatched total vector"
    except ValueError:
        pass

    try:
        ResourceSnapshot.from_counts({}, [], kinds=())
        assert False, "Should reject an empty kind set"
    except ValueError:
        pass


def test_oversized_counts_are_rejected():
    """Counts beyond the int64 range become load errors, not overflows."""
    bad_inputs = [
        {"resources": {"printers": 10 ** 20}},
        {"resources": {"printers": 1e300}},
        {"resources": {"printers": 1}, "consumers": [{"request": {"printers": 2 ** 62}}] * 3},
    ]
    for data in bad_inputs:
        try:
            parse_scenario(data)
            assert False, f"Should have rejected {data!r}"
        except ScenarioLoadError as e:
            assert "too large" in str(e)

    snapshot, _ = parse_scenario({"resources": {"printers": 2 ** 62}}, consumer_count=1)
    assert snapshot.total == {"printers": 2 ** 62, "faxes": 0, "scanners": 0, "tapeDrives": 0}


def test_unreadable_scenario_files(tmp_path):
    """Directories and non-UTF-8 files are reported as load errors."""
    not_utf8 = tmp_path / "latin1.json"
    not_utf8.write_bytes(b'{"resources": {"printers": "\xff"}}')

    for path, expected in [(tmp_path, "Cannot read"), (not_utf8, "not valid UTF-8")]:
        try:
            load_scenario(str(path))
            assert False, f"Should have rejected {path}"
        except ScenarioLoadError as e:
            assert expected in str(e)
