"""
Report and Command-Line Tests

Tests the text report, chart series and the analyzer entry point.
"""

import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from analysis.analyzer import analyze
from deadlock_analyzer import main
from models.consumer import Consumer
from utils.report import chart_series, format_safe_sequence, render_report


OFFICE_TOTAL = {"printers": 8, "faxes": 10, "scanners": 10, "tapeDrives": 10}
OFFICE_REQUESTS = [
    {"printers": 2, "faxes": 1, "scanners": 1, "tapeDrives": 1},
    {"printers": 2, "faxes": 1, "scanners": 1, "tapeDrives": 1},
    {"printers": 1, "faxes": 1, "scanners": 1, "tapeDrives": 1},
    {"printers": 1, "faxes": 1, "scanners": 1, "tapeDrives": 1},
]
NAMES = ["Kashyap", "Mandeep", "Sharath", "AJ"]


def test_chart_series_has_two_parallel_series():
    result = analyze(OFFICE_TOTAL, OFFICE_REQUESTS)
    chart = chart_series(result)

    assert chart["labels"] == ["Printers", "Faxes", "Scanners", "Tape Drives"]
    available, on_hold = chart["datasets"]
    assert available["label"] == "Available Resources"
    assert available["data"] == [2, 6, 6, 6]
    assert on_hold["label"] == "On Hold Resources"
    assert on_hold["data"] == [6, 4, 4, 4]


def test_report_for_deadlock():
    result = analyze(OFFICE_TOTAL, OFFICE_REQUESTS)
    consumers = [Consumer(index=i, name=name) for i, name in enumerate(NAMES)]
    report = render_report(result, consumers)

    assert "Deadlock Status: Deadlock Detected" in report
    assert "Resources Causing Deadlock:" in report
    assert "  - Printers (Requested: 6, Available: 2)" in report
    assert "Safe Sequence: Kashyap -> Mandeep -> Sharath -> AJ" in report
    assert "Recovery: Request from Employee 1 can be fulfilled." in report


def test_report_without_deadlock():
    result = analyze({"printers": 10}, [{"printers": 1}])
    report = render_report(result)

    assert "Deadlock Status: No Deadlock" in report
    assert "No deadlock detected. Resources are sufficient." in report
    assert "Resources Causing Deadlock:" not in report
    assert "Recovery:" not in report
    assert "Safe Sequence: Kashyap" in report


def test_format_safe_sequence():
    assert format_safe_sequence(None) == "No safe sequence exists"
    assert format_safe_sequence(()) == "(no consumers)"
    assert format_safe_sequence((1, 0), [Consumer(index=0, name="a"), Consumer(index=1, name="b")]) == "b -> a"


def test_main_with_scenario_file(tmp_path, capsys):
    chart_path = tmp_path / "chart.json"
    exit_code = main([
        "--scenario", str(project_root / "scenarios" / "office_deadlock.json"),
        "--chart-json", str(chart_path),
    ])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "[WARNING] DEADLOCK DETECTED - Resources: [Printers (Requested: 6, Available: 2)]" in output
    assert "Deadlock Status: Deadlock Detected" in output

    chart = json.loads(chart_path.read_text(encoding="utf-8"))
    assert chart["datasets"][0]["data"] == [2, 6, 6, 6]


def test_main_with_inline_values_and_log_file(tmp_path, capsys):
    log_path = tmp_path / "analysis.log"
    exit_code = main([
        "--total", "printers=10,faxes=10,scanners=10,tapeDrives=10",
        "--request", "Kashyap:printers=1,faxes=1",
        "--verbose",
        "--log-file", str(log_path),
    ])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "[DEBUG] Safety check: safe sequence Kashyap -> Mandeep -> Sharath -> AJ" in output
    assert "Deadlock Status: No Deadlock" in output
    assert "Deadlock Status: No Deadlock" in log_path.read_text(encoding="utf-8")


def test_main_reports_load_errors(capsys):
    exit_code = main(["--scenario", str(project_root / "tests" / "scenarios" / "broken.json")])

    assert exit_code == 1
    assert "[ERROR] Failed to load input: Invalid JSON" in capsys.readouterr().out


def test_main_rejects_request_with_scenario():
    try:
        main(["--scenario", "x.json", "--request", "printers=1"])
        assert False, "Should have exited with a usage error"
    except SystemExit as e:
        assert e.code == 2


def test_main_rejects_oversized_counts(tmp_path, capsys):
    scenario = tmp_path / "huge.json"
    scenario.write_text('{"resources": {"printers": 100000000000000000000}}', encoding="utf-8")

    exit_code = main(["--scenario", str(scenario)])

    assert exit_code == 1
    assert "[ERROR] Failed to load input: Counts for 'printers' are too large" in capsys.readouterr().out


def test_main_verbose_replays_sequence_and_names_recovery(capsys):
    exit_code = main([
        "--scenario", str(project_root / "scenarios" / "office_deadlock.json"),
        "--verbose",
    ])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "[DEBUG] Safe sequence replay: OK" in output
    assert "[DEBUG]   RECOVERY: Request from Kashyap can be fulfilled." in output
    assert "[DEBUG]   RECOVERY: Request from AJ can be fulfilled." in output
