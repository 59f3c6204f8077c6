from ferris_utils.cmd import ExecStatus
from ferris_utils.record import Record, format_record, record_from_exec_status

MOCK_STDOUT = """
...
<record>{"context": "add", "status": "start"}</record>
<record>{"context": "add", "args": [2, 3], "result": 5}</record>
Hello, World! From Rust WASM! 🦀
<record>{"context": "greet", "status": "start"}</record>
<record>{"context": "greet", "args": ["World"], "result": "Hello, World! From Rust WASM! 🦀"}</record>
...
"""

MOCK_STDERR = """
[Guess 2026-10-19 10:00:00,123 ~ INFO]: secret drawn
[Guess 2026-10-19 10:00:00,456 ~ ERROR]: Please type a number!
[Guess 2026-10-19 10:00:00,789 ~ ERROR]: invalid digit found in string: 'abc'
"""


def test_empty_record():
    mock_exec = ExecStatus("no-command", "", "", None, None, -1, -1)
    empty_record = Record([], [], mock_exec)

    assert empty_record.get_entry_by_context("add") is None
    assert empty_record.get_last_entry() is None
    assert empty_record.errors == []
    assert not empty_record.has_errors()
    assert empty_record.is_failure()


def test_record():
    mock_exec = ExecStatus("no-command", MOCK_STDOUT, MOCK_STDERR, None, None, 1, 0.1)
    record = record_from_exec_status(mock_exec)

    assert len(record.entries) == 4
    assert record.entries[0].context == "add"
    assert record.entries[0].entries.get("status") == "start"
    assert record.entries[1].entries.get("result") == 5
    assert record.entries[3].entries.get("result") == "Hello, World! From Rust WASM! 🦀"

    assert record.entries[1] == record.get_entry_by_context("add")
    assert record.entries[3] == record.get_entry_by_context("greet")
    assert record.entries[3] == record.get_last_entry()

    assert record.has_errors()
    assert [e.message for e in record.errors] == [
        "Please type a number!",
        "invalid digit found in string: 'abc'",
    ]
    assert all(e.context == "greet" for e in record.errors)
    assert record.errors[0].prefix == "Guess"


def test_format_record_round_trips_through_parser():
    line = format_record("greet", args=["Ferris"], result="Hello, Ferris! From Rust WASM! 🦀")
    assert line.startswith("<record>{") and line.endswith("}</record>")
    assert "🦀" in line

    record = record_from_exec_status(ExecStatus("cmd", line + "\n", "", None, None, 0, 0.0))
    assert record.get_last_entry().entries["args"] == ["Ferris"]
