from pathlib import Path

import pytest

from armstrong.tracelog import new_request_trace, parse_logs

ARM_URL = "https://management.azure.com/subscriptions/sub/resourceGroups/rg?api-version=2021-04-01"

LINES = [
    f"2023-05-01T10:00:00.000Z [DEBUG] provider: OUTGOING REQUEST: PUT {ARM_URL}",
    '{"location": "westus"}: timestamp=2023-05-01T10:00:00.000Z',
    f"2023-05-01T10:00:01.000Z [DEBUG] provider: REQUEST/RESPONSE: PUT {ARM_URL} "
    "RESPONSE Status: 201 Created",
    "2023-05-01T10:00:02.000Z [INFO] unrelated line",
]


def _write(tmp_path: Path, lines: list[str]) -> Path:
    path = tmp_path / "log.txt"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_parse_logs_collects_arm_entries(tmp_path):
    traces = parse_logs(_write(tmp_path, LINES))
    assert len(traces) == 2
    assert traces[0].content == LINES[0] + "\n" + LINES[1] + "\n"
    assert traces[0].http_method == "PUT"
    assert traces[0].status_code == 0
    assert traces[1].status_code == 201
    assert traces[1].id == "/subscriptions/sub/resourceGroups/rg"


def test_parse_logs_drops_unclosed_last_entry(tmp_path):
    traces = parse_logs(_write(tmp_path, LINES[:3]))
    assert [t.content for t in traces] == [LINES[0] + "\n" + LINES[1] + "\n"]


def test_parse_logs_ignores_other_hosts(tmp_path):
    lines = [
        "2023-05-01T10:00:00Z OUTGOING REQUEST: GET https://example.com/x?api-version=1",
        "2023-05-01T10:00:01Z done",
    ]
    assert parse_logs(_write(tmp_path, lines)) == []


def test_parse_logs_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_logs(tmp_path / "absent.txt")


def test_new_request_trace_fields():
    raw = f"REQUEST/RESPONSE: GET {ARM_URL} RESPONSE Status: 404 Not Found"
    trace = new_request_trace(raw)
    assert trace.http_method == "GET"
    assert trace.status_code == 404
    assert trace.id == "/subscriptions/sub/resourceGroups/rg"
    assert trace.content == raw


def test_new_request_trace_without_matches():
    trace = new_request_trace("nothing useful here")
    assert (trace.http_method, trace.status_code, trace.id) == ("", 0, "")


def test_new_request_trace_status_is_clamped_to_int32():
    trace = new_request_trace("RESPONSE Status: 99999999999")
    assert trace.status_code == 2147483647