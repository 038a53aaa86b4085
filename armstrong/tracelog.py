"""Extract ARM request traces from a terraform debug log."""

from __future__ import annotations

import os
import re

from armstrong.types import RequestTrace

_LOG_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}", re.ASCII)
_METHOD = re.compile(r"([A-Z]+)\shttps", re.ASCII)
_STATUS = re.compile(r"RESPONSE\sStatus:\s(\d+)", re.ASCII)
_RESOURCE_ID = re.compile(r"management\.azure\.com(.+)\?api-version")

_INT32_MAX = 2**31 - 1


def _is_arm_request(entry: str) -> bool:
    return (
        "OUTGOING REQUEST" in entry or "REQUEST/RESPONSE" in entry
    ) and "management.azure.com" in entry


def parse_logs(filepath: str | os.PathLike) -> list[RequestTrace]:
    """Return the ARM requests and responses logged in filepath.

    An entry starts at a line beginning with a date and ends where the next
    such line starts; the last entry of the file is not closed and so not kept.
    """
    with open(filepath, encoding="utf-8", errors="replace", newline="") as fh:
        data = fh.read()
    traces = []
    entry = ""
    for line in data.split("\n"):
        if _LOG_PREFIX.match(line):
            if _is_arm_request(entry):
                traces.append(new_request_trace(entry))
            entry = ""
        entry += line + "\n"
    return traces


def new_request_trace(raw: str) -> RequestTrace:
    """Build a trace from one raw log entry."""
    trace = RequestTrace(content=raw)
    if match := _METHOD.search(raw):
        trace.http_method = match.group(1)
    if match := _STATUS.search(raw):
        trace.status_code = min(int(match.group(1)), _INT32_MAX)
    if match := _RESOURCE_ID.search(raw):
        trace.id = match.group(1)
    return trace