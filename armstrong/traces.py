"""Pick the request traces of one resource out of a parsed log."""

from __future__ import annotations

from typing import Sequence

from armstrong.types import RequestTrace

_TIMESTAMP = ": timestamp="


def _trim(content: str, start_marker: str) -> str:
    start = content.find(start_marker)
    end = content.find(_TIMESTAMP)
    if 0 <= start < end:
        return content[start:end]
    return content


def _find_last(
    logs: Sequence[RequestTrace], resource_id: str, method: str, marker: str, index: int
) -> int | None:
    return next(
        (
            i
            for i in range(index, -1, -1)
            if logs[i].id == resource_id
            and logs[i].http_method == method
            and marker in logs[i].content
        ),
        None,
    )


def request_traces_content(resource_id: str, logs: Sequence[RequestTrace]) -> str:
    """Return the last PUT request, its response and the GET after it."""
    content = ""
    index = len(logs) - 1
    found = _find_last(logs, resource_id, "GET", "REQUEST/RESPONSE", index)
    if found is not None:
        content = _trim(logs[found].content, "GET https")
        index = found
    found = _find_last(logs, resource_id, "PUT", "REQUEST/RESPONSE", index)
    if found is not None:
        content = _trim(logs[found].content, "RESPONSE Status") + "\n\n\n" + content
        index = found
    found = _find_last(logs, resource_id, "PUT", "OUTGOING REQUEST", index)
    if found is not None:
        content = _trim(logs[found].content, f"PUT https") + "\n\n" + content
    return content


def _all_traces(resource_id: str, logs: Sequence[RequestTrace], method: str) -> str:
    wanted = resource_id.casefold()
    parts = []
    for trace in logs:
        if trace.id.casefold() != wanted:
            continue
        if trace.http_method == "GET" and "REQUEST/RESPONSE" in trace.content:
            parts.append(_trim(trace.content, "GET https") + "\n\n\n")
        elif trace.http_method == method:
            if "REQUEST/RESPONSE" in trace.content:
                parts.append(_trim(trace.content, "RESPONSE Status") + "\n\n\n")
            elif "OUTGOING REQUEST" in trace.content:
                parts.append(_trim(trace.content, f"{method} https") + "\n\n")
    return "".join(parts)


def all_request_traces_content(resource_id: str, logs: Sequence[RequestTrace]) -> str:
    """Return every GET and PUT trace of a resource, oldest first."""
    return _all_traces(resource_id, logs, "PUT")


def cleanup_all_request_traces_content(resource_id: str, logs: Sequence[RequestTrace]) -> str:
    """Return every GET and DELETE trace of a resource, oldest first."""
    return _all_traces(resource_id, logs, "DELETE")


def diff_error_codes(diff_text: str) -> list[str]:
    """Return the round-trip error codes that a markdown diff message shows."""
    codes = []
    if "in response, expect" in diff_text:
        codes.append("ROUNDTRIP_INCONSISTENT_PROPERTY")
    if "is not returned from response" in diff_text:
        codes.append("ROUNDTRIP_MISSING_PROPERTY")
    return codes