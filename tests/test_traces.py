from armstrong.traces import (
    all_request_traces_content,
    cleanup_all_request_traces_content,
    diff_error_codes,
    request_traces_content,
)
from armstrong.types import RequestTrace

RID = "/subscriptions/sub/resourceGroups/rg"

PUT_REQUEST = RequestTrace(
    http_method="PUT",
    id=RID,
    content="log OUTGOING REQUEST: PUT https://host/x body: timestamp=1",
)
PUT_RESPONSE = RequestTrace(
    http_method="PUT",
    id=RID,
    content="log REQUEST/RESPONSE: RESPONSE Status: 200 body: timestamp=2",
)
GET_RESPONSE = RequestTrace(
    http_method="GET",
    id=RID,
    content="log REQUEST/RESPONSE: GET https://host/x resp: timestamp=3",
)
DELETE_REQUEST = RequestTrace(
    http_method="DELETE",
    id=RID,
    content="log OUTGOING REQUEST: DELETE https://host/x: timestamp=4",
)
DELETE_RESPONSE = RequestTrace(
    http_method="DELETE",
    id=RID,
    content="log REQUEST/RESPONSE: RESPONSE Status: 202 done: timestamp=5",
)


def test_request_traces_content_orders_put_then_get():
    content = request_traces_content(RID, [PUT_REQUEST, PUT_RESPONSE, GET_RESPONSE])
    assert content == (
        "PUT https://host/x body" + "\n\n" + "RESPONSE Status: 200 body" + "\n\n\n"
        + "GET https://host/x resp"
    )


def test_request_traces_content_requires_exact_id():
    assert request_traces_content(RID.upper(), [PUT_REQUEST, GET_RESPONSE]) == ""


def test_request_traces_content_without_timestamp_keeps_whole_content():
    trace = RequestTrace(http_method="GET", id=RID, content="REQUEST/RESPONSE GET https://a")
    assert request_traces_content(RID, [trace]) == trace.content


def test_all_request_traces_content_ignores_case_and_deletes():
    logs = [PUT_REQUEST, PUT_RESPONSE, DELETE_REQUEST, GET_RESPONSE]
    content = all_request_traces_content(RID.upper(), logs)
    assert content == (
        "PUT https://host/x body\n\n"
        "RESPONSE Status: 200 body\n\n\n"
        "GET https://host/x resp\n\n\n"
    )
    assert "DELETE" not in content


def test_cleanup_all_request_traces_content_uses_deletes():
    logs = [PUT_REQUEST, GET_RESPONSE, DELETE_REQUEST, DELETE_RESPONSE]
    content = cleanup_all_request_traces_content(RID, logs)
    assert content == (
        "GET https://host/x resp\n\n\n"
        "DELETE https://host/x\n\n"
        "RESPONSE Status: 202 done\n\n\n"
    )
    assert "PUT" not in content


def test_traces_of_other_resources_are_skipped():
    other = RequestTrace(http_method="GET", id="/other", content=GET_RESPONSE.content)
    assert all_request_traces_content(RID, [other]) == ""


def test_diff_error_codes():
    assert diff_error_codes("x in response, expect y") == ["ROUNDTRIP_INCONSISTENT_PROPERTY"]
    assert diff_error_codes('"a": 1 is not returned from response') == [
        "ROUNDTRIP_MISSING_PROPERTY"
    ]
    assert diff_error_codes("a in response, expect b; c is not returned from response") == [
        "ROUNDTRIP_INCONSISTENT_PROPERTY",
        "ROUNDTRIP_MISSING_PROPERTY",
    ]
    assert diff_error_codes("{}") == []