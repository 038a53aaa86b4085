"""Build reports from terraform plans, states and apply errors.

Plans and states are the JSON documents printed by ``terraform show -json``,
decoded into Python dicts and lists.
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from armstrong.azid import get_resource_type
from armstrong.types import (
    Change,
    Diff,
    DiffReport,
    ErrorReport,
    PassReport,
    ReportedResource,
    ReportError,
    RequestTrace,
)

logger = logging.getLogger(__name__)

_AZAPI_PREFIX = "azapi_"
_ID_AND_VERSION = re.compile(r'ResourceId \\"(.+)\\" / Api Version \\"(.+)\\"\)')
_RESOURCE_LABEL = re.compile(r'resource "azapi_resource" "(.+)"')
_MESSAGE_END = "------"


class Action(str, Enum):
    """The kind of change terraform plans for one resource."""

    CREATE = "create"
    REPLACE = "replace"
    UPDATE = "update"
    DELETE = "delete"


_SINGLE_ACTIONS = {
    "create": Action.CREATE,
    "delete": Action.DELETE,
    "update": Action.UPDATE,
}


def _resource_changes(plan: Mapping[str, Any] | None) -> list[dict]:
    if not plan:
        return []
    return [rc for rc in plan.get("resource_changes") or [] if rc is not None]


def _state_resources(state: Mapping[str, Any] | None) -> list[dict] | None:
    if not state:
        return None
    values = state.get("values")
    if not values:
        return None
    root = values.get("root_module")
    if not root:
        return None
    return root.get("resources")


def _is_noop(change: Mapping[str, Any]) -> bool:
    return list(change.get("actions") or []) == ["no-op"]


def get_changes(plan: Mapping[str, Any] | None) -> list[Action]:
    """Return the actions a plan will take, one per changing resource."""
    actions = []
    for resource_change in _resource_changes(plan):
        change = resource_change.get("change")
        if change is None:
            continue
        planned = list(change.get("actions") or [])
        if not planned:
            continue
        if len(planned) > 1:
            actions.append(Action.REPLACE)
        elif planned[0] in _SINGLE_ACTIONS:
            actions.append(_SINGLE_ACTIONS[planned[0]])
    return actions


def new_diff_report(
    plan: Mapping[str, Any] | None, logs: Sequence[RequestTrace] | None
) -> DiffReport:
    """Report the azapi resources whose body a plan would change."""
    report = DiffReport(diffs=[], logs=list(logs or []))
    for resource_change in _resource_changes(plan):
        address = resource_change.get("address") or ""
        if not address.startswith(_AZAPI_PREFIX):
            continue
        change = resource_change.get("change")
        if change is None or change.get("before") is None or change.get("after") is None:
            continue
        if _is_noop(change):
            continue
        before, after = change["before"], change["after"]
        if not isinstance(before, dict) or not isinstance(after, dict):
            continue
        report.diffs.append(
            Diff(
                id=after["id"],
                type=after["type"],
                address=address,
                change=Change(before=before["body"], after=after["body"]),
            )
        )
    return report


def new_pass_report_from_state(state: Mapping[str, Any] | None) -> PassReport:
    """Report every azapi resource recorded in a state."""
    report = PassReport(resources=[])
    resources = _state_resources(state)
    if resources is None:
        logger.warning("new pass report from state: state is nil")
        return report
    for res in resources:
        address = res.get("address") or ""
        if not address.startswith(_AZAPI_PREFIX):
            continue
        values = res.get("values") or {}
        report.resources.append(
            ReportedResource(type=values.get("type", ""), address=address)
        )
    return report


def new_pass_report(plan: Mapping[str, Any] | None) -> PassReport:
    """Report the azapi resources a plan leaves unchanged."""
    report = PassReport(resources=[])
    for resource_change in _resource_changes(plan):
        address = resource_change.get("address") or ""
        if not address.startswith(_AZAPI_PREFIX):
            continue
        change = resource_change.get("change")
        if change is None or not _is_noop(change):
            continue
        before = change.get("before")
        if not isinstance(before, dict):
            continue
        report.resources.append(ReportedResource(type=before["type"], address=address))
    return report


def _message(piece: str) -> str:
    last = piece.rfind(_MESSAGE_END)
    return piece[:last] if last != -1 else piece


def new_error_report(
    apply_error: BaseException | str, logs: Sequence[RequestTrace] | None
) -> ErrorReport:
    """Report each azapi resource that failed to be created or updated."""
    report = ErrorReport(errors=[], logs=list(logs or []))
    for piece in str(apply_error).split("Error: creating/updating"):
        resource_id = api_version = ""
        matches = list(_ID_AND_VERSION.finditer(piece))
        if len(matches) == 1:
            resource_id, api_version = matches[0].group(1), matches[0].group(2)
        label_match = _RESOURCE_LABEL.search(piece)
        label = label_match.group(1) if label_match else ""
        if not label:
            continue
        report.errors.append(
            ReportError(
                id=resource_id,
                type=f"{get_resource_type(resource_id)}@{api_version}",
                label=label,
                message=_message(piece),
            )
        )
    return report


def new_cleanup_error_report(
    apply_error: BaseException | str, logs: Sequence[RequestTrace] | None
) -> ErrorReport:
    """Report each resource that failed to be deleted."""
    report = ErrorReport(errors=[], logs=list(logs or []))
    for piece in str(apply_error).split("Error: deleting"):
        matches = list(_ID_AND_VERSION.finditer(piece))
        if len(matches) != 1:
            continue
        resource_id, api_version = matches[0].group(1), matches[0].group(2)
        report.errors.append(
            ReportError(
                id=resource_id,
                type=f"{get_resource_type(resource_id)}@{api_version}",
                message=_message(piece),
            )
        )
    return report


def new_id_address_from_state(state: Mapping[str, Any] | None) -> dict[str, str]:
    """Map the id of every resource in a state to its address."""
    resources = _state_resources(state)
    if resources is None:
        logger.warning("new id address mapping from state: state is nil")
        return {}
    out = {}
    for res in resources:
        values = res.get("values") or {}
        out[values.get("id", "")] = res.get("address") or ""
    return out


def get_body(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild the request body of an azapi resource from its attributes.

    Tags, location and identity are taken from their own attributes; keys in
    the JSON body win over them. Raises ValueError if the body is not a JSON
    object.
    """
    output: dict[str, Any] = {}
    body_raw = attributes.get("body")
    if not body_raw:
        return output
    tags = attributes.get("tags")
    if tags:
        output["tags"] = dict(tags)
    location = attributes.get("location")
    if location:
        output["location"] = location
    identity = attributes.get("identity")
    if identity:
        output["identity"] = expand_identity(identity)
    body = json.loads(body_raw)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("body must be a JSON object")
    output.update(body)
    return output


def expand_identity(identities: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Turn the first identity block into the ARM identity object."""
    first = next(iter(identities or []), None)
    config: dict[str, Any] = {}
    if first is None:
        return config
    identity_type = first.get("type")
    if identity_type:
        config["type"] = identity_type
    identity_ids = first.get("identity_ids")
    if identity_ids:
        config["userAssignedIdentities"] = {identity_id: {} for identity_id in identity_ids}
    return config