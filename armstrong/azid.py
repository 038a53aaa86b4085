"""Helpers for Azure resource ids and example request bodies."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping
from urllib.parse import unquote, urlsplit

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def _request_path(resource_id: str) -> str:
    """Return the path of a request URI, raising ValueError if it is not one."""
    if not resource_id:
        raise ValueError("empty url")
    if _SCHEME.match(resource_id):
        path = urlsplit(resource_id).path
    elif resource_id.startswith("/"):
        path = resource_id.split("?", 1)[0]
    else:
        raise ValueError(f"invalid URI for request: {resource_id!r}")
    return unquote(path)


def _components(resource_id: str) -> list[str]:
    path = _request_path(resource_id)
    return path.removeprefix("/").removesuffix("/").split("/")


def get_updated_body(
    body: Any,
    replacements: Mapping[str, str] | None,
    removes: Iterable[str] | None,
    path: str,
) -> Any:
    """Return a copy of body with values replaced or removed by their path.

    A replacement keyed ``key:<path>`` renames the key at that path.
    """
    replacements = replacements or {}
    removes = list(removes or [])
    if not replacements and not removes:
        return body
    if isinstance(body, dict):
        result = {}
        for key, value in body.items():
            updated = get_updated_body(value, replacements, removes, f"{path}.{key}")
            if updated is None:
                continue
            new_key = replacements.get(f"key:{path}.{key}")
            result[new_key or key] = updated
        return result
    if isinstance(body, list):
        items = (
            get_updated_body(value, replacements, removes, f"{path}.{index}")
            for index, value in enumerate(body)
        )
        return [item for item in items if item is not None]
    if isinstance(body, str):
        if path in replacements:
            return replacements[path]
        if path in removes:
            return None
    return body


def get_id_from_response_example(response: Any) -> str:
    """Extract ``body.id`` from a response example, or return ''."""
    if isinstance(response, dict):
        body = response.get("body")
        if isinstance(body, dict) and isinstance(body.get("id"), str):
            return body["id"]
    return ""


def get_parent_id_from_id(resource_id: str) -> str:
    """Return the id of the parent resource, or '' if the id cannot be parsed."""
    try:
        components = _components(resource_id)
    except ValueError:
        return ""
    length = len(components) - 2
    if length - 2 >= 0 and components[length - 2] == "providers":
        length -= 2
    parts = [
        f"/{components[i]}/{components[i + 1]}" for i in range(0, length - 1, 2)
    ]
    return "".join(parts)


def is_value_match_pattern(value: str, pattern: str) -> bool:
    """Tell whether value is an id whose pattern equals pattern, ignoring case."""
    if not pattern:
        return False
    try:
        value_pattern = get_id_pattern(value)
    except ValueError:
        return False
    return value_pattern.casefold() == pattern.casefold()


def get_id_pattern(resource_id: str) -> str:
    """Return the id with names dropped, keeping provider namespaces."""
    try:
        components = _components(resource_id)
    except ValueError as exc:
        raise ValueError(f"cannot parse Azure ID, id: {resource_id}: {exc}") from exc
    pattern = ""
    for key, value in zip(components[0::2], components[1::2]):
        if not key or not value:
            raise ValueError(
                f"Key/Value cannot be empty strings. Key: '{key}', "
                f"Value: '{value}', id: {resource_id}"
            )
        pattern += "/" + key
        if key == "providers":
            pattern += "/" + value
    return pattern


def get_resource_type(resource_id: str) -> str:
    """Return the ARM resource type of an id, or '' if there is none."""
    try:
        components = _components(resource_id)
    except ValueError:
        return ""
    if len(components) % 2:
        raise ValueError(f"id has an odd number of segments: {resource_id}")
    resource_type = ""
    provider = ""
    for key, value in zip(components[0::2], components[1::2]):
        if not key or not value:
            return ""
        if key == "providers":
            provider = value
            resource_type = provider
        elif provider:
            resource_type += "/" + key
    return resource_type


def get_name(resource_id: str) -> str:
    """Return the last segment of an id, or '' if the id cannot be parsed."""
    try:
        path = _request_path(resource_id)
    except ValueError:
        return ""
    path = path.removeprefix("/").removesuffix("/")
    return path[path.rfind("/") + 1:]