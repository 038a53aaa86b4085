"""Shared logic of generated resources and data sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from armstrong.azid import get_id_from_response_example, is_value_match_pattern
from armstrong.reference import Reference, is_known, new_reference_from_address
from armstrong.singular import singularize
from armstrong.types import Dependency

logger = logging.getLogger(__name__)


@dataclass
class PropertyDependencyMapping:
    """A string value, or a key, of an example body at a given path."""

    is_key: bool = False
    value_path: str = ""
    literal_value: str = ""
    reference: Reference | None = None


def find_parent_reference(mappings: Iterable[PropertyDependencyMapping]) -> str:
    """Return the reference text of the ``parent`` mapping, or '' if unknown."""
    parent = next((m for m in mappings if m.value_path == "parent"), None)
    reference = parent.reference if parent is not None else None
    if is_known(reference):
        return str(reference)
    logger.warning("reference is unknown, reference: %s", reference)
    return ""


def required_dependencies(
    mappings: Iterable[PropertyDependencyMapping],
    existing_dependencies: Iterable[Dependency] | None,
    dependencies: Iterable[Dependency] | None,
) -> list[Dependency]:
    """Return the dependencies a resource needs that do not exist yet."""
    existing = list(existing_dependencies or [])
    candidates = list(dependencies or [])
    out = []
    for mapping in mappings:
        found = next(
            (d for d in existing if is_value_match_pattern(mapping.literal_value, d.pattern)),
            None,
        )
        if found is not None:
            logger.info("found existing dependency: %s", found.address)
            continue
        match = next(
            (d for d in candidates if is_value_match_pattern(mapping.literal_value, d.pattern)),
            None,
        )
        if match is not None:
            logger.info("found dependency: %s", match.resource_type)
            out.append(match)
    return out


def update_property_dependency_mappings_reference(
    mappings: list[PropertyDependencyMapping],
    dependencies: Iterable[Dependency] | None,
    references: Iterable[Reference] | None,
) -> list[PropertyDependencyMapping]:
    """Point each mapping that matches a dependency at that dependency."""
    deps = list(dependencies or [])
    ref_map = {ref.resource_type: ref for ref in references or []}
    for mapping in mappings:
        dep = next(
            (d for d in deps if is_value_match_pattern(mapping.literal_value, d.pattern)),
            None,
        )
        if dep is None:
            continue
        if dep.address:
            mapping.reference = new_reference_from_address(
                f"{dep.address}.{dep.referred_property}"
            )
            continue
        reference = Reference(
            type="resource",
            resource_type=dep.resource_type,
            property_name=dep.referred_property,
        )
        target = ref_map.get(dep.resource_type)
        if target is not None:
            reference.label = target.label
        else:
            logger.warning("dependency not found, resource type: %s", dep.resource_type)
        mapping.reference = reference
    return mappings


def get_key_value_mappings(parameters: Any, path: str) -> list[PropertyDependencyMapping]:
    """List every string value and every key of parameters with its path."""
    results: list[PropertyDependencyMapping] = []
    if isinstance(parameters, dict):
        for key, value in parameters.items():
            child = f"{path}.{key}"
            results.extend(get_key_value_mappings(value, child))
            results.append(
                PropertyDependencyMapping(is_key=True, value_path=child, literal_value=key)
            )
    elif isinstance(parameters, list):
        for index, value in enumerate(parameters):
            results.extend(get_key_value_mappings(value, f"{path}.{index}"))
    elif isinstance(parameters, str):
        results.append(PropertyDependencyMapping(value_path=path, literal_value=parameters))
    return results


def new_label(resource_type: str, references: Iterable[Reference] | None) -> str:
    """Return a label for resource_type not yet used by an azapi_resource."""
    used = {ref.label for ref in references or [] if ref.resource_type == "azapi_resource"}
    label = singularize(resource_type.split("/")[-1])
    if label not in used:
        return label
    for i in range(2, 101):
        candidate = f"{label}{i}"
        if candidate not in used:
            return candidate
    return label


def _api_version(parameters: Mapping[str, Any]) -> str:
    version = parameters.get("api-version")
    if not isinstance(version, str):
        raise ValueError("example parameters have no api-version")
    return version


def _first_response_id(responses: Mapping[str, Any]) -> str:
    for status in ("200", "201", "202"):
        resource_id = get_id_from_response_example(responses.get(status))
        if resource_id:
            return resource_id
    return ""