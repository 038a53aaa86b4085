"""An azapi_resource generated from an API example."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Iterable

from armstrong.azid import get_parent_id_from_id, get_resource_type, get_updated_body
from armstrong.base import (
    PropertyDependencyMapping,
    _api_version,
    _first_response_id,
    find_parent_reference,
    get_key_value_mappings,
    new_label,
    required_dependencies,
    update_property_dependency_mappings_reference,
)
from armstrong.hclconfig import random_name
from armstrong.hclmarshal import marshal_indent
from armstrong.reference import Reference
from armstrong.types import Dependency

logger = logging.getLogger(__name__)

_JSON_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _json_indent(value: Any) -> str:
    text = json.dumps(value, indent=4, sort_keys=True, ensure_ascii=False)
    for char, escaped in _JSON_ESCAPES:
        text = text.replace(char, escaped)
    return text


@dataclass
class AzapiResource:
    """A resource block whose body comes from an example request."""

    api_version: str = ""
    example_id: str = ""
    example_body: Any = None
    property_dependency_mappings: list[PropertyDependencyMapping] = field(default_factory=list)
    label: str = "resource"

    def required_dependencies(
        self,
        existing_dependencies: Iterable[Dependency] | None,
        dependencies: Iterable[Dependency] | None,
    ) -> list[Dependency]:
        return required_dependencies(
            self.property_dependency_mappings, existing_dependencies, dependencies
        )

    def update_property_dependency_mappings_reference(
        self,
        dependencies: Iterable[Dependency] | None,
        references: Iterable[Reference] | None,
    ) -> None:
        self.property_dependency_mappings = update_property_dependency_mappings_reference(
            self.property_dependency_mappings, dependencies, references
        )

    def generate_label(self, references: Iterable[Reference] | None) -> str:
        """Pick a unique label from the resource type and remember it."""
        self.label = new_label(get_resource_type(self.example_id), references)
        return self.label

    def hcl(self, use_raw_json_payload: bool) -> str:
        """Render the resource as an azapi_resource block."""
        if use_raw_json_payload:
            body = f"<<BODY\n{_json_indent(self.get_body())}\nBODY"
        else:
            body = f"jsonencode({marshal_indent(self.get_body(), '', '  ')})"
        resource_type = get_resource_type(self.example_id)
        parent_id = find_parent_reference(self.property_dependency_mappings)
        if not parent_id:
            parent_id = f'"{get_parent_id_from_id(self.example_id)}"'
        return (
            f'\nresource "azapi_resource" "{self.label}" {{\n'
            f'\ttype = "{resource_type}@{self.api_version}"\n'
            f"\tparent_id = {parent_id}\n"
            f'    name = "{random_name()}"\n'
            "\n"
            f" \tbody = {body}\n"
            "\n"
            "    schema_validation_enabled = false\n"
            "    ignore_missing_property = false\n"
            "}\n"
        )

    def get_body(self) -> Any:
        """Return the example body with references substituted and name removed."""
        replacements = {}
        for mapping in self.property_dependency_mappings:
            if mapping.value_path == "parent" or mapping.reference is None:
                continue
            if not mapping.reference.is_known():
                logger.warning("reference is unknown, reference: %s", mapping.reference)
                continue
            path = f"key:{mapping.value_path}" if mapping.is_key else mapping.value_path
            replacements[path] = f"${{{mapping.reference}}}"
        return get_updated_body(self.example_body, replacements, [".name"], "")


def new_resource_from_example(filepath: str | os.PathLike) -> AzapiResource:
    """Build a resource from an API example JSON file."""
    with open(filepath, encoding="utf-8") as fh:
        example = json.load(fh)

    body = None
    example_id = ""
    api_version = ""
    mappings: list[PropertyDependencyMapping] = []
    if isinstance(example, dict):
        parameters = example.get("parameters")
        if isinstance(parameters, dict):
            for value in parameters.values():
                if isinstance(value, dict):
                    body = value
            mappings.extend(get_key_value_mappings(body, ""))
            api_version = _api_version(parameters)
        responses = example.get("responses")
        if isinstance(responses, dict):
            example_id = _first_response_id(responses)
            if example_id:
                mappings.append(
                    PropertyDependencyMapping(
                        value_path="parent",
                        literal_value=get_parent_id_from_id(example_id),
                    )
                )
    return AzapiResource(
        api_version=api_version,
        example_id=example_id,
        example_body=body,
        property_dependency_mappings=mappings,
        label="resource",
    )