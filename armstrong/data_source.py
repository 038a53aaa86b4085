"""An azapi_resource data source generated from an API example."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Iterable

from armstrong.azid import get_name, get_parent_id_from_id, get_resource_type
from armstrong.base import (
    PropertyDependencyMapping,
    _api_version,
    _first_response_id,
    find_parent_reference,
    new_label,
    required_dependencies,
    update_property_dependency_mappings_reference,
)
from armstrong.hclconfig import random_name
from armstrong.reference import Reference
from armstrong.types import Dependency


@dataclass
class DataSource:
    """A data block that reads an existing resource."""

    api_version: str = ""
    example_id: str = ""
    property_dependency_mappings: list[PropertyDependencyMapping] = field(default_factory=list)
    label: str = ""

    def generate_label(self, references: Iterable[Reference] | None) -> str:
        """Pick a unique label from the resource type and remember it."""
        self.label = new_label(get_resource_type(self.example_id), references)
        return self.label

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

    def hcl(self, use_raw_json_payload: bool) -> str:
        """Render the data block; the payload flag has no effect here."""
        resource_type = get_resource_type(self.example_id)
        name = get_name(self.example_id)
        if name != "default":
            name = random_name()
        parent_id = find_parent_reference(self.property_dependency_mappings)
        if not parent_id:
            parent_id = f'"{get_parent_id_from_id(self.example_id)}"'
        return (
            f'\ndata "azapi_resource" "{self.label}" {{\n'
            f'\ttype = "{resource_type}@{self.api_version}"\n'
            f"\tparent_id = {parent_id}\n"
            f'    name = "{name}"\n'
            "}\n"
        )


def new_data_source_from_example(filepath: str | os.PathLike) -> DataSource:
    """Build a data source from an API example JSON file."""
    with open(filepath, encoding="utf-8") as fh:
        example = json.load(fh)

    example_id = ""
    api_version = ""
    mappings: list[PropertyDependencyMapping] = []
    if isinstance(example, dict):
        parameters = example.get("parameters")
        if isinstance(parameters, dict):
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
    return DataSource(
        api_version=api_version,
        example_id=example_id,
        property_dependency_mappings=mappings,
        label="",
    )