"""Load known dependencies from a resource type mapping file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass

from armstrong.types import Dependency, Mapping

_DEFAULT_MAPPINGS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "mappings.json")


@dataclass
class MappingJsonDependencyLoader:
    """Reads dependencies from a JSON list of mappings.

    With no path given, ``mappings.json`` beside this module is read.
    """

    mapping_json_filepath: str = ""

    def load(self) -> list[Dependency]:
        """Return one dependency per mapping; raises OSError or ValueError."""
        path = self.mapping_json_filepath or _DEFAULT_MAPPINGS
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, list):
            raise ValueError("mapping file must hold a JSON array")
        deps = []
        for entry in data:
            if entry is None:
                mapping = Mapping()
            elif isinstance(entry, dict):
                mapping = Mapping.from_dict(entry)
            else:
                raise ValueError(f"mapping entry must be an object, got {entry!r}")
            deps.append(
                Dependency(
                    pattern=mapping.id_pattern,
                    example_configuration=mapping.example_configuration,
                    resource_type=mapping.resource_type,
                    referred_property="id",
                )
            )
        return deps