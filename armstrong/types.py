"""Plain data records shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping as MappingABC


@dataclass
class Dependency:
    """A resource that another resource can refer to."""

    pattern: str = ""
    example_configuration: str = ""
    resource_type: str = ""
    referred_property: str = ""
    address: str = ""


@dataclass
class RequestTrace:
    """One HTTP request or response found in a terraform log."""

    http_method: str = ""
    status_code: int = 0
    id: str = ""
    content: str = ""


@dataclass
class Mapping:
    """An entry of the resource type to id pattern mapping file."""

    resource_type: str = ""
    example_configuration: str = ""
    id_pattern: str = ""

    @classmethod
    def from_dict(cls, data: MappingABC[str, Any]) -> "Mapping":
        """Build a mapping from its JSON object form."""
        return cls(
            resource_type=data.get("resourceType") or "",
            example_configuration=data.get("exampleConfiguration") or "",
            id_pattern=data.get("idPattern") or "",
        )


@dataclass
class ReportedResource:
    """A resource named in a pass report."""

    type: str = ""
    address: str = ""


@dataclass
class PassReport:
    resources: list[ReportedResource] = field(default_factory=list)


@dataclass
class Change:
    """The JSON text of a resource body before and after a plan."""

    before: str = ""
    after: str = ""


@dataclass
class Diff:
    id: str = ""
    type: str = ""
    address: str = ""
    change: Change = field(default_factory=Change)


@dataclass
class DiffReport:
    diffs: list[Diff] = field(default_factory=list)
    logs: list[RequestTrace] = field(default_factory=list)


@dataclass
class ReportError:
    """A failed operation on one resource."""

    id: str = ""
    type: str = ""
    label: str = ""
    message: str = ""


@dataclass
class ErrorReport:
    errors: list[ReportError] = field(default_factory=list)
    logs: list[RequestTrace] = field(default_factory=list)