"""References from one terraform block to an attribute of another."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Reference:
    label: str = ""
    type: str = ""
    resource_type: str = ""
    property_name: str = ""

    def __str__(self) -> str:
        address = f"{self.resource_type}.{self.label}.{self.property_name}"
        return f"data.{address}" if self.type == "data" else address

    def is_known(self) -> bool:
        """Tell whether every part of the reference is filled in."""
        return bool(self.label and self.property_name and self.resource_type and self.type)


def is_known(reference: Reference | None) -> bool:
    """Like Reference.is_known, but also accepts None."""
    return reference is not None and reference.is_known()


def new_reference_from_address(address: str) -> Reference | None:
    """Parse ``type.label.prop`` or ``data.type.label.prop``; None otherwise."""
    parts = address.split(".")
    if len(parts) == 3:
        return Reference(
            type="resource", resource_type=parts[0], label=parts[1], property_name=parts[2]
        )
    if len(parts) == 4:
        return Reference(
            type="data", resource_type=parts[1], label=parts[2], property_name=parts[3]
        )
    return None