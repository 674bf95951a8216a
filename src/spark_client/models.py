#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Spark record models.

Records returned by the Spark API carry many deployment-specific attributes, so
every model keeps unknown keys as pydantic extras instead of rejecting them.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SparkRecord(BaseModel):
    """Base for any record identified by a Spark ``id``."""

    model_config = ConfigDict(extra="allow")

    id: int


class FloorPlan(SparkRecord):
    """Floor plan lookup target."""

    name: Optional[str] = None


class InventoryStatus(SparkRecord):
    """Inventory status lookup target."""

    name: Optional[str] = None


class AdditionalField(SparkRecord):
    """Deployment-specific attribute attached to an inventory unit."""

    # foreign keys stay as the API sent them; lookups are by raw value
    inventory_id: Any = None
    name: Optional[str] = None
    value: Any = None

    @property
    def attribute_name(self) -> Optional[str]:
        """Unit attribute key derived from the display name ("Lot Size" -> "lot_size")."""
        if self.name is None:
            return None
        return self.name.replace(" ", "_").lower()


class Brokerage(SparkRecord):
    """Brokerage resolved by name."""

    name: Optional[str] = None


class Country(BaseModel):
    """Country entry from the ``countries`` resource."""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    name: Optional[str] = None


class Unit(SparkRecord):
    """
    Inventory unit.

    The core schema is fixed. ``floorplan`` and ``status`` hold whatever the API
    sent until enrichment replaces them with the related ``FloorPlan`` and
    ``InventoryStatus`` records (or None when unresolved). Additional fields land
    in ``additional_fields`` keyed by their derived attribute name.
    """

    floorplan_id: Any = None
    status_id: Any = None
    floorplan: Any = None
    status: Any = None
    additional_fields: Dict[str, Any] = Field(default_factory=dict)

    def to_flat_dict(self) -> Dict[str, Any]:
        """
        Dump the unit with additional fields merged into the top level.

        Returns:
            Dict[str, Any]: Unit in the flat shape callers of the original wrapper expect
        """
        data = self.model_dump(exclude={"additional_fields"})
        data.update(self.additional_fields)
        return data


class ContactResult(BaseModel):
    """Outcome of a contact submission."""

    status: str
    message: str = ""
    data: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
