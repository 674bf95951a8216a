"""Spark API v2 client.

This module provides the public façade over the Spark inventory/CRM API:
fetching inventory units and joining floor plans, statuses and additional
fields onto them, resolving brokerages by name, listing countries, and
submitting contacts.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import AppConfig
from ..contacts.sanitizer import sanitize_v1_fields
from ..models import (
    AdditionalField,
    Brokerage,
    ContactResult,
    Country,
    FloorPlan,
    InventoryStatus,
    Unit,
)
from ..utils.logger import get_logger, log_integration_event
from .pagination import FetchResult, fetch_all_pages, key_by_id
from .transport import (
    SparkAPIError,
    SparkConfigurationError,
    SparkResponseError,
    SparkTransport,
)

logger = get_logger(__name__)

# Resource paths
UNITS_RESOURCE = "inventory"
FLOORPLANS_RESOURCE = "floorplans"
STATUSES_RESOURCE = "inventory-statuses"
ADDITIONAL_FIELDS_RESOURCE = "additional-fields?inventory_id_not_null=true"
BROKERAGES_RESOURCE = "brokerages"
COUNTRIES_RESOURCE = "countries"
CONTACTS_RESOURCE = "contacts"

Units = Dict[int, Unit]
RecordT = TypeVar("RecordT", bound=BaseModel)


class SparkFetchError(SparkAPIError):
    """Exception raised in strict mode when a list resource could not be read."""

    def __init__(self, resource: str, cause: SparkAPIError):
        super().__init__(f"Could not fetch {resource}: {cause.message}", cause.status_code)
        self.resource = resource


class BrokerageError(SparkAPIError):
    """Exception raised when a brokerage cannot be created."""
    pass


class SparkClient:
    """Client for the Spark inventory/CRM API.

    Read operations return complete collections. When a resource cannot be
    read, the default behaviour is to log a warning and continue with an empty
    collection; with ``strict_fetch`` enabled a ``SparkFetchError`` is raised
    instead.

    Args:
        config: Client configuration, read from the environment when omitted
        transport: Pre-built transport (mainly for tests)
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 transport: Optional[SparkTransport] = None):
        self.config = config or AppConfig()

        errors = self.config.validate()
        if errors:
            raise SparkConfigurationError("; ".join(errors))

        self.transport = transport or SparkTransport(self.config)
        log_integration_event("spark", "initialize", f"Spark client ready for {self.config.base_url()}")

    def __enter__(self) -> "SparkClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    def _fetch_all(self, resource: str) -> FetchResult:
        result = fetch_all_pages(self.transport.get, resource)
        if not result.ok:
            if self.config.strict_fetch:
                raise SparkFetchError(resource, result.error) from result.error
            log_integration_event(
                "spark", "fetch",
                f"{resource} unavailable, continuing without it: {result.error}",
                level=logging.WARNING,
            )
        return result

    def _parse_records(self, model: Type[RecordT], resource: str,
                       records: Dict[Any, Any]) -> Dict[Any, RecordT]:
        """Validate keyed records into ``model``, skipping any that do not fit."""
        parsed = {}
        for key, record in records.items():
            try:
                parsed[key] = model.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid {resource} record {key!r}: {e.error_count()} validation error(s)")
        return parsed

    def get_units(self) -> Units:
        """Get all inventory units keyed by id.

        Returns:
            Dict of unit id to Unit, empty if there are no units
        """
        records = key_by_id(self._fetch_all(UNITS_RESOURCE).items)
        return self._parse_records(Unit, UNITS_RESOURCE, records)

    def get_floorplans(self) -> Dict[int, FloorPlan]:
        records = key_by_id(self._fetch_all(FLOORPLANS_RESOURCE).items)
        return self._parse_records(FloorPlan, FLOORPLANS_RESOURCE, records)

    def get_statuses(self) -> Dict[int, InventoryStatus]:
        records = key_by_id(self._fetch_all(STATUSES_RESOURCE).items)
        return self._parse_records(InventoryStatus, STATUSES_RESOURCE, records)

    def get_additional_fields(self) -> List[AdditionalField]:
        """Get every additional field that references an inventory unit.

        Fields are de-duplicated by their own id, last one winning.
        """
        records = key_by_id(self._fetch_all(ADDITIONAL_FIELDS_RESOURCE).items)
        return list(self._parse_records(AdditionalField, ADDITIONAL_FIELDS_RESOURCE, records).values())

    def populate_units_floorplans(self, units: Units) -> bool:
        """Attach each unit's floor plan in place (None when unresolved)."""
        floorplans = self.get_floorplans()
        for unit in units.values():
            unit.floorplan = floorplans.get(unit.floorplan_id)
        return True

    def populate_units_statuses(self, units: Units) -> bool:
        """Attach each unit's status in place (None when unresolved)."""
        statuses = self.get_statuses()
        for unit in units.values():
            unit.status = statuses.get(unit.status_id)
        return True

    def populate_units_additional_fields(self, units: Units) -> bool:
        """Copy additional field values onto their units in place.

        A field named "Lot Size" becomes ``unit.additional_fields["lot_size"]``.
        Fields pointing at unknown units are ignored.
        """
        applied = 0
        for additional_field in self.get_additional_fields():
            unit = units.get(additional_field.inventory_id)
            name = additional_field.attribute_name
            if unit is None or name is None:
                continue
            unit.additional_fields[name] = additional_field.value
            applied += 1

        logger.debug(f"Applied {applied} additional field values to {len(units)} units")
        return True

    def get_units_with_details(self) -> Units:
        """Get all units with floor plan, status and additional fields attached.

        Returns:
            Dict of unit id to enriched Unit
        """
        units = self.get_units()

        self.populate_units_floorplans(units)
        self.populate_units_statuses(units)
        self.populate_units_additional_fields(units)

        log_integration_event("spark", "fetch", f"Loaded {len(units)} units with details")
        return units

    def get_brokerage(self, name: str) -> Brokerage:
        """Find a brokerage by exact name, creating it when none exists.

        Two callers creating the same name at once can both create it; the API
        offers no idempotency key.

        Args:
            name: Brokerage name

        Returns:
            Brokerage found or created

        Raises:
            BrokerageError: If creation is answered with anything but 201
            SparkAPIError: If the lookup itself fails
        """
        existing = self.transport.get(BROKERAGES_RESOURCE, params={"name_eq": name})

        if existing and not isinstance(existing, list):
            raise SparkResponseError(f"Unexpected brokerage lookup response for '{name}'")

        if existing:
            logger.info(f"Found brokerage '{name}'")
            return Brokerage.model_validate(existing[0])

        response = self.transport.post(BROKERAGES_RESOURCE, {"name": name})

        if not response.created:
            message = response.error_message
            log_integration_event("spark", "error", f"Brokerage '{name}' not created: {message}", level=logging.ERROR)
            raise BrokerageError(message, status_code=response.status_code)

        if not isinstance(response.data, dict):
            raise BrokerageError(f"Brokerage '{name}' created without a record in the response", response.status_code)

        log_integration_event("spark", "create", f"Created brokerage '{name}'")
        return Brokerage.model_validate(response.data)

    def get_countries(self) -> List[Country]:
        """Get the country list (a single page of up to ``per_page`` rows)."""
        try:
            data = self.transport.get(COUNTRIES_RESOURCE)
            if data and not isinstance(data, list):
                raise SparkResponseError("Unexpected countries response")
        except SparkAPIError as e:
            if self.config.strict_fetch:
                raise SparkFetchError(COUNTRIES_RESOURCE, e) from e
            logger.warning(f"Fetching countries failed: {e}")
            return []

        return [Country.model_validate(record) for record in data or []]

    def post_contact(self, data: Dict[str, Any], sanitize: Optional[bool] = None) -> ContactResult:
        """Submit a contact (lead) to Spark.

        Args:
            data: Lead fields
            sanitize: Convert v1 fields and resolve the brokerage before
                submitting; defaults to ``config.sanitize_contacts``

        Returns:
            ContactResult with status "success" (and the created record) or
            "failed" (and the API's error message)

        Raises:
            BrokerageError: If a brokerage named in the payload cannot be created
        """
        if sanitize is None:
            sanitize = self.config.sanitize_contacts

        payload = sanitize_v1_fields(data, self.get_brokerage) if sanitize else dict(data)

        response = self.transport.post(CONTACTS_RESOURCE, payload)

        if response.created:
            log_integration_event("spark", "submit", "Contact created")
            return ContactResult(status="success", message="", data=response.data if isinstance(response.data, dict) else {})

        message = response.error_message
        log_integration_event("spark", "error", f"Contact rejected ({response.status_code}): {message}", level=logging.WARNING)
        return ContactResult(status="failed", message=message)
