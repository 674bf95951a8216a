#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Client for the Spark real-estate inventory/CRM API (v2).
"""

__version__ = "0.1.0"

from .config import AppConfig
from .api import (
    BrokerageError,
    SparkAPIError,
    SparkClient,
    SparkConfigurationError,
    SparkFetchError,
)
from .models import (
    AdditionalField,
    Brokerage,
    ContactResult,
    Country,
    FloorPlan,
    InventoryStatus,
    Unit,
)

__all__ = [
    "AdditionalField",
    "AppConfig",
    "Brokerage",
    "BrokerageError",
    "ContactResult",
    "Country",
    "FloorPlan",
    "InventoryStatus",
    "SparkAPIError",
    "SparkClient",
    "SparkConfigurationError",
    "SparkFetchError",
    "Unit",
]
