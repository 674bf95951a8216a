#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Contact Payload Sanitizer

Reshapes lead data written for the v1 Spark API into the v2 ``contacts`` schema:
empty values are dropped, a brokerage name is resolved to an id, and the legacy
``standardized_fields_attributes`` / ``answers`` groups are converted into
``additional_fields`` / ``question_answers`` entries.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Tuple

from ..models import Brokerage
from ..utils.logger import get_logger

logger = get_logger(__name__)

BrokerageResolver = Callable[[str], Brokerage]

# Scalars that count as empty besides None/False/0 and empty containers
EMPTY_STRINGS = ("", "0")


def is_empty(value: Any) -> bool:
    """
    Loose emptiness check used when cleaning contact payloads.

    None, False, numeric zero, "", "0" and empty containers are empty;
    everything else (including " " and "0.0") is not.

    Args:
        value: Value to test

    Returns:
        bool: True if the value counts as empty
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in EMPTY_STRINGS
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def _keyed_entries(group: Any) -> Iterator[Tuple[Any, Mapping]]:
    """Yield (key, entry) for a mapping or list group, skipping non-mapping entries."""
    if isinstance(group, Mapping):
        pairs = group.items()
    elif isinstance(group, (list, tuple)):
        pairs = enumerate(group)
    else:
        return
    for key, entry in pairs:
        if isinstance(entry, Mapping):
            yield key, entry
        else:
            logger.debug(f"Skipping malformed entry {key!r} in legacy field group")


def _entry_list(group: Any) -> List[Any]:
    """Existing entries of a list field, taking the values when a mapping was supplied."""
    if isinstance(group, Mapping):
        return list(group.values())
    if isinstance(group, (list, tuple)):
        return list(group)
    if is_empty(group):
        return []
    return [group]


def remove_empty_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` without keys whose value is empty."""
    return {key: value for key, value in data.items() if not is_empty(value)}


def sanitize_v1_fields(data: Dict[str, Any], resolve_brokerage: BrokerageResolver) -> Dict[str, Any]:
    """
    Build a v2 ``contacts`` payload from v1-style lead data.

    The input mapping is not modified.

    Args:
        data: Lead fields as supplied by the caller
        resolve_brokerage: Callable returning the brokerage for a name
            (found or created)

    Returns:
        Dict[str, Any]: Payload ready to POST

    Raises:
        BrokerageError: If the brokerage has to be created and creation fails
    """
    payload = remove_empty_fields(data)

    payload["additional_fields"] = _entry_list(payload.get("additional_fields"))

    # find or create the brokerage
    if not is_empty(payload.get("brokerage_name")):
        brokerage = resolve_brokerage(payload.pop("brokerage_name"))
        payload["brokerage_id"] = brokerage.id

    standardized = payload.get("standardized_fields_attributes")
    for key, entry in _keyed_entries(standardized):
        if not is_empty(entry.get("value")):
            payload["additional_fields"].append({
                "standardized_field_id": key,
                "value": entry["value"],
            })

    answers = payload.get("answers")
    if answers is not None:
        question_answers = _entry_list(payload.get("question_answers"))
        for key, question in _keyed_entries(answers):
            question_answers.append({
                "question_id": key,
                "answers": question.get("answers"),
            })
        payload["question_answers"] = question_answers

    logger.debug(f"Sanitized contact payload keys: {list(payload)}")
    return payload
