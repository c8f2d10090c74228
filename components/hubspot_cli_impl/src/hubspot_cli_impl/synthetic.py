"""Removal of auto-generated tenant records from CRM result sets.

Tenant provisioning creates companies and deals named ``tenant-<hex>`` or
``tenant-<uuid>``. List and search hide them unless IncludeSynthetic is set.
"""

from __future__ import annotations

import re
from typing import Any

__all__ = ["DISPLAY_NAME_PROPERTY", "SYNTHETIC_NAME_PATTERN", "filter_synthetic", "is_synthetic"]

SYNTHETIC_NAME_PATTERN = re.compile(
    r"^tenant[-_ ]?[0-9a-f]{8}(?:-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})?$",
    re.IGNORECASE,
)

#object type -> property holding the display name
DISPLAY_NAME_PROPERTY: dict[str, str] = {
    "companies": "name",
    "deals": "dealname",
}


def is_synthetic(record: dict[str, Any], name_property: str) -> bool:
    name = (record.get("properties") or {}).get(name_property)
    return isinstance(name, str) and SYNTHETIC_NAME_PATTERN.match(name.strip()) is not None


def filter_synthetic(response: dict[str, Any], object_type: str, *, enabled: bool = True) -> dict[str, Any]:
    """
    Args:
        response:    Raw list or search response ({"results": [...], "total"?, "paging"?})
        object_type: Canonical object type; only types with a display name rule are filtered
        enabled:     False keeps every record but still returns the same view shape

    Returns:
        {"total", "count", "excluded", "results"[, "paging"]}. "total" is the
        service-reported total (or the unfiltered page size when the endpoint
        reports none), "count" is the number of records kept.
    """
    results: list[dict[str, Any]] = list(response.get("results") or [])
    name_property = DISPLAY_NAME_PROPERTY.get(object_type)

    if enabled and name_property:
        kept = [record for record in results if not is_synthetic(record, name_property)]
    else:
        kept = results

    view: dict[str, Any] = {
        "total": response.get("total", len(results)),
        "count": len(kept),
        "excluded": len(results) - len(kept),
        "results": kept,
    }
    if response.get("paging"):
        view["paging"] = response["paging"]
    return view
