"""OData filter expression building for the external search index."""

from __future__ import annotations

from collections.abc import Sequence

from tenantkit.core.search.types import SearchFilters


def odata_eq(field: str, value: str) -> str:
    """Build ``field eq 'value'`` with single quotes doubled."""
    escaped = value.replace("'", "''")
    return f"{field} eq '{escaped}'"


def odata_any_of(field: str, values: Sequence[str]) -> str:
    """Build an OR group of equality clauses."""
    return "(" + " or ".join(odata_eq(field, v) for v in values) + ")"


def build_filter_parts(
    default_filters: Sequence[str],
    filter_fields: Sequence[str],
    category: str | None = None,
    type: str | None = None,
    filters: SearchFilters | None = None,
) -> list[str]:
    """Collect filter clauses in order.

    Configured default filters come first, then the legacy category and
    type filters mapped onto the first two configured filter fields, then
    the named filters from the request. A named filter with several values
    becomes an OR group.

    Returns:
        Clauses to be joined with ``and``.
    """
    parts = [expr.strip() for expr in default_filters if expr and expr.strip()]

    if len(filter_fields) >= 1 and category and category.strip():
        parts.append(odata_eq(filter_fields[0], category))
    if len(filter_fields) >= 2 and type and type.strip():
        parts.append(odata_eq(filter_fields[1], type))

    for field, values in (filters or {}).items():
        if not field or not field.strip() or not values:
            continue
        kept = [v for v in values if v and v.strip()]
        if not kept:
            continue
        parts.append(odata_eq(field, kept[0]) if len(kept) == 1 else odata_any_of(field, kept))

    return parts


def build_filter(
    default_filters: Sequence[str],
    filter_fields: Sequence[str],
    category: str | None = None,
    type: str | None = None,
    filters: SearchFilters | None = None,
) -> str | None:
    """Build the full filter expression, or None when there is nothing to filter."""
    parts = build_filter_parts(default_filters, filter_fields, category, type, filters)
    return " and ".join(parts) if parts else None
