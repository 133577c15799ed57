"""
Django-Sieve Query Parser

Ties together pagination, sort and filter parsing into a single
ParseOutcome, and provides the defaults and merge helpers that operate
on parsed queries.

Example:
    from django_sieve import parse_sieve_query

    outcome = parse_sieve_query(request.GET, {
        'sortableFields': ['createdAt', 'price'],
        'maxPageSize': 50,
    })
    if not outcome.is_valid:
        ...  # reject with outcome.errors
"""

import logging
from dataclasses import replace

from django_sieve.conf import sieve_settings
from django_sieve.filters import parse_filters
from django_sieve.pagination import get_default_page_size, get_max_page_size, parse_pagination
from django_sieve.sorts import parse_sorts
from django_sieve.types import (
    FILTERS_PARAM,
    PAGE_PARAM,
    PAGE_SIZE_PARAM,
    SORTS_PARAM,
    FilterClause,
    ParseOutcome,
    SieveConfig,
    SieveQuery,
    SortClause,
)

logger = logging.getLogger("django_sieve")


def get_param(params, key):
    """
    Read one raw parameter value.

    Works with Django QueryDicts, plain dicts, and ``parse_qs`` output
    (lists of values). The first value wins when a key repeats.
    """
    if hasattr(params, "getlist"):
        values = params.getlist(key)
        return values[0] if values else None

    value = params.get(key)
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def parse_sieve_query(params, config=None):
    """
    Parse sieve parameters into a structured query.

    Pagination, sorts and filters are parsed independently and every
    error and warning is collected. The returned query is always
    populated: parts that failed fall back to their defaults.

    Args:
        params: Mapping of raw (already percent-decoded) query parameters
        config: Optional SieveConfig or config dict

    Returns:
        ParseOutcome
    """
    config = SieveConfig.coerce(config)
    params = params or {}

    page, page_size, pagination_errors = parse_pagination(
        get_param(params, PAGE_PARAM), get_param(params, PAGE_SIZE_PARAM), config
    )
    sorts, sort_warnings = parse_sorts(get_param(params, SORTS_PARAM), config)
    filters, filter_errors, filter_warnings = parse_filters(get_param(params, FILTERS_PARAM), config)

    errors = pagination_errors + filter_errors
    warnings = sort_warnings + filter_warnings

    log_level = logging.INFO if sieve_settings.LOG_WARNINGS else logging.DEBUG
    for warning in warnings:
        logger.log(log_level, "Sieve clause dropped: %s", warning)
    for error in errors:
        logger.debug("Sieve parse error on %s: %s", error.field, error.message)

    query = SieveQuery(page=page, page_size=page_size, sorts=sorts, filters=filters)
    return ParseOutcome(query=query, errors=errors, warnings=warnings)


def create_default_sieve_query(config=None):
    """
    Build the query an empty request would produce.

    Examples:
        >>> create_default_sieve_query()
        SieveQuery(page=1, page_size=20, sorts=(), filters=())
    """
    config = SieveConfig.coerce(config)
    sorts = (config.default_sort,) if config.default_sort is not None else ()
    page_size = min(get_default_page_size(config), get_max_page_size(config))
    return SieveQuery(page=1, page_size=page_size, sorts=sorts)


# Accepted spellings of the mergeable keys
_MERGE_KEYS = {
    "page": "page",
    "page_size": "page_size",
    "pageSize": "page_size",
    "sorts": "sorts",
    "filters": "filters",
}


def merge_sieve_query(current, partial=None, **changes):
    """
    Return a new query with the keys present in ``partial`` replaced.

    Sort and filter lists are replaced wholesale, never merged element
    by element. Keys set to None count as absent.

    Args:
        current: SieveQuery to start from
        partial: Optional mapping with any of page, page_size/pageSize,
            sorts, filters
        **changes: Same keys as keyword arguments

    Returns:
        SieveQuery

    Raises:
        KeyError: If a key is not one of the merge keys
        ValueError: If page or page size is below 1

    Examples:
        >>> merge_sieve_query(SieveQuery(), {"page": 3})
        SieveQuery(page=3, page_size=20, sorts=(), filters=())
    """
    updates = {}
    for key, value in {**(partial or {}), **changes}.items():
        if key not in _MERGE_KEYS:
            raise KeyError(f"Unknown sieve query key: '{key}'")
        if value is None:
            continue

        target = _MERGE_KEYS[key]
        if target in ("page", "page_size") and value < 1:
            raise ValueError(f"Sieve query '{key}' must be a positive integer, got {value!r}")
        if target == "sorts":
            value = tuple(SortClause.coerce(s) for s in value)
        elif target == "filters":
            value = tuple(FilterClause.coerce(f) for f in value)
        updates[target] = value

    return replace(current, **updates)
