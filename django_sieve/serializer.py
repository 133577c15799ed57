"""
Django-Sieve Serializer

Builds the canonical query string for a SieveQuery: defaults are left
out, so a query at its defaults serializes to "".
"""

from urllib.parse import urlencode

from django_sieve.codec import escape_value, format_value
from django_sieve.conf import sieve_settings
from django_sieve.types import FILTERS_PARAM, PAGE_PARAM, PAGE_SIZE_PARAM, SORTS_PARAM


def format_sorts(sorts):
    """
    Examples:
        >>> format_sorts([SortClause("createdAt", SortDirection.DESC), SortClause("price")])
        '-createdAt,price'
    """
    return ",".join(f"-{s.field}" if s.is_descending else s.field for s in sorts)


def format_filters(filters):
    """
    Rebuild ``field<operator><value>`` expressions, re-escaping commas.

    Examples:
        >>> format_filters([FilterClause("name", "==", "Test, Inc."), FilterClause("deletedAt", "==null")])
        'name==Test\\\\, Inc.,deletedAt==null'
    """
    return ",".join(f"{f.field}{f.operator}{escape_value(format_value(f.value))}" for f in filters)


def build_sieve_params(query, default_page_size=None):
    """
    List the non-default sieve parameters of a query as (key, value) pairs.

    Args:
        query: SieveQuery
        default_page_size: Page size to treat as default (falls back to
            the DEFAULT_PAGE_SIZE setting)

    Returns:
        List of (key, value) tuples in page, pageSize, sorts, filters order
    """
    if default_page_size is None:
        default_page_size = sieve_settings.DEFAULT_PAGE_SIZE

    params = []
    if query.page != 1:
        params.append((PAGE_PARAM, str(query.page)))
    if query.page_size != default_page_size:
        params.append((PAGE_SIZE_PARAM, str(query.page_size)))
    if query.sorts:
        params.append((SORTS_PARAM, format_sorts(query.sorts)))
    if query.filters:
        params.append((FILTERS_PARAM, format_filters(query.filters)))
    return params


def build_sieve_query_string(query, default_page_size=None):
    """
    Serialize a query to its canonical query string (without ``?``).

    Each value is percent-encoded as a whole, so operator characters and
    list commas never collide with URL structure.

    Examples:
        >>> build_sieve_query_string(SieveQuery(page=2, sorts=(SortClause("price", SortDirection.DESC),)))
        'page=2&sorts=-price'
        >>> build_sieve_query_string(SieveQuery())
        ''
    """
    return urlencode(build_sieve_params(query, default_page_size))
