"""
Django-Sieve URL Helpers

Parse sieve parameters out of a URL and rewrite a URL's sieve
parameters while leaving every other query parameter alone.
"""

from dataclasses import replace
from urllib.parse import parse_qs, parse_qsl, urlencode, urlsplit, urlunsplit

from django_sieve.pagination import get_default_page_size
from django_sieve.parser import merge_sieve_query, parse_sieve_query
from django_sieve.serializer import build_sieve_params
from django_sieve.types import SIEVE_PARAMS, SieveConfig


def parse_sieve_from_url(url, config=None):
    """
    Parse the sieve parameters of an absolute or relative URL.

    A URL without a query string yields the default query.

    Examples:
        >>> parse_sieve_from_url("/api/products?page=2&sorts=-price").query.page
        2
    """
    query_string = urlsplit(url).query
    return parse_sieve_query(parse_qs(query_string, keep_blank_values=True), config)


def update_url_with_sieve(base_url, partial, config=None):
    """
    Apply a partial sieve query to a URL.

    The URL's current sieve state is merged with ``partial`` and the
    canonical form replaces the page, pageSize, sorts and filters
    parameters. Other parameters keep their values and order.

    The current state is read with the names used in the URL: field
    mappings and the default sort are not applied, so the rewritten URL
    parses the same way as the original one. An empty ``partial`` leaves
    the URL unchanged; otherwise the sieve parameters are always
    rewritten, and those left at their defaults are dropped.

    Args:
        base_url: Absolute or relative URL
        partial: Mapping with any of page, page_size/pageSize, sorts, filters
        config: Optional SieveConfig or config dict

    Returns:
        Updated URL string

    Examples:
        >>> update_url_with_sieve("/api/products?foo=bar", {"page": 2})
        '/api/products?foo=bar&page=2'
    """
    if not partial:
        return base_url

    config = SieveConfig.coerce(config)
    parts = urlsplit(base_url)

    url_config = replace(config, field_mappings={}, default_sort=None)
    current = parse_sieve_query(parse_qs(parts.query, keep_blank_values=True), url_config).query
    merged = merge_sieve_query(current, partial)
    sieve_params = build_sieve_params(merged, get_default_page_size(config))

    kept = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key not in SIEVE_PARAMS]
    query_string = urlencode(kept + sieve_params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query_string, parts.fragment))
