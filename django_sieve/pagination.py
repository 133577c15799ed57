"""
Django-Sieve Pagination Parsing

Parses the ``page`` and ``pageSize`` query parameters.
"""

import re

from django_sieve.conf import sieve_settings
from django_sieve.types import PAGE_PARAM, PAGE_SIZE_PARAM, ErrorKind, ParseError

# Leading integer, the rest is ignored ("1.5" -> 1, "20abc" -> 20)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(raw):
    """Truncating integer parse. Returns None when no leading integer exists."""
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def get_default_page_size(config):
    if config.default_page_size is not None:
        return config.default_page_size
    return sieve_settings.DEFAULT_PAGE_SIZE


def get_max_page_size(config):
    if config.max_page_size is not None:
        return config.max_page_size
    return sieve_settings.MAX_PAGE_SIZE


def parse_pagination(raw_page, raw_page_size, config):
    """
    Parse page number and page size.

    A missing parameter (None) takes its default. A parameter that is
    present but not a positive integer is an error, and the default is
    used in its place. Page sizes above the maximum are clamped without
    an error; page numbers have no upper bound.

    Args:
        raw_page: Raw ``page`` value or None
        raw_page_size: Raw ``pageSize`` value or None
        config: SieveConfig

    Returns:
        Tuple of (page, page_size, errors)
    """
    errors = []

    page = 1
    if raw_page is not None:
        parsed = parse_int(raw_page)
        if parsed is None or parsed < 1:
            errors.append(
                ParseError(
                    ErrorKind.INVALID_PAGINATION,
                    f"Invalid page number: '{raw_page}'. Must be a positive integer.",
                    field=PAGE_PARAM,
                )
            )
        else:
            page = parsed

    max_page_size = get_max_page_size(config)
    page_size = min(get_default_page_size(config), max_page_size)
    if raw_page_size is not None:
        parsed = parse_int(raw_page_size)
        if parsed is None or parsed < 1:
            errors.append(
                ParseError(
                    ErrorKind.INVALID_PAGINATION,
                    f"Invalid page size: '{raw_page_size}'. Must be a positive integer.",
                    field=PAGE_SIZE_PARAM,
                )
            )
        else:
            page_size = min(parsed, max_page_size)

    return page, page_size, errors
