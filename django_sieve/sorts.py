"""
Django-Sieve Sort Parsing

Parses the ``sorts`` query parameter: a comma-separated list of field
names where a leading ``-`` means descending.

Example:
    sorts=-createdAt,price  ->  createdAt DESC, then price ASC
"""

from django_sieve.codec import split_sorts
from django_sieve.types import SortClause, SortDirection


def parse_sort_token(token):
    """
    Parse a single sort token.

    Returns:
        Tuple of (field, direction); field is empty for blank tokens

    Examples:
        >>> parse_sort_token("-createdAt")
        ('createdAt', <SortDirection.DESC: 'desc'>)
        >>> parse_sort_token("price")
        ('price', <SortDirection.ASC: 'asc'>)
    """
    if token.startswith("-"):
        return token[1:].strip(), SortDirection.DESC
    return token.strip(), SortDirection.ASC


def parse_sorts(raw, config):
    """
    Parse sort clauses, honouring the sortable allow-list.

    Fields outside ``config.sortable_fields`` are dropped with a warning.
    Surviving fields are renamed through ``config.field_mappings``. When
    nothing survives, ``config.default_sort`` is used if set.

    Args:
        raw: Raw ``sorts`` value or None
        config: SieveConfig

    Returns:
        Tuple of (sorts, warnings)
    """
    sorts = []
    warnings = []

    for token in split_sorts(raw):
        field, direction = parse_sort_token(token)
        if not field:
            continue

        if config.sortable_fields is not None and field not in config.sortable_fields:
            warnings.append(f"Field '{field}' is not sortable. Ignored.")
            continue

        sorts.append(SortClause(config.map_field(field), direction))

    if not sorts and config.default_sort is not None:
        sorts.append(config.default_sort)

    return tuple(sorts), warnings
