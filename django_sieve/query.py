"""
Django-Sieve Query Execution

Applies a parsed SieveQuery to a Django queryset: filtering, ordering
and page slicing, with pagination metadata for the response.

Provides:
- SieveQuerySet class for OOP-style usage
- execute_sieve_query function for procedural usage
- apply_mandatory_filters for server-imposed clauses
"""

import math
from dataclasses import replace

from django_sieve.filters import build_q_object, extract_filter_fields, to_field_path
from django_sieve.types import FilterClause


def build_ordering(sorts):
    """
    Convert sort clauses into ``QuerySet.order_by`` arguments.

    Examples:
        >>> build_ordering([SortClause("createdAt", SortDirection.DESC), SortClause("shop.name")])
        ['-createdAt', 'shop__name']
    """
    return [f"-{to_field_path(s.field)}" if s.is_descending else to_field_path(s.field) for s in sorts]


def apply_mandatory_filters(query, mandatory_filters):
    """
    Force server-side filter clauses onto a query.

    Client clauses on any field that has a mandatory clause are removed,
    and the mandatory clauses are placed first.

    Args:
        query: SieveQuery
        mandatory_filters: Iterable of FilterClause or filter dicts

    Returns:
        New SieveQuery
    """
    mandatory = tuple(FilterClause.coerce(f) for f in mandatory_filters or ())
    if not mandatory:
        return query

    locked_fields = set(extract_filter_fields(mandatory))
    client = tuple(f for f in query.filters if f.field not in locked_fields)
    return replace(query, filters=mandatory + client)


def get_queryset(source):
    """Accept a model class, manager or queryset and return a queryset."""
    if hasattr(source, "_default_manager"):
        return source._default_manager.all()
    return source.all()


class SieveQuerySet:
    """
    Sieve executor for a Django queryset.

    Example:
        outcome = parse_sieve_query(request.GET, config)
        result = SieveQuerySet(Product.objects.filter(active=True)).execute(outcome.query)

        # With server-imposed filters
        result = SieveQuerySet(Product, mandatory_filters=[
            {"field": "status", "operator": "==", "value": "published"},
        ]).execute(outcome.query)
    """

    def __init__(self, source, mandatory_filters=None):
        """
        Initialize a SieveQuerySet.

        Args:
            source: Django model class, manager or queryset
            mandatory_filters: Optional filter clauses always applied
        """
        self.source = source
        self.mandatory_filters = mandatory_filters

    def apply(self, query):
        """Return the filtered and ordered queryset, without slicing."""
        query = apply_mandatory_filters(query, self.mandatory_filters)
        queryset = get_queryset(self.source).filter(build_q_object(query.filters))
        ordering = build_ordering(query.sorts)
        if ordering:
            queryset = queryset.order_by(*ordering)
        return queryset

    def execute(self, query, transform=None):
        """
        Run the query and return one page with pagination metadata.

        Args:
            query: SieveQuery
            transform: Optional callable applied to each row of the page

        Returns:
            Dict with data, total, page, pageSize, totalPages,
            hasNextPage and hasPreviousPage
        """
        queryset = self.apply(query)
        total = queryset.count()
        total_pages = math.ceil(total / query.page_size) if total else 0

        rows = list(queryset[query.offset : query.offset + query.page_size])
        if transform is not None:
            rows = [transform(row) for row in rows]

        return {
            "data": rows,
            "total": total,
            "page": query.page,
            "pageSize": query.page_size,
            "totalPages": total_pages,
            "hasNextPage": query.page < total_pages,
            "hasPreviousPage": query.page > 1,
        }


def execute_sieve_query(source, query, mandatory_filters=None, transform=None):
    """
    Execute a sieve query on a model or queryset.

    Convenience function that wraps SieveQuerySet.

    Example:
        result = execute_sieve_query(Product, outcome.query)
        result["totalPages"]
    """
    return SieveQuerySet(source, mandatory_filters=mandatory_filters).execute(query, transform=transform)
