"""
Django-Sieve Types

Value objects shared by the parser, serializer and ORM adapter.

All query types are frozen dataclasses; "changing" a query always means
building a new one with ``dataclasses.replace`` or ``merge_sieve_query``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from django_sieve.conf import sieve_settings
from django_sieve.operators import Operator

FilterValue = Union[str, float, bool, None]

# Query-string keys owned by the sieve grammar
PAGE_PARAM = "page"
PAGE_SIZE_PARAM = "pageSize"
SORTS_PARAM = "sorts"
FILTERS_PARAM = "filters"
SIEVE_PARAMS = (PAGE_PARAM, PAGE_SIZE_PARAM, SORTS_PARAM, FILTERS_PARAM)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ValueType(str, Enum):
    """Declared type of a filterable field's value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class ErrorKind(str, Enum):
    INVALID_PAGINATION = "invalid_pagination"
    INVALID_FILTER = "invalid_filter"


@dataclass(frozen=True)
class SortClause:
    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def is_descending(self) -> bool:
        return self.direction == SortDirection.DESC

    @classmethod
    def coerce(cls, value: Any) -> SortClause:
        """Accept a SortClause, a ``{"field", "direction"}`` dict or a ``"-field"`` string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value.startswith("-"):
                return cls(value[1:], SortDirection.DESC)
            return cls(value)
        return cls(value["field"], SortDirection(value.get("direction", SortDirection.ASC)))


@dataclass(frozen=True)
class FilterClause:
    """
    One parsed ``field<operator><value>`` expression.

    Attributes:
        field: Field name after field mapping
        operator: Operator token exactly as written (e.g. ``"@=*"``)
        value: Decoded value; ``None`` for the null checks
        is_negated: True for ``!``-prefixed tokens
        is_case_insensitive: True for the contains / starts-with / ends-with family
    """

    field: str
    operator: str
    value: FilterValue = None
    is_negated: bool = False
    is_case_insensitive: bool = False

    @classmethod
    def coerce(cls, value: Any) -> FilterClause:
        """Accept a FilterClause or a dict; missing flags are derived from the operator."""
        if isinstance(value, cls):
            return value
        op = Operator.from_token(value["operator"])
        return cls(
            field=value["field"],
            operator=op.value,
            value=value.get("value"),
            is_negated=value.get("is_negated", value.get("isNegated", op.is_negated)),
            is_case_insensitive=value.get(
                "is_case_insensitive", value.get("isCaseInsensitive", op.is_case_insensitive)
            ),
        )


@dataclass(frozen=True)
class SieveQuery:
    """
    A validated page/sort/filter request.

    ``page_size`` defaults to the DEFAULT_PAGE_SIZE setting.
    """

    page: int = 1
    page_size: int = field(default_factory=lambda: sieve_settings.DEFAULT_PAGE_SIZE)
    sorts: tuple[SortClause, ...] = ()
    filters: tuple[FilterClause, ...] = ()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "sorts": [{"field": s.field, "direction": s.direction.value} for s in self.sorts],
            "filters": [
                {
                    "field": f.field,
                    "operator": f.operator,
                    "value": f.value,
                    "isNegated": f.is_negated,
                    "isCaseInsensitive": f.is_case_insensitive,
                }
                for f in self.filters
            ],
        }


@dataclass(frozen=True)
class FilterableField:
    field: str
    operators: frozenset[str] = frozenset()
    value_type: Optional[ValueType] = None

    @classmethod
    def coerce(cls, value: Any) -> FilterableField:
        if isinstance(value, cls):
            return value
        raw_type = value.get("value_type", value.get("type"))
        return cls(
            field=value["field"],
            operators=frozenset(value.get("operators", ())),
            value_type=ValueType(raw_type) if raw_type else None,
        )


@dataclass(frozen=True)
class SieveConfig:
    """
    Capability configuration for one endpoint.

    ``sortable_fields`` and ``filterable_fields`` are allow-lists: ``None``
    permits every field, a collection permits only the listed ones.
    Unset page sizes fall back to the DJANGO_SIEVE settings.
    """

    default_page_size: Optional[int] = None
    max_page_size: Optional[int] = None
    default_sort: Optional[SortClause] = None
    sortable_fields: Optional[frozenset[str]] = None
    filterable_fields: Optional[tuple[FilterableField, ...]] = None
    field_mappings: dict[str, str] = field(default_factory=dict)

    def get_filterable_field(self, name: str) -> Optional[FilterableField]:
        for filterable in self.filterable_fields or ():
            if filterable.field == name:
                return filterable
        return None

    def map_field(self, name: str) -> str:
        return self.field_mappings.get(name, name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SieveConfig:
        """
        Build a config from a plain dict.

        Both snake_case and the camelCase keys used by API clients are
        accepted, e.g. ``{"maxPageSize": 50, "sortableFields": ["price"]}``.
        """

        def pick(snake, camel):
            return data.get(snake, data.get(camel))

        default_sort = pick("default_sort", "defaultSort")
        sortable = pick("sortable_fields", "sortableFields")
        filterable = pick("filterable_fields", "filterableFields")
        return cls(
            default_page_size=pick("default_page_size", "defaultPageSize"),
            max_page_size=pick("max_page_size", "maxPageSize"),
            default_sort=SortClause.coerce(default_sort) if default_sort else None,
            sortable_fields=frozenset(sortable) if sortable is not None else None,
            filterable_fields=(
                tuple(FilterableField.coerce(f) for f in filterable) if filterable is not None else None
            ),
            field_mappings=dict(pick("field_mappings", "fieldMappings") or {}),
        )

    @classmethod
    def coerce(cls, value: Any) -> SieveConfig:
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)


@dataclass(frozen=True)
class ParseError:
    kind: ErrorKind
    message: str
    field: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "field": self.field, "message": self.message}


@dataclass
class ParseOutcome:
    """
    Result of parsing one set of query parameters.

    ``errors`` mean the request should be rejected; ``warnings`` name
    clauses that were dropped while parsing carried on. ``query`` always
    holds the best-effort result.
    """

    query: SieveQuery
    errors: list[ParseError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
