"""
Django-Sieve Filter Utilities

Handles filter parsing and Q object construction for sieve queries.

Supports:
- ``field<operator><value>`` expressions (``status==published``)
- Escaped commas inside values (``name==Test\\, Inc.``)
- Per-field operator and value-type restrictions
- Nested relation filtering via dotted or mapped field names
"""

from django.db.models import Q

from django_sieve.codec import coerce_value, split_filters
from django_sieve.operators import OPERATOR_TOKENS, Comparison, Operator, find_operator
from django_sieve.types import ErrorKind, FilterClause, ParseError

# Exposed for callers building filterable field configs
OPERATORS = OPERATOR_TOKENS

_LOOKUPS = {
    Comparison.GREATER_THAN: "gt",
    Comparison.GREATER_OR_EQUAL: "gte",
    Comparison.LESS_THAN: "lt",
    Comparison.LESS_OR_EQUAL: "lte",
    Comparison.CONTAINS: "contains",
    Comparison.STARTS_WITH: "startswith",
    Comparison.ENDS_WITH: "endswith",
}


def parse_filter_expression(expression):
    """
    Parse a filter expression into (field, operator, raw_value).

    Args:
        expression: Filter expression string (e.g., "price>=100")

    Returns:
        Tuple of (field, Operator, raw_value), or None when no operator
        follows the field name

    Examples:
        >>> parse_filter_expression("status==published")
        ('status', <Operator.EQUAL: '=='>, 'published')
        >>> parse_filter_expression("deletedAt==null")
        ('deletedAt', <Operator.IS_NULL: '==null'>, '')
        >>> parse_filter_expression("name@=*lap")
        ('name', <Operator.CONTAINS_CI: '@=*'>, 'lap')
    """
    return find_operator(expression)


def parse_filters(raw, config):
    """
    Parse the ``filters`` parameter into filter clauses.

    Unknown fields under a ``filterable_fields`` allow-list are dropped
    with a warning. A known field used with an operator it does not
    allow, a value that fails type coercion, or an expression without an
    operator is an error; that clause is dropped and parsing continues.

    Args:
        raw: Raw ``filters`` value or None
        config: SieveConfig

    Returns:
        Tuple of (filters, errors, warnings)
    """
    filters = []
    errors = []
    warnings = []

    for expression in split_filters(raw):
        if not expression:
            continue

        parsed = parse_filter_expression(expression)
        if parsed is None:
            errors.append(
                ParseError(ErrorKind.INVALID_FILTER, f"No valid operator found in filter: {expression}")
            )
            continue

        field, op, raw_value = parsed

        value_type = None
        if config.filterable_fields is not None:
            filterable = config.get_filterable_field(field)
            if filterable is None:
                warnings.append(f"Field '{field}' is not filterable. Ignored.")
                continue
            if op.value not in filterable.operators:
                errors.append(
                    ParseError(
                        ErrorKind.INVALID_FILTER,
                        f"Operator '{op.value}' is not allowed for field '{field}'",
                        field=field,
                    )
                )
                continue
            value_type = filterable.value_type

        if op.is_null_check:
            value = None
        else:
            try:
                value = coerce_value(raw_value, value_type)
            except ValueError as e:
                errors.append(
                    ParseError(
                        ErrorKind.INVALID_FILTER,
                        f"Invalid value for field '{field}': {e}",
                        field=field,
                    )
                )
                continue

        filters.append(
            FilterClause(
                field=config.map_field(field),
                operator=op.value,
                value=value,
                is_negated=op.is_negated,
                is_case_insensitive=op.is_case_insensitive,
            )
        )

    return tuple(filters), errors, warnings


def to_field_path(field):
    """Convert dot notation to Django's double underscore format."""
    return field.replace(".", "__")


def build_clause_q(clause):
    """
    Build a Django Q object for a single filter clause.

    Examples:
        >>> build_clause_q(FilterClause("price", ">=", 100.0))
        <Q: (AND: ('price__gte', 100.0))>
        >>> build_clause_q(FilterClause("name", "!@=", "refurb", is_negated=True, is_case_insensitive=True))
        <Q: (NOT (AND: ('name__icontains', 'refurb')))>
    """
    op = Operator.from_token(clause.operator)
    field_path = to_field_path(clause.field)
    kind = op.kind

    if kind == Comparison.IS_NULL:
        return Q(**{f"{field_path}__isnull": True})
    if kind == Comparison.IS_NOT_NULL:
        return Q(**{f"{field_path}__isnull": False})

    if kind in (Comparison.EQUAL, Comparison.NOT_EQUAL):
        if clause.value is None:
            q = Q(**{f"{field_path}__isnull": True})
        else:
            q = Q(**{field_path: clause.value})
        return ~q if kind == Comparison.NOT_EQUAL else q

    lookup = _LOOKUPS[kind]
    if clause.is_case_insensitive:
        lookup = f"i{lookup}"
    q = Q(**{f"{field_path}__{lookup}": clause.value})
    return ~q if clause.is_negated else q


def build_q_object(filters):
    """
    Build Django Q object from parsed filter clauses.

    All clauses are combined with AND; two clauses on the same field
    express a range.

    Args:
        filters: Iterable of FilterClause

    Returns:
        Django Q object representing the filter

    Examples:
        >>> build_q_object([])
        <Q: (AND: )>
        >>> build_q_object([FilterClause("price", ">", 100.0), FilterClause("price", "<", 500.0)])
        <Q: (AND: ('price__gt', 100.0), ('price__lt', 500.0))>
    """
    result = Q()
    for clause in filters:
        result &= build_clause_q(clause)
    return result


def extract_filter_fields(filters):
    """
    List the field names used by filter clauses, in order, without duplicates.

    Examples:
        >>> extract_filter_fields([FilterClause("price", ">", 1.0), FilterClause("price", "<", 9.0)])
        ['price']
    """
    fields = []
    for clause in filters:
        if clause.field not in fields:
            fields.append(clause.field)
    return fields
