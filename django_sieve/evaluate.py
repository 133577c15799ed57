"""
Django-Sieve In-Memory Evaluation

Applies parsed filter clauses to plain Python records (dicts or
objects). Useful for post-filtering data that did not come from the
ORM, or for clauses a storage backend cannot express.

Semantics:
- ``None`` only equals ``None``; ordering comparisons against ``None``
  are False
- Equality between a number and a string compares their text
- Case-insensitive clauses compare lowercased text
- Missing fields on a record read as ``None``
"""

from django_sieve.codec import format_value
from django_sieve.operators import Comparison, Operator

_MISSING = object()


def get_record_value(record, field_path):
    """
    Read a dotted field path from a dict or object.

    Examples:
        >>> get_record_value({"user": {"address": {"city": "Mumbai"}}}, "user.address.city")
        'Mumbai'
        >>> get_record_value({"metadata": {}}, "metadata.priority") is None
        True
    """
    value = record
    for part in field_path.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part, _MISSING)
        else:
            value = getattr(value, part, _MISSING)
        if value is _MISSING:
            return None
    return value


def _as_text(value, case_insensitive):
    if isinstance(value, (list, tuple)):
        text = ",".join(format_value(v) for v in value)
    else:
        text = format_value(value)
    return text.lower() if case_insensitive else text


def _equals(actual, expected, case_insensitive):
    if actual is None or expected is None:
        return actual is None and expected is None
    if isinstance(actual, bool) or isinstance(expected, bool):
        return actual is expected or _as_text(actual, False) == _as_text(expected, False)
    if type(actual) is type(expected) and not case_insensitive:
        return actual == expected
    return _as_text(actual, case_insensitive) == _as_text(expected, case_insensitive)


def _compare(actual, expected, kind):
    if actual is None or expected is None:
        return False

    if isinstance(actual, (int, float)) and isinstance(expected, (int, float)):
        left, right = actual, expected
    elif hasattr(actual, "isoformat"):
        left, right = actual.isoformat(), _as_text(expected, False)
    else:
        left, right = _as_text(actual, False), _as_text(expected, False)

    if kind == Comparison.GREATER_THAN:
        return left > right
    if kind == Comparison.GREATER_OR_EQUAL:
        return left >= right
    if kind == Comparison.LESS_THAN:
        return left < right
    return left <= right


def evaluate_filter(clause, value):
    """
    Test a single value against a filter clause.

    Unknown operators never match.

    Args:
        clause: FilterClause
        value: The record's value for ``clause.field``

    Returns:
        bool
    """
    try:
        op = Operator.from_token(clause.operator)
    except ValueError:
        return False

    kind = op.kind
    if kind == Comparison.IS_NULL:
        return value is None
    if kind == Comparison.IS_NOT_NULL:
        return value is not None

    if kind == Comparison.EQUAL:
        return _equals(value, clause.value, clause.is_case_insensitive)
    if kind == Comparison.NOT_EQUAL:
        return not _equals(value, clause.value, clause.is_case_insensitive)

    if kind in (
        Comparison.GREATER_THAN,
        Comparison.GREATER_OR_EQUAL,
        Comparison.LESS_THAN,
        Comparison.LESS_OR_EQUAL,
    ):
        return _compare(value, clause.value, kind)

    if value is None:
        # A missing value neither contains nor starts with anything
        return clause.is_negated

    haystack = _as_text(value, clause.is_case_insensitive)
    needle = _as_text(clause.value, clause.is_case_insensitive)
    if kind == Comparison.CONTAINS:
        matched = needle in haystack
    elif kind == Comparison.STARTS_WITH:
        matched = haystack.startswith(needle)
    else:
        matched = haystack.endswith(needle)

    return not matched if clause.is_negated else matched


def evaluate_filters(filters, record):
    """
    Test a record against every clause (AND semantics).

    An empty clause list matches every record.
    """
    return all(evaluate_filter(clause, get_record_value(record, clause.field)) for clause in filters)
