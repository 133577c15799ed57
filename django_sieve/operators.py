"""
Django-Sieve Operator Grammar

The closed table of filter operator tokens recognised in a ``filters``
expression such as ``price>=100`` or ``name@=*laptop``.

Every token maps to a comparison kind plus two flags:

- ``is_negated``: the token starts with ``!``
- ``is_case_insensitive``: the token belongs to the contains / starts-with /
  ends-with family. The plain and ``*`` spellings behave the same; the
  spelling is kept as written so serialization round-trips.
"""

from enum import Enum


class Comparison(str, Enum):
    """What an operator compares, independent of negation."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER_THAN = "greater_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS_THAN = "less_than"
    LESS_OR_EQUAL = "less_or_equal"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"


class Operator(str, Enum):
    """Filter operator tokens, declared longest-first."""

    IS_NOT_NULL = "!=null"
    IS_NULL = "==null"
    NOT_ENDS_WITH = "!_-="
    ENDS_WITH = "_-="
    NOT_CONTAINS = "!@="
    CONTAINS_CI = "@=*"
    CONTAINS = "@="
    NOT_STARTS_WITH = "!_="
    STARTS_WITH_CI = "_=*"
    STARTS_WITH = "_="
    NOT_EQUAL = "!="
    EQUAL = "=="
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    GREATER_THAN = ">"
    LESS_THAN = "<"

    @property
    def token(self):
        return self.value

    @property
    def kind(self):
        return _KINDS[self]

    @property
    def is_negated(self):
        return self.value.startswith("!")

    @property
    def is_case_insensitive(self):
        return _KINDS[self] in _TEXT_KINDS

    @property
    def is_null_check(self):
        return _KINDS[self] in (Comparison.IS_NULL, Comparison.IS_NOT_NULL)

    @classmethod
    def from_token(cls, token):
        """
        Look up an operator by its literal token.

        Raises:
            ValueError: If the token is not part of the grammar
        """
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown filter operator: '{token}'") from None


_KINDS = {
    Operator.IS_NOT_NULL: Comparison.IS_NOT_NULL,
    Operator.IS_NULL: Comparison.IS_NULL,
    Operator.NOT_ENDS_WITH: Comparison.ENDS_WITH,
    Operator.ENDS_WITH: Comparison.ENDS_WITH,
    Operator.NOT_CONTAINS: Comparison.CONTAINS,
    Operator.CONTAINS_CI: Comparison.CONTAINS,
    Operator.CONTAINS: Comparison.CONTAINS,
    Operator.NOT_STARTS_WITH: Comparison.STARTS_WITH,
    Operator.STARTS_WITH_CI: Comparison.STARTS_WITH,
    Operator.STARTS_WITH: Comparison.STARTS_WITH,
    Operator.NOT_EQUAL: Comparison.NOT_EQUAL,
    Operator.EQUAL: Comparison.EQUAL,
    Operator.GREATER_OR_EQUAL: Comparison.GREATER_OR_EQUAL,
    Operator.LESS_OR_EQUAL: Comparison.LESS_OR_EQUAL,
    Operator.GREATER_THAN: Comparison.GREATER_THAN,
    Operator.LESS_THAN: Comparison.LESS_THAN,
}

_TEXT_KINDS = frozenset({Comparison.CONTAINS, Comparison.STARTS_WITH, Comparison.ENDS_WITH})

# Longest token first so that "!=null" wins over "!=" and "@=*" over "@="
OPERATORS = tuple(sorted(Operator, key=lambda op: len(op.value), reverse=True))

OPERATOR_TOKENS = tuple(op.value for op in OPERATORS)


def match_operator(text, start=0):
    """
    Return the longest operator token that begins at ``start``.

    Args:
        text: Filter expression
        start: Index to test

    Returns:
        Operator, or None if no token begins at that index

    Examples:
        >>> match_operator("deletedAt!=null", 9)
        <Operator.IS_NOT_NULL: '!=null'>
        >>> match_operator("price>=10", 5)
        <Operator.GREATER_OR_EQUAL: '>='>
    """
    for op in OPERATORS:
        if text.startswith(op.value, start):
            return op
    return None


def find_operator(expression):
    """
    Locate the field/operator boundary in a filter expression.

    Scans left to right and stops at the first index where any token
    matches; the field name must be at least one character long.

    Args:
        expression: Raw filter expression (e.g. "status==published")

    Returns:
        Tuple of (field, operator, raw_value), or None if the expression
        holds no operator after a field name

    Examples:
        >>> find_operator("status==published")
        ('status', <Operator.EQUAL: '=='>, 'published')
        >>> find_operator("invalidfilter") is None
        True
    """
    for index in range(1, len(expression)):
        op = match_operator(expression, index)
        if op is not None:
            return expression[:index], op, expression[index + len(op.value):]
    return None
