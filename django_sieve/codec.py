"""
Django-Sieve Value Codec

List splitting, comma escaping and value coercion for the sieve grammar.

``\\,`` is the only escape sequence: it keeps a literal comma inside a
filter value. Sort lists have no escaping.
"""

import re

from django_sieve.types import ValueType

# A comma not preceded by a backslash
_UNESCAPED_COMMA = re.compile(r"(?<!\\),")

_NUMBER_LITERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def split_filters(raw):
    """
    Split a ``filters`` value into expressions.

    Expressions are not whitespace-trimmed. Escaped commas are
    unescaped after splitting.

    Examples:
        >>> split_filters("price>100,name==Test\\\\, Inc.")
        ['price>100', 'name==Test, Inc.']
    """
    if not raw:
        return []
    return [unescape_value(part) for part in _UNESCAPED_COMMA.split(raw)]


def split_sorts(raw):
    """
    Split a ``sorts`` value into trimmed tokens.

    Examples:
        >>> split_sorts(" createdAt , -price ")
        ['createdAt', '-price']
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(",")]


def unescape_value(value):
    return value.replace("\\,", ",")


def escape_value(value):
    return value.replace(",", "\\,")


def coerce_value(raw, value_type):
    """
    Convert a raw filter value to its declared type.

    Args:
        raw: Decoded string value
        value_type: ValueType or None (no declared type keeps the string)

    Returns:
        str, float or bool

    Raises:
        ValueError: If the value does not parse as the declared type
    """
    if value_type is None or value_type == ValueType.STRING:
        return raw

    if value_type == ValueType.BOOLEAN:
        if raw == "true":
            return True
        if raw == "false":
            return False
        raise ValueError(f"Expected 'true' or 'false', got '{raw}'")

    if value_type == ValueType.NUMBER:
        if not _NUMBER_LITERAL.match(raw):
            raise ValueError(f"Expected a number, got '{raw}'")
        return float(raw)

    return raw


def format_value(value):
    """
    Render a filter value back to its query-string text.

    ``None`` renders empty (the null operators carry their own ``null``),
    booleans as ``true``/``false`` and whole floats without ``.0``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
