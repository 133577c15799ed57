"""
Django-Sieve: Query-String Sieve Language for Django

Parses compact ``page``/``pageSize``/``sorts``/``filters`` query
parameters into a validated, immutable query description, checks it
against a per-endpoint capability configuration, and serializes it back
to a canonical query string.

Example:
    from django_sieve import parse_sieve_query

    outcome = parse_sieve_query(
        {'sorts': '-createdAt', 'filters': 'price>=100,name@=*laptop'},
        {'maxPageSize': 50},
    )
    outcome.query.sorts[0].field  # 'createdAt'
"""

__version__ = "0.1.0"
__author__ = "Nehemiah Jacob"

# Types
from django_sieve.types import (
    SieveQuery,
    SortClause,
    FilterClause,
    SortDirection,
    SieveConfig,
    FilterableField,
    ValueType,
    ParseOutcome,
    ParseError,
    ErrorKind,
)

# Operator grammar
from django_sieve.operators import Operator, Comparison, match_operator, find_operator

# Parsing
from django_sieve.parser import (
    parse_sieve_query,
    create_default_sieve_query,
    merge_sieve_query,
)

# Serialization
from django_sieve.serializer import build_sieve_query_string

# URL helpers
from django_sieve.urlquery import parse_sieve_from_url, update_url_with_sieve

# Filter utilities
from django_sieve.filters import (
    parse_filter_expression,
    build_q_object,
    extract_filter_fields,
    OPERATORS,
)

# In-memory evaluation
from django_sieve.evaluate import evaluate_filter, evaluate_filters

# Query execution
from django_sieve.query import SieveQuerySet, execute_sieve_query, build_ordering, apply_mandatory_filters

# Decorators
from django_sieve.decorators import sieve_query

# Response utilities
from django_sieve.response import SieveResponse

# Configuration
from django_sieve.conf import sieve_settings

__all__ = [
    # Version
    "__version__",
    # Types
    "SieveQuery",
    "SortClause",
    "FilterClause",
    "SortDirection",
    "SieveConfig",
    "FilterableField",
    "ValueType",
    "ParseOutcome",
    "ParseError",
    "ErrorKind",
    # Operators
    "Operator",
    "Comparison",
    "match_operator",
    "find_operator",
    # Parsing
    "parse_sieve_query",
    "create_default_sieve_query",
    "merge_sieve_query",
    # Serialization
    "build_sieve_query_string",
    # URL helpers
    "parse_sieve_from_url",
    "update_url_with_sieve",
    # Filters
    "parse_filter_expression",
    "build_q_object",
    "extract_filter_fields",
    "OPERATORS",
    # Evaluation
    "evaluate_filter",
    "evaluate_filters",
    # Query
    "SieveQuerySet",
    "execute_sieve_query",
    "build_ordering",
    "apply_mandatory_filters",
    # Decorators
    "sieve_query",
    # Response
    "SieveResponse",
    # Settings
    "sieve_settings",
]
