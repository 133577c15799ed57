"""
Tests for django_sieve.pagination module.
"""

import pytest


class TestParseInt:
    """Tests for the truncating integer parse."""

    @pytest.mark.parametrize("raw,expected", [("2", 2), ("1.5", 1), (" 7", 7), ("20abc", 20), ("-1", -1)])
    def test_leading_integer(self, raw, expected):
        from django_sieve.pagination import parse_int

        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", ".5"])
    def test_no_integer(self, raw):
        from django_sieve.pagination import parse_int

        assert parse_int(raw) is None


class TestParsePagination:
    """Tests for parse_pagination function."""

    def test_defaults_when_absent(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        assert parse_pagination(None, None, SieveConfig()) == (1, 20, [])

    def test_valid_values(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        assert parse_pagination("2", "50", SieveConfig()) == (2, 50, [])

    def test_config_default_page_size(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        _, page_size, _ = parse_pagination(None, None, SieveConfig(default_page_size=10))
        assert page_size == 10

    def test_clamps_to_default_max(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        _, page_size, errors = parse_pagination(None, "1000", SieveConfig())
        assert page_size == 100
        assert errors == []

    def test_clamps_to_config_max(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        _, page_size, errors = parse_pagination(None, "200", SieveConfig(max_page_size=50))
        assert page_size == 50
        assert errors == []

    @pytest.mark.parametrize("raw", ["0", "-1", "abc", ""])
    def test_invalid_page(self, raw):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import ErrorKind, SieveConfig

        page, _, errors = parse_pagination(raw, None, SieveConfig())
        assert page == 1
        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.INVALID_PAGINATION
        assert errors[0].field == "page"

    def test_invalid_page_size(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import ErrorKind, SieveConfig

        _, page_size, errors = parse_pagination(None, "0", SieveConfig())
        assert page_size == 20
        assert [(e.kind, e.field) for e in errors] == [(ErrorKind.INVALID_PAGINATION, "pageSize")]

    def test_both_invalid(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        _, _, errors = parse_pagination("x", "y", SieveConfig())
        assert [e.field for e in errors] == ["page", "pageSize"]

    def test_large_page_is_valid(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        page, _, errors = parse_pagination("999999", None, SieveConfig())
        assert page == 999999
        assert errors == []

    def test_decimal_page_truncates(self):
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        page, _, errors = parse_pagination("1.5", None, SieveConfig())
        assert page == 1
        assert errors == []

    def test_settings_fallback(self, settings):
        settings.DJANGO_SIEVE = {"DEFAULT_PAGE_SIZE": 15, "MAX_PAGE_SIZE": 30}

        from django_sieve.conf import sieve_settings
        from django_sieve.pagination import parse_pagination
        from django_sieve.types import SieveConfig

        sieve_settings.reload()
        assert parse_pagination(None, None, SieveConfig()) == (1, 15, [])
        assert parse_pagination(None, "500", SieveConfig()) == (1, 30, [])
