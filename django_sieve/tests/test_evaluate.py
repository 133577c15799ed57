"""
Tests for django_sieve.evaluate module.
"""

from datetime import datetime

import pytest


def clause(field, operator, value=None):
    from django_sieve.types import FilterClause

    return FilterClause.coerce({"field": field, "operator": operator, "value": value})


class TestEvaluateFilterEquality:
    """Tests for ==, != and the null checks."""

    def test_equal_strings(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("status", "==", "active"), "active") is True
        assert evaluate_filter(clause("status", "==", "active"), "inactive") is False

    def test_equal_numbers_and_text(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("value", "==", "100"), 100) is True
        assert evaluate_filter(clause("value", "==", 100.0), 100) is True

    def test_equal_booleans(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("featured", "==", True), True) is True
        assert evaluate_filter(clause("featured", "==", True), False) is False

    def test_falsy_values_are_not_null(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("v", "==", 0.0), 0) is True
        assert evaluate_filter(clause("v", "==", 0.0), None) is False
        assert evaluate_filter(clause("v", "==", False), None) is False
        assert evaluate_filter(clause("v", "==", ""), None) is False

    def test_not_equal(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("status", "!=", "deleted"), "active") is True
        assert evaluate_filter(clause("status", "!=", "deleted"), "deleted") is False

    def test_null_checks(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("x", "==null"), None) is True
        assert evaluate_filter(clause("x", "==null"), "") is False
        assert evaluate_filter(clause("x", "==null"), 0) is False
        assert evaluate_filter(clause("x", "!=null"), False) is True
        assert evaluate_filter(clause("x", "!=null"), None) is False


class TestEvaluateFilterComparison:
    """Tests for >, >=, <, <=."""

    @pytest.mark.parametrize("operator,value,expected", [
        (">", 150, True), (">", 100, False),
        (">=", 100, True), (">=", 50, False),
        ("<", 50, True), ("<", 100, False),
        ("<=", 100, True), ("<=", 150, False),
    ])
    def test_numbers(self, operator, value, expected):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("price", operator, 100.0), value) is expected

    def test_strings_compare_lexically(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("name", ">", "M"), "Z") is True
        assert evaluate_filter(clause("name", ">", "M"), "A") is False

    def test_dates(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("createdAt", ">", "2024-01-01"), datetime(2024, 6, 1)) is True
        assert evaluate_filter(clause("createdAt", ">", "2024-01-01"), datetime(2023, 6, 1)) is False

    def test_none_never_compares(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("price", ">", 100.0), None) is False
        assert evaluate_filter(clause("price", "<", 100.0), None) is False


class TestEvaluateFilterText:
    """Tests for the contains / starts-with / ends-with family."""

    def test_contains_ignores_case(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("d", "@=", "laptop"), "Gaming LAPTOP") is True
        assert evaluate_filter(clause("d", "@=*", "laptop"), "Gaming Laptop") is True
        assert evaluate_filter(clause("d", "@=", "laptop"), "desktop") is False

    def test_starts_and_ends_with(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("n", "_=", "Pro"), "pro edition") is True
        assert evaluate_filter(clause("n", "_=*", "Pro"), "Best Pro") is False
        assert evaluate_filter(clause("n", "_-=", "Edition"), "Pro edition") is True
        assert evaluate_filter(clause("n", "_-=", "Edition"), "Edition Pro") is False

    def test_negated(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("d", "!@=", "refurbished"), "Brand new") is True
        assert evaluate_filter(clause("d", "!@=", "refurbished"), "Refurbished unit") is False
        assert evaluate_filter(clause("n", "!_=", "Used"), "Used Product") is False
        assert evaluate_filter(clause("n", "!_-=", "Damaged"), "Product New") is True

    def test_empty_needle_matches(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("v", "@=", ""), "anything") is True
        assert evaluate_filter(clause("v", "@=", ""), "") is True

    def test_literal_special_characters(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("f", "@=", "a+b*c"), "Formula: a+b*c") is True
        assert evaluate_filter(clause("f", "@=", "日本語"), "製品名: 日本語") is True

    def test_lists_are_joined(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("tags", "@=", "tag1"), ["tag1", "tag2"]) is True

    def test_missing_value(self):
        from django_sieve.evaluate import evaluate_filter

        assert evaluate_filter(clause("d", "@=", "x"), None) is False
        assert evaluate_filter(clause("d", "!@=", "x"), None) is True

    def test_unknown_operator_never_matches(self):
        from django_sieve.evaluate import evaluate_filter
        from django_sieve.types import FilterClause

        assert evaluate_filter(FilterClause("v", "=~", "test"), "test") is False


class TestEvaluateFilters:
    """Tests for evaluate_filters function."""

    def test_and_semantics(self):
        from django_sieve.evaluate import evaluate_filters

        filters = [clause("price", ">", 100.0), clause("status", "==", "active")]
        assert evaluate_filters(filters, {"price": 150, "status": "active"}) is True
        assert evaluate_filters(filters, {"price": 150, "status": "inactive"}) is False
        assert evaluate_filters(filters, {"price": 50, "status": "active"}) is False

    def test_empty_matches_everything(self):
        from django_sieve.evaluate import evaluate_filters

        assert evaluate_filters([], {"price": 1}) is True

    def test_nested_fields(self):
        from django_sieve.evaluate import evaluate_filters

        record = {"user": {"profile": {"address": {"city": "Mumbai"}}}}
        assert evaluate_filters([clause("user.profile.address.city", "==", "Mumbai")], record) is True
        assert evaluate_filters([clause("metadata.missing", "==", "x")], {"metadata": {}}) is False

    def test_objects(self):
        from django_sieve.evaluate import evaluate_filters

        class Shop:
            name = "Acme"

        class Product:
            price = 300
            shop = Shop()

        filters = [clause("price", ">=", 100.0), clause("price", "<=", 500.0), clause("shop.name", "_=", "ac")]
        assert evaluate_filters(filters, Product()) is True

    def test_same_field_equality_is_impossible(self):
        from django_sieve.evaluate import evaluate_filters

        filters = [clause("status", "==", "active"), clause("status", "==", "pending")]
        assert evaluate_filters(filters, {"status": "active"}) is False
