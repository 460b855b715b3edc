"""Tests for declarative rules and the commit step."""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from fractions import Fraction

import pytest

from data_objects.validation import (
    AttributionError,
    ObjectRequirementError,
    RequirementType,
    Rule,
    Violation,
    check,
    commit,
    named,
    not_empty,
    not_null,
    positive,
)

NULL = RequirementType.VALUE_MUST_NOT_BE_NULL
EMPTY = RequirementType.VALUE_MUST_NOT_BE_EMPTY
POSITIVE = RequirementType.VALUE_HAS_TO_BE_POSITIVE


class ShopRequirement(str, Enum):
    VALUE_MUST_BE_UPPERCASE = "value_must_be_uppercase"


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------


class TestNotNull:
    def test_passing_values_produce_nothing(self) -> None:
        name, purchases = "Oleg", []
        assert not_null(lambda: name, lambda: purchases) == []

    def test_every_failing_reference_is_reported(self) -> None:
        name = None
        customer_number = 5
        purchases = None
        result = not_null(
            lambda: name, lambda: customer_number, lambda: purchases
        )
        assert result == [Violation("name", NULL), Violation("purchases", NULL)]

    def test_falsy_values_are_not_null(self) -> None:
        zero, empty = 0, ""
        assert not_null(lambda: zero, lambda: empty) == []


class TestPositive:
    @pytest.mark.parametrize(
        "value", [1, 0.5, Decimal("0.01"), Fraction(1, 3), 10**20]
    )
    def test_positive_numbers_pass(self, value) -> None:
        assert positive(lambda: value) == []

    @pytest.mark.parametrize(
        "value",
        [0, -2, -0.1, Decimal("0"), Decimal("NaN"), float("nan"), None, "5", True],
    )
    def test_non_positive_or_non_numeric_fails(self, value) -> None:
        assert positive(lambda: value) == [Violation("value", POSITIVE)]


class TestNotEmpty:
    @pytest.mark.parametrize("value", ["Oleg", [1], (0,), {"k": 1}])
    def test_non_empty_passes(self, value) -> None:
        assert not_empty(lambda: value) == []

    @pytest.mark.parametrize("value", ["", [], None, 42])
    def test_empty_absent_or_unsized_fails(self, value) -> None:
        assert not_empty(lambda: value) == [Violation("value", EMPTY)]


class TestAttribution:
    def test_unattributable_reference_fails_whole_call(self) -> None:
        name = "Oleg"
        with pytest.raises(AttributionError):
            not_null(lambda: name, lambda: name + "!")

    def test_attribution_checked_even_when_value_passes(self) -> None:
        with pytest.raises(AttributionError):
            positive(lambda: 3)

    def test_explicit_names(self) -> None:
        result = positive(named("purchase_id", -1), ("customer_number", 0))
        assert result == [
            Violation("purchase_id", POSITIVE),
            Violation("customer_number", POSITIVE),
        ]


# ---------------------------------------------------------------------------
# Custom rules
# ---------------------------------------------------------------------------


class TestCustomRules:
    def test_rule_with_own_kind(self) -> None:
        uppercase = Rule(ShopRequirement.VALUE_MUST_BE_UPPERCASE, str.isupper)
        code = "abc"
        assert uppercase(lambda: code) == [
            Violation("code", ShopRequirement.VALUE_MUST_BE_UPPERCASE)
        ]

    def test_check_ad_hoc(self) -> None:
        quantity = 12
        result = check(POSITIVE, lambda v: v < 10, lambda: quantity)
        assert result == [Violation("quantity", POSITIVE)]

    def test_custom_kind_renders_in_error(self) -> None:
        code = "abc"
        uppercase = Rule(ShopRequirement.VALUE_MUST_BE_UPPERCASE, str.isupper)
        with pytest.raises(ObjectRequirementError) as exc_info:
            commit(uppercase(lambda: code))
        assert str(exc_info.value) == "code: value_must_be_uppercase"


# ---------------------------------------------------------------------------
# Commit
# ---------------------------------------------------------------------------


class TestCommit:
    def test_no_violations_is_noop(self) -> None:
        name, customer_number = "Oleg", 1
        assert commit(not_null(lambda: name), positive(lambda: customer_number)) is None

    def test_no_groups_is_noop(self) -> None:
        assert commit() is None

    def test_all_groups_aggregate_into_one_error(self) -> None:
        name = None
        customer_number = -2
        with pytest.raises(ObjectRequirementError) as exc_info:
            commit(
                not_null(lambda: name),
                not_empty(lambda: name),
                positive(lambda: customer_number),
            )
        assert dict(exc_info.value.errors) == {
            "name": frozenset({NULL, EMPTY}),
            "customer_number": frozenset({POSITIVE}),
        }

    def test_same_violation_twice_yields_one_entry(self) -> None:
        name = None
        with pytest.raises(ObjectRequirementError) as exc_info:
            commit(not_null(lambda: name), not_null(lambda: name))
        assert exc_info.value.violations == (Violation("name", NULL),)

    def test_accepts_any_iterable_group(self) -> None:
        group = (v for v in [Violation("name", NULL)])
        with pytest.raises(ObjectRequirementError):
            commit(group)

    def test_logs_failure_at_debug(self, caplog) -> None:
        customer_number = 0
        with caplog.at_level(logging.DEBUG, logger="data_objects.validation.require"):
            with pytest.raises(ObjectRequirementError):
                commit(positive(lambda: customer_number))
        assert "Requirement check failed" in caplog.text
        assert "customer_number" in caplog.text
