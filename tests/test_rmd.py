"""Tests for the uniform lifetime table and RMD calculator."""

from decimal import Decimal

from rmd import (
    MAX_TABLE_AGE,
    MIN_TABLE_AGE,
    UNIFORM_LIFETIME_DIVISORS,
    divisor_for,
    project_rmds,
    required_minimum_distribution,
)


def test_divisor_lookup():
    assert divisor_for(73) == Decimal("26.5")
    assert divisor_for(75) == Decimal("24.6")


def test_divisor_clamps_outside_table():
    assert divisor_for(60) == UNIFORM_LIFETIME_DIVISORS[MIN_TABLE_AGE]
    assert divisor_for(130) == UNIFORM_LIFETIME_DIVISORS[MAX_TABLE_AGE] == Decimal("2.0")


def test_divisors_strictly_decrease_with_age():
    ages = sorted(UNIFORM_LIFETIME_DIVISORS)
    assert ages == list(range(MIN_TABLE_AGE, MAX_TABLE_AGE + 1))
    for a, b in zip(ages, ages[1:]):
        assert UNIFORM_LIFETIME_DIVISORS[a] > UNIFORM_LIFETIME_DIVISORS[b]


def test_basic_rmd_at_75():
    # 500,000 / 24.6 = 20,325.2032...
    assert required_minimum_distribution(Decimal("500000"), 75) == Decimal("20325.20")


def test_rmd_rounds_half_up_to_cent():
    # 100,000 / 26.5 = 3,773.5849...
    assert required_minimum_distribution(Decimal("100000"), 73) == Decimal("3773.58")


def test_no_rmd_before_start_age():
    assert required_minimum_distribution(Decimal("500000"), 72) == 0
    assert required_minimum_distribution(Decimal("500000"), 50) == 0


def test_start_age_is_configurable():
    # 500,000 / 27.4 = 18,248.175...
    assert required_minimum_distribution(Decimal("500000"), 72, rmd_start_age=72) == Decimal("18248.18")


def test_zero_balance_has_no_rmd():
    for age in (73, 90, 125):
        assert required_minimum_distribution(Decimal("0"), age) == 0


def test_project_rmds_grows_remaining_balance():
    rows = project_rmds(Decimal("500000"), 75, years=2)
    assert [r.age for r in rows] == [75, 76]
    assert rows[0].rmd == Decimal("20325.20")
    assert rows[0].monthly_amount == Decimal("1693.77")
    # (500,000 - 20,325.20) * 1.05
    assert rows[1].starting_balance == Decimal("503658.54")
    assert rows[1].divisor == Decimal("23.7")
    assert rows[1].rmd == Decimal("21251.42")


def test_project_rmds_before_start_age():
    rows = project_rmds(Decimal("100000"), 70, years=3, growth_rate=0)
    assert [r.rmd for r in rows] == [0, 0, 0]
    assert all(r.starting_balance == Decimal("100000") for r in rows)


def test_project_rmds_zero_years():
    assert project_rmds(Decimal("100000"), 75, years=0) == []
