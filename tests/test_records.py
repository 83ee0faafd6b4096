"""Tests for camelCase input/result records."""

import json
from decimal import Decimal

import pytest

from income_tax import FilingStatus
from records import (
    camel_case,
    dumps_result,
    input_from_record,
    input_to_record,
    result_to_record,
)
from withdrawal_planner import plan_withdrawals

RECORD = {
    "currentAge": 65,
    "filingStatus": "marriedFilingJointly",
    "desiredAnnualIncome": 60000,
    "accounts": {
        "traditionalBalance": "400000",
        "rothBalance": 150000,
        "taxableBalance": 200000.0,
    },
    "horizonYears": 2,
}


def test_camel_case():
    assert camel_case("ending_traditional_balance") == "endingTraditionalBalance"
    assert camel_case("year") == "year"


def test_input_from_record():
    planning_input = input_from_record(RECORD)
    assert planning_input.current_age == 65
    assert planning_input.filing_status is FilingStatus.MARRIED_FILING_JOINTLY
    assert planning_input.desired_annual_income == Decimal("60000")
    assert planning_input.accounts.traditional_balance == Decimal("400000")
    assert planning_input.accounts.taxable_balance == Decimal("200000")
    assert planning_input.horizon_years == 2
    assert planning_input.rmd_start_age == 73


def test_missing_required_field():
    record = dict(RECORD)
    del record["currentAge"]
    with pytest.raises(KeyError):
        input_from_record(record)


def test_input_record_round_trip():
    planning_input = input_from_record(RECORD)
    assert input_from_record(input_to_record(planning_input)) == planning_input


def test_result_record_field_names():
    record = result_to_record(plan_withdrawals(input_from_record(RECORD)))
    assert set(record) == {"yearlyWithdrawals", "totalTaxesPaid", "totalAfterTaxIncome"}
    first = record["yearlyWithdrawals"][0]
    assert list(first) == [
        "year", "age", "rmd", "traditionalWithdrawal", "rothWithdrawal",
        "taxableWithdrawal", "taxableIncomeRecognized", "taxOwed", "afterTaxIncome",
        "endingTraditionalBalance", "endingRothBalance", "endingTaxableBalance",
        "incomeShortfall",
    ]
    assert first["taxableWithdrawal"] == "60000.00"
    assert first["traditionalWithdrawal"] == "0.00"
    assert record["totalAfterTaxIncome"] == "120000.00"


def test_dumps_result_is_json():
    text = dumps_result(plan_withdrawals(input_from_record(RECORD)))
    parsed = json.loads(text)
    assert len(parsed["yearlyWithdrawals"]) == 2
    assert parsed["yearlyWithdrawals"][1]["endingTaxableBalance"] == "80000.00"
