"""Plain JSON-ready records for planner inputs and results.

Field names are camelCase to match what the web calculators send and
render. Money goes out as two-decimal strings so nothing is lost to floats.
"""

import json
from dataclasses import fields
from decimal import Decimal

from income_tax import to_cents
from withdrawal_planner import AccountSnapshot, PlanningInput, PlanningResult, YearlyWithdrawal

_ACCOUNT_KEYS = {
    "traditionalBalance": "traditional_balance",
    "rothBalance": "roth_balance",
    "taxableBalance": "taxable_balance",
}

_OPTIONAL_INPUT_KEYS = {
    "horizonYears": "horizon_years",
    "startYear": "start_year",
    "rmdStartAge": "rmd_start_age",
    "assumedGainsFraction": "assumed_gains_fraction",
}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _money_in(value) -> Decimal:
    # strings and ints are exact; floats go through str()
    return Decimal(str(value))


def input_from_record(record: dict) -> PlanningInput:
    """Build a PlanningInput from a camelCase record.

    ``currentAge``, ``filingStatus`` and ``desiredAnnualIncome`` are required;
    a missing one raises KeyError. Balances live under ``accounts``.
    """
    accounts = record.get("accounts", {})
    snapshot = AccountSnapshot(
        **{attr: _money_in(accounts.get(key, 0)) for key, attr in _ACCOUNT_KEYS.items()}
    )
    optional = {attr: record[key] for key, attr in _OPTIONAL_INPUT_KEYS.items() if key in record}
    if "assumed_gains_fraction" in optional:
        optional["assumed_gains_fraction"] = _money_in(optional["assumed_gains_fraction"])
    return PlanningInput(
        current_age=int(record["currentAge"]),
        filing_status=record["filingStatus"],
        desired_annual_income=_money_in(record["desiredAnnualIncome"]),
        accounts=snapshot,
        **optional,
    )


def input_to_record(planning_input: PlanningInput) -> dict:
    accounts = planning_input.accounts
    return {
        "currentAge": planning_input.current_age,
        "filingStatus": planning_input.filing_status.value,
        "desiredAnnualIncome": str(planning_input.desired_annual_income),
        "accounts": {
            key: str(getattr(accounts, attr)) for key, attr in _ACCOUNT_KEYS.items()
        },
        "horizonYears": planning_input.horizon_years,
        "startYear": planning_input.start_year,
        "rmdStartAge": planning_input.rmd_start_age,
        "assumedGainsFraction": str(planning_input.assumed_gains_fraction),
    }


def _value_out(value):
    return str(to_cents(value)) if isinstance(value, Decimal) else value


def withdrawal_to_record(row: YearlyWithdrawal) -> dict:
    return {camel_case(f.name): _value_out(getattr(row, f.name)) for f in fields(row)}


def result_to_record(result: PlanningResult) -> dict:
    return {
        "yearlyWithdrawals": [withdrawal_to_record(r) for r in result.yearly_withdrawals],
        "totalTaxesPaid": str(to_cents(result.total_taxes_paid)),
        "totalAfterTaxIncome": str(to_cents(result.total_after_tax_income)),
    }


def dumps_result(result: PlanningResult, indent: int | None = 2) -> str:
    return json.dumps(result_to_record(result), indent=indent)
