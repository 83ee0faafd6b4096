"""Tax-aware withdrawal planner for traditional, Roth and taxable accounts.

Simulates retirement year by year and decides how much to pull from each
account type. Key simplifying assumptions:

- No investment growth or inflation; balances only fall by withdrawals.
- Before the RMD start age the taxable account funds the income target
  first, then traditional, then Roth.
- From the RMD start age on, traditional funds first and never less than
  the RMD; taxable then Roth cover what is left.
- Traditional withdrawals are ordinary income. A flat share of each
  taxable-account withdrawal (15% by default) is treated as recognized gain
  and taxed at ordinary rates; no cost basis is tracked.
- Federal tax only, standard deduction, no Social Security or other income.
- Income the accounts cannot fund is reported as a shortfall, not raised.

Money is Decimal throughout and every reported amount is rounded to the cent.
Negative inputs are clamped to zero when the input objects are built.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from decimal import Decimal

from income_tax import (
    ASSUMED_GAINS_FRACTION,
    ZERO,
    FilingStatus,
    TaxTable,
    as_decimal,
    tax_owed,
    to_cents,
)
from rmd import DEFAULT_RMD_START_AGE, required_minimum_distribution

logger = logging.getLogger(__name__)

TRADITIONAL = "traditional"
ROTH = "roth"
TAXABLE = "taxable"

# Funding priority before RMDs start. After that traditional always leads.
PREFERRED_ORDER = (TAXABLE, TRADITIONAL, ROTH)
RMD_ORDER = (TRADITIONAL, TAXABLE, ROTH)
# Baseline that ignores tax: drain traditional first every year.
NAIVE_ORDER = (TRADITIONAL, TAXABLE, ROTH)

HIGH_EFFECTIVE_RATE = Decimal("0.15")


def _money(value) -> Decimal:
    return max(ZERO, to_cents(value))


@dataclass(frozen=True)
class AccountSnapshot:
    traditional_balance: Decimal = ZERO
    roth_balance: Decimal = ZERO
    taxable_balance: Decimal = ZERO

    def __post_init__(self):
        object.__setattr__(self, "traditional_balance", _money(self.traditional_balance))
        object.__setattr__(self, "roth_balance", _money(self.roth_balance))
        object.__setattr__(self, "taxable_balance", _money(self.taxable_balance))


@dataclass(frozen=True)
class PlanningInput:
    current_age: int
    filing_status: FilingStatus
    desired_annual_income: Decimal
    accounts: AccountSnapshot = field(default_factory=AccountSnapshot)
    horizon_years: int = 30
    start_year: int = 1
    rmd_start_age: int = DEFAULT_RMD_START_AGE
    assumed_gains_fraction: Decimal = ASSUMED_GAINS_FRACTION
    tax_tables: dict[FilingStatus, TaxTable] | None = None

    def __post_init__(self):
        object.__setattr__(self, "current_age", max(0, int(self.current_age)))
        object.__setattr__(self, "filing_status", FilingStatus(self.filing_status))
        object.__setattr__(self, "desired_annual_income", _money(self.desired_annual_income))
        object.__setattr__(self, "horizon_years", max(0, int(self.horizon_years)))
        fraction = min(Decimal(1), max(ZERO, as_decimal(self.assumed_gains_fraction)))
        object.__setattr__(self, "assumed_gains_fraction", fraction)


@dataclass(frozen=True)
class YearlyWithdrawal:
    year: int
    age: int
    rmd: Decimal
    traditional_withdrawal: Decimal
    roth_withdrawal: Decimal
    taxable_withdrawal: Decimal
    taxable_income_recognized: Decimal
    tax_owed: Decimal
    after_tax_income: Decimal
    ending_traditional_balance: Decimal
    ending_roth_balance: Decimal
    ending_taxable_balance: Decimal
    income_shortfall: Decimal  # desired income the accounts could not fund

    @property
    def total_withdrawal(self) -> Decimal:
        return self.traditional_withdrawal + self.roth_withdrawal + self.taxable_withdrawal


@dataclass(frozen=True)
class PlanningResult:
    yearly_withdrawals: list[YearlyWithdrawal]
    total_taxes_paid: Decimal
    total_after_tax_income: Decimal

    @property
    def effective_tax_rate(self) -> Decimal:
        """Taxes as a share of everything withdrawn, 0 when nothing was."""
        gross = self.total_taxes_paid + self.total_after_tax_income
        if gross <= 0:
            return ZERO
        return (self.total_taxes_paid / gross).quantize(Decimal("0.0001"))

    @property
    def shortfall_years(self) -> list[YearlyWithdrawal]:
        return [row for row in self.yearly_withdrawals if row.income_shortfall > 0]


def _fund(need: Decimal, balances: dict, order: tuple, rmd: Decimal) -> dict:
    """Cover ``need`` from ``balances`` in ``order``; traditional never below ``rmd``."""
    drawn = {TRADITIONAL: ZERO, ROTH: ZERO, TAXABLE: ZERO}
    remaining = need
    for account in order:
        wanted = remaining
        if account == TRADITIONAL:
            wanted = max(wanted, rmd)
        amount = min(wanted, balances[account])
        drawn[account] = amount
        remaining = max(ZERO, remaining - amount)
    return drawn


def _simulate(planning_input: PlanningInput, pre_rmd_order: tuple) -> PlanningResult:
    status = planning_input.filing_status
    need = planning_input.desired_annual_income
    balances = {
        TRADITIONAL: planning_input.accounts.traditional_balance,
        ROTH: planning_input.accounts.roth_balance,
        TAXABLE: planning_input.accounts.taxable_balance,
    }

    rows: list[YearlyWithdrawal] = []
    total_tax = ZERO
    total_after_tax = ZERO

    for i in range(planning_input.horizon_years):
        if all(b == 0 for b in balances.values()):
            logger.debug("all accounts depleted after %d years", i)
            break

        year = planning_input.start_year + i
        age = planning_input.current_age + i

        rmd = required_minimum_distribution(
            balances[TRADITIONAL], age, planning_input.rmd_start_age
        )
        order = pre_rmd_order if age < planning_input.rmd_start_age else RMD_ORDER
        drawn = _fund(need, balances, order, rmd)

        recognized = to_cents(
            drawn[TRADITIONAL] + drawn[TAXABLE] * planning_input.assumed_gains_fraction
        )
        tax = to_cents(tax_owed(recognized, status, planning_input.tax_tables))
        gross = drawn[TRADITIONAL] + drawn[ROTH] + drawn[TAXABLE]
        after_tax = gross - tax

        for account, amount in drawn.items():
            balances[account] = max(ZERO, balances[account] - amount)

        row = YearlyWithdrawal(
            year=year,
            age=age,
            rmd=rmd,
            traditional_withdrawal=drawn[TRADITIONAL],
            roth_withdrawal=drawn[ROTH],
            taxable_withdrawal=drawn[TAXABLE],
            taxable_income_recognized=recognized,
            tax_owed=tax,
            after_tax_income=after_tax,
            ending_traditional_balance=balances[TRADITIONAL],
            ending_roth_balance=balances[ROTH],
            ending_taxable_balance=balances[TAXABLE],
            income_shortfall=max(ZERO, need - gross),
        )
        rows.append(row)
        logger.debug(
            "year %d age %d: trad=%s roth=%s taxable=%s tax=%s",
            year, age, row.traditional_withdrawal, row.roth_withdrawal,
            row.taxable_withdrawal, tax,
        )

        total_tax += tax
        total_after_tax += after_tax

    return PlanningResult(
        yearly_withdrawals=rows,
        total_taxes_paid=total_tax,
        total_after_tax_income=total_after_tax,
    )


def plan_withdrawals(planning_input: PlanningInput) -> PlanningResult:
    """Year-by-year tax-aware withdrawal plan.

    Runs for ``horizon_years`` or until a year begins with every account
    empty; that year and any after it are not emitted.
    """
    return _simulate(planning_input, PREFERRED_ORDER)


def plan_naive_withdrawals(planning_input: PlanningInput) -> PlanningResult:
    """Same horizon and RMD rules, but traditional always funds first."""
    return _simulate(planning_input, NAIVE_ORDER)


def tax_savings_versus_naive(planning_input: PlanningInput) -> Decimal:
    """Taxes the tax-aware plan saves over draining traditional first.

    Negative when the naive order happens to be cheaper for these inputs.
    """
    planned = plan_withdrawals(planning_input)
    naive = plan_naive_withdrawals(planning_input)
    return naive.total_taxes_paid - planned.total_taxes_paid


def recommendations(planning_input: PlanningInput, result: PlanningResult) -> list[str]:
    accounts = planning_input.accounts
    age = planning_input.current_age
    rmd_age = planning_input.rmd_start_age
    out: list[str] = []

    if accounts.traditional_balance > 0 and age < 70:
        out.append("Consider Roth conversions before age 70 to reduce future RMDs")
    if accounts.taxable_balance > 0:
        out.append("Use taxable accounts first to take advantage of capital gains rates")
    if age < rmd_age:
        out.append(f"Plan for RMDs starting at age {rmd_age} - consider Roth conversions now")
    if result.effective_tax_rate > HIGH_EFFECTIVE_RATE:
        out.append(
            "Your effective tax rate is relatively high. "
            "Consider more aggressive Roth conversion strategies"
        )
    short = result.shortfall_years
    if short:
        out.append(
            f"Savings fall short of the desired income starting at age {short[0].age}"
        )
    out.append("Review strategy annually as tax laws and your situation change")
    return out


def to_dataframe(rows):
    """Ledger as a DataFrame; accepts a PlanningResult or a list of rows."""
    try:
        import pandas as pd
    except ImportError as exc:
        raise RuntimeError("pandas is required to build a DataFrame output") from exc
    if isinstance(rows, PlanningResult):
        rows = rows.yearly_withdrawals
    records = [
        {k: float(v) if isinstance(v, Decimal) else v for k, v in asdict(r).items()}
        for r in rows
    ]
    return pd.DataFrame(records, columns=[f.name for f in fields(YearlyWithdrawal)])
