"""Federal income tax bracket utilities.

This module provides a simple progressive tax calculator given a list
of brackets like:
    [TaxBracket(start=0, end=11000, rate=0.10), ...]

Amounts are Decimal dollars for a single tax year. Brackets are not
inflation indexed; callers wanting indexation should supply their own
tables.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, List, Optional

ZERO = Decimal("0")
CENT = Decimal("0.01")

TAX_YEAR = 2023

# Share of a taxable-account withdrawal treated as recognized gain.
# There is no cost-basis tracking; this flat fraction stands in for it.
ASSUMED_GAINS_FRACTION = Decimal("0.15")


def as_decimal(value) -> Decimal:
    # floats go through str() so 0.05 stays 0.05
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_cents(amount) -> Decimal:
    """Round a money amount half-up to the cent."""
    return as_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "marriedFilingJointly"
    MARRIED_FILING_SEPARATELY = "marriedFilingSeparately"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    FilingStatus.SINGLE: "Single",
    FilingStatus.MARRIED_FILING_JOINTLY: "Married Filing Jointly",
    FilingStatus.MARRIED_FILING_SEPARATELY: "Married Filing Separately",
}


@dataclass(frozen=True)
class TaxBracket:
    start: Decimal
    end: Optional[Decimal]  # None means no upper bound
    rate: Decimal           # e.g., 0.22 for 22%


@dataclass(frozen=True)
class TaxTable:
    brackets: List[TaxBracket]
    standard_deduction: Decimal

    @property
    def top_rate(self) -> Decimal:
        return max(b.rate for b in self.brackets)


def compute_tax(taxable_income: Decimal, brackets: List[TaxBracket]) -> Decimal:
    """Compute tax owed under progressive brackets.

    Args:
        taxable_income: income subject to ordinary brackets (>=0).
        brackets: ordered low-to-high list of TaxBracket.

    Returns:
        Total tax in dollars, unrounded.
    """
    if taxable_income <= 0:
        return ZERO

    tax = ZERO
    for b in brackets:
        if taxable_income <= b.start:
            break
        upper = taxable_income if b.end is None else min(taxable_income, b.end)
        amount_in_bracket = upper - b.start
        if amount_in_bracket > 0:
            tax += amount_in_bracket * b.rate
    return tax


def _brackets(*rows) -> List[TaxBracket]:
    out = []
    for start, end, rate in rows:
        out.append(TaxBracket(
            start=Decimal(start),
            end=None if end is None else Decimal(end),
            rate=Decimal(rate),
        ))
    return out


# 2023 federal brackets and standard deductions
DEFAULT_TAX_TABLES: Dict[FilingStatus, TaxTable] = {
    FilingStatus.SINGLE: TaxTable(
        brackets=_brackets(
            (0, 11000, "0.10"),
            (11000, 44725, "0.12"),
            (44725, 95375, "0.22"),
            (95375, 182100, "0.24"),
            (182100, 231250, "0.32"),
            (231250, 578125, "0.35"),
            (578125, None, "0.37"),
        ),
        standard_deduction=Decimal(13850),
    ),
    FilingStatus.MARRIED_FILING_JOINTLY: TaxTable(
        brackets=_brackets(
            (0, 22000, "0.10"),
            (22000, 89450, "0.12"),
            (89450, 190750, "0.22"),
            (190750, 364200, "0.24"),
            (364200, 462500, "0.32"),
            (462500, 693750, "0.35"),
            (693750, None, "0.37"),
        ),
        standard_deduction=Decimal(27700),
    ),
    FilingStatus.MARRIED_FILING_SEPARATELY: TaxTable(
        brackets=_brackets(
            (0, 11000, "0.10"),
            (11000, 44725, "0.12"),
            (44725, 95375, "0.22"),
            (95375, 182100, "0.24"),
            (182100, 231250, "0.32"),
            (231250, 346875, "0.35"),
            (346875, None, "0.37"),
        ),
        standard_deduction=Decimal(13850),
    ),
}


def table_for(
    status: FilingStatus, tables: Optional[Dict[FilingStatus, TaxTable]] = None
) -> TaxTable:
    tables = tables or DEFAULT_TAX_TABLES
    return tables[FilingStatus(status)]


def tax_owed(
    gross_income: Decimal,
    status: FilingStatus,
    tables: Optional[Dict[FilingStatus, TaxTable]] = None,
) -> Decimal:
    """Tax on ordinary income after the standard deduction for ``status``.

    The result is exact; round at the point of reporting.
    """
    table = table_for(status, tables)
    taxable = max(ZERO, as_decimal(gross_income) - table.standard_deduction)
    return compute_tax(taxable, table.brackets)


def top_rate(
    status: FilingStatus, tables: Optional[Dict[FilingStatus, TaxTable]] = None
) -> Decimal:
    return table_for(status, tables).top_rate
