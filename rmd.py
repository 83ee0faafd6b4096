"""Required minimum distributions from tax-deferred accounts.

RMDs use the IRS Uniform Lifetime Table (2022+). The first RMD is due at
age 73 by default; the table starts at 72 so a caller can lower the start
age for older birth cohorts.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from income_tax import ZERO, as_decimal, to_cents

logger = logging.getLogger(__name__)

DEFAULT_RMD_START_AGE = 73

UNIFORM_LIFETIME_DIVISORS = {
    age: Decimal(divisor)
    for age, divisor in {
        72: "27.4", 73: "26.5", 74: "25.5", 75: "24.6", 76: "23.7", 77: "22.9",
        78: "22.0", 79: "21.1", 80: "20.2", 81: "19.4", 82: "18.5", 83: "17.7",
        84: "16.8", 85: "16.0", 86: "15.2", 87: "14.4", 88: "13.7", 89: "12.9",
        90: "12.2", 91: "11.5", 92: "10.8", 93: "10.1", 94: "9.5", 95: "8.9",
        96: "8.4", 97: "7.8", 98: "7.3", 99: "6.8", 100: "6.4", 101: "6.0",
        102: "5.6", 103: "5.2", 104: "4.9", 105: "4.6", 106: "4.3", 107: "4.1",
        108: "3.9", 109: "3.7", 110: "3.5", 111: "3.4", 112: "3.3", 113: "3.1",
        114: "3.0", 115: "2.9", 116: "2.8", 117: "2.7", 118: "2.5", 119: "2.3",
        120: "2.0",
    }.items()
}

MIN_TABLE_AGE = min(UNIFORM_LIFETIME_DIVISORS)
MAX_TABLE_AGE = max(UNIFORM_LIFETIME_DIVISORS)


def divisor_for(age: int) -> Decimal:
    """Life-expectancy divisor for ``age``.

    Ages outside the table clamp to its nearest end; the divisor is never
    extrapolated below the last tabulated value.
    """
    clamped = min(max(int(age), MIN_TABLE_AGE), MAX_TABLE_AGE)
    return UNIFORM_LIFETIME_DIVISORS[clamped]


def required_minimum_distribution(
    traditional_balance: Decimal, age: int, rmd_start_age: int = DEFAULT_RMD_START_AGE
) -> Decimal:
    """Compute RMD given balance and age, rounded half-up to the cent."""
    balance = as_decimal(traditional_balance)
    if age < rmd_start_age or balance <= 0:
        return ZERO
    return to_cents(balance / divisor_for(age))


@dataclass(frozen=True)
class RmdProjection:
    age: int
    starting_balance: Decimal
    divisor: Decimal
    rmd: Decimal
    monthly_amount: Decimal


def project_rmds(
    traditional_balance: Decimal,
    age: int,
    years: int = 10,
    growth_rate: float = 0.05,
    rmd_start_age: int = DEFAULT_RMD_START_AGE,
) -> list[RmdProjection]:
    """Project RMDs forward, growing what remains after each distribution.

    Each following year starts from ``(balance - rmd) * (1 + growth_rate)``.
    Years before ``rmd_start_age`` show a zero RMD and the balance simply grows.
    """
    growth = 1 + as_decimal(growth_rate)
    balance = to_cents(traditional_balance)
    rows: list[RmdProjection] = []
    for i in range(max(0, years)):
        year_age = age + i
        rmd = required_minimum_distribution(balance, year_age, rmd_start_age)
        rows.append(
            RmdProjection(
                age=year_age,
                starting_balance=balance,
                divisor=divisor_for(year_age),
                rmd=rmd,
                monthly_amount=to_cents(rmd / 12),
            )
        )
        balance = to_cents(max(ZERO, balance - rmd) * growth)
    logger.debug("projected %d RMD years from age %d", len(rows), age)
    return rows
