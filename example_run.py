import json
import logging
import sys

from income_tax import FilingStatus
from records import dumps_result, input_from_record
from withdrawal_planner import (
    AccountSnapshot,
    PlanningInput,
    plan_withdrawals,
    recommendations,
    tax_savings_versus_naive,
    to_dataframe,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

if len(sys.argv) > 1:
    # a PlanningInput record, e.g. {"currentAge": 65, "filingStatus": "single", ...}
    with open(sys.argv[1], "r", encoding="utf-8") as f:
        inputs = input_from_record(json.load(f))
else:
    inputs = PlanningInput(
        current_age=65,
        filing_status=FilingStatus.MARRIED_FILING_JOINTLY,
        desired_annual_income=60_000,
        accounts=AccountSnapshot(
            traditional_balance=400_000,
            roth_balance=150_000,
            taxable_balance=200_000,
        ),
        start_year=2025,
    )

result = plan_withdrawals(inputs)
df = to_dataframe(result)
df.to_csv("example_output.csv", index=False)
print(df.head(10).to_string(index=False))
print()
print(f"Total taxes paid:        ${result.total_taxes_paid:,.2f}")
print(f"Total after-tax income:  ${result.total_after_tax_income:,.2f}")
print(f"Effective tax rate:      {result.effective_tax_rate:.2%}")
print(f"Savings vs. traditional-first: ${tax_savings_versus_naive(inputs):,.2f}")
for tip in recommendations(inputs, result):
    print(f"- {tip}")

with open("example_output.json", "w", encoding="utf-8") as f:
    f.write(dumps_result(result))
