"""Generates human-readable explanations for allocation results."""

from typing import List
from models.allocation import AllocationRow, AllocationResult


def _label(row: AllocationRow) -> str:
    return f"{row.name} ({row.id})" if row.name else str(row.id)


def explain_row(row: AllocationRow, final_total: int) -> str:
    """One-line breakdown of how a single participant's amount was derived."""
    return (
        f"{_label(row)}: {row.original_amount} is {float(row.weight):.2%} of the original total "
        f"=> {float(row.weight):.4f} x {final_total} = {float(row.exact_share):.4f} "
        f"=> base {row.base_share} + extra {row.extra_share} = {row.allocated_amount}"
    )


def explain_allocation(result: AllocationResult) -> List[str]:
    """Produce step-by-step explanation for an allocation result."""
    steps = []
    rows = result.rows
    base_total = sum(r.base_share for r in rows)
    granted = sum(r.extra_share for r in rows)

    steps.append(
        f"Step 1 - Weights: {len(rows)} participants with an original total of "
        f"{result.original_total} => each weight is original amount / {result.original_total}"
    )

    steps.append(
        f"Step 2 - Base shares: floor of each exact share adds up to {base_total} "
        f"of {result.final_total} => {result.leftover_before_distribution} units left over"
    )

    if result.leftover_before_distribution > 0:
        recipients = ", ".join(
            f"{_label(r)} +{r.extra_share}" for r in rows if r.extra_share > 0
        )
        steps.append(
            f"Step 3 - Largest remainder: leftover units granted by fractional share, "
            f"then original amount, then input order => {recipients}"
        )
    else:
        steps.append("Step 3 - Largest remainder: nothing left over to distribute")

    correction = granted - result.leftover_before_distribution
    if correction != 0:
        steps.append(
            f"Note: Rounding drift corrected by {correction:+d} on a single participant"
        )

    steps.append(
        f"Step 4 - Final: allocated amounts add up to {result.allocated_total} "
        f"(final total {result.final_total})"
    )

    return steps
