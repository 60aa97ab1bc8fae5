"""Tabular breakdown and summary figures for allocation results."""

import pandas as pd
from models.allocation import AllocationResult
from config.defaults import REPORT_COLUMNS


def result_to_dataframe(result: AllocationResult) -> pd.DataFrame:
    """One row per participant, in input order."""
    rows = []
    for r in result.rows:
        rows.append({
            "Participant ID": r.id,
            "Name": r.name or "",
            "Original Amount": r.original_amount,
            "Weight": float(r.weight),
            "Exact Share": float(r.exact_share),
            "Base Share": r.base_share,
            "Fractional Share": float(r.fractional_share),
            "Extra Share": r.extra_share,
            "Allocated Amount": r.allocated_amount,
            "Deviation": r.deviation,
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def summarize_allocation(result: AllocationResult) -> dict:
    """Headline figures for a result.

    Returns dict with: original_total, final_total, discount,
    leftover_before_distribution, participants, rows_with_extra, max_abs_deviation
    """
    df = result_to_dataframe(result)
    return {
        "original_total": result.original_total,
        "final_total": result.final_total,
        "discount": result.original_total - result.final_total,
        "leftover_before_distribution": result.leftover_before_distribution,
        "participants": len(df),
        "rows_with_extra": int((df["Extra Share"] > 0).sum()),
        "max_abs_deviation": float(df["Deviation"].abs().max()),
    }
