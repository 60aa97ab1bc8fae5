"""Pre-flight validation of allocation inputs and audit of allocation results."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List

from models.allocation import AllocationResult
from engine.allocation_engine import integer_violation, read_participant


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def validate_allocation_inputs(final_total, participants: Iterable) -> ValidationResult:
    """Report every problem ``allocate`` would reject, instead of stopping at the first."""
    result = ValidationResult()

    reason = integer_violation(final_total)
    if reason:
        result.is_valid = False
        result.errors.append(f"Final total {final_total!r} is invalid: {reason}.")

    participants = list(participants)
    if not participants:
        result.is_valid = False
        result.errors.append("At least one participant is required.")
        return result

    original_total = 0
    amounts_ok = True
    ids = []
    zero_amount = []
    for index, participant in enumerate(participants):
        pid, _, amount = read_participant(participant)
        ids.append(pid)
        reason = integer_violation(amount)
        if reason:
            result.is_valid = False
            amounts_ok = False
            result.errors.append(
                f"Participant {pid!r} (position {index}): original amount {amount!r} is invalid: {reason}."
            )
            continue
        original_total += int(amount)
        if amount == 0:
            zero_amount.append(pid)

    if amounts_ok and original_total <= 0:
        result.is_valid = False
        result.errors.append("Original amounts must add up to more than 0.")

    dupes = sorted(str(pid) for pid, count in Counter(ids).items() if count > 1)
    if dupes:
        result.warnings.append(f"Duplicate participant ids: {', '.join(dupes)}.")
    if zero_amount and original_total > 0:
        result.warnings.append(
            f"Participants with an original amount of 0 will be allocated nothing: "
            f"{', '.join(str(pid) for pid in zero_amount)}."
        )

    return result


def check_result_invariants(result: AllocationResult) -> ValidationResult:
    """Audit a result: exact total, non-negative amounts, input order kept."""
    check = ValidationResult()

    if result.allocated_total != result.final_total:
        check.is_valid = False
        check.errors.append(
            f"Allocated amounts add up to {result.allocated_total}, expected {result.final_total}."
        )

    negative = [r.id for r in result.rows if r.allocated_amount < 0]
    if negative:
        check.is_valid = False
        check.errors.append(f"Negative allocations for: {', '.join(str(i) for i in negative)}.")

    indices = [r.original_index for r in result.rows]
    if indices != list(range(len(result.rows))):
        check.is_valid = False
        check.errors.append(f"Rows are out of input order: {indices}.")

    original_total = sum(r.original_amount for r in result.rows)
    if original_total != result.original_total:
        check.is_valid = False
        check.errors.append(
            f"Original total {result.original_total} does not match the rows ({original_total})."
        )

    for r in result.rows:
        if r.allocated_amount != r.base_share + r.extra_share:
            check.is_valid = False
            check.errors.append(f"Participant {r.id!r}: base + extra does not equal allocated amount.")

    return check
