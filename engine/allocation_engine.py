"""Proportional split allocation: the core business engine.

Splits an integer final total across participants in proportion to their
original amounts. Every participant first receives the floor of its ideal
share; the leftover units then go out one at a time by largest remainder, and
a corrective pass absorbs any floating-point drift so the allocations always
add up to the final total exactly.
"""

import logging
import math
import sys
from collections.abc import Mapping
from dataclasses import replace
from decimal import Decimal
from fractions import Fraction
from numbers import Rational, Real
from typing import Iterable, List, Optional, Sequence, Tuple

from models.allocation import AllocationRow, AllocationResult
from engine.errors import (
    InvalidTotalError,
    EmptyParticipantsError,
    InvalidParticipantAmountError,
    ZeroOriginalTotalError,
    DistributionOverflowError,
    AllocationMismatchError,
)
from config.defaults import (
    DEFAULT_ARITHMETIC_MODE, ARITHMETIC_MODES,
    DISTRIBUTION_SAFETY_MULTIPLIER,
    REASON_NOT_A_NUMBER, REASON_NOT_FINITE, REASON_NOT_INTEGER, REASON_NEGATIVE,
)

logger = logging.getLogger(__name__)


def integer_violation(value) -> Optional[str]:
    """Return why ``value`` is not a finite non-negative integer, or None if it is."""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return REASON_NOT_A_NUMBER
    if isinstance(value, Decimal):
        finite = value.is_finite()
    elif isinstance(value, Rational):
        # ints and fractions are always finite and may not fit in a float
        finite = True
    else:
        finite = math.isfinite(value)
    if not finite:
        return REASON_NOT_FINITE
    if value != math.floor(value):
        return REASON_NOT_INTEGER
    if value < 0:
        return REASON_NEGATIVE
    return None


def read_participant(participant) -> Tuple[Optional[str], Optional[str], object]:
    """Pull (id, name, original amount) out of a ParticipantInput or a plain mapping."""
    if isinstance(participant, Mapping):
        amount = participant.get("original_amount", participant.get("originalAmount"))
        return participant.get("id"), participant.get("name"), amount
    return participant.id, participant.name, participant.original_amount


def _sanitize(final_total, participants: Iterable) -> Tuple[int, List[Tuple[str, Optional[str], int]]]:
    reason = integer_violation(final_total)
    if reason:
        raise InvalidTotalError(final_total, reason)

    participants = list(participants)
    if not participants:
        raise EmptyParticipantsError()

    sanitized = []
    for index, participant in enumerate(participants):
        pid, name, amount = read_participant(participant)
        reason = integer_violation(amount)
        if reason:
            raise InvalidParticipantAmountError(pid, index, amount, reason)
        sanitized.append((pid, name, int(amount)))

    return int(final_total), sanitized


def _build_rows(
    final_total: int,
    sanitized: List[Tuple[str, Optional[str], int]],
    original_total: int,
    arithmetic: str,
) -> List[AllocationRow]:
    rows = []
    for index, (pid, name, amount) in enumerate(sanitized):
        if arithmetic == "exact":
            weight = Fraction(amount, original_total)
        else:
            weight = amount / original_total
        exact_share = final_total * weight
        base_share = math.floor(exact_share)
        rows.append(AllocationRow(
            id=pid,
            name=name,
            original_amount=amount,
            original_index=index,
            weight=weight,
            exact_share=exact_share,
            base_share=base_share,
            fractional_share=exact_share - base_share,
            extra_share=0,
            allocated_amount=base_share,
        ))
    return rows


def priority_order(rows: Sequence[AllocationRow]) -> List[int]:
    """Positions of ``rows`` in the order leftover units are handed out.

    Largest fractional share first, then largest original amount, then
    earliest input position.
    """
    def sort_key(i: int):
        row = rows[i]
        return (-row.fractional_share, -row.original_amount, row.original_index)

    return sorted(range(len(rows)), key=sort_key)


def distribute_leftover(
    rows: Sequence[AllocationRow],
    order: Sequence[int],
    remaining: int,
    safety_multiplier: int = DISTRIBUTION_SAFETY_MULTIPLIER,
) -> List[AllocationRow]:
    """Grant ``remaining`` units one at a time, cycling through ``order``."""
    rows = list(rows)
    cycle_length = len(order)
    limit = cycle_length * safety_multiplier
    cursor = 0

    while remaining > 0:
        if cursor >= limit:
            logger.error(
                "Leftover distribution exceeded %s grants across %s participants (%s left)",
                limit, cycle_length, remaining,
            )
            raise DistributionOverflowError(cursor, remaining)
        idx = order[cursor % cycle_length]
        row = rows[idx]
        rows[idx] = replace(
            row,
            extra_share=row.extra_share + 1,
            allocated_amount=row.allocated_amount + 1,
        )
        remaining -= 1
        cursor += 1

    return rows


def reconcile_total(rows: Sequence[AllocationRow], final_total: int) -> List[AllocationRow]:
    """Push any gap between the allocated sum and ``final_total`` onto a single row.

    The first row (in input order) that stays non-negative after the
    adjustment absorbs the whole difference.
    """
    rows = list(rows)
    allocated_sum = sum(r.allocated_amount for r in rows)
    if allocated_sum == final_total:
        return rows

    difference = final_total - allocated_sum
    for idx, row in enumerate(rows):
        if row.allocated_amount + difference >= 0:
            logger.warning(
                "Allocated sum %s drifted from final total %s; adjusting participant %r by %+d",
                allocated_sum, final_total, row.id, difference,
            )
            rows[idx] = replace(
                row,
                allocated_amount=row.allocated_amount + difference,
                extra_share=row.extra_share + difference,
            )
            return rows

    logger.error(
        "Cannot reconcile allocated sum %s with final total %s", allocated_sum, final_total,
    )
    raise AllocationMismatchError(final_total, allocated_sum)


def allocate(
    final_total,
    participants: Iterable,
    rule_config: Optional[dict] = None,
) -> AllocationResult:
    """Split ``final_total`` across ``participants`` in proportion to their original amounts."""
    cfg = rule_config or {}
    arithmetic = cfg.get("arithmetic", DEFAULT_ARITHMETIC_MODE)
    safety_multiplier = cfg.get("distribution_safety_multiplier", DISTRIBUTION_SAFETY_MULTIPLIER)
    if arithmetic not in ARITHMETIC_MODES:
        raise ValueError(
            f"Unknown arithmetic mode {arithmetic!r}. Expected one of: {ARITHMETIC_MODES}"
        )

    # Step 1: Validate and normalise inputs
    final_total, sanitized = _sanitize(final_total, participants)

    # Step 2: Original total
    original_total = sum(amount for _, _, amount in sanitized)
    if original_total <= 0:
        raise ZeroOriginalTotalError(original_total)

    # Step 3: Weights, exact shares and floors
    if arithmetic == "float" and final_total > sys.float_info.max:
        logger.debug("Final total %s does not fit in a float; using exact arithmetic", final_total)
        arithmetic = "exact"
    rows = _build_rows(final_total, sanitized, original_total, arithmetic)

    # Step 4: Leftover after flooring
    base_total = sum(r.base_share for r in rows)
    remaining = round(final_total - base_total)
    leftover = max(0, remaining)

    logger.debug(
        "Allocating %s across %s participants (original total %s, base total %s, leftover %s)",
        final_total, len(rows), original_total, base_total, remaining,
    )

    # Step 5-6: Largest remainder, walked cyclically
    if remaining > 0:
        rows = distribute_leftover(rows, priority_order(rows), remaining, safety_multiplier)

    # Step 7: Corrective pass
    rows = reconcile_total(rows, final_total)

    return AllocationResult(
        original_total=original_total,
        final_total=final_total,
        leftover_before_distribution=leftover,
        rows=tuple(rows),
    )
