from dataclasses import dataclass
from numbers import Real
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ParticipantInput:
    id: str
    original_amount: int            # Pre-discount amount in minor units
    name: Optional[str] = None


@dataclass(frozen=True)
class AllocationRow:
    id: str
    name: Optional[str]
    original_amount: int
    original_index: int             # Input position, used only as the last tie-break
    weight: Real                    # original_amount / original_total
    exact_share: Real               # final_total * weight
    base_share: int                 # floor(exact_share)
    fractional_share: Real          # exact_share - base_share, in [0, 1)
    extra_share: int = 0            # Leftover units granted to this row
    allocated_amount: int = 0       # base_share + extra_share

    @property
    def deviation(self) -> float:
        """Signed distance between the integer allocation and the ideal share."""
        return float(self.allocated_amount - self.exact_share)


@dataclass(frozen=True)
class AllocationResult:
    original_total: int
    final_total: int
    leftover_before_distribution: int
    rows: Tuple[AllocationRow, ...]

    @property
    def allocated_amounts(self) -> List[int]:
        return [r.allocated_amount for r in self.rows]

    @property
    def allocated_total(self) -> int:
        return sum(r.allocated_amount for r in self.rows)

    def by_id(self) -> Dict[str, AllocationRow]:
        return {r.id: r for r in self.rows}
