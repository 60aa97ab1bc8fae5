"""Exceptions raised by the allocation engine.

Input errors describe a problem with what the caller passed in and are safe to
show to a user. Internal errors mean the engine broke one of its own
guarantees and should be logged and alerted on instead.
"""

from typing import Optional


class AllocationError(Exception):
    """Base class for every allocation failure."""


class AllocationInputError(AllocationError, ValueError):
    """The caller supplied values the allocator cannot work with."""


class InvalidTotalError(AllocationInputError):
    def __init__(self, value, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Final total {value!r} is invalid: {reason}.")


class EmptyParticipantsError(AllocationInputError):
    def __init__(self):
        super().__init__("At least one participant is required.")


class InvalidParticipantAmountError(AllocationInputError):
    def __init__(self, participant_id: Optional[str], index: int, value, reason: str):
        self.participant_id = participant_id
        self.index = index
        self.value = value
        self.reason = reason
        super().__init__(
            f"Participant {participant_id!r} (position {index}) has an invalid "
            f"original amount {value!r}: {reason}."
        )


class ZeroOriginalTotalError(AllocationInputError):
    def __init__(self, original_total: int):
        self.original_total = original_total
        super().__init__(
            f"Original amounts must add up to more than 0 (got {original_total})."
        )


class AllocationInternalError(AllocationError, RuntimeError):
    """The engine failed one of its own consistency checks."""


class DistributionOverflowError(AllocationInternalError):
    def __init__(self, grants: int, remaining: int):
        self.grants = grants
        self.remaining = remaining
        super().__init__(
            f"Leftover distribution stopped after {grants} grants with "
            f"{remaining} units still undistributed."
        )


class AllocationMismatchError(AllocationInternalError):
    def __init__(self, final_total: int, allocated_sum: int):
        self.final_total = final_total
        self.allocated_sum = allocated_sum
        super().__init__(
            f"Allocated amounts add up to {allocated_sum} but the final total is "
            f"{final_total}, and no participant can absorb the difference."
        )
