from models.allocation import ParticipantInput, AllocationRow, AllocationResult
