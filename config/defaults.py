"""Default configuration constants for the proportional split allocator."""

# Arithmetic used for weights and shares: "float" (IEEE-754 doubles) or "exact" (rationals)
DEFAULT_ARITHMETIC_MODE = "float"
ARITHMETIC_MODES = ["float", "exact"]

# Leftover distribution gives up after this many grants per participant
DISTRIBUTION_SAFETY_MULTIPLIER = 10_000

# Reasons attached to invalid amount errors
REASON_NOT_A_NUMBER = "not a number"
REASON_NOT_FINITE = "not finite"
REASON_NOT_INTEGER = "not an integer"
REASON_NEGATIVE = "negative"

# Tabular report layout
REPORT_COLUMNS = [
    "Participant ID",
    "Name",
    "Original Amount",
    "Weight",
    "Exact Share",
    "Base Share",
    "Fractional Share",
    "Extra Share",
    "Allocated Amount",
    "Deviation",
]
