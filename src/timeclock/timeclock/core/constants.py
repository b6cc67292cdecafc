"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_BUSINESS_TIMEZONE = "Europe/Oslo"

# Auto punch-in
PUNCH_IN_LOOKAHEAD_MINUTES = 5
AUTO_PUNCH_DUPLICATE_WINDOW_MINUTES = 10

# Auto punch-out
PUNCH_OUT_GRACE_MINUTES = 5
PUNCH_OUT_LATE_MINUTES = 10
STALE_PUNCH_OUT_OFFSET_SECONDS = 1

# Reconciliation
LUNCH_THRESHOLD_MINUTES = 330
LUNCH_MINUTES = 30
# How long after an overnight close a next-day punch-out still ends the night.
OVERNIGHT_PUNCH_OUT_TOLERANCE_MINUTES = 60

# Normalizer
NORMALIZER_STDDEV_MINUTES = 4.0
NORMALIZER_CLAMP_MINUTES = 10

DEFAULT_HOOK_TIMEOUT_SECONDS = 10
