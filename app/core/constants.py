"""Application constants."""

# Trend prediction / leaderboard entry
MIN_PREDICTION_POINTS = 2

# Winner / danger band size cap
MAX_BAND_SIZE = 3

# Progressive unlocks (confirmed reports)
TREND_UNLOCK_REPORTS = 2
ADVICE_UNLOCK_REPORTS = 4

SECONDS_PER_DAY = 60 * 60 * 24

# Segmental breakdown keys (lean mass kg / fat mass kg per segment)
SEGMENT_KEYS = ("right_arm", "left_arm", "trunk", "right_leg", "left_leg")

# Metric-change leaderboard: metrics where a decrease is the better result
LOWER_IS_BETTER_METRICS = frozenset({"body_fat_pct"})
