"""Shared enums for models and API."""

from enum import Enum


class Goal(str, Enum):
    """Competition goal chosen at registration."""

    CUT = "cut"
    BULK = "bulk"
    MAINTAIN = "maintain"


class BadgeType(str, Enum):
    """Achievement badges, in evaluation order."""

    FIRST_UPLOAD = "first_upload"
    SECOND_UPLOAD = "second_upload"
    FOUR_UPLOADS = "four_uploads"
    FAT_DOWN_1 = "fat_down_1"
    FAT_DOWN_3 = "fat_down_3"
    MUSCLE_UP_05 = "muscle_up_05"
    MUSCLE_UP_1 = "muscle_up_1"
    TOP_3 = "top_3"


class RuleKind(str, Enum):
    """What a badge rule inspects."""

    UPLOAD_COUNT = "upload_count"  # number of confirmed measurements
    METRIC_DELTA = "metric_delta"  # last - first of one metric's non-null series
    RANK = "rank"  # position in the prediction ranking


class Band(str, Enum):
    """Leaderboard band of a ranked prediction."""

    WINNER = "winner"
    DANGER = "danger"


class UnavailableReason(str, Enum):
    """Why a user has no prediction yet."""

    INSUFFICIENT_DATA = "insufficient_data"
    DEGENERATE_REGRESSION = "degenerate_regression"
    NO_COMPETITION_END = "no_competition_end"


class LeaderboardMetric(str, Enum):
    """Measurement compared on the metric-change leaderboard."""

    BODY_FAT_PCT = "body_fat_pct"
    SKELETAL_MUSCLE = "skeletal_muscle"
    INBODY_SCORE = "inbody_score"


class LeaderboardPeriod(str, Enum):
    """Look-back window for the metric-change leaderboard."""

    DAYS_30 = "30"
    DAYS_90 = "90"
    ALL = "all"
