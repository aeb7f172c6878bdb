"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DatafeedId, JobId wrap str — never pass bare ids through validation logic
    - Millis is always an integer count of milliseconds
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (error codes land in API bodies)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DatafeedId = NewType("DatafeedId", str)
JobId = NewType("JobId", str)


# ─── Value Types ─────────────────────────────────────────────────

Millis = NewType("Millis", int)


# ─── Enums ───────────────────────────────────────────────────────

class ValidationErrorKind(str, Enum):
    """Datafeed/job incompatibilities, in evaluation order."""
    UNSUPPORTED_JOB_LATENCY = "UNSUPPORTED_JOB_LATENCY"
    AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD = "AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD"
    AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN = "AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN"


class BucketingType(str, Enum):
    """Aggregation types that partition a datafeed stream into time buckets."""
    HISTOGRAM = "histogram"
    DATE_HISTOGRAM = "date_histogram"


class IntervalKind(str, Enum):
    """How a bucketing aggregation expresses its interval."""
    NUMERIC = "numeric"
    FIXED = "fixed"
    CALENDAR = "calendar"


class Locale(str, Enum):
    """Supported message locales — maps to the ?locale= query parameter."""
    EN = "en"
    PT_BR = "pt-BR"
