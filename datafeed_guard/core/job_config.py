"""Job Configuration — read-only view of an anomaly detection job's analysis settings.

Invariants:
    - bucket_span is strictly positive
    - latency is None or non-negative; zero and None mean the same thing to the validator
    - Frozen: the validator never mutates a job, and callers may share instances across threads
"""

from dataclasses import dataclass, field
from datetime import timedelta

from datafeed_guard.core.domain_types import JobId


DEFAULT_BUCKET_SPAN = timedelta(minutes=5)


@dataclass(frozen=True)
class Detector:
    """One analysis function over a field, optionally split by other fields."""
    function: str
    field_name: str | None = None
    by_field_name: str | None = None
    over_field_name: str | None = None
    partition_field_name: str | None = None


@dataclass(frozen=True)
class AnalysisConfig:
    """How the analysis engine buckets and consumes input records."""
    detectors: tuple[Detector, ...] = ()
    bucket_span: timedelta = DEFAULT_BUCKET_SPAN
    latency: timedelta | None = None
    summary_count_field_name: str | None = None

    def __post_init__(self):
        if self.bucket_span <= timedelta(0):
            raise ValueError("bucket_span must be greater than 0")
        if self.latency is not None and self.latency < timedelta(0):
            raise ValueError("latency cannot be negative")

    @property
    def has_latency(self) -> bool:
        return self.latency is not None and self.latency > timedelta(0)

    @property
    def has_summary_count_field(self) -> bool:
        return bool(self.summary_count_field_name)


@dataclass(frozen=True)
class JobConfig:
    """Anomaly detection job — only the parts a datafeed is checked against."""
    job_id: JobId
    analysis_config: AnalysisConfig = field(default_factory=AnalysisConfig)
    description: str | None = None
