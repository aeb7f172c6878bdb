"""Datafeed Configuration — read-only view of how a datafeed pulls and pre-aggregates data.

Invariants:
    - aggregations is None or a parsed AggregationTree; an empty tree means "no aggregations"
    - DOC_COUNT is the canonical document-count field suggested to aggregating jobs
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from datafeed_guard.core.protocols import BucketIntervalSource
from datafeed_guard.core.domain_types import DatafeedId, JobId


DEFAULT_SCROLL_SIZE = 1000


@dataclass(frozen=True)
class DatafeedConfig:
    """Datafeed attached to a job. Only aggregations are read during validation."""

    DOC_COUNT = "doc_count"

    datafeed_id: DatafeedId
    job_id: JobId
    indices: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    query: dict[str, Any] = field(default_factory=lambda: {"match_all": {}})
    scroll_size: int = DEFAULT_SCROLL_SIZE
    frequency: timedelta | None = None
    query_delay: timedelta | None = None
    aggregations: BucketIntervalSource | None = None

    @property
    def has_aggregations(self) -> bool:
        return self.aggregations is not None and not self.aggregations.is_empty
