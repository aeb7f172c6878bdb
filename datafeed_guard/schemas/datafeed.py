"""Datafeed Schemas — Pydantic models for the datafeed side of a validation request.

Invariants:
    - "indexes" and "aggs" accepted as aliases of "indices" and "aggregations"
    - frequency and query_delay are duration strings or omitted
    - The aggregation tree is parsed in to_domain(); shape errors raise AggregationTreeError

Design Decisions:
    - aggregations kept as a raw dict on the schema: the grammar lives in
      core.aggregations, so the API contract does not duplicate it
"""

from datetime import timedelta
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from datafeed_guard.core.aggregations import AggregationTree
from datafeed_guard.core.datafeed_config import DatafeedConfig, DEFAULT_SCROLL_SIZE
from datafeed_guard.core.domain_types import DatafeedId, JobId
from datafeed_guard.core.time_values import parse_time_value


class DatafeedConfigIn(BaseModel):
    """Datafeed configuration as submitted for validation."""
    datafeed_id: str = Field(min_length=1, max_length=64)
    job_id: str = Field(min_length=1, max_length=64)
    indices: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("indices", "indexes"),
    )
    types: list[str] = Field(default_factory=list)
    query: dict[str, Any] = Field(default_factory=lambda: {"match_all": {}})
    scroll_size: int = Field(DEFAULT_SCROLL_SIZE, ge=0)
    frequency: timedelta | None = None
    query_delay: timedelta | None = None
    aggregations: dict[str, Any] | None = Field(
        None, validation_alias=AliasChoices("aggregations", "aggs"),
    )

    @field_validator("frequency", "query_delay", mode="before")
    @classmethod
    def parse_duration(cls, v, info):
        return parse_time_value(v, info.field_name)

    def to_domain(self) -> DatafeedConfig:
        aggregations = None
        if self.aggregations is not None:
            aggregations = AggregationTree.from_dict(self.aggregations)
        return DatafeedConfig(
            datafeed_id=DatafeedId(self.datafeed_id),
            job_id=JobId(self.job_id),
            indices=tuple(self.indices),
            types=tuple(self.types),
            query=dict(self.query),
            scroll_size=self.scroll_size,
            frequency=self.frequency,
            query_delay=self.query_delay,
            aggregations=aggregations,
        )
