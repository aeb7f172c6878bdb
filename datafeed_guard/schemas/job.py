"""Job Schemas — Pydantic models for the job side of a validation request.

Invariants:
    - bucket_span and latency are duration strings ("1800s", "30m"), never bare numbers
    - bucket_span > 0; latency >= 0 or omitted
    - At least one detector per analysis config

Design Decisions:
    - mode="before" validators parse durations so the model holds timedelta, and parse
      errors surface as field-level 400s through RequestValidationError
"""

from datetime import timedelta

from pydantic import BaseModel, Field, field_validator

from datafeed_guard.core.domain_types import JobId
from datafeed_guard.core.job_config import (
    AnalysisConfig, Detector, JobConfig, DEFAULT_BUCKET_SPAN,
)
from datafeed_guard.core.time_values import parse_time_value


class DetectorIn(BaseModel):
    """One detector definition."""
    function: str = Field(min_length=1)
    field_name: str | None = None
    by_field_name: str | None = None
    over_field_name: str | None = None
    partition_field_name: str | None = None

    def to_domain(self) -> Detector:
        return Detector(**self.model_dump())


class AnalysisConfigIn(BaseModel):
    """Analysis settings — the fields a datafeed is checked against."""
    detectors: list[DetectorIn] = Field(min_length=1)
    bucket_span: timedelta = DEFAULT_BUCKET_SPAN
    latency: timedelta | None = None
    summary_count_field_name: str | None = None

    @field_validator("bucket_span", "latency", mode="before")
    @classmethod
    def parse_duration(cls, v, info):
        return parse_time_value(v, f"analysis_config.{info.field_name}")

    @field_validator("bucket_span")
    @classmethod
    def bucket_span_positive(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("bucket_span must be greater than 0")
        return v

    def to_domain(self) -> AnalysisConfig:
        return AnalysisConfig(
            detectors=tuple(d.to_domain() for d in self.detectors),
            bucket_span=self.bucket_span,
            latency=self.latency,
            summary_count_field_name=self.summary_count_field_name,
        )


class JobConfigIn(BaseModel):
    """Job configuration as submitted for validation."""
    job_id: str = Field(min_length=1, max_length=64)
    description: str | None = Field(None, max_length=4000)
    analysis_config: AnalysisConfigIn

    def to_domain(self) -> JobConfig:
        return JobConfig(
            job_id=JobId(self.job_id),
            analysis_config=self.analysis_config.to_domain(),
            description=self.description,
        )
