"""Datafeed/Job Compatibility — validates that a datafeed may be attached to a job.

Invariants:
    - All functions are PURE: no IO, no async, no mutation of either config
    - Each check returns a ValidationFailure on violation, None on success
    - validate_datafeed_job chains all checks in a fixed order — first failure wins:
      latency → summary count field → aggregation interval
    - Absent and empty aggregation trees both skip the aggregation checks
    - Interval equal to the bucket span is allowed (<= is inclusive)

Design Decisions:
    - Result values over exceptions: the failure carries a kind enum plus structured
      params, and message text comes from core.validation_messages. validate() is the
      raising wrapper for the HTTP shell.
    - The aggregation tree is consumed through BucketIntervalSource only, so this module
      never depends on the aggregation grammar
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from datafeed_guard.core.datafeed_config import DatafeedConfig
from datafeed_guard.core.domain_types import Locale, ValidationErrorKind
from datafeed_guard.core.errors import DatafeedJobValidationError, ErrorContext
from datafeed_guard.core.job_config import JobConfig
from datafeed_guard.core.time_values import to_millis
from datafeed_guard.core.validation_messages import format_validation_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """Single cause of a failed datafeed/job validation."""
    kind: ValidationErrorKind
    params: dict[str, Any] = field(default_factory=dict)

    def message(self, locale: Locale = Locale.EN) -> str:
        return format_validation_message(self.kind, locale, **self.params)


def check_latency(job: JobConfig) -> ValidationFailure | None:
    """Rule 1: datafeeds cannot feed a job that waits for late data."""
    if job.analysis_config.has_latency:
        return ValidationFailure(ValidationErrorKind.UNSUPPORTED_JOB_LATENCY)
    return None


def check_summary_count_field(
    datafeed: DatafeedConfig, job: JobConfig,
) -> ValidationFailure | None:
    """Rule 2: aggregated input needs a summary count field on the job."""
    if not datafeed.has_aggregations:
        return None
    if not job.analysis_config.has_summary_count_field:
        return ValidationFailure(
            ValidationErrorKind.AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD,
            {"doc_count": DatafeedConfig.DOC_COUNT},
        )
    return None


def check_aggregation_interval(
    datafeed: DatafeedConfig, job: JobConfig,
) -> ValidationFailure | None:
    """Rule 3: the top-level bucketing interval must fit inside the bucket span."""
    if not datafeed.has_aggregations:
        return None
    interval_ms = datafeed.aggregations.effective_bucket_interval_ms()
    if interval_ms is None:
        return None
    bucket_span_ms = to_millis(job.analysis_config.bucket_span)
    if interval_ms > bucket_span_ms:
        return ValidationFailure(
            ValidationErrorKind.AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN,
            {"interval_ms": interval_ms, "bucket_span_ms": bucket_span_ms},
        )
    return None


def validate_datafeed_job(
    datafeed: DatafeedConfig, job: JobConfig,
) -> ValidationFailure | None:
    """Chain all compatibility checks. Returns first failure or None."""
    failure = (
        check_latency(job)
        or check_summary_count_field(datafeed, job)
        or check_aggregation_interval(datafeed, job)
    )
    if failure is not None:
        logger.debug(
            f"Datafeed [{datafeed.datafeed_id}] rejected for job [{job.job_id}]",
            extra={
                "error_code": failure.kind.value,
                "datafeed_id": datafeed.datafeed_id,
                "job_id": job.job_id,
            },
        )
    return failure


def validate(
    datafeed: DatafeedConfig, job: JobConfig, locale: Locale = Locale.EN,
) -> None:
    """Raise DatafeedJobValidationError if datafeed cannot be attached to job."""
    failure = validate_datafeed_job(datafeed, job)
    if failure is None:
        return
    raise DatafeedJobValidationError(
        failure.kind,
        failure.message(locale),
        failure.params,
        ErrorContext(datafeed_id=datafeed.datafeed_id, job_id=job.job_id),
    )
