"""Datafeed Validation — HTTP gate run before a datafeed is started or updated.

Invariants:
    - POST /api/v1/datafeeds/_validate is read-only: nothing is stored or started
    - 200 {"valid": true, ...} only when every compatibility rule passes
    - Incompatible pairs and malformed aggregations raise DatafeedGuardError, which the
      global handler turns into a 400 envelope (error.code = failure kind)

Design Decisions:
    - Thin route: schema → frozen configs → core.validate_datafeed.validate
      (ADR: functional core, imperative shell)
    - ?locale= overrides the configured default locale for the error message only
"""

import logging

from fastapi import APIRouter, Query, status

from datafeed_guard.config import get_settings
from datafeed_guard.core.domain_types import Locale
from datafeed_guard.core.validate_datafeed import validate
from datafeed_guard.schemas.validation import (
    ValidateDatafeedRequest,
    ValidateDatafeedResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/datafeeds", tags=["datafeeds"])


@router.post(
    "/_validate", response_model=ValidateDatafeedResponse,
    status_code=status.HTTP_200_OK,
)
async def validate_datafeed(
    body: ValidateDatafeedRequest,
    locale: Locale | None = Query(None),
) -> ValidateDatafeedResponse:
    """Check that the datafeed can be attached to the job."""
    datafeed = body.datafeed_config.to_domain()
    job = body.job_config.to_domain()

    validate(datafeed, job, locale or get_settings().default_locale)

    logger.info(
        "Datafeed accepted",
        extra={"datafeed_id": datafeed.datafeed_id, "job_id": job.job_id},
    )
    return ValidateDatafeedResponse(
        datafeed_id=datafeed.datafeed_id, job_id=job.job_id,
    )
