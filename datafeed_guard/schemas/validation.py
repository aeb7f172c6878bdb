"""Validation Schemas — request/response envelope for POST /datafeeds/_validate."""

from pydantic import BaseModel

from datafeed_guard.schemas.datafeed import DatafeedConfigIn
from datafeed_guard.schemas.job import JobConfigIn


class ValidateDatafeedRequest(BaseModel):
    """Datafeed and job to check against each other."""
    datafeed_config: DatafeedConfigIn
    job_config: JobConfigIn


class ValidateDatafeedResponse(BaseModel):
    """Returned only when the pair is compatible; failures use the error envelope."""
    valid: bool = True
    datafeed_id: str
    job_id: str
