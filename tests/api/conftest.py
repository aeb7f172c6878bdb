"""API test fixtures — FastAPI app behind an in-process httpx client.

Invariants:
    - No network: requests go through ASGITransport straight into the app
"""

import pytest
from httpx import ASGITransport, AsyncClient

from datafeed_guard.main import app


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def job_config() -> dict:
    return {
        "job_id": "foo",
        "analysis_config": {
            "bucket_span": "1800s",
            "summary_count_field_name": "some_count",
            "detectors": [
                {"function": "info_content", "field_name": "domain", "over_field_name": "client"},
                {"function": "min", "field_name": "field"},
            ],
        },
    }


@pytest.fixture
def datafeed_config() -> dict:
    return {
        "datafeed_id": "my-datafeed",
        "job_id": "foo",
        "indices": ["myIndex"],
        "types": ["myType"],
    }
