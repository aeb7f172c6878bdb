"""Datafeed Validation Route — POST /api/v1/datafeeds/_validate end to end.

Invariants:
    - Compatible pair → 200 {"valid": true}
    - Each incompatibility → 400 with error.code = failure kind and params in details
    - Malformed aggregations and durations → 400, never 500
    - Out-of-range intervals and durations → 400, never an overflow 500
    - Body validation errors carry and log the submitted datafeed and job ids
    - ?locale= switches the message language
"""

import json
import logging

URL = "/api/v1/datafeeds/_validate"


def _histogram(interval) -> dict:
    return {"time": {"histogram": {"field": "time", "interval": interval}}}


async def test_compatible_pair_returns_200(client, datafeed_config, job_config):
    datafeed_config["aggregations"] = _histogram(900000)
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 200
    assert res.json() == {"valid": True, "datafeed_id": "my-datafeed", "job_id": "foo"}


async def test_latency_rejected(client, datafeed_config, job_config):
    job_config["analysis_config"]["latency"] = "3600s"
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "UNSUPPORTED_JOB_LATENCY"
    assert error["message"] == "A job configured with datafeed cannot support latency"
    assert error["context"] == {"datafeed_id": "my-datafeed", "job_id": "foo"}


async def test_missing_summary_count_field_rejected(client, datafeed_config, job_config):
    del job_config["analysis_config"]["summary_count_field_name"]
    datafeed_config["aggs"] = _histogram(1800000)
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD"
    assert error["details"] == {"doc_count": "doc_count"}


async def test_interval_exceeding_bucket_span_rejected(client, datafeed_config, job_config):
    datafeed_config["aggregations"] = _histogram(1800001)
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN"
    assert error["message"] == (
        "Aggregation interval [1800001ms] must be less than or equal "
        "to the bucket_span [1800000ms]"
    )
    assert error["details"] == {"interval_ms": 1800001, "bucket_span_ms": 1800000}


async def test_locale_query_parameter(client, datafeed_config, job_config):
    job_config["analysis_config"]["latency"] = "1h"
    res = await client.post(
        URL, params={"locale": "pt-BR"},
        json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == (
        "Um job configurado com datafeed não suporta latency"
    )


async def test_unknown_locale_is_request_error(client, datafeed_config, job_config):
    res = await client.post(
        URL, params={"locale": "xx"},
        json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_malformed_aggregations_rejected(client, datafeed_config, job_config):
    datafeed_config["aggregations"] = {
        "a": {"histogram": {"field": "time", "interval": 1000}},
        "b": {"histogram": {"field": "time", "interval": 2000}},
    }
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_AGGREGATIONS"


async def test_bad_duration_is_field_error(client, datafeed_config, job_config):
    job_config["analysis_config"]["bucket_span"] = "soon"
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any("bucket_span" in d["field"] for d in error["details"])


async def test_missing_job_config_is_request_error(client, datafeed_config):
    res = await client.post(URL, json={"datafeed_config": datafeed_config})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── Out-of-range values ─────────────────────────────────────────

async def test_infinite_histogram_interval_rejected(client, datafeed_config, job_config):
    datafeed_config["aggregations"] = _histogram(900000)
    raw = json.dumps(
        {"datafeed_config": datafeed_config, "job_config": job_config},
    ).replace('"interval": 900000', '"interval": 1e400')
    res = await client.post(
        URL, content=raw, headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_AGGREGATIONS"
    assert "finite" in error["message"]


async def test_huge_fixed_interval_rejected(client, datafeed_config, job_config):
    datafeed_config["aggregations"] = {
        "buckets": {"date_histogram": {"field": "time", "fixed_interval": "9999999999999d"}},
    }
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TIME_VALUE"


async def test_huge_bucket_span_is_field_error(client, datafeed_config, job_config):
    job_config["analysis_config"]["bucket_span"] = "9999999999999d"
    res = await client.post(
        URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any("bucket_span" in d["field"] for d in error["details"])


# ─── Request validation context ──────────────────────────────────

async def test_field_error_names_submitted_ids(client, datafeed_config, job_config, caplog):
    job_config["analysis_config"]["bucket_span"] = "soon"
    with caplog.at_level(logging.INFO, logger="datafeed_guard.api.error_handlers"):
        res = await client.post(
            URL, json={"datafeed_config": datafeed_config, "job_config": job_config},
        )
    assert res.status_code == 400
    assert res.json()["error"]["context"] == {"datafeed_id": "my-datafeed", "job_id": "foo"}

    records = [r for r in caplog.records if r.name == "datafeed_guard.api.error_handlers"]
    assert len(records) == 1
    record = records[0]
    assert record.levelno == logging.INFO
    assert record.error_code == "VALIDATION_ERROR"
    assert record.path == URL
    assert record.datafeed_id == "my-datafeed"
    assert record.job_id == "foo"
    assert "bucket_span" in record.getMessage()


async def test_field_error_without_ids_has_empty_context(client):
    res = await client.post(URL, json={"datafeed_config": "not an object"})
    assert res.status_code == 400
    assert res.json()["error"]["context"] == {"datafeed_id": None, "job_id": None}


async def test_field_error_falls_back_to_datafeed_job_id(client, datafeed_config):
    res = await client.post(URL, json={"datafeed_config": datafeed_config})
    assert res.status_code == 400
    assert res.json()["error"]["context"] == {"datafeed_id": "my-datafeed", "job_id": "foo"}
