"""Validation Messages tests — pure data functions for locale-specific failure text.

Tests cover:
    - Every ValidationErrorKind has a template in every Locale
    - Placeholders format correctly with structured params
    - Unknown locale values fall back to English
"""

import pytest

from datafeed_guard.core.domain_types import Locale, ValidationErrorKind
from datafeed_guard.core.validation_messages import (
    format_validation_message,
    get_message_template,
)


# --- All locales covered ------------------------------------------------------


def test_every_kind_has_template_in_every_locale():
    for locale in Locale:
        for kind in ValidationErrorKind:
            template = get_message_template(kind, locale)
            assert isinstance(template, str)
            assert len(template) > 0


# --- Formatting ---------------------------------------------------------------


def test_latency_message_has_no_placeholders():
    assert format_validation_message(ValidationErrorKind.UNSUPPORTED_JOB_LATENCY) == (
        "A job configured with datafeed cannot support latency"
    )


def test_summary_count_message_names_doc_count():
    msg = format_validation_message(
        ValidationErrorKind.AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD,
        doc_count="doc_count",
    )
    assert "summary_count_field_name" in msg
    assert "use doc_count or suitable alternative" in msg


def test_interval_message_renders_millis():
    msg = format_validation_message(
        ValidationErrorKind.AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN,
        interval_ms=1800001, bucket_span_ms=1800000,
    )
    assert msg == (
        "Aggregation interval [1800001ms] must be less than or equal "
        "to the bucket_span [1800000ms]"
    )


def test_pt_br_interval_message():
    msg = format_validation_message(
        ValidationErrorKind.AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN,
        Locale.PT_BR, interval_ms=2, bucket_span_ms=1,
    )
    assert msg.startswith("O intervalo de agregação [2ms]")


def test_unknown_locale_falls_back_to_english():
    template = get_message_template(
        ValidationErrorKind.UNSUPPORTED_JOB_LATENCY, "xx",
    )
    assert template == get_message_template(
        ValidationErrorKind.UNSUPPORTED_JOB_LATENCY, Locale.EN,
    )


def test_missing_param_raises_key_error():
    with pytest.raises(KeyError):
        format_validation_message(
            ValidationErrorKind.AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN,
            interval_ms=1,
        )
