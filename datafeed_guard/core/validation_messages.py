"""Validation Messages — centralized, locale-specific text for datafeed/job incompatibilities.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Every ValidationErrorKind has a template in every Locale
    - Templates take structured params only; callers never pre-render values
    - Millisecond values render as bare integers followed by "ms"

Design Decisions:
    - Templates keyed by (locale, kind): message text maintained in one place, validator
      supplies params and never builds strings itself
    - Unknown locale falls back to English: an error must always be reportable
"""

from typing import Any

from datafeed_guard.core.domain_types import Locale, ValidationErrorKind


# --- English ------------------------------------------------------------------

_MESSAGES_EN: dict[ValidationErrorKind, str] = {
    ValidationErrorKind.UNSUPPORTED_JOB_LATENCY: (
        "A job configured with datafeed cannot support latency"
    ),
    ValidationErrorKind.AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD: (
        "A job configured with a datafeed with aggregations must set "
        "summary_count_field_name; use {doc_count} or suitable alternative"
    ),
    ValidationErrorKind.AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN: (
        "Aggregation interval [{interval_ms}ms] must be less than or equal "
        "to the bucket_span [{bucket_span_ms}ms]"
    ),
}


# --- Português Brasileiro -----------------------------------------------------

_MESSAGES_PT_BR: dict[ValidationErrorKind, str] = {
    ValidationErrorKind.UNSUPPORTED_JOB_LATENCY: (
        "Um job configurado com datafeed não suporta latency"
    ),
    ValidationErrorKind.AGGREGATIONS_REQUIRE_SUMMARY_COUNT_FIELD: (
        "Um job configurado com um datafeed com agregações deve definir "
        "summary_count_field_name; use {doc_count} ou alternativa adequada"
    ),
    ValidationErrorKind.AGGREGATION_INTERVAL_EXCEEDS_BUCKET_SPAN: (
        "O intervalo de agregação [{interval_ms}ms] deve ser menor ou igual "
        "ao bucket_span [{bucket_span_ms}ms]"
    ),
}

_MESSAGES: dict[Locale, dict[ValidationErrorKind, str]] = {
    Locale.EN: _MESSAGES_EN,
    Locale.PT_BR: _MESSAGES_PT_BR,
}


def get_message_template(
    kind: ValidationErrorKind, locale: Locale = Locale.EN,
) -> str:
    """Return the raw template for kind in locale (English fallback)."""
    return _MESSAGES.get(locale, _MESSAGES_EN)[kind]


def format_validation_message(
    kind: ValidationErrorKind, locale: Locale = Locale.EN, **params: Any,
) -> str:
    """Render the final, parameter-substituted message for a validation failure."""
    return get_message_template(kind, locale).format(**params)
