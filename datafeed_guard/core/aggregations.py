"""Aggregation Tree — immutable view of a datafeed's aggregation definitions.

Invariants:
    - Each definition has exactly one aggregation type (besides aggs/aggregations/meta)
    - At most one top-level bucketing aggregation (histogram or date_histogram)
    - A bucketing aggregation declares exactly one interval; it is finite and > 0 ms
    - date_histogram.time_zone, when given, is UTC
    - Only the top-level bucketing interval is resolved; nested aggregations are shape-checked only

Design Decisions:
    - Parse once, validate at construction: a built AggregationTree is always well-formed,
      so effective_bucket_interval_ms() cannot fail
    - Implements core.protocols.BucketIntervalSource structurally (no inheritance)
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from datafeed_guard.core.calendar_intervals import (
    calendar_interval_millis,
    is_calendar_interval,
)
from datafeed_guard.core.domain_types import BucketingType, IntervalKind, Millis
from datafeed_guard.core.errors import AggregationTreeError
from datafeed_guard.core.time_values import parse_time_value, to_millis


_SUB_AGGREGATION_KEYS = ("aggregations", "aggs")
_RESERVED_KEYS = {*_SUB_AGGREGATION_KEYS, "meta"}
_INTERVAL_KEYS = ("calendar_interval", "fixed_interval", "interval")
_UTC_ZONES = {"utc", "etc/utc", "z", "+00:00"}


@dataclass(frozen=True)
class AggregationNode:
    """One named aggregation definition."""
    name: str
    type: str
    body: Mapping[str, Any] = field(default_factory=dict)
    sub_aggregations: tuple["AggregationNode", ...] = ()

    @property
    def is_bucketing(self) -> bool:
        return self.type in {t.value for t in BucketingType}


@dataclass(frozen=True)
class BucketInterval:
    """Resolved interval of the top-level bucketing aggregation."""
    kind: IntervalKind
    millis: Millis
    expression: str


@dataclass(frozen=True)
class AggregationTree:
    """Top-level aggregations of a datafeed plus the resolved bucket interval."""
    nodes: tuple[AggregationNode, ...] = ()
    bucket_interval: BucketInterval | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "AggregationTree":
        nodes = _parse_level(data or {}, path="")
        bucketing = [n for n in nodes if n.is_bucketing]
        if len(bucketing) > 1:
            raise AggregationTreeError(
                "Aggregations can only have 1 date_histogram or histogram aggregation",
            )
        interval = _resolve_interval(bucketing[0]) if bucketing else None
        return cls(nodes=nodes, bucket_interval=interval)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def bucketing_aggregation(self) -> AggregationNode | None:
        return next((n for n in self.nodes if n.is_bucketing), None)

    def effective_bucket_interval_ms(self) -> Millis | None:
        if self.bucket_interval is None:
            return None
        return self.bucket_interval.millis


# -- Parsing -------------------------------------------------------------------

def _parse_level(data: Mapping[str, Any], path: str) -> tuple[AggregationNode, ...]:
    if not isinstance(data, Mapping):
        raise AggregationTreeError(
            f"Aggregations at [{path or '<root>'}] must be an object",
        )
    return tuple(
        _parse_node(name, definition, f"{path}{name}")
        for name, definition in data.items()
    )


def _parse_node(name: str, definition: Any, path: str) -> AggregationNode:
    if not isinstance(definition, Mapping):
        raise AggregationTreeError(f"Aggregation [{path}] must be an object")

    types = [key for key in definition if key not in _RESERVED_KEYS]
    if len(types) != 1:
        raise AggregationTreeError(
            f"Aggregation [{path}] must declare exactly one aggregation type, "
            f"found {sorted(types)}",
        )
    agg_type = types[0]
    body = definition[agg_type]
    if not isinstance(body, Mapping):
        raise AggregationTreeError(
            f"Aggregation [{path}] of type [{agg_type}] must have an object body",
        )

    present = [key for key in _SUB_AGGREGATION_KEYS if key in definition]
    if len(present) > 1:
        raise AggregationTreeError(
            f"Aggregation [{path}] declares both [aggs] and [aggregations]",
        )
    children: tuple[AggregationNode, ...] = ()
    if present:
        children = _parse_level(definition[present[0]], path=f"{path}>")

    return AggregationNode(
        name=name, type=agg_type, body=dict(body), sub_aggregations=children,
    )


# -- Interval resolution -------------------------------------------------------

def _resolve_interval(node: AggregationNode) -> BucketInterval:
    declared = [key for key in _INTERVAL_KEYS if key in node.body]
    if node.type == BucketingType.HISTOGRAM:
        if declared != ["interval"]:
            raise AggregationTreeError(
                f"histogram [{node.name}] must declare [interval]",
            )
        interval = _histogram_interval(node, node.body["interval"])
    else:
        if len(declared) != 1:
            raise AggregationTreeError(
                f"date_histogram [{node.name}] must declare exactly one of "
                f"{list(_INTERVAL_KEYS)}",
            )
        _check_time_zone(node)
        interval = _date_histogram_interval(node, declared[0], node.body[declared[0]])

    if interval.millis <= 0:
        raise AggregationTreeError("Aggregation interval must be greater than 0")
    return interval


def _histogram_interval(node: AggregationNode, value: Any) -> BucketInterval:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AggregationTreeError(
            f"histogram [{node.name}] interval must be a number, got [{value}]",
        )
    if not math.isfinite(value):
        raise AggregationTreeError(
            f"histogram [{node.name}] interval must be finite, got [{value}]",
        )
    return BucketInterval(IntervalKind.NUMERIC, Millis(int(value)), str(value))


def _date_histogram_interval(
    node: AggregationNode, key: str, value: Any,
) -> BucketInterval:
    setting = f"{node.name}.{key}"
    if key == "interval" and not isinstance(value, str):
        # legacy numeric interval is in milliseconds
        return _histogram_interval(node, value)
    if not isinstance(value, str):
        raise AggregationTreeError(
            f"date_histogram [{setting}] must be a string, got [{value}]",
        )
    if key == "calendar_interval" or (key == "interval" and is_calendar_interval(value)):
        return BucketInterval(
            IntervalKind.CALENDAR, calendar_interval_millis(value), value,
        )
    fixed = parse_time_value(value, setting)
    if fixed is None:
        raise AggregationTreeError("Aggregation interval must be greater than 0")
    return BucketInterval(IntervalKind.FIXED, to_millis(fixed), value)


def _check_time_zone(node: AggregationNode) -> None:
    zone = node.body.get("time_zone")
    if zone is not None and str(zone).strip().lower() not in _UTC_ZONES:
        raise AggregationTreeError(
            f"ML requires date_histogram.time_zone to be UTC, "
            f"but [{node.name}] uses [{zone}]",
        )
