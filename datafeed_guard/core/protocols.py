"""Boundary Protocols — contracts between the validator and its collaborators.

Invariants:
    - The validator NEVER imports the aggregation grammar — it only asks for an interval
    - Protocol methods are pure and synchronous

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy. Tests can pass a
      tiny stub instead of building a full aggregation tree.
"""

from typing import Protocol

from datafeed_guard.core.domain_types import Millis


class BucketIntervalSource(Protocol):
    """Anything that can report a top-level bucketing interval.

    Implemented by core.aggregations.AggregationTree.
    """
    @property
    def is_empty(self) -> bool: ...

    def effective_bucket_interval_ms(self) -> Millis | None: ...
