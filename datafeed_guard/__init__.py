"""Datafeed Guard — checks that a datafeed configuration can be attached to an analysis job."""

__version__ = "0.1.0"
