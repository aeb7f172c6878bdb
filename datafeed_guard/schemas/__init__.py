"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Every input schema converts to a frozen core config via to_domain()

Design Decisions:
    - Separate from core configs: schemas are API contracts, core configs are what the
      validator reads (ADR: DDD boundary)
"""
