"""Core Layer — pure datafeed/job compatibility logic, no IO, no async, no web framework.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the FastAPI routes only translate
      request bodies into frozen configs and failures into responses
"""
