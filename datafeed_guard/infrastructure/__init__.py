"""Infrastructure Layer — cross-cutting concerns for the HTTP shell.

Invariants:
    - Infrastructure never imports from core/ domain logic
"""
