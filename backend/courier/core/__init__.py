"""Core — pure domain logic: errors, domain types, ownership and proxy decisions.

Invariants:
    - No IO in core: no database sessions, no network, no environment access
    - Shell (services/, api/) orchestrates IO around these functions
"""
