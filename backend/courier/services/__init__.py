"""Services — IO-performing operations behind the routes.

Invariants:
    - Services receive the database session and configuration explicitly
    - Ownership is checked here before any read of detail data or any write
"""
