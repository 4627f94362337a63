"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns Collections; Collection owns APIRequests (cascade delete)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from courier.models.user import User  # noqa: F401
from courier.models.collection import Collection  # noqa: F401
from courier.models.api_request import ApiRequest  # noqa: F401
