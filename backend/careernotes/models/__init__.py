"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from careernotes.models.career_note import CareerNote  # noqa: F401
from careernotes.models.user_preference import UserPreference  # noqa: F401
