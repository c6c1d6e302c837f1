"""ORM Models — SQLAlchemy declarative models for locally persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Review is the only persisted entity; movies and characters stay remote

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from lotr_api.models.review import Review  # noqa: F401
