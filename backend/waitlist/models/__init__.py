"""ORM Models — SQLAlchemy declarative models for queues and their entries.

Invariants:
    - All models inherit from Base (db/base.py)
    - Queue is the aggregate root; every entry is scoped by queue_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from waitlist.models.queue import Queue  # noqa: F401
from waitlist.models.queue_entry import QueueEntry  # noqa: F401
