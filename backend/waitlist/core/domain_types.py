"""Domain Types — identity wrappers and enums shared by every layer.

Invariants:
    - QueueId and UserId wrap UUIDs; identities are opaque and never parsed further
    - MemberClass has exactly two members; priority always outranks standard

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from datetime import timedelta
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

QueueId = NewType("QueueId", UUID)
UserId = NewType("UserId", UUID)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_QUEUE_HORIZON = timedelta(days=365 * 2)


# ─── Enums ───────────────────────────────────────────────────────

class MemberClass(str, Enum):
    """Ranking class of a membership entry. Listed in serving order."""
    PRIORITY = "priority"
    STANDARD = "standard"
