"""Ranking Engine — pure projection of a ledger snapshot onto serving positions.

Invariants:
    - All functions are PURE: no IO, no async, no clock reads
    - Output orders are exactly 1..N with no gaps and no ties
    - Every priority member ranks ahead of every standard member
    - Within a class, earlier joined_at ranks first; user_id breaks exact ties
    - is_held is passed through untouched and never reorders anyone
    - Result is independent of the iteration order of the input

Design Decisions:
    - order is recomputed on every read instead of being stored, so no
      mutation can leave a stale position behind
    - Input is assumed unique per user_id (the ledger enforces it)
"""

from collections.abc import Iterable

from waitlist.core.domain_types import MemberClass, UserId
from waitlist.core.records import MembershipEntry, RankedMember


def member_class(entry: MembershipEntry) -> MemberClass:
    """Classify an entry for the priority partition."""
    return MemberClass.PRIORITY if entry.has_priority else MemberClass.STANDARD


def _tenure_key(entry: MembershipEntry) -> tuple:
    return (entry.joined_at, str(entry.user_id))


def serving_sequence(entries: Iterable[MembershipEntry]) -> list[MembershipEntry]:
    """Canonical serving order: priority block, then standard block, each by tenure."""
    classes: dict[MemberClass, list[MembershipEntry]] = {
        cls: [] for cls in MemberClass
    }
    for entry in entries:
        classes[member_class(entry)].append(entry)

    sequence: list[MembershipEntry] = []
    for cls in MemberClass:
        sequence.extend(sorted(classes[cls], key=_tenure_key))
    return sequence


def rank_members(entries: Iterable[MembershipEntry]) -> list[RankedMember]:
    """Assign a 1-based order to every entry of one queue."""
    return [
        RankedMember(
            user_id=entry.user_id,
            order=index,
            has_priority=entry.has_priority,
            is_held=entry.is_held,
            joined_at=entry.joined_at,
        )
        for index, entry in enumerate(serving_sequence(entries), start=1)
    ]


def position_of(
    ranked: Iterable[RankedMember], user_id: UserId,
) -> RankedMember | None:
    """Find one member in an already ranked sequence."""
    for member in ranked:
        if member.user_id == user_id:
            return member
    return None
