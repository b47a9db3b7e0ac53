"""Ordering Plans: pure planning for reorder and batch-sync requests.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Positions are 1-based and contiguous in the order they are planned
    - A request naming a row twice raises DuplicateIdsError before anything else
    - A request naming a row outside the caller's active set raises ForeignIdsError
    - Nothing is planned for a rejected request (callers write nothing)

Design Decisions:
    - Reorder keeps unlisted rows after the listed ones, in their previous relative order
    - Batch plans update-in-place for items with an id, creates for items without,
      and retires every active row the payload does not mention
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Sequence

from einfo.core.errors import DuplicateIdsError, ForeignIdsError


@dataclass
class BatchPlan:
    """Result of plan_batch.

    updates: (payload index, existing id, position) for items that keep their row
    creates: (payload index, position) for items that need a new row
    retired: ids of active rows the payload dropped
    """
    updates: list[tuple[int, Hashable, int]] = field(default_factory=list)
    creates: list[tuple[int, int]] = field(default_factory=list)
    retired: list[Hashable] = field(default_factory=list)


def next_display_order(existing_orders: Iterable[int | None]) -> int:
    """Position for a newly created row: max existing + 1, or 1 when empty."""
    orders = [o for o in existing_orders if o is not None]
    return max(orders) + 1 if orders else 1


def check_request_ids(
    owned_ids: Iterable[Hashable],
    requested_ids: Sequence[Hashable],
    resource_label: str,
) -> None:
    """Raise if requested_ids repeats an id or names one outside owned_ids."""
    counts = Counter(requested_ids)
    duplicates = [i for i, n in counts.items() if n > 1]
    if duplicates:
        raise DuplicateIdsError(resource_label, duplicates)
    owned = set(owned_ids)
    foreign = [i for i in requested_ids if i not in owned]
    if foreign:
        raise ForeignIdsError(resource_label, foreign)


def plan_reorder(
    current_ids: Sequence[Hashable],
    requested_ids: Sequence[Hashable],
    resource_label: str = "item",
) -> list[tuple[Hashable, int]]:
    """Plan new positions for a reorder request.

    current_ids is the caller's active rows in their current display order.
    Returns (id, position) for every active row.
    """
    check_request_ids(current_ids, requested_ids, resource_label)
    listed = set(requested_ids)
    final = list(requested_ids) + [i for i in current_ids if i not in listed]
    return [(row_id, position) for position, row_id in enumerate(final, start=1)]


def plan_batch(
    current_ids: Sequence[Hashable],
    item_ids: Sequence[Hashable | None],
    resource_label: str = "item",
) -> BatchPlan:
    """Plan a batch sync from the ids carried by each payload item (None = new)."""
    referenced = [i for i in item_ids if i is not None]
    check_request_ids(current_ids, referenced, resource_label)

    plan = BatchPlan()
    for index, item_id in enumerate(item_ids):
        position = index + 1
        if item_id is None:
            plan.creates.append((index, position))
        else:
            plan.updates.append((index, item_id, position))
    kept = set(referenced)
    plan.retired = [i for i in current_ids if i not in kept]
    return plan
