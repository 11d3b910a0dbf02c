# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypedDict, cast

import pendulum

from travellog.configuration import OverlapPolicy
from travellog.model.entry import EntryId, Stay, TimelineEntry
from travellog.model.location import DateRange, Location
from travellog.repository.entry import entry_sort_key
from travellog.service.entry import (
    copy_stay_with_range,
    create_stay,
    is_stay,
    validate_date_range,
)
from travellog.template.entry import generate_entry_id

logger = logging.getLogger(__name__)


class OverlapError(Exception):
    """Raised when two stays in a collection cover the same day."""

    pass


class Reconciliation(TypedDict):
    removed: list[EntryId]  # Entries to drop entirely
    upserted: list[Stay]  # New stays and trimmed/split remainders


def empty_reconciliation() -> Reconciliation:
    return {"removed": [], "upserted": []}


def stays(entries: list[TimelineEntry]) -> list[Stay]:
    return [cast(Stay, entry) for entry in entries if is_stay(entry)]


def stay_intersects(stay: Stay, date_range: DateRange) -> bool:
    return stay["start_date"] <= date_range["end"] and stay["end_date"] >= date_range[
        "start"
    ]


def stays_intersecting(
    entries: list[TimelineEntry], date_range: DateRange
) -> list[Stay]:
    """Stays whose inclusive range shares at least one day with ``date_range``."""
    return [stay for stay in stays(entries) if stay_intersects(stay, date_range)]


def stay_covering(entries: list[TimelineEntry], day: pendulum.Date) -> Optional[Stay]:
    """First stay in collection order whose range contains ``day``."""
    for stay in stays(entries):
        if stay["start_date"] <= day <= stay["end_date"]:
            return stay
    return None


def _plan_removal(
    entries: list[TimelineEntry], date_range: DateRange, policy: OverlapPolicy
) -> Reconciliation:
    """
    Clear every stay off ``date_range``.

    Under ``replace`` intersecting stays are dropped whole. Under ``clip`` the
    days outside the range survive: a stay sticking out on one side is trimmed
    in place, a stay sticking out on both sides is split, the right part
    getting a fresh id.
    """
    reconciliation = empty_reconciliation()

    for stay in stays_intersecting(entries, date_range):
        if policy == "replace":
            reconciliation["removed"].append(stay["id"])
            continue

        left: Optional[Stay] = None
        right: Optional[Stay] = None
        if stay["start_date"] < date_range["start"]:
            left = copy_stay_with_range(
                stay, stay["start_date"], date_range["start"].subtract(days=1)
            )
        if stay["end_date"] > date_range["end"]:
            right = copy_stay_with_range(
                stay,
                date_range["end"].add(days=1),
                stay["end_date"],
                id=generate_entry_id() if left is not None else None,
            )

        if left is None and right is None:
            reconciliation["removed"].append(stay["id"])
        if left is not None:
            reconciliation["upserted"].append(left)
        if right is not None:
            reconciliation["upserted"].append(right)

    return reconciliation


def plan_set_location(
    entries: list[TimelineEntry],
    date_range: DateRange,
    location: Location,
    policy: OverlapPolicy = "replace",
    accommodation_type: Optional[str] = None,
    comments: Optional[str] = None,
) -> Reconciliation:
    """
    Plan assigning ``location`` to every day of ``date_range``.

    The explicit write always wins: whatever stays intersect the range are
    handled per ``policy`` and one new stay spanning the range is inserted.

    Raises:
        EntryValidationError: If the range is inverted or the location is blank
    """
    validate_date_range(date_range["start"], date_range["end"])
    new_stay = create_stay(
        date_range["start"],
        date_range["end"],
        location["city"],
        location["country"],
        accommodation_type=accommodation_type,
        comments=comments,
    )

    reconciliation = _plan_removal(entries, date_range, policy)
    reconciliation["upserted"].append(new_stay)

    logger.debug(
        "set_location %s..%s -> %s, %s (%s): removes %d, writes %d",
        date_range["start"],
        date_range["end"],
        new_stay["city"],
        new_stay["country"],
        policy,
        len(reconciliation["removed"]),
        len(reconciliation["upserted"]),
    )
    return reconciliation


def plan_delete_range(
    entries: list[TimelineEntry],
    date_range: DateRange,
    policy: OverlapPolicy = "replace",
) -> Reconciliation:
    """
    Plan clearing all stays off ``date_range`` without inserting a replacement.

    A range that intersects nothing yields an empty plan.
    """
    validate_date_range(date_range["start"], date_range["end"])
    reconciliation = _plan_removal(entries, date_range, policy)

    logger.debug(
        "delete_range %s..%s (%s): removes %d, writes %d",
        date_range["start"],
        date_range["end"],
        policy,
        len(reconciliation["removed"]),
        len(reconciliation["upserted"]),
    )
    return reconciliation


def plan_fill_gaps(
    entries: list[TimelineEntry], date_range: DateRange, location: Location
) -> Reconciliation:
    """
    Plan one ``other`` stay at ``location`` per maximal run of uncovered days
    inside ``date_range``. Existing stays are left alone.
    """
    validate_date_range(date_range["start"], date_range["end"])
    reconciliation = empty_reconciliation()

    cursor = date_range["start"]
    covering = sorted(
        stays_intersecting(entries, date_range), key=lambda s: s["start_date"]
    )
    for stay in covering:
        if stay["start_date"] > cursor:
            reconciliation["upserted"].append(
                create_stay(
                    cursor,
                    min(stay["start_date"].subtract(days=1), date_range["end"]),
                    location["city"],
                    location["country"],
                )
            )
        cursor = max(cursor, stay["end_date"].add(days=1))
        if cursor > date_range["end"]:
            break

    if cursor <= date_range["end"]:
        reconciliation["upserted"].append(
            create_stay(
                cursor, date_range["end"], location["city"], location["country"]
            )
        )

    logger.debug(
        "fill_gaps %s..%s -> %s, %s: %d gap(s)",
        date_range["start"],
        date_range["end"],
        location["city"],
        location["country"],
        len(reconciliation["upserted"]),
    )
    return reconciliation


def apply_reconciliation(
    entries: list[TimelineEntry], reconciliation: Reconciliation
) -> list[TimelineEntry]:
    """Return a new, sorted collection with ``reconciliation`` applied."""
    replaced_ids = set(reconciliation["removed"]) | {
        stay["id"] for stay in reconciliation["upserted"]
    }
    result: list[TimelineEntry] = [
        entry for entry in entries if entry["id"] not in replaced_ids
    ]
    result.extend(reconciliation["upserted"])
    result.sort(key=entry_sort_key)
    return result


def find_overlap(entries: list[TimelineEntry]) -> Optional[tuple[Stay, Stay]]:
    """First pair of stays sharing a day, or None."""
    ordered = sorted(stays(entries), key=lambda s: (s["start_date"], s["end_date"]))
    for previous, current in zip(ordered, ordered[1:]):
        if current["start_date"] <= previous["end_date"]:
            return previous, current
    return None


def assert_no_overlap(entries: list[TimelineEntry]) -> None:
    """
    Raises:
        OverlapError: If any two stays cover the same day
    """
    overlap = find_overlap(entries)
    if overlap is not None:
        first, second = overlap
        raise OverlapError(
            f"Stay {first['city']}, {first['country']} "
            f"({first['start_date'].to_date_string()}..{first['end_date'].to_date_string()}) "
            f"overlaps {second['city']}, {second['country']} "
            f"({second['start_date'].to_date_string()}..{second['end_date'].to_date_string()})"
        )


def set_location(
    entries: list[TimelineEntry],
    date_range: DateRange,
    location: Location,
    policy: OverlapPolicy = "replace",
    accommodation_type: Optional[str] = None,
    comments: Optional[str] = None,
) -> list[TimelineEntry]:
    """Pure form of a location write: returns the reconciled collection."""
    reconciliation = plan_set_location(
        entries,
        date_range,
        location,
        policy=policy,
        accommodation_type=accommodation_type,
        comments=comments,
    )
    return apply_reconciliation(entries, reconciliation)


def delete_range(
    entries: list[TimelineEntry],
    date_range: DateRange,
    policy: OverlapPolicy = "replace",
) -> list[TimelineEntry]:
    """Pure form of a range deletion: returns the reconciled collection."""
    return apply_reconciliation(
        entries, plan_delete_range(entries, date_range, policy=policy)
    )
