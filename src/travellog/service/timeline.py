# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

import pendulum

from travellog.configuration import OverlapPolicy
from travellog.model.entry import EntryId, Flight, Stay, TimelineEntry
from travellog.model.location import DateRange, Location
from travellog.repository.entry import EntryRepository, entry_sort_key
from travellog.service.entry import is_stay, normalize_stay
from travellog.service.overlap import (
    OverlapError,
    Reconciliation,
    apply_reconciliation,
    assert_no_overlap,
    find_overlap,
    plan_delete_range,
    plan_fill_gaps,
    plan_set_location,
    stay_intersects,
)

logger = logging.getLogger(__name__)


class Timeline:
    """
    The signed-in user's entry collection.

    This is the only write path. Every mutation is planned against the current
    entries, checked for overlapping stays, committed to the store, and only
    then swapped in. If the store rejects the commit, the in-memory entries are
    unchanged.
    """

    def __init__(
        self,
        repository: EntryRepository,
        policy: OverlapPolicy = "replace",
        entries: Optional[list[TimelineEntry]] = None,
    ) -> None:
        self.repository = repository
        self.policy: OverlapPolicy = policy
        if entries is None:
            entries = repository.list_entries()
        for entry in entries:
            if is_stay(entry):
                normalize_stay(entry)  # type: ignore[arg-type]
        self._entries: list[TimelineEntry] = sorted(entries, key=entry_sort_key)

        overlap = find_overlap(self._entries)
        if overlap is not None:
            logger.warning(
                "Stored stays overlap (%s..%s and %s..%s); the next write over "
                "that range will resolve it",
                overlap[0]["start_date"],
                overlap[0]["end_date"],
                overlap[1]["start_date"],
                overlap[1]["end_date"],
            )

    @property
    def entries(self) -> list[TimelineEntry]:
        return self._entries

    def get_entries(self) -> list[TimelineEntry]:
        return deepcopy(self._entries)

    def get_entry(self, id: EntryId) -> TimelineEntry:
        """
        Raises:
            KeyError: If no entry has this id
        """
        for entry in self._entries:
            if entry["id"] == id:
                return deepcopy(entry)
        raise KeyError(id)

    def set_location(
        self,
        date_range: DateRange,
        location: Location,
        accommodation_type: Optional[str] = None,
        comments: Optional[str] = None,
    ) -> Stay:
        """Assign ``location`` to every day in ``date_range``; returns the new stay."""
        reconciliation = plan_set_location(
            self._entries,
            date_range,
            location,
            policy=self.policy,
            accommodation_type=accommodation_type,
            comments=comments,
        )
        self.__commit(reconciliation)
        return deepcopy(reconciliation["upserted"][-1])

    def delete_range(self, date_range: DateRange) -> Reconciliation:
        reconciliation = plan_delete_range(
            self._entries, date_range, policy=self.policy
        )
        if reconciliation["removed"] or reconciliation["upserted"]:
            self.__commit(reconciliation)
        return reconciliation

    def fill_gaps(self, date_range: DateRange, location: Location) -> list[Stay]:
        reconciliation = plan_fill_gaps(self._entries, date_range, location)
        if reconciliation["upserted"]:
            self.__commit(reconciliation)
        return deepcopy(reconciliation["upserted"])

    def add_stay(self, stay: Stay) -> Stay:
        """Write a manually entered stay over whatever it overlaps."""
        return self.set_location(
            {"start": stay["start_date"], "end": stay["end_date"]},
            {"city": stay["city"], "country": stay["country"]},
            accommodation_type=stay["accommodation_type"],
            comments=stay["comments"],
        )

    def add_flight(self, flight: Flight) -> Flight:
        candidate = sorted([*self._entries, flight], key=entry_sort_key)
        self.repository.upsert(flight)
        self._entries = candidate
        return deepcopy(flight)

    def delete_entry(self, id: EntryId) -> TimelineEntry:
        """
        Raises:
            KeyError: If no entry has this id
        """
        return self.delete_entries([id])[0]

    def delete_entries(self, ids: list[EntryId]) -> list[TimelineEntry]:
        """
        Delete several entries as one commit; either all go or none do.

        Raises:
            KeyError: If any id is unknown, before anything is deleted
        """
        deleted = [self.get_entry(id) for id in ids]
        doomed = {entry["id"] for entry in deleted}
        self.repository.commit([], list(doomed))
        self._entries = [e for e in self._entries if e["id"] not in doomed]
        return deleted

    def add_entries(self, entries: list[TimelineEntry]) -> list[TimelineEntry]:
        """
        Add a batch in order as one commit. Stays go through the overlap
        resolver one after another, so later stays win over earlier ones.
        """
        working = list(self._entries)
        removed: set[EntryId] = set()
        written: dict[EntryId, TimelineEntry] = {}

        for entry in entries:
            if is_stay(entry):
                stay: Stay = entry  # type: ignore[assignment]
                reconciliation = plan_set_location(
                    working,
                    {"start": stay["start_date"], "end": stay["end_date"]},
                    {"city": stay["city"], "country": stay["country"]},
                    policy=self.policy,
                    accommodation_type=stay["accommodation_type"],
                    comments=stay["comments"],
                )
                for entry_id in reconciliation["removed"]:
                    removed.add(entry_id)
                    written.pop(entry_id, None)
                for upserted in reconciliation["upserted"]:
                    written[upserted["id"]] = upserted
                working = apply_reconciliation(working, reconciliation)
            else:
                written[entry["id"]] = entry
                working = sorted([*working, entry], key=entry_sort_key)

        written_stays: list[Stay] = [
            w for w in written.values() if is_stay(w)  # type: ignore[misc]
        ]
        self.__check_invariant(working, written_stays)
        self.repository.commit(
            written.values(), [entry_id for entry_id in removed if entry_id not in written]
        )
        self._entries = working
        return deepcopy(list(written.values()))

    def __commit(self, reconciliation: Reconciliation) -> None:
        candidate = apply_reconciliation(self._entries, reconciliation)
        self.__check_invariant(candidate, reconciliation["upserted"])
        self.repository.commit(reconciliation["upserted"], reconciliation["removed"])
        self._entries = candidate

    def __check_invariant(
        self, candidate: list[TimelineEntry], written: list[Stay]
    ) -> None:
        if find_overlap(self._entries) is None:
            assert_no_overlap(candidate)
            return

        # Stored data already overlapped: only insist the written stays are clean
        written_ids = {stay["id"] for stay in written}
        for stay in written:
            date_range: DateRange = {
                "start": stay["start_date"],
                "end": stay["end_date"],
            }
            for other in candidate:
                if (
                    is_stay(other)
                    and other["id"] not in written_ids
                    and stay_intersects(other, date_range)  # type: ignore[arg-type]
                ):
                    raise OverlapError(
                        f"Stay {stay['city']} ({stay['start_date'].to_date_string()}.."
                        f"{stay['end_date'].to_date_string()}) would overlap "
                        f"{other['city']}"
                    )


def year_range(year: int) -> DateRange:
    return {"start": pendulum.date(year, 1, 1), "end": pendulum.date(year, 12, 31)}
