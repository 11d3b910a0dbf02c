# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Iterable, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from travellog import time
from travellog.model.entry import EntryId, EntryKind, TimelineEntry

logger = logging.getLogger(__name__)

_STAGED_SUFFIX = ".yaml.tmp"
_BACKUP_SUFFIX = ".yaml.bak"


class PersistenceError(Exception):
    """Raised when the entry store cannot be read or a write is rejected."""

    pass


def entry_sort_key(entry: TimelineEntry) -> tuple[int, int, str]:
    """Start date ascending, stays before flights on the same day, then id."""
    if entry["kind"] == EntryKind.STAY:
        return (entry["start_date"].toordinal(), 0, entry["id"])  # type: ignore[typeddict-item]
    return (entry["date"].toordinal(), 1, entry["id"])  # type: ignore[typeddict-item]


class EntryRepository:
    """
    File-backed store for one user's timeline entries.

    Every entry lives in its own ``<id>.yaml`` file inside ``entries_dir``.
    Writes go straight to disk: callers update their in-memory view only after
    a write call has returned.
    """

    def __init__(self, entries_dir: Path) -> None:
        self.entries_dir = entries_dir

    def list_entries(self) -> list[TimelineEntry]:
        entries: list[TimelineEntry] = []
        try:
            self.entries_dir.mkdir(parents=True, exist_ok=True)
            for file_path in sorted(self.entries_dir.iterdir()):
                if file_path.suffix != ".yaml":
                    continue
                raw_entry = load(file_path.read_text(), Loader=Loader)
                if raw_entry is not None:
                    entries.append(self.__convert_entry_for_deserialization(raw_entry))
        except (OSError, YAMLError, KeyError, ValueError) as e:
            logger.error("Could not read entries from %s: %s", self.entries_dir, e)
            raise PersistenceError(f"Could not read entries: {e}") from e

        entries.sort(key=entry_sort_key)
        return entries

    def upsert(self, entry: TimelineEntry) -> None:
        self.commit([entry], [])

    def delete(self, id: EntryId) -> None:
        self.commit([], [id])

    def commit(
        self, upserts: Iterable[TimelineEntry], deletes: Iterable[EntryId]
    ) -> None:
        """
        Write ``upserts`` and remove ``deletes`` as one unit.

        Upserts are staged next to their final location, and every file that
        is about to be removed or overwritten is moved aside to a backup. If
        anything fails, the backups are restored and the store is left as it
        was. Backups are dropped only once every staged file is in place.

        Raises:
            PersistenceError: If the store directory or any file cannot be written
        """
        upserts = list(upserts)
        deletes = list(deletes)
        staged: list[tuple[Path, Path]] = []
        backups: dict[Path, Path] = {}

        try:
            self.entries_dir.mkdir(parents=True, exist_ok=True)
            for entry in upserts:
                serializable_entry = self.__convert_entry_for_serialization(
                    deepcopy(entry)
                )
                final_path = self.__entry_path(entry["id"])
                staged_path = final_path.with_suffix(_STAGED_SUFFIX)
                staged_path.write_text(dump(serializable_entry, Dumper=Dumper))
                staged.append((staged_path, final_path))

            replaced = [final_path for _, final_path in staged]
            replaced.extend(self.__entry_path(entry_id) for entry_id in deletes)
            for final_path in replaced:
                if final_path in backups or not final_path.exists():
                    continue
                backup_path = final_path.with_suffix(_BACKUP_SUFFIX)
                final_path.replace(backup_path)
                backups[final_path] = backup_path
        except (OSError, YAMLError) as e:
            self.__roll_back(staged, [], backups)
            logger.error("Rejected write to %s: %s", self.entries_dir, e)
            raise PersistenceError(f"Could not save entries: {e}") from e

        applied: list[Path] = []
        try:
            for staged_path, final_path in staged:
                staged_path.replace(final_path)
                applied.append(final_path)
        except OSError as e:
            self.__roll_back(staged, applied, backups)
            logger.error("Failed while applying changes in %s: %s", self.entries_dir, e)
            raise PersistenceError(f"Could not apply changes: {e}") from e

        for backup_path in backups.values():
            try:
                backup_path.unlink(missing_ok=True)
            except OSError as e:
                # list_entries skips *.yaml.bak
                logger.warning("Could not remove backup %s: %s", backup_path, e)

        logger.debug(
            "Committed %d upsert(s) and %d delete(s) to %s",
            len(upserts),
            len(deletes),
            self.entries_dir,
        )

    def __entry_path(self, entry_id: EntryId) -> Path:
        return self.entries_dir / f"{entry_id}.yaml"

    def __roll_back(
        self,
        staged: list[tuple[Path, Path]],
        applied: list[Path],
        backups: dict[Path, Path],
    ) -> None:
        for staged_path, _ in staged:
            try:
                staged_path.unlink(missing_ok=True)
            except OSError as e:
                logger.error("Could not discard staged file %s: %s", staged_path, e)
        for final_path in applied:
            if final_path in backups:
                continue
            try:
                final_path.unlink(missing_ok=True)
            except OSError as e:
                logger.error("Could not undo write of %s: %s", final_path, e)
        for final_path, backup_path in backups.items():
            try:
                backup_path.replace(final_path)
            except OSError as e:
                logger.error("Could not restore %s: %s", final_path, e)

    def __convert_entry_for_serialization(
        self, entry: TimelineEntry
    ) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        if entry["kind"] == EntryKind.STAY:
            serializable_entry["start_date"] = time.date_to_iso_str(
                serializable_entry["start_date"]
            )
            serializable_entry["end_date"] = time.date_to_iso_str(
                serializable_entry["end_date"]
            )
        else:
            serializable_entry["date"] = time.date_to_iso_str(
                serializable_entry["date"]
            )
        serializable_entry["created"] = time.datetime_to_iso_str(
            serializable_entry["created"]
        )
        serializable_entry["updated"] = time.datetime_to_iso_str(
            serializable_entry["updated"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(
        self, entry: dict[str, Any]
    ) -> TimelineEntry:
        deserializable_entry = entry
        if deserializable_entry["kind"] == EntryKind.STAY:
            start_date = time.date_from_str(str(deserializable_entry["start_date"]))
            end_date = time.date_from_str(str(deserializable_entry["end_date"]))
            deserializable_entry["start_date"] = start_date
            deserializable_entry["end_date"] = end_date
            # Never trust a stored day count
            deserializable_entry["days"] = time.inclusive_day_count(
                start_date, end_date
            )
        elif deserializable_entry["kind"] == EntryKind.FLIGHT:
            deserializable_entry["date"] = time.date_from_str(
                str(deserializable_entry["date"])
            )
        else:
            raise ValueError(f"Unknown entry kind: {deserializable_entry['kind']}")
        deserializable_entry["created"] = time.datetime_from_str(
            str(deserializable_entry["created"])
        )
        deserializable_entry["updated"] = time.datetime_from_str(
            str(deserializable_entry["updated"])
        )
        return cast(TimelineEntry, deserializable_entry)
