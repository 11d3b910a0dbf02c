# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path
from typing import Any, Optional, TypedDict

import pendulum

from travellog.model.entry import EntryKind, TimelineEntry
from travellog.service.entry import EntryValidationError, create_flight, create_stay
from travellog.time import date_from_str, date_to_iso_str, today

logger = logging.getLogger(__name__)

REQUIRED_IMPORT_FIELDS = ("date", "type", "country", "city")


class MalformedImportError(Exception):
    """Raised when an import payload is not a JSON array of objects."""

    pass


class ImportResult(TypedDict):
    entries: list[TimelineEntry]
    skipped: int


def _optional_text(item: dict[str, Any], key: str) -> Optional[str]:
    value = item.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_import_item(item: Any) -> TimelineEntry:
    """
    Build one entry from an import item.

    Raises:
        EntryValidationError: If the item lacks a required field, has an
            unknown type, or carries an unparseable date
    """
    if not isinstance(item, dict):
        raise EntryValidationError("Import item is not an object.")
    missing = [
        field
        for field in REQUIRED_IMPORT_FIELDS
        if item.get(field) is None or str(item.get(field)).strip() == ""
    ]
    if missing:
        raise EntryValidationError(f"Missing required field(s): {', '.join(missing)}")

    try:
        start_date = date_from_str(str(item["date"]))
        end_date = (
            date_from_str(str(item["endDate"]))
            if item.get("endDate") is not None
            else None
        )
    except ValueError as e:
        raise EntryValidationError(str(e)) from e

    entry_type = str(item["type"]).strip().lower()
    if entry_type == EntryKind.STAY:
        return create_stay(
            start_date,
            end_date,
            str(item["city"]),
            str(item["country"]),
            accommodation_type=_optional_text(item, "accommodationType"),
            comments=_optional_text(item, "comments"),
        )
    if entry_type == EntryKind.FLIGHT:
        return create_flight(
            start_date,
            str(item["city"]),
            str(item["country"]),
            flight_number=_optional_text(item, "flightNumber"),
            departure=_optional_text(item, "departure"),
            arrival=_optional_text(item, "arrival"),
            comments=_optional_text(item, "comments"),
        )
    raise EntryValidationError(f"Unknown entry type: {item['type']}")


def parse_import_payload(payload: str) -> ImportResult:
    """
    Parse a JSON export back into entries.

    Items that fail validation are skipped and counted; they never abort the
    batch. A payload that is not valid JSON, or not an array, aborts the whole
    import.

    Raises:
        MalformedImportError: If the payload is not a JSON array
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedImportError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedImportError("Expected a JSON array of entries.")

    result: ImportResult = {"entries": [], "skipped": 0}
    for index, item in enumerate(data):
        try:
            result["entries"].append(parse_import_item(item))
        except EntryValidationError as e:
            result["skipped"] += 1
            logger.info("Skipping import item %d: %s", index, e)

    return result


def entry_to_export_dict(entry: TimelineEntry) -> dict[str, Any]:
    if entry["kind"] == EntryKind.STAY:
        return {
            "id": entry["id"],
            "type": EntryKind.STAY,
            "date": date_to_iso_str(entry["start_date"]),  # type: ignore[typeddict-item]
            "endDate": date_to_iso_str(entry["end_date"]),  # type: ignore[typeddict-item]
            "country": entry["country"],
            "city": entry["city"],
            "accommodationType": entry["accommodation_type"],  # type: ignore[typeddict-item]
            "days": entry["days"],  # type: ignore[typeddict-item]
            "comments": entry["comments"],
        }
    return {
        "id": entry["id"],
        "type": EntryKind.FLIGHT,
        "date": date_to_iso_str(entry["date"]),  # type: ignore[typeddict-item]
        "country": entry["country"],
        "city": entry["city"],
        "flightNumber": entry["flight_number"],  # type: ignore[typeddict-item]
        "departure": entry["departure"],  # type: ignore[typeddict-item]
        "arrival": entry["arrival"],  # type: ignore[typeddict-item]
        "comments": entry["comments"],
    }


def export_payload(entries: list[TimelineEntry]) -> str:
    return json.dumps(
        [entry_to_export_dict(entry) for entry in entries],
        indent=2,
        ensure_ascii=False,
    )


def export_file_name(date: Optional[pendulum.Date] = None) -> str:
    if date is None:
        date = today()
    return f"travel-entries-{date_to_iso_str(date)}.json"


def export_to_directory(
    entries: list[TimelineEntry],
    directory: Path,
    date: Optional[pendulum.Date] = None,
) -> Path:
    """Write the whole collection to a single dated JSON file in ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_file_name(date)
    path.write_text(export_payload(entries), encoding="utf-8")
    logger.info("Exported %d entries to %s", len(entries), path)
    return path
