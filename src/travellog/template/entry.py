# SPDX-License-Identifier: MIT

import uuid

import pendulum

from travellog.model.entry import EntryId, EntryKind, Flight, Stay
from travellog.time import now_utc, today


def generate_entry_id() -> EntryId:
    return str(uuid.uuid4())


def get_stay_template() -> Stay:
    now = now_utc()
    day: pendulum.Date = today()
    return {
        "id": generate_entry_id(),
        "kind": EntryKind.STAY,  # type: ignore[typeddict-item]
        "start_date": day,
        "end_date": day,
        "country": "",  # Must be set
        "city": "",  # Must be set
        "accommodation_type": "other",
        "days": 1,
        "comments": None,
        "created": now,
        "updated": now,
    }


def get_flight_template() -> Flight:
    now = now_utc()
    return {
        "id": generate_entry_id(),
        "kind": EntryKind.FLIGHT,  # type: ignore[typeddict-item]
        "date": today(),
        "country": "",  # Must be set
        "city": "",  # Must be set
        "flight_number": None,
        "departure": None,
        "arrival": None,
        "comments": None,
        "created": now,
        "updated": now,
    }
