# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypeAlias, TypedDict, Union

import pendulum

EntryId: TypeAlias = str

AccommodationType = Literal["airbnb", "hotel", "friend", "other"]

ACCOMMODATION_TYPES: tuple[AccommodationType, ...] = (
    "airbnb",
    "hotel",
    "friend",
    "other",
)


class EntryKind:
    STAY = "stay"
    FLIGHT = "flight"


class Stay(TypedDict):
    id: EntryId
    kind: Literal["stay"]
    start_date: pendulum.Date
    end_date: pendulum.Date
    country: str
    city: str
    accommodation_type: AccommodationType
    days: int  # Derived: inclusive day count, always recomputed
    comments: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class Flight(TypedDict):
    id: EntryId
    kind: Literal["flight"]
    date: pendulum.Date
    country: str  # Destination
    city: str  # Destination
    flight_number: Optional[str]
    departure: Optional[str]
    arrival: Optional[str]
    comments: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime


TimelineEntry = Union[Stay, Flight]
