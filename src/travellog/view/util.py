# SPDX-License-Identifier: MIT

from typing import Optional

from travellog.model.entry import AccommodationType

ACCOMMODATION_LABELS: dict[AccommodationType, str] = {
    "airbnb": "Airbnb",
    "hotel": "Hotel",
    "friend": "With friends",
    "other": "Other",
}


def accommodation_label(accommodation_type: Optional[str]) -> str:
    if accommodation_type is None:
        return ACCOMMODATION_LABELS["other"]
    return ACCOMMODATION_LABELS.get(accommodation_type, ACCOMMODATION_LABELS["other"])  # type: ignore[call-overload]


def format_days(days: int) -> str:
    return f"{days} day" if days == 1 else f"{days} days"


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."
