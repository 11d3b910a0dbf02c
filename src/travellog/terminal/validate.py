# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from travellog.configuration import LOG_LEVELS, OVERLAP_POLICIES, YEAR_SCOPES
from travellog.model.entry import ACCOMMODATION_TYPES


def validate_accommodation_type(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if value not in ACCOMMODATION_TYPES:
        raise typer.BadParameter(
            f"Invalid accommodation type: {value}. Valid options: {', '.join(ACCOMMODATION_TYPES)}"
        )
    return value


def validate_overlap_policy(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if value not in OVERLAP_POLICIES:
        raise typer.BadParameter(
            f"Invalid overlap policy: {value}. Valid options: {', '.join(OVERLAP_POLICIES)}"
        )
    return value


def validate_year_scope(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if value not in YEAR_SCOPES:
        raise typer.BadParameter(
            f"Invalid year scope: {value}. Valid options: {', '.join(YEAR_SCOPES)}"
        )
    return value


def validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if value.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Invalid log level: {value}. Valid options: {', '.join(LOG_LEVELS)}"
        )
    return value.upper()


def validate_threshold(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if not (1 <= value <= 366):
        raise typer.BadParameter("Threshold must be between 1 and 366 days (inclusive)")
    return value


def validate_month(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if not (1 <= value <= 12):
        raise typer.BadParameter("Month must be between 1 and 12 (inclusive)")
    return value
