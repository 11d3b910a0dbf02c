# SPDX-License-Identifier: MIT

import zlib

FLIGHT_COLOR = "bright_cyan"
WARNING_COLOR = "orange1"
OK_COLOR = "green"
EMPTY_DAY_COLOR = "bright_black"

# Background colors that keep white day numbers readable
COUNTRY_COLORS = [
    "dark_green",
    "blue3",
    "dark_orange3",
    "purple4",
    "deep_pink4",
    "dark_cyan",
    "red3",
    "gold3",
    "slate_blue3",
    "chartreuse4",
    "orange4",
    "magenta3",
]


def color_for_country(country: str) -> str:
    """Stable color per country, the same across runs."""
    index = zlib.crc32(country.strip().lower().encode("utf-8")) % len(COUNTRY_COLORS)
    return COUNTRY_COLORS[index]
