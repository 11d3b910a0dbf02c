# SPDX-License-Identifier: MIT

import atexit

from travellog.repository.configuration import CONFIGURATION_REPO
from travellog.service.session import close_timeline


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    # Flushes the id map of the open timeline
    close_timeline()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
