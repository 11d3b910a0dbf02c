# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from travellog import configuration
from travellog.repository.auth import AUTH_REPO
from travellog.repository.configuration import CONFIGURATION_REPO
from travellog.repository.entry import EntryRepository
from travellog.repository.id_map import ID_MAP_REPO
from travellog.service.timeline import Timeline

logger = logging.getLogger(__name__)

_timeline: Optional[Timeline] = None
_timeline_user: Optional[str] = None


def open_timeline() -> Optional[Timeline]:
    """
    Load the signed-in user's timeline, or return None when nobody is signed in.

    The timeline is created once per process and shared by every command in it.

    Raises:
        PersistenceError: If the user's entries cannot be read
    """
    global _timeline, _timeline_user

    user = AUTH_REPO.current_user()
    if user is None:
        close_timeline()
        return None
    if _timeline is not None and _timeline_user == user:
        return _timeline

    config = CONFIGURATION_REPO.get_config()
    repository = EntryRepository(configuration.user_entries_dir(user))
    ID_MAP_REPO.bind(configuration.user_id_map_path(user))

    _timeline = Timeline(repository, policy=config["overlap_policy"])
    _timeline_user = user
    logger.debug("Opened timeline for %s with %d entries", user, len(_timeline.entries))
    return _timeline


def close_timeline() -> None:
    global _timeline, _timeline_user

    if _timeline is not None:
        ID_MAP_REPO.flush()
    _timeline = None
    _timeline_user = None


def sign_in(user: str) -> None:
    close_timeline()
    AUTH_REPO.sign_in(user)


def sign_out() -> None:
    """Forget the signed-in user and drop their in-memory entries."""
    close_timeline()
    AUTH_REPO.sign_out()
