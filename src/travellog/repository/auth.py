# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from travellog import configuration, time

logger = logging.getLogger(__name__)


class AuthRepository:
    """Local sign-in state kept in the config directory's session file."""

    def current_user(self) -> Optional[str]:
        if not configuration.APP_SESSION_PATH.is_file():
            return None
        session: Optional[dict[str, Any]] = load(
            configuration.APP_SESSION_PATH.read_text(), Loader=Loader
        )
        if session is None:
            return None
        user = session.get("user")
        if not user:
            return None
        return str(user)

    def sign_in(self, user: str) -> None:
        user = user.strip()
        if not user:
            raise ValueError("User name must not be empty")
        # Fails early on names that cannot become a data directory
        configuration.user_slug(user)

        configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
        session = {
            "user": user,
            "signed_in": time.datetime_to_iso_str(time.now_utc()),
        }
        configuration.APP_SESSION_PATH.write_text(dump(session, Dumper=Dumper))
        logger.info("Signed in as %s", user)

    def sign_out(self) -> None:
        if configuration.APP_SESSION_PATH.is_file():
            configuration.APP_SESSION_PATH.unlink()
            logger.info("Signed out")


AUTH_REPO = AuthRepository()
