# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from travellog.model.entry import EntryId
from travellog.model.id_map import IdMap
from travellog.template.id_map import get_id_map_template


class IdMapRepository:
    """
    Short numeric ids for entries shown in listings.

    Entry ids are UUIDs; listings assign 1, 2, 3... so commands such as
    ``entry delete 2`` can address what was just shown.
    """

    def __init__(self) -> None:
        self._path: Optional[Path] = None
        self._id_map: Optional[IdMap] = None
        self.is_dirty = False

    def bind(self, path: Path) -> None:
        """Point the repository at a user's id map file, dropping cached state."""
        self._path = path
        self._id_map = None
        self.is_dirty = False

    @property
    def id_map(self) -> IdMap:
        if self._id_map is None:
            self.__load_data()
        if self._id_map is None:
            raise ValueError()
        return self._id_map

    def __load_data(self) -> None:
        if self._path is None or not self._path.is_file():
            self._id_map = get_id_map_template()
            return
        self._id_map = load(self._path.read_text(), Loader=Loader)
        if self._id_map is None:
            self._id_map = get_id_map_template()

    def __save_data(self, id_map: IdMap) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(dump(id_map, Dumper=Dumper))

    def flush(self) -> None:
        if self._id_map is not None and self.is_dirty:
            self.__save_data(self._id_map)
            self.is_dirty = False

    def clear_ids(self) -> None:
        self.is_dirty = True
        self._id_map = get_id_map_template()

    def associate_id(self, entry_id: EntryId) -> int:
        """
        Create a new synthetic id to associate with an entry id
        """
        mapping = self.id_map["entries"]
        if entry_id in mapping["real_to_synthetic"]:
            return mapping["real_to_synthetic"][entry_id]

        self.is_dirty = True
        next_id = len(mapping["real_to_synthetic"]) + 1
        mapping["real_to_synthetic"][entry_id] = next_id
        mapping["synthetic_to_real"][next_id] = entry_id
        return next_id

    def get_real_id(self, synthetic_id: int) -> EntryId:
        """
        Get the entry id associated with a synthetic id

        Raises:
            KeyError: If the synthetic id was never handed out
        """
        return self.id_map["entries"]["synthetic_to_real"][synthetic_id]


ID_MAP_REPO = IdMapRepository()
