# SPDX-License-Identifier: MIT

from travellog.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {"entries": {"synthetic_to_real": {}, "real_to_synthetic": {}}}
