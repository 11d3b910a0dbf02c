# SPDX-License-Identifier: MIT

from travellog.cleanup import register_cleanup
from travellog.initialize import initialize
from travellog.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
