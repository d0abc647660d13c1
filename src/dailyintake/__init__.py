# SPDX-License-Identifier: MIT

from dailyintake.cleanup import register_cleanup
from dailyintake.initialize import initialize
from dailyintake.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
