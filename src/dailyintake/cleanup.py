# SPDX-License-Identifier: MIT

import atexit

from dailyintake.repository.configuration import CONFIGURATION_REPO
from dailyintake.repository.store import STORE


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    STORE.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
