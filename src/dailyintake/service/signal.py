# SPDX-License-Identifier: MIT

from typing import Any, Callable

Receiver = Callable[[Any], None]


class Signal:
    """A named outbound notification with any number of subscribed receivers."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._receivers: list[Receiver] = []

    def connect(self, receiver: Receiver) -> Receiver:
        if receiver not in self._receivers:
            self._receivers.append(receiver)
        return receiver

    def disconnect(self, receiver: Receiver) -> None:
        if receiver in self._receivers:
            self._receivers.remove(receiver)

    def send(self, payload: Any) -> None:
        for receiver in list(self._receivers):
            receiver(payload)

    @property
    def receivers(self) -> list[Receiver]:
        return list(self._receivers)
