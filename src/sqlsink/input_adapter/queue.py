import queue
import typing

from sqlsink.input_adapter.base import BaseInputAdapter
from sqlsink.structs import Event


class QueueInputAdapter(BaseInputAdapter):
    """
    Reads events from a ``queue.Queue`` until the sentinel is received.

    Items may be Event instances or plain dictionaries with ``tag``,
    ``time`` and ``record`` keys.
    """

    def __init__(
        self,
        queue: queue.Queue,
        sentinel: typing.Any = None,
    ):
        super().__init__()
        self.queue = queue
        self.sentinel = sentinel

    @property
    def generator(self) -> typing.Generator[Event, None, None]:
        while True:
            item = self.queue.get()

            if item == self.sentinel:
                break

            yield self.to_event(item)


class IterableInputAdapter(BaseInputAdapter):
    def __init__(
        self, events: typing.Iterable[Event | typing.Mapping[str, typing.Any]]
    ):
        super().__init__()
        self.events = events

    @property
    def generator(self) -> typing.Generator[Event, None, None]:
        for item in self.events:
            yield self.to_event(item)
