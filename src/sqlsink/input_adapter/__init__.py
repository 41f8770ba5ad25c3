from sqlsink.input_adapter.base import BaseInputAdapter
from sqlsink.input_adapter.queue import IterableInputAdapter, QueueInputAdapter

__all__ = [
    "BaseInputAdapter",
    "IterableInputAdapter",
    "QueueInputAdapter",
]
