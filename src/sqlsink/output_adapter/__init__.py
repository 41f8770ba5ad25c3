from sqlsink.output_adapter.base import BaseOutputAdapter
from sqlsink.output_adapter.sql import SQLOutputAdapter

__all__ = [
    "BaseOutputAdapter",
    "SQLOutputAdapter",
]
