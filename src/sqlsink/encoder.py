import enum
import typing

from sqlsink.structs import EncodedRecord, Event
from sqlsink.utils.pool import BufferPool

TAG_SELECTORS = frozenset({"@tag", "_tag"})
TIMESTAMP_SELECTORS = frozenset({"@timestamp", "_timestamp"})


class SelectorKind(enum.Enum):
    TAG = "tag"
    TIMESTAMP = "timestamp"
    FIELD = "field"


def selector_kind(selector: str) -> SelectorKind:
    if selector in TAG_SELECTORS:
        return SelectorKind.TAG
    if selector in TIMESTAMP_SELECTORS:
        return SelectorKind.TIMESTAMP
    return SelectorKind.FIELD


class MappingTable:
    """
    Immutable, ordered mapping of destination columns to source selectors.

    A selector is either a sentinel (``@tag``/``_tag`` for the event tag,
    ``@timestamp``/``_timestamp`` for the event time) or a key looked up in
    the event record. Iteration follows declaration order.
    """

    def __init__(self, mapping: typing.Mapping[str, str]):
        if not mapping:
            raise ValueError("Column mapping must not be empty")
        self._entries: tuple[tuple[str, str, SelectorKind], ...] = tuple(
            (column, selector, selector_kind(selector))
            for column, selector in mapping.items()
        )

    @property
    def columns(self) -> list[str]:
        return [column for column, _, _ in self._entries]

    def __iter__(self) -> typing.Iterator[tuple[str, str, SelectorKind]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={s}" for c, s, _ in self._entries)
        return f"<MappingTable {pairs}>"


class Encoder:
    """
    Projects events into encoded records according to a MappingTable.

    Columns whose source field is missing from the event are skipped, so
    the record only carries what the event actually provides. Encoding is
    free of I/O and deterministic for a given event and mapping.
    """

    def __init__(
        self,
        mapping: MappingTable | typing.Mapping[str, str],
        pool: BufferPool | None = None,
    ):
        """
        Initialize the Encoder.

        Args:
            mapping: Column mapping, either prebuilt or as a plain mapping.
            pool: Scratch buffer pool used to build column lists. A private
                pool is created when omitted.
        """
        if not isinstance(mapping, MappingTable):
            mapping = MappingTable(mapping)
        self.mapping = mapping
        self.pool = pool or BufferPool()

    @property
    def max_arity(self) -> int:
        return len(self.mapping)

    def encode(self, event: Event) -> EncodedRecord | None:
        """
        Encode one event.

        Returns:
            The encoded record, or None when no column could be resolved,
            in which case the event should be dropped.
        """
        values: list[typing.Any] = []
        with self.pool.borrow() as buf:
            for column, selector, kind in self.mapping:
                if kind is SelectorKind.TAG:
                    values.append(event.tag)
                elif kind is SelectorKind.TIMESTAMP:
                    values.append(event.time)
                else:
                    if selector not in event.record:
                        continue
                    values.append(event.record[selector])
                if len(values) > 1:
                    buf.write(",")
                buf.write(column)
            if not values:
                return None
            columns = buf.getvalue()
        return EncodedRecord(columns=columns, values=values)

    def __repr__(self) -> str:
        return f"<Encoder columns={len(self.mapping)}>"


__all__ = [
    "Encoder",
    "MappingTable",
    "SelectorKind",
    "TAG_SELECTORS",
    "TIMESTAMP_SELECTORS",
]
