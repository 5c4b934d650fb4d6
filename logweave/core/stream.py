"""Ordered, single-pass streams of log records."""

from typing import Iterable, Iterator, List, Protocol, Sequence, Tuple

from logweave.models import LogRecord

class RecordSource(Protocol):
    """Anything that can produce log records."""

    def read_records(self) -> Iterable[LogRecord]:
        ...

class LogStream:
    """An ordered sequence of records with a forward-only cursor.

    The stream keeps records in the order it was given; it sorts only when
    merging. ``merge`` and ``filter`` return new streams and leave their
    inputs untouched. Once exhausted, a stream stays exhausted.
    """

    def __init__(self, records: Iterable[LogRecord] = ()):
        self._records: Tuple[LogRecord, ...] = tuple(records)
        self._index = 0

    @classmethod
    def from_source(cls, source: RecordSource) -> "LogStream":
        """Build a stream from the records a source produces."""
        return cls(source.read_records())

    @property
    def records(self) -> Tuple[LogRecord, ...]:
        return self._records

    def merge(self, other: "LogStream") -> "LogStream":
        """Return a new stream holding the records of both, fully sorted."""
        return merge_streams(self, other)

    def filter(self, exclude: Sequence[str] = (), include: Sequence[str] = ()) -> "LogStream":
        """Keep records whose message contains every include term and no exclude term.

        Args:
            exclude: Terms that drop a record when found in its message
            include: Terms that must all appear in a record's message

        Returns:
            New stream in the same order as this one
        """
        return LogStream(
            record for record in self._records
            if record.includes(include) and not record.excludes(exclude)
        )

    def __iter__(self) -> Iterator[LogRecord]:
        return self

    def __next__(self) -> LogRecord:
        if self._index >= len(self._records):
            raise StopIteration
        record = self._records[self._index]
        self._index += 1
        return record

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"LogStream(records={len(self._records)}, position={self._index})"

def merge_streams(*streams: LogStream) -> LogStream:
    """Merge any number of streams into one sorted stream."""
    records: List[LogRecord] = []
    for stream in streams:
        records.extend(stream.records)
    records.sort()
    return LogStream(records)
