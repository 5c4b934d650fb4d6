"""Data structures shared by the ingestion pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, NamedTuple, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

class ExtractedFields(NamedTuple):
    """Field texts captured from one candidate entry."""
    datetime_text: str
    host: str
    service: str
    message: str

@dataclass(frozen=True, order=True)
class LogRecord:
    """A parsed log entry.

    Records order by timestamp, then hostname, service and message, so
    entries logged in the same microsecond still sort deterministically.
    """
    timestamp: int  # microseconds since the Unix epoch
    hostname: str
    service: str
    message: str

    @property
    def datetime(self) -> datetime:
        """Timestamp as an aware UTC datetime."""
        return EPOCH + timedelta(microseconds=self.timestamp)

    def includes(self, words: Iterable[str]) -> bool:
        return all(word in self.message for word in words)

    def excludes(self, words: Iterable[str]) -> bool:
        return any(word in self.message for word in words)

@dataclass
class IngestReport:
    """Counters for one parsed text blob."""
    source: str
    candidates: int = 0
    parsed: int = 0
    appended: int = 0
    dropped: int = 0

@dataclass
class IngestResult:
    """Records parsed from one text blob with their report."""
    records: List[LogRecord]
    report: IngestReport

    def read_records(self) -> List[LogRecord]:
        return self.records

@dataclass
class SourceResult:
    """Outcome of collecting a single source."""
    name: str
    records: List[LogRecord] = field(default_factory=list)
    report: Optional[IngestReport] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def read_records(self) -> List[LogRecord]:
        return self.records
