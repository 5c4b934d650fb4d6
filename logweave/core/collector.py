"""Collects records from several sources into one timeline."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from logweave.core.errors import DecodeError, TransportError
from logweave.core.ingest import parse_entries
from logweave.core.logging import get_logger, log_duration
from logweave.core.scheme import CompiledScheme
from logweave.core.stream import LogStream, merge_streams
from logweave.core.transport import run_local, run_remote
from logweave.models import (
    IngestResult,
    LogRecord,
    SourceConfig,
    SourceResult,
    TransportSettings,
    UnmatchedPolicy
)

logger = get_logger(__name__)

class CommandSource:
    """Record source backed by a command run locally or over ssh."""

    def __init__(
        self,
        config: SourceConfig,
        compiled: CompiledScheme,
        transport: Optional[TransportSettings] = None,
        policy: UnmatchedPolicy = UnmatchedPolicy.APPEND
    ):
        self.config = config
        self.compiled = compiled
        self.transport = transport or TransportSettings()
        self.policy = policy

    @property
    def name(self) -> str:
        return self.config.name

    def fetch(self) -> str:
        """Run the command and return its output."""
        if self.config.is_remote:
            return run_remote(
                self.config.address,
                self.config.command,
                self.config.args,
                timeout=self.transport.timeout_seconds,
                connect_timeout=self.transport.connect_timeout_seconds,
                known_hosts_file=self.transport.known_hosts_file,
                fail_on_nonzero_exit=self.transport.fail_on_nonzero_exit,
                decode_errors=self.transport.decode_errors
            )
        return run_local(
            self.config.command,
            self.config.args,
            timeout=self.transport.timeout_seconds,
            fail_on_nonzero_exit=self.transport.fail_on_nonzero_exit,
            decode_errors=self.transport.decode_errors
        )

    def ingest(self) -> IngestResult:
        return parse_entries(self.compiled, self.fetch(), policy=self.policy, source=self.name)

    def read_records(self) -> List[LogRecord]:
        return self.ingest().records

@dataclass
class CollectionResult:
    """Merged stream plus the outcome of every source."""
    stream: LogStream
    results: List[SourceResult]

    @property
    def succeeded(self) -> List[SourceResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> List[SourceResult]:
        return [result for result in self.results if not result.ok]

    @property
    def lines_parsed(self) -> int:
        return sum(result.report.parsed for result in self.results if result.report)

    @property
    def lines_dropped(self) -> int:
        return sum(result.report.dropped for result in self.results if result.report)

def collect_source(source: CommandSource) -> SourceResult:
    """Collect one source. Transport failures become a failed result."""
    try:
        ingested = source.ingest()
    except (TransportError, DecodeError) as e:
        logger.warning("source_failed", source=source.name, error=str(e), details=e.details)
        return SourceResult(name=source.name, error=str(e))
    return SourceResult(name=source.name, records=ingested.records, report=ingested.report)

@log_duration(logger)
def collect(sources: Sequence[CommandSource], max_workers: int = 4) -> CollectionResult:
    """Collect all sources concurrently and merge them.

    Every source is waited for before merging. A failing source contributes
    no records and is reported in the result.

    Args:
        sources: Sources to collect
        max_workers: Number of sources collected at the same time

    Returns:
        Merged stream with per-source results, in the order of ``sources``
    """
    if not sources:
        return CollectionResult(stream=LogStream(), results=[])

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(collect_source, sources))

    stream = merge_streams(*(LogStream.from_source(result) for result in results))
    logger.info(
        "collection_finished",
        sources=len(results),
        failed=sum(1 for result in results if not result.ok),
        records=len(stream)
    )
    return CollectionResult(stream=stream, results=results)
