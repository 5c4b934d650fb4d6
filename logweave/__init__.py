"""logweave - merge logs from many hosts into one chronological stream.

Log lines are described by a configurable scheme, parsed into ordered
records, merged across sources and filtered by message content.
"""

__version__ = "0.1.0"

from logweave.core.scheme import CompiledScheme, compile_scheme, extract, parse_timestamp
from logweave.core.splitter import split_keep, split_entries
from logweave.core.stream import LogStream, RecordSource, merge_streams
from logweave.core.ingest import parse_entries
from logweave.models import LogRecord, Scheme, UnmatchedPolicy

__all__ = [
    'CompiledScheme',
    'compile_scheme',
    'extract',
    'parse_timestamp',
    'split_keep',
    'split_entries',
    'LogStream',
    'RecordSource',
    'merge_streams',
    'parse_entries',
    'LogRecord',
    'Scheme',
    'UnmatchedPolicy',
]
