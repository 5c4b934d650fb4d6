"""Models package for configuration and parsed data."""

from .config import Scheme, SourceConfig, TransportSettings, UnmatchedPolicy
from .data import (
    ExtractedFields,
    LogRecord,
    IngestReport,
    IngestResult,
    SourceResult
)

__all__ = [
    'Scheme',
    'SourceConfig',
    'TransportSettings',
    'UnmatchedPolicy',
    'ExtractedFields',
    'LogRecord',
    'IngestReport',
    'IngestResult',
    'SourceResult'
]
