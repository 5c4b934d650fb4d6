"""Core parsing, merging and transport functionality."""

from .errors import (
    error_handler,
    LogweaveError,
    ConfigError,
    ParsingError,
    TransportError,
    DecodeError
)

__all__ = [
    'error_handler',
    'LogweaveError',
    'ConfigError',
    'ParsingError',
    'TransportError',
    'DecodeError'
]
