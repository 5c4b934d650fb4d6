"""Module for centralized error handling."""

from typing import Optional, Any, Dict
from rich.console import Console
from functools import wraps
from typing import Type, Tuple, Callable
from logweave.core.logging import get_logger

# Initialize console for rich output
console = Console(stderr=True)
logger = get_logger(__name__)

# Define error codes
ERROR_CODES = {
    'CONFIG_ERROR': 1000,
    'PARSING_ERROR': 3000,
    'TRANSPORT_ERROR': 6000,
    'DECODE_ERROR': 7000
}

class LogweaveError(Exception):
    """Base exception class for logweave."""

    def __init__(
        self,
        message: str,
        error_code: int,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize error.

        Args:
            message: Error message
            error_code: Numeric error code
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

class ConfigError(LogweaveError):
    """Scheme or settings errors. Fatal at startup."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['CONFIG_ERROR'], details)

class ParsingError(LogweaveError):
    """A single log entry could not be parsed."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['PARSING_ERROR'], details)

class TransportError(LogweaveError):
    """A local or remote command could not be run to completion."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['TRANSPORT_ERROR'], details)

class DecodeError(LogweaveError):
    """Captured output is not valid text and lossy decoding is disabled."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['DECODE_ERROR'], details)

def error_handler(reraise: bool = True, exclude: Tuple[Type[Exception], ...] = None):
    """Decorator for handling errors in functions.

    Args:
        reraise: Whether to reraise the exception after handling
        exclude: Tuple of exception types to exclude from handling

    Returns:
        Decorated function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if exclude and isinstance(e, exclude):
                    raise

                # Handle the error
                if isinstance(e, LogweaveError):
                    console.print(f"[red]Error {e.error_code}:[/red] {str(e)}")
                    if e.details:
                        console.print("[yellow]Details:[/yellow]")
                        for key, value in e.details.items():
                            console.print(f"  [blue]{key}:[/blue] {value}")
                else:
                    console.print(f"[red]Unexpected Error:[/red] {str(e)}")

                # Coded errors are already on the console
                if isinstance(e, LogweaveError):
                    logger.debug(
                        "error_handled",
                        function=func.__name__,
                        error_code=e.error_code,
                        details=e.details
                    )
                else:
                    logger.error("error_unexpected", function=func.__name__, exc_info=e)

                if reraise:
                    raise

            return None
        return wrapper
    return decorator
