"""
Error handling utilities for NFOBridge
Provides structured error handling, retry mechanisms, and error reporting
"""
import time
import errno
import functools
from typing import Callable, Optional, Type, Union, List, Any
from pathlib import Path

from nfobridge.utils.logging import _log
from nfobridge.utils.exceptions import (
    NFOBridgeException,
    RetryableError,
    TemporaryFileError,
    FileOperationError
)


# No space left, quota exceeded
_DISK_FULL_ERRNOS = (errno.ENOSPC, getattr(errno, "EDQUOT", 122))


def with_retry(
    max_attempts: int = 3,
    delay: float = 0.5,
    backoff_factor: float = 2.0,
    retry_on: Union[Type[Exception], List[Type[Exception]], None] = None
):
    """
    Decorator for retry logic on retryable errors

    Args:
        max_attempts: Maximum number of attempts
        delay: Initial delay between retries in seconds
        backoff_factor: Factor to multiply delay by after each attempt
        retry_on: Exception types to retry on (defaults to RetryableError)
    """
    if retry_on is None:
        retry_on = [RetryableError]
    elif not isinstance(retry_on, list):
        retry_on = [retry_on]

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            current_delay = delay

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    should_retry = any(isinstance(e, exc_type) for exc_type in retry_on)
                    if not should_retry or attempt == max_attempts - 1:
                        raise

                    retry_delay = current_delay
                    if isinstance(e, RetryableError) and e.retry_after:
                        retry_delay = e.retry_after

                    _log("WARNING", f"Attempt {attempt + 1}/{max_attempts} failed: {e}. Retrying in {retry_delay}s...")
                    time.sleep(retry_delay)
                    current_delay *= backoff_factor
        return wrapper
    return decorator


def safe_file_operation(
    operation: str,
    file_path: Union[str, Path],
    operation_func: Callable,
    *args,
    **kwargs
) -> Any:
    """
    Safely perform file operations with error handling

    Args:
        operation: Description of the operation
        file_path: Path to the file being operated on
        operation_func: Function to execute
        *args, **kwargs: Arguments to pass to operation_func

    Returns:
        Result of operation_func

    Raises:
        FileOperationError: If file operation fails
        TemporaryFileError: If the disk is full or over quota
    """
    try:
        return operation_func(*args, **kwargs)
    except PermissionError as e:
        raise FileOperationError(operation, str(file_path), f"Permission denied: {e}") from e
    except FileNotFoundError as e:
        raise FileOperationError(operation, str(file_path), f"File not found: {e}") from e
    except OSError as e:
        if e.errno in _DISK_FULL_ERRNOS:
            raise TemporaryFileError(str(file_path), operation, f"Disk space issue: {e}") from e
        raise FileOperationError(operation, str(file_path), f"OS error: {e}") from e


def log_structured_error(error: NFOBridgeException, context: Optional[str] = None) -> None:
    """
    Log structured error information

    Args:
        error: NFOBridgeException to log
        context: Additional context for the error
    """
    error_dict = error.to_dict()
    if context:
        error_dict['context'] = context

    _log("ERROR", f"Structured error: {error.message}")
    _log("DEBUG", f"Error details: {error_dict}")


def create_error_response(error: NFOBridgeException, include_details: bool = False) -> dict:
    """
    Create standardized error response for API endpoints

    Args:
        error: NFOBridgeException to convert
        include_details: Whether to include detailed error information

    Returns:
        Dictionary suitable for JSON response
    """
    response = {
        "status": "error",
        "error_type": error.__class__.__name__,
        "message": error.message
    }

    if include_details and error.details:
        response["details"] = error.details

    return response
