"""
Custom exceptions for NFOBridge
Provides structured error handling and better error reporting
"""
from typing import Optional, Dict, Any


class NFOBridgeException(Exception):
    """Base exception for all NFOBridge errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class NFOParseError(NFOBridgeException):
    """Raised when an NFO document is not well-formed XML at all"""

    def __init__(self, source: str, reason: str):
        details = {
            "source": source,
            "reason": reason
        }
        message = f"Failed to parse NFO {source}: {reason}"
        super().__init__(message, details)


class NFOCreationError(NFOBridgeException):
    """Raised when NFO file creation fails"""

    def __init__(self, nfo_path: str, reason: str, media_type: str = "movie"):
        details = {
            "nfo_path": nfo_path,
            "reason": reason,
            "media_type": media_type
        }
        message = f"Failed to create {media_type} NFO file: {reason}"
        super().__init__(message, details)


class ConfigurationError(NFOBridgeException):
    """Raised when configuration is invalid or missing"""

    def __init__(self, setting: str, reason: str, current_value: Optional[Any] = None):
        details = {
            "setting": setting,
            "reason": reason,
            "current_value": current_value
        }
        message = f"Configuration error for {setting}: {reason}"
        super().__init__(message, details)


class FileOperationError(NFOBridgeException):
    """Raised when file operations fail"""

    def __init__(self, operation: str, file_path: str, reason: str):
        details = {
            "operation": operation,
            "file_path": file_path,
            "reason": reason
        }
        message = f"File {operation} failed for {file_path}: {reason}"
        super().__init__(message, details)


class DateProcessingError(NFOBridgeException):
    """Raised when date processing or parsing fails"""

    def __init__(self, date_value: str, operation: str, media_type: str = "movie"):
        details = {
            "date_value": date_value,
            "operation": operation,
            "media_type": media_type
        }
        message = f"Date processing error during {operation} for {media_type}: {date_value}"
        super().__init__(message, details)


class ValidationError(NFOBridgeException):
    """Raised when input values fail validation"""

    def __init__(self, field_name: str, value: Any, reason: str):
        details = {
            "field_name": field_name,
            "value": value,
            "reason": reason
        }
        message = f"Validation failed for {field_name}: {reason}"
        super().__init__(message, details)


class RetryableError(NFOBridgeException):
    """Base class for errors that can be retried"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, retry_after: Optional[float] = None):
        super().__init__(message, details)
        self.retry_after = retry_after  # Seconds to wait before retry


class TemporaryFileError(RetryableError):
    """Temporary file system errors that can be retried"""

    def __init__(self, file_path: str, operation: str, reason: str, retry_after: Optional[float] = 1):
        details = {"file_path": file_path, "operation": operation, "reason": reason}
        message = f"Temporary file error during {operation} for {file_path}: {reason}"
        super().__init__(message, details, retry_after)
