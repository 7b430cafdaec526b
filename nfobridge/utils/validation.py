"""
Validation utilities for NFOBridge
"""
import re
from typing import Any, Optional

from nfobridge.utils.exceptions import ValidationError


_IMDB_ID = re.compile(r"tt\d{6,}")
_ILLEGAL_FILENAME_CHARS = r'<>:"/\|?*'


def validate_imdb_id(imdb_id: Optional[str]) -> bool:
    """
    Validate IMDb ID format

    Args:
        imdb_id: IMDb ID to validate

    Returns:
        True if valid, False otherwise
    """
    if not imdb_id or not isinstance(imdb_id, str):
        return False

    # Must be 'tt' followed by 6+ digits
    return _IMDB_ID.fullmatch(imdb_id) is not None


def require_choice(value: Any, choices, name: str) -> Any:
    """Require value to be one of the given choices"""
    if value not in choices:
        raise ValidationError(name, value, f"must be one of {sorted(choices)}")
    return value


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename by removing invalid characters

    Args:
        filename: Filename to sanitize

    Returns:
        Sanitized filename
    """
    for char in _ILLEGAL_FILENAME_CHARS:
        filename = filename.replace(char, '_')

    # Remove leading/trailing dots and spaces
    filename = filename.strip('. ')

    if not filename:
        filename = 'unnamed'

    return filename
