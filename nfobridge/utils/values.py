"""
Value coercion helpers shared by the NFO reader and writer
Locale-safe number/date parsing and multi-value splitting
"""
import re
import math
from datetime import date, datetime
from typing import Any, List, Optional, Union

from nfobridge.utils.exceptions import DateProcessingError


_NO_DEFAULT = object()

# digit grouping written by any locale: 2.001 / 2,001 / 2 001
_DIGIT_SEPARATORS = re.compile(r"[,.\s]")

# legacy single-tag multi-value delimiters
_MULTI_VALUE_DELIMITERS = re.compile(r"[;,/|]")

_HTTP_URL = re.compile(r"https?://.*")

_DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y",
    "%m/%d/%Y",
    "%d-%m-%Y",
    "%Y",
]

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def parse_int(value: Any, default: Any = _NO_DEFAULT) -> int:
    """
    Parse an integer, tolerating digit group separators

    Args:
        value: String (or number) to parse
        default: Returned for blank or unparsable input; without it a
            ValueError is raised instead

    Returns:
        The parsed integer
    """
    if default is not _NO_DEFAULT and is_blank(value):
        return default

    try:
        return _parse_int_strict(value)
    except (TypeError, ValueError):
        if default is _NO_DEFAULT:
            raise
        return default


def _parse_int_strict(value: Any) -> int:
    if value is None:
        raise ValueError("cannot parse an integer from None")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return int(_DIGIT_SEPARATORS.sub("", text))


def parse_float(value: Optional[str]) -> float:
    """Parse a float with a fixed '.' decimal separator"""
    if value is None:
        raise ValueError("cannot parse a float from None")
    number = float(str(value).strip())
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value}")
    return number


def parse_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


def split(source: Optional[str]) -> List[str]:
    """
    Split a legacy multi-value string on ; , / or |

    Args:
        source: The raw string

    Returns:
        Trimmed, non-blank parts in order
    """
    if not source:
        return []
    return [part.strip() for part in _MULTI_VALUE_DELIMITERS.split(source) if part.strip()]


def is_http_url(value: Optional[str]) -> bool:
    return bool(value) and _HTTP_URL.fullmatch(value) is not None


def coerce_id(value: str) -> Union[int, str]:
    """Numeric-looking identifiers become ints, everything else stays a string"""
    try:
        return parse_int(value)
    except ValueError:
        return value


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse the date formats seen in NFO files

    Args:
        value: Raw date text

    Returns:
        The parsed datetime, or None for blank input

    Raises:
        DateProcessingError: If the text is not a recognised date
    """
    if is_blank(value):
        return None

    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        raise DateProcessingError(text, "parse_date") from None


def format_date(value: Optional[Union[date, datetime]]) -> str:
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)


def format_datetime(value: Optional[Union[date, datetime]]) -> str:
    if value is None:
        return ""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value.strftime(DATETIME_FORMAT)


def format_one_decimal(value: float) -> str:
    """Always exactly one decimal digit, independent of the locale"""
    return f"{value:.1f}"


def format_at_most_one_decimal(value: float) -> str:
    """One decimal digit at most; whole numbers are written without one"""
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return text
