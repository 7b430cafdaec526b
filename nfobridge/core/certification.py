"""
Age-rating certifications as written into NFO files
Parses the many notations found in the wild and formats them per display style
"""
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from nfobridge.utils.values import is_blank


STYLE_SHORT = "short"
STYLE_MEDIUM = "medium"
STYLE_MEDIUM_FULL = "medium_full"
STYLE_LARGE = "large"
STYLE_TECHNICAL = "technical"

CERTIFICATION_STYLES = (STYLE_SHORT, STYLE_MEDIUM, STYLE_MEDIUM_FULL, STYLE_LARGE, STYLE_TECHNICAL)

COUNTRY_NAMES = {
    "US": "United States",
    "GB": "United Kingdom",
    "DE": "Germany",
    "AT": "Austria",
    "FR": "France",
    "NL": "Netherlands",
    "CA": "Canada",
    "AU": "Australia",
    "ES": "Spain",
    "IT": "Italy",
}

# country: {label: alternate notations}
_KNOWN: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "US": {
        "G": ("Rated G",),
        "PG": ("Rated PG",),
        "PG-13": ("Rated PG-13", "PG13"),
        "R": ("Rated R",),
        "NC-17": ("Rated NC-17", "NC17"),
        "NR": ("Not Rated", "Unrated"),
        "TV-Y": ("TVY",),
        "TV-G": ("TVG",),
        "TV-PG": ("TVPG",),
        "TV-14": ("TV14",),
        "TV-MA": ("TVMA",),
    },
    "GB": {
        "U": (),
        "PG": (),
        "12A": (),
        "12": (),
        "15": (),
        "18": (),
        "R18": ("R 18",),
    },
    "DE": {
        "FSK 0": ("FSK0", "0", "ab 0"),
        "FSK 6": ("FSK6", "6", "ab 6"),
        "FSK 12": ("FSK12", "12", "ab 12"),
        "FSK 16": ("FSK16", "16", "ab 16"),
        "FSK 18": ("FSK18", "18", "ab 18"),
    },
    "AT": {
        "0": (),
        "6": (),
        "10": (),
        "12": (),
        "14": (),
        "16": (),
        "18": (),
    },
    "FR": {
        "U": ("Tous publics",),
        "12": ("-12",),
        "16": ("-16",),
        "18": ("-18",),
    },
    "NL": {
        "AL": (),
        "6": (),
        "9": (),
        "12": (),
        "16": (),
    },
    "CA": {
        "G": (),
        "PG": (),
        "14A": ("14+",),
        "18A": ("18+",),
        "R": (),
        "A": (),
    },
    "AU": {
        "G": (),
        "PG": (),
        "M": (),
        "MA15+": ("MA 15+", "MA15"),
        "R18+": ("R 18+", "R18"),
        "X18+": ("X 18+", "X18"),
    },
    "ES": {
        "APTA": ("A",),
        "7": (),
        "12": (),
        "16": (),
        "18": (),
    },
    "IT": {
        "T": (),
        "V.M.14": ("VM14",),
        "V.M.18": ("VM18",),
    },
}

_COUNTRY_CODES = {name.lower(): code for code, name in COUNTRY_NAMES.items()}

_RATED_PREFIX = re.compile(r"^rated\s+", re.IGNORECASE)
_TECHNICAL = re.compile(r"([A-Za-z]{2})_([A-Za-z0-9]+)")


@dataclass(frozen=True)
class Certification:
    country: str
    label: str


def _lookup(country: str, name: str) -> Optional[Certification]:
    table = _KNOWN.get(country.upper())
    if not table:
        return None
    wanted = name.strip().lower()
    for label, notations in table.items():
        if label.lower() == wanted or any(n.lower() == wanted for n in notations):
            return Certification(country.upper(), label)
    return None


def _technical_key(label: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "", label).upper()


def _lookup_technical(text: str) -> Optional[Certification]:
    match = _TECHNICAL.fullmatch(text.strip())
    if not match:
        return None
    country, key = match.group(1).upper(), match.group(2).upper()
    for label in _KNOWN.get(country, {}):
        if _technical_key(label) == key:
            return Certification(country, label)
    return None


def _find_any(name: str) -> Optional[Certification]:
    for country in _KNOWN:
        found = _lookup(country, name)
        if found:
            return found
    return None


def _split_prefix(part: str) -> Tuple[str, str]:
    """'US:PG-13' -> ('US', 'PG-13'); a missing prefix yields an empty country"""
    if ":" in part:
        country, label = part.split(":", 1)
        country = country.strip()
        code = _COUNTRY_CODES.get(country.lower(), country.upper())
        return code, label.strip()
    return "", part.strip()


def parse_certification(text: Optional[str], country: str = "US") -> Optional[Certification]:
    """
    Parse a certification string from an NFO file

    Multi-country strings separated by '/' prefer the configured country,
    then fall back to any recognised certification. Unrecognised values are
    kept verbatim so they survive a rewrite.

    Args:
        text: Raw tag text, e.g. "PG-13", "US:PG-13", "DE:FSK 12 / US:R"
        country: Preferred ISO 3166 country code

    Returns:
        The certification, or None for blank input
    """
    if is_blank(text):
        return None

    technical = _lookup_technical(text)
    if technical:
        return technical

    parts = [p.strip() for p in text.strip().split("/") if p.strip()]
    if not parts:
        return None
    split_parts = [_split_prefix(p) for p in parts]

    for prefix, label in split_parts:
        if prefix and prefix != country.upper():
            continue
        found = _lookup(country, label) or _lookup(country, _RATED_PREFIX.sub("", label))
        if found:
            return found

    for prefix, label in split_parts:
        stripped = _RATED_PREFIX.sub("", label)
        found = None
        if prefix:
            found = _lookup(prefix, label) or _lookup(prefix, stripped)
        found = found or _find_any(label) or _find_any(stripped)
        if found:
            return found

    prefix, label = split_parts[0]
    return Certification(prefix or country.upper(), _RATED_PREFIX.sub("", label))


def format_certification(cert: Optional[Certification], style: str = STYLE_SHORT) -> str:
    """
    Render a certification in the configured display style

    Args:
        cert: The certification, may be None
        style: One of CERTIFICATION_STYLES

    Returns:
        The rendered text, empty for no certification
    """
    if cert is None or is_blank(cert.label):
        return ""

    if style == STYLE_MEDIUM:
        return f"{cert.country}: {cert.label}"
    if style == STYLE_MEDIUM_FULL:
        return f"{COUNTRY_NAMES.get(cert.country, cert.country)}: {cert.label}"
    if style == STYLE_LARGE:
        notations = (cert.label, *_KNOWN.get(cert.country, {}).get(cert.label, ()))
        return " / ".join(f"{cert.country}:{n}" for n in notations)
    if style == STYLE_TECHNICAL:
        return f"{cert.country}_{_technical_key(cert.label)}"
    return cert.label
