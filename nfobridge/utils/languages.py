"""
Spoken-language normalization for NFO files
Maps codes and localized names onto ISO 639-1 and back

Localized names exist for English and German only. Any other NFO
language writes English names and is reported once in the log.
"""
from typing import Dict, Optional

from nfobridge.utils.logging import _log

# iso2: (iso3 codes, English, German, native)
_LANGUAGES = {
    "ar": (("ara",), "Arabic", "Arabisch", "العربية"),
    "bg": (("bul",), "Bulgarian", "Bulgarisch", "български"),
    "bn": (("ben",), "Bengali", "Bengalisch", "বাংলা"),
    "ca": (("cat",), "Catalan", "Katalanisch", "català"),
    "cs": (("ces", "cze"), "Czech", "Tschechisch", "čeština"),
    "da": (("dan",), "Danish", "Dänisch", "dansk"),
    "de": (("deu", "ger"), "German", "Deutsch", "Deutsch"),
    "el": (("ell", "gre"), "Greek", "Griechisch", "ελληνικά"),
    "en": (("eng",), "English", "Englisch", "English"),
    "es": (("spa",), "Spanish", "Spanisch", "español"),
    "et": (("est",), "Estonian", "Estnisch", "eesti"),
    "fa": (("fas", "per"), "Persian", "Persisch", "فارسی"),
    "fi": (("fin",), "Finnish", "Finnisch", "suomi"),
    "fr": (("fra", "fre"), "French", "Französisch", "français"),
    "he": (("heb",), "Hebrew", "Hebräisch", "עברית"),
    "hi": (("hin",), "Hindi", "Hindi", "हिन्दी"),
    "hr": (("hrv",), "Croatian", "Kroatisch", "hrvatski"),
    "hu": (("hun",), "Hungarian", "Ungarisch", "magyar"),
    "id": (("ind",), "Indonesian", "Indonesisch", "Bahasa Indonesia"),
    "is": (("isl", "ice"), "Icelandic", "Isländisch", "íslenska"),
    "it": (("ita",), "Italian", "Italienisch", "italiano"),
    "ja": (("jpn",), "Japanese", "Japanisch", "日本語"),
    "ko": (("kor",), "Korean", "Koreanisch", "한국어"),
    "la": (("lat",), "Latin", "Latein", "latine"),
    "lt": (("lit",), "Lithuanian", "Litauisch", "lietuvių"),
    "lv": (("lav",), "Latvian", "Lettisch", "latviešu"),
    "ms": (("msa", "may"), "Malay", "Malaiisch", "Bahasa Melayu"),
    "nl": (("nld", "dut"), "Dutch", "Niederländisch", "Nederlands"),
    "no": (("nor",), "Norwegian", "Norwegisch", "norsk"),
    "pl": (("pol",), "Polish", "Polnisch", "polski"),
    "pt": (("por",), "Portuguese", "Portugiesisch", "português"),
    "ro": (("ron", "rum"), "Romanian", "Rumänisch", "română"),
    "ru": (("rus",), "Russian", "Russisch", "русский"),
    "sk": (("slk", "slo"), "Slovak", "Slowakisch", "slovenčina"),
    "sl": (("slv",), "Slovenian", "Slowenisch", "slovenščina"),
    "sr": (("srp",), "Serbian", "Serbisch", "српски"),
    "sv": (("swe",), "Swedish", "Schwedisch", "svenska"),
    "ta": (("tam",), "Tamil", "Tamil", "தமிழ்"),
    "th": (("tha",), "Thai", "Thailändisch", "ไทย"),
    "tr": (("tur",), "Turkish", "Türkisch", "Türkçe"),
    "uk": (("ukr",), "Ukrainian", "Ukrainisch", "українська"),
    "vi": (("vie",), "Vietnamese", "Vietnamesisch", "Tiếng Việt"),
    "zh": (("zho", "chi"), "Chinese", "Chinesisch", "中文"),
}

NAME_LANGUAGES = ("en", "de")
_NAME_COLUMNS = {"en": 1, "de": 2}

_reported_name_languages = set()


def name_language(nfo_language: Optional[str]) -> str:
    """
    The NFO language if names are localized into it, otherwise English

    Args:
        nfo_language: Configured NFO language code

    Returns:
        One of NAME_LANGUAGES
    """
    key = (nfo_language or "en").strip().lower()[:2]
    if key in NAME_LANGUAGES:
        return key
    if key not in _reported_name_languages:
        _reported_name_languages.add(key)
        _log("WARNING", f"No localized names for NFO language '{nfo_language}', writing English names")
    return "en"


def _build_lookup() -> Dict[str, str]:
    lookup = {}
    for iso2, (iso3_codes, english, german, native) in _LANGUAGES.items():
        for key in (iso2, *iso3_codes, english, german, native):
            lookup.setdefault(key.lower(), iso2)
    return lookup


_LOOKUP = _build_lookup()


def iso2_from_localized(value: Optional[str]) -> Optional[str]:
    """
    Resolve a language code or name to its ISO 639-1 code

    Args:
        value: ISO 639-1/639-2 code, or an English, German or native name

    Returns:
        The two-letter code, or None if the language is unknown
    """
    if not value:
        return None
    key = value.strip().lower()
    # region suffixes as in en_US or pt-BR
    if key not in _LOOKUP and len(key) == 5 and key[2] in "-_":
        key = key[:2]
    return _LOOKUP.get(key)


def localized_language_name(nfo_language: str, value: str) -> str:
    """
    Name a language in the NFO language (English when no table exists)

    Args:
        nfo_language: Target language code for the name
        value: Code or name of the language to render

    Returns:
        The localized name, or the value unchanged if it is not recognised
    """
    iso2 = iso2_from_localized(value)
    if iso2 is None:
        return value
    return _LANGUAGES[iso2][_NAME_COLUMNS[name_language(nfo_language)]]
