import logging
from datetime import date, datetime

import pytest

from nfobridge.utils.exceptions import DateProcessingError
from nfobridge.utils import languages
from nfobridge.utils.genres import canonical_genre, localized_genre_name
from nfobridge.utils.languages import iso2_from_localized, localized_language_name, name_language
from nfobridge.utils.validation import require_choice, sanitize_filename, validate_imdb_id
from nfobridge.utils.exceptions import ValidationError
from nfobridge.utils.values import (
    coerce_id,
    format_at_most_one_decimal,
    format_date,
    format_datetime,
    format_one_decimal,
    is_http_url,
    parse_date,
    parse_float,
    parse_int,
    split,
)


def test_split_on_all_legacy_delimiters():
    assert split("Action, Drama / Crime|Thriller;War") == ["Action", "Drama", "Crime", "Thriller", "War"]
    assert split("") == []
    assert split(None) == []
    assert split(" , ") == []


def test_parse_int_tolerates_group_separators():
    assert parse_int("1,234") == 1234
    assert parse_int("1.234.567") == 1234567
    assert parse_int(" 42 ") == 42


def test_parse_int_default_and_errors():
    assert parse_int("", 0) == 0
    assert parse_int("abc", -1) == -1
    with pytest.raises(ValueError):
        parse_int("abc")


def test_parse_float_rejects_non_finite():
    assert parse_float("7.5") == 7.5
    with pytest.raises(ValueError):
        parse_float("nan")
    with pytest.raises(ValueError):
        parse_float(None)


def test_decimal_formatting():
    assert format_one_decimal(8.0) == "8.0"
    assert format_one_decimal(8.66) == "8.7"
    assert format_at_most_one_decimal(8.0) == "8"
    assert format_at_most_one_decimal(7.5) == "7.5"
    assert format_at_most_one_decimal(0) == "0"


def test_parse_date_formats():
    assert parse_date("2020-01-02 03:04:05") == datetime(2020, 1, 2, 3, 4, 5)
    assert parse_date("1999-03-31") == datetime(1999, 3, 31)
    assert parse_date("31.03.1999") == datetime(1999, 3, 31)
    assert parse_date("2020-01-02T03:04:05Z") == datetime(2020, 1, 2, 3, 4, 5)
    assert parse_date("  ") is None


def test_parse_date_raises_on_garbage():
    with pytest.raises(DateProcessingError):
        parse_date("sometime last year")


def test_date_formatting():
    assert format_date(date(1999, 3, 31)) == "1999-03-31"
    assert format_datetime(datetime(2020, 1, 2, 3, 4, 5)) == "2020-01-02 03:04:05"
    assert format_datetime(date(2020, 1, 2)) == "2020-01-02 00:00:00"
    assert format_date(None) == ""


def test_coerce_id_keeps_imdb_ids_as_strings():
    assert coerce_id("603") == 603
    assert coerce_id("tt0133093") == "tt0133093"


def test_is_http_url():
    assert is_http_url("https://example.com/x.jpg")
    assert not is_http_url("/local/poster.jpg")
    assert not is_http_url("")


def test_language_lookup_and_localization():
    assert iso2_from_localized("German") == "de"
    assert iso2_from_localized("deu") == "de"
    assert iso2_from_localized("Deutsch") == "de"
    assert iso2_from_localized("en_US") == "en"
    assert iso2_from_localized("Klingon") is None
    assert localized_language_name("en", "de") == "German"
    assert localized_language_name("de", "en") == "Englisch"
    assert localized_language_name("en", "Klingon") == "Klingon"


def test_validation_helpers():
    assert validate_imdb_id("tt0133093")
    assert not validate_imdb_id("0133093")
    assert sanitize_filename("AC/DC: Live?") == "AC_DC_ Live_"
    with pytest.raises(ValidationError):
        require_choice("bogus", ("kodi", "emby"), "dialect")


def test_unsupported_nfo_language_falls_back_to_english_once(caplog, monkeypatch):
    monkeypatch.setattr(languages, "_reported_name_languages", set())
    with caplog.at_level(logging.WARNING, logger="NFOBridge"):
        assert localized_language_name("fr", "de") == "German"
        assert name_language("fr-FR") == "en"
    assert name_language("DE") == "de"
    assert caplog.text.count("No localized names for NFO language") == 1


def test_genre_names():
    assert canonical_genre(" komödie ") == "Comedy"
    assert canonical_genre("Sci-Fi") == "Science Fiction"
    assert canonical_genre("Space Opera") == "Space Opera"
    assert localized_genre_name("de", "Comedy") == "Komödie"
    assert localized_genre_name("de", "Sci-Fi") == "Science Fiction"
    assert localized_genre_name("en", "Kriegsfilm") == "War"
    assert localized_genre_name("de", "Space Opera") == "Space Opera"
