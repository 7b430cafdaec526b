import pytest

from nfobridge.core.certification import Certification, format_certification, parse_certification


@pytest.mark.parametrize("text, expected", [
    ("PG-13", Certification("US", "PG-13")),
    ("US:PG-13", Certification("US", "PG-13")),
    ("Rated PG-13", Certification("US", "PG-13")),
    ("US_PG13", Certification("US", "PG-13")),
    ("United States: PG-13", Certification("US", "PG-13")),
    ("DE:FSK 12 / US:R", Certification("US", "R")),
    ("FSK 16", Certification("DE", "FSK 16")),
])
def test_parse_certification(text, expected):
    assert parse_certification(text, "US") == expected


def test_unknown_certifications_survive_verbatim():
    assert parse_certification("Family Friendly", "US") == Certification("US", "Family Friendly")
    assert parse_certification("XX:Weird", "US") == Certification("XX", "Weird")


def test_blank_certification_is_none():
    assert parse_certification("", "US") is None
    assert parse_certification(None, "US") is None


@pytest.mark.parametrize("style, expected", [
    ("short", "PG-13"),
    ("medium", "US: PG-13"),
    ("medium_full", "United States: PG-13"),
    ("large", "US:PG-13 / US:Rated PG-13 / US:PG13"),
    ("technical", "US_PG13"),
])
def test_format_certification(style, expected):
    assert format_certification(Certification("US", "PG-13"), style) == expected


@pytest.mark.parametrize("style", ["short", "medium", "medium_full", "large", "technical"])
def test_every_style_parses_back(style):
    cert = Certification("US", "PG-13")
    assert parse_certification(format_certification(cert, style), "US") == cert


def test_format_without_certification():
    assert format_certification(None, "medium") == ""
