import xml.etree.ElementTree as ET
from dataclasses import replace

import pytest

from nfobridge.core.dialects import (
    COLLECTION_DIALECTS,
    MOVIE_DIALECTS,
    dialect_names,
    get_collection_dialect,
    get_movie_dialect,
    kodi_trailer_url,
)
from nfobridge.core.mapping import movie_set_to_record, movie_to_record, record_to_movie, record_to_movie_set
from nfobridge.core.reader import parse_movie_nfo, parse_movie_set_nfo
from nfobridge.core.writer import render
from nfobridge.utils.exceptions import ValidationError


def _root(xml: str) -> ET.Element:
    return ET.fromstring(xml.split("-->", 1)[1])


def _render(movie, name, settings, now, prior=None):
    record = movie_to_record(movie, settings, prior)
    return render(record, record.unsupported_fragments, get_movie_dialect(name), settings, now=now)


def test_registry():
    assert dialect_names() == ["kodi", "mediaportal_legacy", "mediaportal_myvideo", "emby", "jellyfin"]
    assert set(COLLECTION_DIALECTS) == set(MOVIE_DIALECTS)
    with pytest.raises(ValidationError):
        get_movie_dialect("plex")
    with pytest.raises(ValidationError):
        get_collection_dialect("plex")


def test_kodi_writes_nested_ratings_and_set(movie, settings, now):
    root = _root(_render(movie, "kodi", settings, now))
    ratings = root.findall("ratings/rating")
    assert [r.get("name") for r in ratings] == ["imdb", "themoviedb"]
    assert [r.get("default") for r in ratings] == ["true", "false"]
    assert ratings[0].find("value").text == "8.7"
    assert ratings[0].find("votes").text == "1900000"
    assert root.find("votes") is None
    assert root.find("userrating").text == "9"

    movie_set = root.find("set")
    assert movie_set.get("tmdbcolid") == "2344"
    assert movie_set.find("name").text == "The Matrix Collection"
    assert movie_set.find("overview").text == "All Matrix movies"


def test_kodi_rewrites_trailers():
    assert kodi_trailer_url("https://www.youtube.com/watch?v=vKQi3bBA1y8") == \
        "plugin://plugin.video.youtube/?action=play_video&videoid=vKQi3bBA1y8"
    assert kodi_trailer_url("https://movietrailers.apple.com/movies/x.mov").startswith(
        "plugin://plugin.video.hdtrailers_net/video/apple.com/https%3A%2F%2F")
    assert kodi_trailer_url("https://example.com/t.mp4") == "https://example.com/t.mp4"


def test_common_dialect_writes_flat_rating_and_plain_set(movie, settings, now):
    root = _root(_render(movie, "emby", settings, now))
    assert root.find("rating").text == "8.7"
    assert root.find("votes").text == "1900000"
    assert root.find("ratings") is None
    assert root.find("set").text == "The Matrix Collection"
    assert root.find("trailer").text == "https://www.youtube.com/watch?v=vKQi3bBA1y8"


@pytest.mark.parametrize("name", ["emby", "jellyfin"])
def test_emby_family_never_writes_artwork(movie, settings, now, name):
    root = _root(_render(movie, name, settings, now))
    assert root.find("thumb") is None
    assert root.find("fanart") is None


def test_jellyfin_always_locks(movie, settings, now):
    assert _root(_render(movie, "jellyfin", settings, now)).find("lockdata").text == "true"
    assert _root(_render(movie, "emby", settings, now)).find("lockdata") is None


def test_mediaportal_legacy_shape(movie, settings, now):
    root = _root(_render(movie, "mediaportal_legacy", settings, now))
    assert root.find("mpaa") is None
    assert [g.text for g in root.findall("genres/genre")] == ["Action", "Science Fiction"]
    assert root.find("genre") is None
    assert root.find("fanart/thumb").text == "https://image.tmdb.org/t/p/original/fanart.jpg"
    assert [s.text for s in root.findall("studio")] == ["Warner Bros. / Village Roadshow Pictures"]
    assert root.find("director").text == "Lana Wachowski"
    assert root.find("director").attrib == {}
    assert root.find("languages").text == "English"


def test_mediaportal_myvideo_shape(movie, settings, now):
    root = _root(_render(movie, "mediaportal_myvideo", settings, now))
    names = [e.tag for e in root if isinstance(e.tag, str)]
    assert names.index("imdb") + 1 == names.index("id")
    assert root.find("imdb").text == "tt0133093"
    assert root.find("language").text == "English"
    assert root.find("languages") is None
    assert root.find("mpaa").text == "R"


@pytest.mark.parametrize("name", list(MOVIE_DIALECTS))
def test_rewrite_of_own_output_is_identical(movie, settings, now, name):
    first = _render(movie, name, settings, now)
    parsed = parse_movie_nfo(first, settings=settings)
    assert parsed.is_valid_nfo()
    second = _render(record_to_movie(parsed), name, settings, now, prior=parsed)
    assert second == first


@pytest.mark.parametrize("name", list(MOVIE_DIALECTS))
def test_foreign_tags_survive_a_rewrite(foreign_nfo, settings, now, name):
    prior = parse_movie_nfo(foreign_nfo, settings=settings)
    root = _root(_render(record_to_movie(prior), name, settings, now, prior=prior))
    assert root.find("myscraper_score").text == "42"
    assert [e.text for e in root.findall("custom/entry")] == ["one", "two"]
    assert root.find("custom").get("source") == "x"


@pytest.mark.parametrize("name", list(COLLECTION_DIALECTS))
def test_collection_rewrite_is_identical(movie_set, settings, now, name):
    dialect = get_collection_dialect(name)
    first = render(movie_set_to_record(movie_set, settings), [], dialect, settings, now=now)
    parsed = parse_movie_set_nfo(first, settings=settings)
    assert parsed.title == "The Matrix Collection"
    record = movie_set_to_record(record_to_movie_set(parsed), settings, parsed)
    assert render(record, record.unsupported_fragments, dialect, settings, now=now) == first


@pytest.mark.parametrize("name", list(MOVIE_DIALECTS))
def test_delimited_genre_is_split_and_stable(movie, settings, now, name):
    movie.genres = ["Action/Adventure", "Drama"]
    first = _render(movie, name, settings, now)
    parsed = parse_movie_nfo(first, settings=settings)
    assert parsed.genres == ["Action", "Adventure", "Drama"]
    assert _render(record_to_movie(parsed), name, settings, now, prior=parsed) == first


def test_genres_are_written_in_the_nfo_language(movie, settings, now):
    german = replace(settings, nfo_language="de")
    movie.genres = ["Adventure", "Science Fiction", "War", "Space Opera"]
    first = _render(movie, "kodi", german, now)
    assert [g.text for g in _root(first).findall("genre")] == ["Abenteuer", "Science Fiction", "Kriegsfilm", "Space Opera"]

    parsed = parse_movie_nfo(first, settings=german)
    assert parsed.genres == ["Adventure", "Science Fiction", "War", "Space Opera"]
    assert _render(record_to_movie(parsed), "kodi", german, now, prior=parsed) == first


def test_localized_genres_in_wrapped_dialect(movie, settings, now):
    movie.genres = ["Comedy"]
    root = _root(_render(movie, "mediaportal_legacy", replace(settings, nfo_language="de"), now))
    assert [g.text for g in root.findall("genres/genre")] == ["Komödie"]


def test_namespaced_and_commented_fragments_survive_a_rewrite(settings, now):
    prior = parse_movie_nfo(
        '<movie><title>Heat</title><ext:foo xmlns:ext="urn:x">1</ext:foo>'
        "<custom><!-- keep --><a>1</a></custom></movie>",
        settings=settings,
    )
    xml = _render(record_to_movie(prior), "kodi", settings, now, prior=prior)
    assert '<ext:foo xmlns:ext="urn:x">1</ext:foo>' in xml
    assert "<!-- keep -->" in xml
    assert parse_movie_nfo(xml, settings=settings).unsupported_fragments == prior.unsupported_fragments
