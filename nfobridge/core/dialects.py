"""
NFO dialects: per-application overrides of the common writer steps
"""
import re
from typing import Dict, List
from urllib.parse import quote_plus

from nfobridge.core import record as rec
from nfobridge.core.writer import (
    COMMON_COLLECTION,
    COMMON_MOVIE,
    Builder,
    Dialect,
    first_http_trailer,
    localized_genres,
    localized_languages,
    studios_to_write,
    add_fanart_nested,
    main_rating,
)
from nfobridge.utils.validation import require_choice
from nfobridge.utils.values import format_one_decimal


YOUTUBE_PATTERN = re.compile(
    r"^((?:https?:)?//)?((?:www|m)\.)?((?:youtube\.com|youtu.be))(/(?:[\w\-]+\?v=|embed/|v/)?)([\w\-]+)(\S+)?$"
)
HD_TRAILERS_PATTERN = re.compile(
    r"https?://.*(apple.com|yahoo-redir|yahoo.com|youtube.com|moviefone.com|ign.com|hd-trailers.net|aol.com).*"
)


# --- kodi ---------------------------------------------------------------------

def add_kodi_ratings(b: Builder) -> Builder:
    """
    <ratings><rating name="imdb" max="10" default="true"><value>8.1</value><votes>1</votes></rating></ratings>
    """
    ratings = b.add("ratings")
    default = main_rating(b.record.ratings, b.settings.rating_sources)
    for key, rating in b.record.ratings.items():
        if key == rec.RATING_USER:
            continue
        element = b.add(
            "rating",
            parent=ratings,
            name="themoviedb" if key == rec.TMDB else key,
            max=str(rating.max_value),
            default="true" if rating is default else "false",
        )
        b.add("value", format_one_decimal(rating.rating), parent=element)
        b.add("votes", str(rating.votes), parent=element)
    return b


def add_kodi_set(b: Builder) -> Builder:
    movie_set = b.record.movie_sets[0] if b.record.movie_sets else None
    if movie_set is None:
        b.add("set")
        return b

    attributes = {"tmdbcolid": str(movie_set.tmdb_id)} if movie_set.tmdb_id > 0 else {}
    element = b.add("set", **attributes)
    b.add("name", movie_set.name, parent=element)
    b.add("overview", movie_set.overview, parent=element)
    return b


def kodi_trailer_url(url: str) -> str:
    """Rewrite trailer URLs into the Kodi plugin form Kodi can play directly"""
    match = YOUTUBE_PATTERN.match(url)
    if match:
        return f"plugin://plugin.video.youtube/?action=play_video&videoid={match.group(5)}"
    match = HD_TRAILERS_PATTERN.match(url)
    if match:
        return f"plugin://plugin.video.hdtrailers_net/video/{match.group(1)}/{quote_plus(url, safe='')}"
    return url


def add_kodi_trailer(b: Builder) -> Builder:
    trailer = first_http_trailer(b)
    b.add("trailer", kodi_trailer_url(trailer) if trailer else "")
    return b


# --- mediaportal ----------------------------------------------------------------

def add_genres_wrapped(b: Builder) -> Builder:
    genres = b.add("genres")
    for genre in localized_genres(b):
        b.add("genre", genre, parent=genres)
    return b


def add_country_raw(b: Builder) -> Builder:
    b.add("country", "/".join(b.record.countries))
    return b


def add_country_joined(b: Builder) -> Builder:
    b.add("country", " / ".join(b.record.countries))
    return b


def add_studio_raw(b: Builder) -> Builder:
    b.add("studio", " / ".join(studios_to_write(b)))
    return b


def add_credits_single(b: Builder) -> Builder:
    b.add("credits", ", ".join(p.name for p in b.record.credits))
    return b


def add_directors_single(b: Builder) -> Builder:
    b.add("director", ", ".join(p.name for p in b.record.directors))
    return b


def add_languages_piped(b: Builder) -> Builder:
    b.add("languages", "|".join(localized_languages(b)))
    return b


def add_language_piped(b: Builder) -> Builder:
    b.add("language", "|".join(localized_languages(b)))
    return b


def add_imdb_then_id(b: Builder) -> Builder:
    value = b.record.ids.get(rec.IMDB, "")
    b.add("imdb", str(value))
    b.add("id", str(value))
    return b


# --- jellyfin -------------------------------------------------------------------

def add_lockdata_always(b: Builder) -> Builder:
    b.add("lockdata", "true")
    return b


KODI = COMMON_MOVIE.derive(
    "kodi",
    rating=add_kodi_ratings,
    votes=None,
    set=add_kodi_set,
    trailer=add_kodi_trailer,
)

MEDIAPORTAL_LEGACY = COMMON_MOVIE.derive(
    "mediaportal_legacy",
    fanart=add_fanart_nested,
    mpaa=None,
    genres=add_genres_wrapped,
    country=add_country_raw,
    studios=add_studio_raw,
    credits=add_credits_single,
    directors=add_directors_single,
    languages=add_languages_piped,
)

MEDIAPORTAL_MYVIDEO = COMMON_MOVIE.derive(
    "mediaportal_myvideo",
    fanart=add_fanart_nested,
    id=add_imdb_then_id,
    country=add_country_joined,
    studios=add_studio_raw,
    credits=add_credits_single,
    directors=add_directors_single,
    languages=add_language_piped,
)

# emby and jellyfin must never see artwork urls in the sidecar file
EMBY = COMMON_MOVIE.derive("emby", thumb=None, fanart=None)
JELLYFIN = EMBY.derive("jellyfin", lockdata=add_lockdata_always)

MOVIE_DIALECTS: Dict[str, Dialect] = {
    d.name: d for d in (KODI, MEDIAPORTAL_LEGACY, MEDIAPORTAL_MYVIDEO, EMBY, JELLYFIN)
}

_COLLECTION_KODI = COMMON_COLLECTION.derive("kodi")
_COLLECTION_NO_ARTWORK = COMMON_COLLECTION.derive("emby", thumb=None, fanart=None)

COLLECTION_DIALECTS: Dict[str, Dialect] = {
    "kodi": _COLLECTION_KODI,
    "mediaportal_legacy": COMMON_COLLECTION.derive("mediaportal_legacy"),
    "mediaportal_myvideo": COMMON_COLLECTION.derive("mediaportal_myvideo"),
    "emby": _COLLECTION_NO_ARTWORK,
    "jellyfin": _COLLECTION_NO_ARTWORK.derive("jellyfin", lockdata=add_lockdata_always),
}


def dialect_names() -> List[str]:
    return list(MOVIE_DIALECTS)


def get_movie_dialect(name: str) -> Dialect:
    """
    Look up a movie dialect by name

    Raises:
        ValidationError: If the dialect is unknown
    """
    require_choice(name, MOVIE_DIALECTS, "dialect")
    return MOVIE_DIALECTS[name]


def get_collection_dialect(name: str) -> Dialect:
    require_choice(name, COLLECTION_DIALECTS, "dialect")
    return COLLECTION_DIALECTS[name]
