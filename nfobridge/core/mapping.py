"""
Mapping between parsed MediaRecords and the Movie / MovieSet domain entities
"""
import os
from datetime import datetime
from typing import Dict, Optional

from nfobridge.config.settings import NfoSettings
from nfobridge.core import record as rec
from nfobridge.core.entities import (
    ArtworkType,
    CastMember,
    MediaRating,
    MediaTrailer,
    Movie,
    MovieSet,
    MovieSetRef,
    edition_from_text,
    edition_to_text,
    media_source_from_text,
    source_to_text,
)
from nfobridge.core.record import MediaRecord, Person, Rating, SetCandidate
from nfobridge.utils.values import is_blank, is_http_url, parse_int, split


# record list attribute <-> artwork type
ARTWORK_FIELDS = (
    ("posters", ArtworkType.POSTER),
    ("fanarts", ArtworkType.FANART),
    ("banners", ArtworkType.BANNER),
    ("cleararts", ArtworkType.CLEARART),
    ("clearlogos", ArtworkType.CLEARLOGO),
    ("discarts", ArtworkType.DISC),
    ("thumbs", ArtworkType.THUMB),
    ("keyarts", ArtworkType.KEYART),
    ("logos", ArtworkType.LOGO),
)

OUTLINE_MIN_LENGTH = 20


# --- people -------------------------------------------------------------------

def _person_to_cast(person: Person, default_role: str = "") -> CastMember:
    ids: Dict = {}
    tmdb_id = parse_int(person.tmdb_id, 0)
    if tmdb_id > 0:
        ids[rec.TMDB] = tmdb_id
    if not is_blank(person.imdb_id):
        ids[rec.IMDB] = person.imdb_id.strip()
    tvdb_id = parse_int(person.tvdb_id, 0)
    if tvdb_id > 0:
        ids[rec.TVDB] = tvdb_id
    return CastMember(
        name=person.name,
        role=person.role or default_role,
        thumb_url=person.thumb,
        profile_url=person.profile,
        ids=ids,
    )


def _cast_to_person(member: CastMember, drop_role: str = "") -> Person:
    ids = member.ids
    return Person(
        name=member.name,
        # the generic role the reader assigned is not written back
        role="" if member.role == drop_role else member.role,
        thumb=member.thumb_url,
        profile=member.profile_url,
        tmdb_id=str(ids[rec.TMDB]) if rec.TMDB in ids else "",
        imdb_id=str(ids.get(rec.IMDB, "")),
        tvdb_id=str(ids[rec.TVDB]) if rec.TVDB in ids else "",
    )


# --- movie set reference ------------------------------------------------------

def _choose_set(record: MediaRecord) -> Optional[MovieSetRef]:
    """Prefer the candidate that carries a TMDB collection id"""
    if not record.movie_sets:
        return None
    candidate = next((c for c in record.movie_sets if c.tmdb_id > 0), record.movie_sets[0])
    tmdb_id = candidate.tmdb_id
    if tmdb_id <= 0:
        tmdb_id = parse_int(record.ids.get(rec.TMDB_SET, record.ids.get("tmdbset", 0)), 0)
    return MovieSetRef(title=candidate.name, plot=candidate.overview, tmdb_id=max(tmdb_id, 0))


# --- record -> movie ----------------------------------------------------------

def record_to_movie(record: MediaRecord) -> Movie:
    """
    Build a Movie from a parsed movie NFO record

    Args:
        record: Parsed record

    Returns:
        A fresh Movie; file system fields are left empty
    """
    movie = Movie(
        title=record.title,
        original_title=record.original_title,
        sort_title=record.sort_title,
        plot=record.plot,
        tagline=record.tagline,
        runtime=record.runtime,
        top250=record.top250,
        certification=record.certification,
        release_date=record.release_date,
        watched=record.watched,
        playcount=record.playcount,
        spoken_languages=record.languages,
        country="/".join(record.countries),
        production_company=" / ".join(record.studios),
        media_source=media_source_from_text(record.source),
        edition=edition_from_text(record.edition),
        original_filename=record.original_filename,
        note=record.user_note,
        date_added=record.date_added,
        last_played=record.last_played,
    )
    if record.year > -1:
        movie.year = record.year

    movie.ids = dict(record.ids)
    movie.ratings = {
        key: MediaRating(id=r.id, rating=r.rating, votes=r.votes, max_value=r.max_value)
        for key, r in record.ratings.items()
    }
    for field_name, artwork_type in ARTWORK_FIELDS:
        urls = getattr(record, field_name)
        if urls:
            movie.artwork_urls[artwork_type] = urls[0]

    movie.genres = list(record.genres)
    movie.tags = list(record.tags)
    movie.showlinks = list(record.showlinks)
    movie.trailers = [MediaTrailer(url=url, in_nfo=True) for url in record.trailers if is_http_url(url)]

    movie.actors = [_person_to_cast(p) for p in record.actors]
    movie.directors = [_person_to_cast(p, "Director") for p in record.directors]
    movie.writers = [_person_to_cast(p, "Writer") for p in record.credits]
    movie.producers = [_person_to_cast(p) for p in record.producers]

    movie.movie_set = _choose_set(record)
    return movie


# --- movie -> record ----------------------------------------------------------

def create_outline(plot: str, first_sentence: bool) -> str:
    """
    Derive an outline from the plot

    With first_sentence, whole sentences are collected until the outline
    reaches OUTLINE_MIN_LENGTH characters.
    """
    if not first_sentence:
        return plot
    outline = ""
    for sentence in plot.split("."):
        outline += sentence + "."
        if len(outline) >= OUTLINE_MIN_LENGTH:
            break
    return outline.strip()


def _date_added(movie: Movie, settings: NfoSettings) -> Optional[datetime]:
    field_name = settings.date_added_field
    if field_name == "file_creation_date":
        value = movie.file_creation_date
    elif field_name == "file_last_modified_date":
        value = movie.file_last_modified_date
    elif field_name == "release_date" and movie.release_date is not None:
        value = datetime.combine(movie.release_date, datetime.min.time())
    else:
        value = movie.date_added
    return value or movie.date_added


def movie_to_record(movie: Movie, settings: NfoSettings, prior: Optional[MediaRecord] = None) -> MediaRecord:
    """
    Flatten a Movie into a record ready for the writer

    Args:
        movie: The movie to write
        settings: Settings snapshot
        prior: Record parsed from the previous NFO, if any; supplies the
            outline, a floor for the playcount and the passthrough fragments

    Returns:
        The record to render
    """
    record = MediaRecord(
        title=movie.title,
        original_title=movie.original_title,
        sort_title=movie.sort_title,
        year=movie.year,
        top250=movie.top250,
        plot=movie.plot,
        tagline=movie.tagline,
        runtime=movie.runtime,
        certification=movie.certification,
        release_date=movie.release_date,
        watched=movie.watched,
        languages=movie.spoken_languages,
        source=source_to_text(movie.media_source),
        edition=edition_to_text(movie.edition),
        user_note=movie.note,
        last_played=movie.last_played,
        lockdata=settings.write_lockdata,
    )

    if settings.create_outline:
        record.outline = create_outline(movie.plot, settings.outline_first_sentence)
    elif prior is not None:
        record.outline = prior.outline

    playcount = max(movie.playcount, prior.playcount if prior is not None else 0)
    if movie.watched and playcount == 0:
        playcount = 1
    record.playcount = playcount

    record.date_added = _date_added(movie, settings)
    record.original_filename = movie.original_filename or os.path.basename(movie.main_video_file())

    record.ids = dict(movie.ids)
    record.ratings = {
        key: Rating(id=r.id, rating=r.rating, votes=r.votes, max_value=r.max_value)
        for key, r in movie.ratings.items()
    }
    for field_name, artwork_type in ARTWORK_FIELDS:
        url = movie.artwork_urls.get(artwork_type)
        if not is_blank(url):
            getattr(record, field_name).append(url)

    record.genres = [g for value in movie.genres for g in split(value)]
    record.countries = split(movie.country)
    record.studios = split(movie.production_company)
    record.tags = list(movie.tags)
    record.showlinks = list(movie.showlinks)
    record.trailers = [t.url for t in movie.trailers if t.in_nfo and is_http_url(t.url)]

    record.actors = [_cast_to_person(m) for m in movie.actors]
    record.directors = [_cast_to_person(m, "Director") for m in movie.directors]
    record.credits = [_cast_to_person(m, "Writer") for m in movie.writers]
    record.producers = [_cast_to_person(m) for m in movie.producers]

    if movie.movie_set is not None:
        ref = movie.movie_set
        record.movie_sets.append(SetCandidate(name=ref.title, overview=ref.plot, tmdb_id=ref.tmdb_id))

    if prior is not None:
        record.unsupported_fragments = list(prior.unsupported_fragments)
    return record


# --- movie sets ---------------------------------------------------------------

def record_to_movie_set(record: MediaRecord) -> MovieSet:
    """Build a MovieSet from a parsed collection record; a plain tmdb id is the collection id"""
    ids: Dict = {}
    for key, value in record.ids.items():
        if key == rec.TMDB:
            ids.setdefault(rec.TMDB_SET, value)
        else:
            ids[key] = value

    movie_set = MovieSet(
        title=record.title,
        sort_title=record.sort_title,
        plot=record.plot,
        ids=ids,
        genres=list(record.genres),
        studios=list(record.studios),
        tags=list(record.tags),
        note=record.user_note,
        date_added=record.date_added,
    )
    for field_name, artwork_type in ARTWORK_FIELDS:
        urls = getattr(record, field_name)
        if urls:
            movie_set.artwork_urls[artwork_type] = urls[0]
    return movie_set


def movie_set_to_record(movie_set: MovieSet, settings: NfoSettings,
                        prior: Optional[MediaRecord] = None) -> MediaRecord:
    record = MediaRecord(
        title=movie_set.title,
        sort_title=movie_set.sort_title,
        plot=movie_set.plot,
        user_note=movie_set.note,
        date_added=movie_set.date_added,
        lockdata=settings.write_lockdata,
    )
    record.ids = dict(movie_set.ids)
    for field_name, artwork_type in ARTWORK_FIELDS:
        url = movie_set.artwork_urls.get(artwork_type)
        if not is_blank(url):
            getattr(record, field_name).append(url)
    record.genres = [g for value in movie_set.genres for g in split(value)]
    record.studios = list(movie_set.studios)
    record.tags = list(movie_set.tags)
    if prior is not None:
        record.unsupported_fragments = list(prior.unsupported_fragments)
    return record

