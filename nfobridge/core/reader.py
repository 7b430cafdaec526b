"""
Tolerant NFO reader

Detects the document shape by its root tag and runs an ordered list of
independent extraction steps over it. Each step claims its tag names up
front, so anything no step claimed is kept verbatim as a passthrough
fragment for the next write.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import unquote_plus

from lxml import etree as ET

from nfobridge.config.settings import NfoSettings
from nfobridge.core import record as rec
from nfobridge.core.certification import parse_certification
from nfobridge.core.record import (
    AudioStream,
    FileInfo,
    MediaRecord,
    Person,
    Rating,
    SetCandidate,
    SubtitleStream,
    VideoStream,
)
from nfobridge.core.tree import (
    attr,
    children,
    find_root,
    own_text,
    parse_document,
    serialize_fragment,
    single_child,
    tag_name,
    whole_text,
)
from nfobridge.utils.error_handler import safe_file_operation
from nfobridge.utils.exceptions import DateProcessingError
from nfobridge.utils.genres import canonical_genre
from nfobridge.utils.languages import iso2_from_localized
from nfobridge.utils.logging import _log
from nfobridge.utils.validation import validate_imdb_id
from nfobridge.utils.values import (
    coerce_id,
    is_blank,
    is_http_url,
    parse_bool,
    parse_date,
    parse_float,
    parse_int,
    split,
)


StepFunc = Callable[[ET.Element, MediaRecord, NfoSettings], Optional[str]]

_YOUTUBE_PLUGIN = re.compile(r"plugin://plugin\.video\.youtube/\?action=play_video&videoid=(.*)$")
_HDTRAILERS_PLUGIN = re.compile(r"plugin://plugin\.video\.hdtrailers_net/video/(?:.*\?/(.*)|[^/]*/([^/]*))$")

_RATING_ALIASES = {
    "themoviedb": rec.TMDB,
    "rottenTomatoes": rec.RATING_ROTTEN_TOMATOES,
    "metascore": rec.METACRITIC,
}

# thumb aspect -> record attribute
_ARTWORK_BUCKETS = {
    "poster": "posters",
    "banner": "banners",
    "clearart": "cleararts",
    "clearlogo": "clearlogos",
    "discart": "discarts",
    "landscape": "thumbs",
    "keyart": "keyarts",
    "logo": "logos",
}

_PERSON_ID_FIELDS = (("tmdbid", "tmdb_id"), ("imdbid", "imdb_id"), ("tvdbid", "tvdb_id"))

MOVIE_ROOTS = ("movie", "recording")
COLLECTION_ROOTS = ("collection",)


@dataclass(frozen=True)
class ReadStep:
    name: str
    tags: Tuple[str, ...]
    func: StepFunc


def _text_of(root: ET.Element, tag: str) -> Optional[str]:
    element = single_child(root, tag)
    return own_text(element) if element is not None else None


def _warn_join(problems: List[str]) -> Optional[str]:
    return "; ".join(problems) if problems else None


def _read_int(text: Optional[str], what: str, problems: List[str]) -> Optional[int]:
    """Parse an int; blank text is silently absent, garbage is reported"""
    if is_blank(text):
        return None
    try:
        return parse_int(text)
    except ValueError:
        problems.append(f"invalid {what} '{text}'")
        return None


# --- simple text fields -----------------------------------------------------

def _read_title(root, record, settings):
    text = _text_of(root, "title")
    if text is not None:
        record.title = text


def _read_original_title(root, record, settings):
    text = _text_of(root, "originaltitle")
    if text is not None:
        record.original_title = text


def _read_sort_title(root, record, settings):
    text = _text_of(root, "sorttitle")
    if text is not None:
        record.sort_title = text


def _read_plot(root, record, settings):
    element = single_child(root, "plot")
    if element is not None:
        record.plot = whole_text(element)


def _read_description(root, record, settings):
    element = single_child(root, "description")
    if element is not None:
        record.plot = whole_text(element)


def _read_outline(root, record, settings):
    element = single_child(root, "outline")
    if element is not None:
        record.outline = whole_text(element)


def _read_tagline(root, record, settings):
    element = single_child(root, "tagline")
    if element is not None:
        record.tagline = whole_text(element)


def _read_number(tag: str, field_name: str) -> StepFunc:
    """Step reading one integer tag into a record field"""
    def step(root, record, settings):
        problems = []
        value = _read_int(_text_of(root, tag), tag, problems)
        if value is not None:
            setattr(record, field_name, value)
        return _warn_join(problems)
    return step


def _read_plain(tag: str, field_name: str) -> StepFunc:
    def step(root, record, settings):
        text = _text_of(root, tag)
        if text is not None:
            setattr(record, field_name, text)
    return step


# --- ratings and sets -------------------------------------------------------

def _read_ratings(root, record, settings):
    """
    Ratings come in three shapes that may all be present at once

    Flat <rating>/<votes>, <userrating>, and the nested <ratings> block.
    Emby adds a single <criticrating> on a 0-100 scale. Later shapes
    overwrite earlier ones for the same key.
    """
    problems = []

    element = single_child(root, "rating")
    if element is not None:
        rating = Rating(id=rec.RATING_NFO)
        try:
            rating.rating = parse_float(own_text(element))
        except ValueError:
            if not is_blank(own_text(element)):
                problems.append(f"invalid rating '{own_text(element)}'")
        votes = _read_int(_text_of(root, "votes"), "votes", problems)
        if votes is not None:
            rating.votes = votes
        if rating.rating > 0:
            record.ratings[rating.id] = rating

    element = single_child(root, "userrating")
    if element is not None and not is_blank(own_text(element)):
        try:
            value = parse_float(own_text(element))
            if value > 0:
                record.ratings[rec.RATING_USER] = Rating(id=rec.RATING_USER, rating=value)
        except ValueError:
            problems.append(f"invalid userrating '{own_text(element)}'")

    block = single_child(root, "ratings")
    for child in children(block, "rating"):
        name = attr(child, "name")
        rating = Rating(id=_RATING_ALIASES.get(name, name))

        max_value = parse_int(attr(child, "max"), 0)
        if max_value > 0:
            rating.max_value = max_value

        for value_node in children(child):
            if tag_name(value_node) == "value":
                try:
                    rating.rating = parse_float(own_text(value_node))
                except ValueError:
                    problems.append(f"invalid rating value for '{name}'")
            elif tag_name(value_node) == "votes":
                rating.votes = parse_int(own_text(value_node), rating.votes)

        if not is_blank(rating.id) and rating.rating > 0:
            record.ratings[rating.id] = rating

    element = single_child(root, "criticrating")
    if element is not None:
        value = parse_int(own_text(element), 0)
        if value > 0:
            record.ratings[rec.RATING_ROTTEN_TOMATOES] = Rating(
                id=rec.RATING_ROTTEN_TOMATOES, rating=float(value), max_value=100
            )

    return _warn_join(problems)


def _read_sets(root, record, settings):
    wrapper = single_child(root, "sets")
    if wrapper is not None:
        # mediaportal: <sets><set order="1">name</set></sets>
        for child in children(wrapper, "set"):
            if not is_blank(own_text(child)):
                record.movie_sets.append(SetCandidate(name=own_text(child)))
        return None

    for child in children(root, "set"):
        tmdb_id = parse_int(attr(child, "tmdbcolid"), 0)
        if children(child):
            candidate = SetCandidate(tmdb_id=tmdb_id)
            for set_child in children(child):
                name = tag_name(set_child)
                if name in ("name", "setname"):
                    candidate.name = own_text(set_child)
                elif name in ("overview", "setdescription"):
                    candidate.overview = own_text(set_child)
            if not is_blank(candidate.name):
                record.movie_sets.append(candidate)
        elif not is_blank(own_text(child)):
            record.movie_sets.append(SetCandidate(name=own_text(child), tmdb_id=tmdb_id))
    return None


# --- artwork ----------------------------------------------------------------

def _read_thumbs(root, record, settings):
    for element in children(root, "thumb"):
        url = own_text(element)
        if not is_http_url(url):
            continue
        aspect = attr(element, "aspect")
        if is_blank(aspect):
            record.posters.append(url)
            continue
        bucket = _ARTWORK_BUCKETS.get(aspect)
        if bucket:
            getattr(record, bucket).append(url)


def _read_fanart(root, record, settings):
    fanart = single_child(root, "fanart")
    if fanart is None:
        return
    nested = children(fanart, "thumb")
    if nested:
        record.fanarts.extend(own_text(t) for t in nested if is_http_url(own_text(t)))
    elif is_http_url(own_text(fanart)):
        record.fanarts.append(own_text(fanart))


# --- certification and ids --------------------------------------------------

def _read_certification(root, record, settings):
    element = single_child(root, "certification")
    if element is None or is_blank(own_text(element)):
        element = single_child(root, "mpaa")
    if element is not None:
        record.certification = parse_certification(own_text(element), settings.certification_country)


def _read_certification_in_rating(root, record, settings):
    text = _text_of(root, "rating")
    if text is not None:
        record.certification = parse_certification(text, settings.certification_country)


def _put_id(ids: Dict, key: str, value: str) -> None:
    if not is_blank(key) and not is_blank(value):
        ids[key] = coerce_id(value.strip())


def _read_ids_block(root: ET.Element, record: MediaRecord) -> None:
    block = single_child(root, "ids")
    if block is None:
        return
    # old style: <ids><entry><key>imdb</key><value>tt..</value></entry></ids>
    for entry in children(block, "entry"):
        key = single_child(entry, "key")
        value = single_child(entry, "value")
        if key is not None and value is not None:
            _put_id(record.ids, own_text(key), own_text(value))
    # new style: <ids><imdb>tt..</imdb></ids>
    for entry in children(block):
        if tag_name(entry) == "entry":
            continue
        # keep the original case, e.g. tmdbSet
        key = entry.tag.split("}", 1)[-1]
        _put_id(record.ids, key, own_text(entry))


def _read_ids(root, record, settings):
    problems = []

    # a bare <id> only counts when it is recognisably an IMDb id
    for tag in ("id", "imdb", "imdbid"):
        text = _text_of(root, tag)
        if text is not None and validate_imdb_id(text.strip()):
            record.ids.setdefault(rec.IMDB, text.strip())

    tmdb_id = _read_int(_text_of(root, "tmdbid"), "tmdbId", problems)
    if tmdb_id is not None:
        record.ids[rec.TMDB] = tmdb_id

    for element in children(root, "uniqueid"):
        _put_id(record.ids, attr(element, "type"), own_text(element))

    _read_ids_block(root, record)

    collection_id = _read_int(_text_of(root, "tmdbcollectionid"), "tmdbCollectionId", problems)
    if collection_id is not None:
        record.ids[rec.TMDB_SET] = collection_id

    return _warn_join(problems)


def _read_collection_ids(root, record, settings):
    problems = []
    tmdb_id = _read_int(_text_of(root, "tmdbid"), "tmdbid", problems)
    if tmdb_id is not None:
        record.ids[rec.TMDB] = tmdb_id

    for element in children(root, "uniqueid"):
        key = attr(element, "type")
        _put_id(record.ids, rec.TMDB_SET if key == rec.TMDB else key, own_text(element))

    _read_ids_block(root, record)
    return _warn_join(problems)


# --- multi value fields -----------------------------------------------------

def _split_or_verbatim(root: ET.Element, tag: str) -> List[str]:
    """One tag: split on delimiters. Several tags: one value each."""
    elements = children(root, tag)
    if len(elements) == 1:
        return split(own_text(elements[0]))
    return [own_text(e) for e in elements if not is_blank(own_text(e))]


def _read_countries(root, record, settings):
    record.countries.extend(_split_or_verbatim(root, "country"))


def _read_studios(root, record, settings):
    record.studios.extend(_split_or_verbatim(root, "studio"))


def _read_genres(root, record, settings):
    wrapper = single_child(root, "genres")
    elements = children(wrapper, "genre") if wrapper is not None else children(root, "genre")
    for element in elements:
        record.genres.extend(canonical_genre(g) for g in split(own_text(element)))


def _read_tags(root, record, settings):
    record.tags.extend(own_text(e) for e in children(root, "tag") if not is_blank(own_text(e)))


def _read_showlinks(root, record, settings):
    record.showlinks.extend(own_text(e) for e in children(root, "showlink"))


def _attach_person_ids(person: Person, element: ET.Element) -> None:
    for attribute, field_name in _PERSON_ID_FIELDS:
        value = attr(element, attribute)
        if not is_blank(value):
            setattr(person, field_name, value)


def _read_person_tags(root: ET.Element, tag: str) -> List[Person]:
    """
    Credits and directors: a single tag may hold several names

    Id attributes are only attached when the single tag names exactly one
    person; spreading them over several split names would be a guess.
    """
    elements = children(root, tag)
    people = []
    if len(elements) == 1:
        names = split(own_text(elements[0]))
        for name in names:
            person = Person(name=name)
            if len(names) == 1:
                _attach_person_ids(person, elements[0])
            people.append(person)
        return people

    for element in elements:
        if not is_blank(own_text(element)):
            person = Person(name=own_text(element))
            _attach_person_ids(person, element)
            people.append(person)
    return people


def _read_credits(root, record, settings):
    record.credits.extend(_read_person_tags(root, "credits"))


def _read_directors(root, record, settings):
    record.directors.extend(_read_person_tags(root, "director"))


_ACTOR_CHILDREN = {
    "name": "name",
    "role": "role",
    "thumb": "thumb",
    "profile": "profile",
    "tmdbid": "tmdb_id",
    "tvdbid": "tvdb_id",
    "imdbid": "imdb_id",
}


def _read_nested_people(root: ET.Element, tag: str, allowed: Tuple[str, ...]) -> List[Tuple[Person, ET.Element]]:
    people = []
    for element in children(root, tag):
        person = Person()
        for child in children(element):
            field_name = _ACTOR_CHILDREN.get(tag_name(child))
            if field_name and tag_name(child) in allowed:
                setattr(person, field_name, own_text(child))
        if not is_blank(person.name):
            people.append((person, element))
    return people


def _read_actors(root, record, settings):
    for person, _element in _read_nested_people(root, "actor", tuple(_ACTOR_CHILDREN)):
        record.actors.append(person)


def _read_producers(root, record, settings):
    for person, element in _read_nested_people(root, "producer", ("name", "role", "thumb", "profile")):
        _attach_person_ids(person, element)
        record.producers.append(person)


# --- file info ----------------------------------------------------------------

def _child_texts(element: ET.Element) -> Dict[str, str]:
    return {tag_name(child): own_text(child) for child in children(element)}


def _read_fileinfo(root, record, settings):
    details = single_child(single_child(root, "fileinfo"), "streamdetails")
    if details is None:
        return None

    fileinfo = FileInfo()
    for stream in children(details):
        values = _child_texts(stream)
        kind = tag_name(stream)
        if kind == "video" and not is_blank(values.get("codec")):
            aspect = 0.0
            try:
                aspect = parse_float(values.get("aspect"))
            except ValueError:
                pass
            fileinfo.videos.append(VideoStream(
                codec=values["codec"],
                aspect=aspect,
                width=parse_int(values.get("width"), 0),
                height=parse_int(values.get("height"), 0),
                duration_in_seconds=parse_int(values.get("durationinseconds"), 0),
                hdr_type=values.get("hdrtype", ""),
                stereo_mode=values.get("stereomode", ""),
            ))
        elif kind == "audio" and not is_blank(values.get("codec")):
            fileinfo.audios.append(AudioStream(
                codec=values["codec"],
                language=values.get("language", ""),
                channels=parse_int(values.get("channels"), 0),
            ))
        elif kind == "subtitle" and not is_blank(values.get("language")):
            fileinfo.subtitles.append(SubtitleStream(language=values["language"]))
    record.fileinfo = fileinfo
    return None


# --- misc fields --------------------------------------------------------------

def _read_release_date(root, record, settings):
    problems = []
    for tag in ("premiered", "aired", "releasedate"):
        text = _text_of(root, tag)
        if is_blank(text):
            continue
        try:
            record.release_date = parse_date(text).date()
            break
        except DateProcessingError as e:
            problems.append(f"invalid {tag} '{text}': {e}")
    return _warn_join(problems)


def _read_date_field(tag: str, field_name: str) -> StepFunc:
    def step(root, record, settings):
        text = _text_of(root, tag)
        if is_blank(text):
            return None
        try:
            setattr(record, field_name, parse_date(text))
        except DateProcessingError as e:
            return f"invalid {tag} '{text}': {e}"
        return None
    return step


def _read_watched(root, record, settings):
    problems = []
    text = _text_of(root, "watched")
    if text is not None:
        record.watched = parse_bool(text)

    playcount = _read_int(_text_of(root, "playcount"), "playcount", problems)
    if playcount is not None:
        record.playcount = playcount
        # kodi only sets a playcount for watched movies
        if playcount > 0:
            record.watched = True
    return _warn_join(problems)


def _read_languages(root, record, settings):
    text = _text_of(root, "languages")
    if text is None:
        text = _text_of(root, "language")
    if is_blank(text):
        return
    codes = [iso2_from_localized(part) or part for part in split(text)]
    record.languages = ", ".join(codes)


def _read_trailers(root, record, settings):
    for element in children(root, "trailer"):
        text = own_text(element)
        trailer = ""
        match = _YOUTUBE_PLUGIN.match(text)
        if match:
            trailer = "http://www.youtube.com/watch?v=" + match.group(1)
        else:
            match = _HDTRAILERS_PLUGIN.match(text)
            if match:
                trailer = unquote_plus(match.group(1) or match.group(2) or "")
        if is_http_url(text):
            trailer = text
        if not is_blank(trailer):
            record.trailers.append(trailer)


def _read_unsupported(root, record, settings):
    """Keep every top-level element no step claimed; must run last"""
    for element in children(root):
        if tag_name(element) not in record.consumed_tags:
            record.unsupported_fragments.append(serialize_fragment(element))


# --- pipelines ----------------------------------------------------------------

MOVIE_STEPS: Tuple[ReadStep, ...] = (
    ReadStep("title", ("title",), _read_title),
    ReadStep("originaltitle", ("originaltitle",), _read_original_title),
    ReadStep("sorttitle", ("sorttitle",), _read_sort_title),
    ReadStep("rating", ("rating", "userrating", "ratings", "votes", "criticrating"), _read_ratings),
    ReadStep("set", ("sets", "set"), _read_sets),
    ReadStep("year", ("year",), _read_number("year", "year")),
    ReadStep("top250", ("top250",), _read_number("top250", "top250")),
    ReadStep("plot", ("plot",), _read_plot),
    ReadStep("outline", ("outline",), _read_outline),
    ReadStep("tagline", ("tagline",), _read_tagline),
    ReadStep("runtime", ("runtime",), _read_number("runtime", "runtime")),
    ReadStep("thumb", ("thumb",), _read_thumbs),
    ReadStep("fanart", ("fanart",), _read_fanart),
    ReadStep("certification", ("certification", "mpaa"), _read_certification),
    ReadStep("ids", ("id", "imdb", "imdbid", "tmdbid", "ids", "tmdbcollectionid", "uniqueid"), _read_ids),
    ReadStep("country", ("country",), _read_countries),
    ReadStep("premiered", ("premiered", "aired", "releasedate"), _read_release_date),
    ReadStep("watched", ("watched", "playcount"), _read_watched),
    ReadStep("genres", ("genres", "genre"), _read_genres),
    ReadStep("studio", ("studio",), _read_studios),
    ReadStep("credits", ("credits",), _read_credits),
    ReadStep("director", ("director",), _read_directors),
    ReadStep("tag", ("tag",), _read_tags),
    ReadStep("actor", ("actor",), _read_actors),
    ReadStep("producer", ("producer",), _read_producers),
    ReadStep("fileinfo", ("fileinfo",), _read_fileinfo),
    ReadStep("languages", ("languages", "language"), _read_languages),
    ReadStep("source", ("source",), _read_plain("source", "source")),
    ReadStep("edition", ("edition",), _read_plain("edition", "edition")),
    ReadStep("trailer", ("trailer",), _read_trailers),
    ReadStep("showlink", ("showlink",), _read_showlinks),
    ReadStep("epbookmark", ("epbookmark",), _read_plain("epbookmark", "epbookmark")),
    ReadStep("lastplayed", ("lastplayed",), _read_date_field("lastplayed", "last_played")),
    ReadStep("status", ("status",), _read_plain("status", "status")),
    ReadStep("code", ("code",), _read_plain("code", "code")),
    ReadStep("dateadded", ("dateadded",), _read_date_field("dateadded", "date_added")),
    ReadStep("original_filename", ("original_filename",), _read_plain("original_filename", "original_filename")),
    ReadStep("user_note", ("user_note",), _read_plain("user_note", "user_note")),
    ReadStep("unsupported", ("lockdata",), _read_unsupported),
)

# NextPVR recordings
RECORDING_STEPS: Tuple[ReadStep, ...] = (
    ReadStep("title", ("title",), _read_title),
    ReadStep("description", ("description",), _read_description),
    ReadStep("rating", ("rating",), _read_certification_in_rating),
    ReadStep("genres", ("genres", "genre"), _read_genres),
)

COLLECTION_STEPS: Tuple[ReadStep, ...] = (
    ReadStep("title", ("title",), _read_title),
    ReadStep("plot", ("plot",), _read_plot),
    ReadStep("thumb", ("thumb",), _read_thumbs),
    ReadStep("fanart", ("fanart",), _read_fanart),
    ReadStep("ids", ("tmdbid", "ids", "uniqueid"), _read_collection_ids),
    ReadStep("tag", ("tag",), _read_tags),
    ReadStep("user_note", ("user_note",), _read_plain("user_note", "user_note")),
    ReadStep("sorttitle", ("sorttitle",), _read_sort_title),
    ReadStep("dateadded", ("dateadded",), _read_date_field("dateadded", "date_added")),
    ReadStep("genres", ("genres", "genre"), _read_genres),
    ReadStep("studio", ("studio",), _read_studios),
    ReadStep("unsupported", ("lockdata",), _read_unsupported),
)

PIPELINES: Dict[str, Tuple[ReadStep, ...]] = {
    "movie": MOVIE_STEPS,
    "recording": RECORDING_STEPS,
    "collection": COLLECTION_STEPS,
}


def run_pipeline(root: ET.Element, steps: Tuple[ReadStep, ...], settings: NfoSettings,
                 source: str = "<string>") -> MediaRecord:
    """
    Run extraction steps in order, isolating each one

    A step registers its tags before it runs, so a failing step still keeps
    its tags out of the passthrough fragments. Step problems never stop the
    pipeline; they are logged and collected on the record.

    Args:
        root: The NFO root element
        steps: Ordered extraction steps
        settings: Settings snapshot (certification country)
        source: Name used in log messages

    Returns:
        The populated record
    """
    record = MediaRecord()
    for step in steps:
        record.consumed_tags.update(step.tags)
        try:
            warning = step.func(root, record, settings)
        except Exception as e:
            warning = f"unexpected {type(e).__name__}: {e}"
        if warning:
            _log("WARNING", f"Problem reading <{step.name}> in {source}: {warning}")
            record.warnings.append(f"{step.name}: {warning}")
    return record


def parse_nfo(raw: Union[str, bytes], source: str = "<string>", settings: Optional[NfoSettings] = None,
              accepted: Tuple[str, ...] = MOVIE_ROOTS + COLLECTION_ROOTS) -> MediaRecord:
    """
    Parse NFO content into a MediaRecord

    Args:
        raw: NFO content as text or bytes
        source: Name used in log and error messages
        settings: Settings snapshot; defaults apply when omitted
        accepted: Root tags to look for

    Returns:
        The record; without a known root it is empty and not a valid NFO

    Raises:
        NFOParseError: If the content is not XML at all
    """
    settings = settings or NfoSettings()
    document = parse_document(raw, source)
    root = find_root(document, accepted)
    if root is None:
        _log("DEBUG", f"No <{'/'.join(accepted)}> root found in {source}")
        record = MediaRecord()
        record.warnings.append(f"no supported root element in {source}")
        return record

    return run_pipeline(root, PIPELINES[tag_name(root)], settings, source)


def parse_movie_nfo(raw: Union[str, bytes], source: str = "<string>",
                    settings: Optional[NfoSettings] = None) -> MediaRecord:
    return parse_nfo(raw, source, settings, MOVIE_ROOTS)


def parse_movie_set_nfo(raw: Union[str, bytes], source: str = "<string>",
                        settings: Optional[NfoSettings] = None) -> MediaRecord:
    return parse_nfo(raw, source, settings, COLLECTION_ROOTS)


def _read_bytes(path: Path) -> bytes:
    return safe_file_operation("read", path, path.read_bytes)


def read_movie_nfo(path: Union[str, Path], settings: Optional[NfoSettings] = None) -> MediaRecord:
    """Read and parse a movie NFO file from disk"""
    path = Path(path)
    return parse_movie_nfo(_read_bytes(path), str(path), settings)


def read_movie_set_nfo(path: Union[str, Path], settings: Optional[NfoSettings] = None) -> MediaRecord:
    """Read and parse a movie set NFO file from disk"""
    path = Path(path)
    return parse_movie_set_nfo(_read_bytes(path), str(path), settings)
