"""
Step-table NFO writer

A dialect is an ordered table of append steps. The common table below holds
the Kodi-compatible behaviour; dialects copy it and replace only the steps
where their target application disagrees.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from lxml import etree as ET

from nfobridge.config.settings import NfoSettings
from nfobridge.core import record as rec
from nfobridge.core.certification import format_certification
from nfobridge.core.record import MediaRecord, Person, Rating
from nfobridge.core.tree import parse_fragment
from nfobridge.utils.exceptions import NFOCreationError
from nfobridge.utils.genres import localized_genre_name
from nfobridge.utils.languages import localized_language_name
from nfobridge.utils.logging import _log
from nfobridge.utils.values import (
    format_at_most_one_decimal,
    format_date,
    format_datetime,
    format_one_decimal,
    is_blank,
    parse_int,
    split,
)


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

_BARE_NEWLINE = re.compile(r"(?<!\r)\n")


@dataclass
class Builder:
    """Output tree under construction, threaded through every write step"""
    root: ET.Element
    record: MediaRecord
    settings: NfoSettings

    def add(self, tag: str, text: Optional[str] = "", parent: Optional[ET.Element] = None,
            **attributes: str) -> ET.Element:
        element = ET.SubElement(self.root if parent is None else parent, tag, attributes)
        element.text = text or ""
        return element


WriteStep = Callable[[Builder], Builder]
StepTable = Tuple[Tuple[str, WriteStep], ...]


@dataclass(frozen=True)
class Dialect:
    """
    One target application's NFO shape

    Attributes:
        name: Registry name of the dialect
        root_tag: Root element name
        steps: Ordered (name, step) pairs run against a fresh tree
        trailer_steps: Engine bookkeeping steps written after the passthrough fragments
    """
    name: str
    root_tag: str
    steps: StepTable
    trailer_steps: StepTable

    def step_names(self) -> List[str]:
        return [name for name, _ in self.steps]

    def derive(self, name: str, **overrides: Optional[WriteStep]) -> "Dialect":
        """
        Copy this dialect, replacing steps by name

        A step overridden with None is dropped. Unknown names are an error
        so a typo can not silently leave the common behaviour in place.
        """
        known = set(self.step_names())
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"unknown write steps for dialect {name}: {sorted(unknown)}")
        steps = []
        for step_name, step in self.steps:
            replacement = overrides.get(step_name, step)
            if replacement is not None:
                steps.append((step_name, replacement))
        return Dialect(name=name, root_tag=self.root_tag, steps=tuple(steps), trailer_steps=self.trailer_steps)


# --- rating helpers -----------------------------------------------------------

def normalize_rating(rating: Rating) -> float:
    """Rating on a 0-10 scale; a non-positive max leaves the raw value"""
    if rating.max_value > 0:
        return rating.rating * 10 / rating.max_value
    return rating.rating


def main_rating(ratings: Dict[str, Rating], sources: Iterable[str]) -> Rating:
    """
    Pick the rating written as <rating>

    Args:
        ratings: Ratings keyed by source
        sources: Preferred source order

    Returns:
        The first preferred rating, else the last non-user one, else an empty rating
    """
    for source in sources:
        if source in ratings:
            return ratings[source]
    chosen = None
    for rating in ratings.values():
        if rating.id != rec.RATING_USER:
            chosen = rating
    return chosen or Rating()


def default_id_key(ids: Dict) -> str:
    if rec.IMDB in ids:
        return rec.IMDB
    if rec.TMDB in ids:
        return rec.TMDB
    return next(iter(ids), "")


def _positive(value) -> int:
    return max(parse_int(value, 0), 0)


# --- common steps -------------------------------------------------------------

def add_title(b: Builder) -> Builder:
    b.add("title", b.record.title)
    return b


def add_original_title(b: Builder) -> Builder:
    b.add("originaltitle", b.record.original_title)
    return b


def add_sort_title(b: Builder) -> Builder:
    b.add("sorttitle", b.record.sort_title)
    return b


def add_year(b: Builder) -> Builder:
    b.add("year", str(b.record.year) if b.record.year > 0 else "")
    return b


def add_rating(b: Builder) -> Builder:
    rating = main_rating(b.record.ratings, b.settings.rating_sources)
    b.add("rating", format_one_decimal(normalize_rating(rating)))
    return b


def add_user_rating(b: Builder) -> Builder:
    rating = b.record.ratings.get(rec.RATING_USER, Rating(id=rec.RATING_USER))
    b.add("userrating", format_at_most_one_decimal(normalize_rating(rating)))
    return b


def add_votes(b: Builder) -> Builder:
    b.add("votes", str(main_rating(b.record.ratings, b.settings.rating_sources).votes))
    return b


def add_set(b: Builder) -> Builder:
    b.add("set", b.record.movie_sets[0].name if b.record.movie_sets else "")
    return b


def add_plot(b: Builder) -> Builder:
    b.add("plot", b.record.plot)
    return b


def add_outline(b: Builder) -> Builder:
    if not is_blank(b.record.outline):
        b.add("outline", b.record.outline)
    return b


def add_tagline(b: Builder) -> Builder:
    b.add("tagline", b.record.tagline)
    return b


def add_runtime(b: Builder) -> Builder:
    b.add("runtime", str(b.record.runtime))
    return b


def add_thumb(b: Builder) -> Builder:
    b.add("thumb", b.record.posters[0] if b.record.posters else "")
    return b


def add_fanart(b: Builder) -> Builder:
    b.add("fanart", b.record.fanarts[0] if b.record.fanarts else "")
    return b


def add_fanart_nested(b: Builder) -> Builder:
    """<fanart><thumb>url</thumb></fanart>"""
    fanart = b.add("fanart")
    if b.record.fanarts:
        b.add("thumb", b.record.fanarts[0], parent=fanart)
    return b


def _certification_text(b: Builder) -> str:
    return format_certification(b.record.certification, b.settings.certification_style)


def add_mpaa(b: Builder) -> Builder:
    b.add("mpaa", _certification_text(b))
    return b


def add_certification(b: Builder) -> Builder:
    b.add("certification", _certification_text(b))
    return b


def _imdb_id(b: Builder) -> str:
    value = b.record.ids.get(rec.IMDB, "")
    return value if isinstance(value, str) else str(value)


def add_id(b: Builder) -> Builder:
    b.add("id", _imdb_id(b))
    return b


def add_tmdb_id(b: Builder) -> Builder:
    tmdb_id = _positive(b.record.ids.get(rec.TMDB))
    b.add("tmdbid", str(tmdb_id) if tmdb_id > 0 else "")
    return b


def _add_unique_ids(b: Builder, rename: Optional[Dict[str, str]] = None) -> Builder:
    """One uniqueid per id in sorted key order; exactly one is the default"""
    rename = rename or {}
    default_key = default_id_key(b.record.ids)
    for key in sorted(b.record.ids):
        b.add(
            "uniqueid",
            str(b.record.ids[key]),
            type=rename.get(key, key),
            default="true" if key == default_key else "false",
        )
    return b


def add_unique_ids(b: Builder) -> Builder:
    return _add_unique_ids(b)


def add_set_unique_ids(b: Builder) -> Builder:
    return _add_unique_ids(b, {rec.TMDB_SET: rec.TMDB})


def add_countries(b: Builder) -> Builder:
    for country in b.record.countries:
        b.add("country", country)
    return b


def add_premiered(b: Builder) -> Builder:
    b.add("premiered", format_date(b.record.release_date))
    return b


def add_watched(b: Builder) -> Builder:
    # the reader treats a positive playcount as watched
    watched = b.record.watched or b.record.playcount > 0
    b.add("watched", "true" if watched else "false")
    return b


def add_playcount(b: Builder) -> Builder:
    b.add("playcount", str(b.record.playcount))
    return b


def localized_genres(b: Builder) -> List[str]:
    return [localized_genre_name(b.settings.nfo_language, genre) for genre in b.record.genres]


def add_genres(b: Builder) -> Builder:
    for genre in localized_genres(b):
        b.add("genre", genre)
    return b


def studios_to_write(b: Builder) -> List[str]:
    if b.settings.write_single_studio:
        return b.record.studios[:1]
    return list(b.record.studios)


def add_studios(b: Builder) -> Builder:
    for studio in studios_to_write(b):
        b.add("studio", studio)
    return b


def add_collection_studios(b: Builder) -> Builder:
    for studio in b.record.studios:
        b.add("studio", studio)
    return b


def _person_id_attributes(person: Person) -> Dict[str, str]:
    attributes = {}
    if _positive(person.tmdb_id) > 0:
        attributes["tmdbid"] = str(_positive(person.tmdb_id))
    if not is_blank(person.imdb_id):
        attributes["imdbid"] = person.imdb_id
    if _positive(person.tvdb_id) > 0:
        attributes["tvdbid"] = str(_positive(person.tvdb_id))
    return attributes


def add_credits(b: Builder) -> Builder:
    for person in b.record.credits:
        b.add("credits", person.name, **_person_id_attributes(person))
    return b


def add_directors(b: Builder) -> Builder:
    for person in b.record.directors:
        b.add("director", person.name, **_person_id_attributes(person))
    return b


def add_tags(b: Builder) -> Builder:
    for tag in b.record.tags:
        b.add("tag", tag)
    return b


def _add_person_details(b: Builder, element: ET.Element, person: Person) -> None:
    b.add("name", person.name, parent=element)
    if not is_blank(person.role):
        b.add("role", person.role, parent=element)
    if not is_blank(person.thumb):
        b.add("thumb", person.thumb, parent=element)
    if not is_blank(person.profile):
        b.add("profile", person.profile, parent=element)


def add_actors(b: Builder) -> Builder:
    for person in b.record.actors:
        actor = b.add("actor")
        _add_person_details(b, actor, person)
        for tag, value in _person_id_attributes(person).items():
            b.add(tag, value, parent=actor)
    return b


def add_producers(b: Builder) -> Builder:
    for person in b.record.producers:
        producer = b.add("producer", **_person_id_attributes(person))
        _add_person_details(b, producer, person)
    return b


def first_http_trailer(b: Builder) -> str:
    return next((t for t in b.record.trailers if t.startswith("http")), "")


def add_trailer(b: Builder) -> Builder:
    b.add("trailer", first_http_trailer(b))
    return b


def localized_languages(b: Builder) -> List[str]:
    return [localized_language_name(b.settings.nfo_language, lang) for lang in split(b.record.languages)]


def add_languages(b: Builder) -> Builder:
    b.add("languages", ", ".join(localized_languages(b)))
    return b


def add_showlinks(b: Builder) -> Builder:
    for showlink in b.record.showlinks:
        b.add("showlink", showlink)
    return b


def add_date_added(b: Builder) -> Builder:
    b.add("dateadded", format_datetime(b.record.date_added))
    return b


def add_lockdata(b: Builder) -> Builder:
    if b.settings.write_lockdata:
        b.add("lockdata", "true")
    return b


# --- trailer block ------------------------------------------------------------

def add_source(b: Builder) -> Builder:
    b.add("source", b.record.source)
    return b


def add_edition(b: Builder) -> Builder:
    b.add("edition", b.record.edition)
    return b


def add_original_filename(b: Builder) -> Builder:
    b.add("original_filename", b.record.original_filename)
    return b


def add_user_note(b: Builder) -> Builder:
    b.add("user_note", b.record.user_note)
    return b


COMMON_MOVIE_STEPS: StepTable = (
    ("title", add_title),
    ("originaltitle", add_original_title),
    ("sorttitle", add_sort_title),
    ("year", add_year),
    ("rating", add_rating),
    ("userrating", add_user_rating),
    ("votes", add_votes),
    ("set", add_set),
    ("plot", add_plot),
    ("outline", add_outline),
    ("tagline", add_tagline),
    ("runtime", add_runtime),
    ("thumb", add_thumb),
    ("fanart", add_fanart),
    ("mpaa", add_mpaa),
    ("certification", add_certification),
    ("id", add_id),
    ("tmdbid", add_tmdb_id),
    ("uniqueid", add_unique_ids),
    ("country", add_countries),
    ("premiered", add_premiered),
    ("watched", add_watched),
    ("playcount", add_playcount),
    ("genres", add_genres),
    ("studios", add_studios),
    ("credits", add_credits),
    ("directors", add_directors),
    ("tags", add_tags),
    ("actors", add_actors),
    ("producers", add_producers),
    ("trailer", add_trailer),
    ("languages", add_languages),
    ("showlink", add_showlinks),
    ("dateadded", add_date_added),
    ("lockdata", add_lockdata),
)

MOVIE_TRAILER_STEPS: StepTable = (
    ("source", add_source),
    ("edition", add_edition),
    ("original_filename", add_original_filename),
    ("user_note", add_user_note),
)

COMMON_COLLECTION_STEPS: StepTable = (
    ("title", add_title),
    ("plot", add_plot),
    ("thumb", add_thumb),
    ("fanart", add_fanart),
    ("uniqueid", add_set_unique_ids),
    ("genres", add_genres),
    ("studios", add_collection_studios),
    ("tags", add_tags),
    ("dateadded", add_date_added),
    ("lockdata", add_lockdata),
)

COLLECTION_TRAILER_STEPS: StepTable = (
    ("user_note", add_user_note),
)

COMMON_MOVIE = Dialect("common", "movie", COMMON_MOVIE_STEPS, MOVIE_TRAILER_STEPS)
COMMON_COLLECTION = Dialect("common", "collection", COMMON_COLLECTION_STEPS, COLLECTION_TRAILER_STEPS)


# --- document assembly --------------------------------------------------------

def _append_fragments(root: ET.Element, fragments: Iterable[str]) -> None:
    for fragment in fragments:
        try:
            root.append(parse_fragment(fragment))
        except ET.XMLSyntaxError as e:
            _log("ERROR", f"Dropping unreadable passthrough fragment {fragment[:80]!r}: {e}")


def serialize(root: ET.Element, settings: NfoSettings, now: Optional[datetime] = None) -> str:
    """
    Serialize the tree with declaration, header comment and CRLF line endings

    Args:
        root: The finished root element
        settings: Supplies the application name and version for the header
        now: Timestamp for the header comment (defaults to the current time)

    Returns:
        The document text
    """
    now = now or datetime.now()
    ET.indent(root, space="  ")
    header = f"<!--created on {now:%Y-%m-%d %H:%M:%S} - {settings.app_name} {settings.app_version}-->"
    body = ET.tostring(root, encoding="unicode")
    xml = "\n".join((XML_DECLARATION, header, body)) + "\n"
    return _BARE_NEWLINE.sub("\r\n", xml)


def build_tree(record: MediaRecord, prior_fragments: Iterable[str], dialect: Dialect,
               settings: NfoSettings, clean: bool = False) -> ET.Element:
    builder = Builder(ET.Element(dialect.root_tag), record, settings)
    for _name, step in dialect.steps:
        builder = step(builder)

    if not clean:
        _append_fragments(builder.root, prior_fragments)

    builder.root.append(ET.Comment(f"{settings.app_name} meta data"))
    for _name, step in dialect.trailer_steps:
        builder = step(builder)
    return builder.root


def render(record: MediaRecord, prior_fragments: Iterable[str], dialect: Dialect,
           settings: NfoSettings, clean: bool = False, now: Optional[datetime] = None) -> str:
    """
    Render a record as an NFO document in the given dialect

    Args:
        record: The data to write
        prior_fragments: Passthrough fragments from the previous NFO
        dialect: Target dialect
        settings: Settings snapshot
        clean: Drop the passthrough fragments
        now: Timestamp for the header comment

    Returns:
        The serialized document

    Raises:
        NFOCreationError: If a write step fails
    """
    try:
        root = build_tree(record, prior_fragments, dialect, settings, clean)
    except Exception as e:
        raise NFOCreationError(record.title or "<untitled>", f"{type(e).__name__}: {e}") from e
    return serialize(root, settings, now)
