"""
Domain entities for movies and movie sets
These are the long-lived objects of the surrounding application; NFO records are mapped onto them
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from nfobridge.core.certification import Certification


IdValue = Union[int, str]


class MediaSource(Enum):
    """Source medium of a release; the value is the display title"""
    UHD_BLURAY = "UHD Blu-ray"
    BLURAY = "Blu-ray"
    DVD = "DVD"
    HDDVD = "HDDVD"
    TV = "TV"
    VHS = "VHS"
    LASERDISC = "LaserDisc"
    D_VHS = "D-VHS"
    HDRIP = "HDRip"
    CAM = "Cam"
    TS = "Telesync"
    TC = "Telecine"
    DVDSCR = "DVD Screener"
    R5 = "R5"
    WEBRIP = "Webrip"
    WEB_DL = "Web-DL"
    STREAM = "Stream"
    UNKNOWN = ""


class MovieEdition(Enum):
    NONE = ""
    DIRECTORS_CUT = "Director's Cut"
    EXTENDED_EDITION = "Extended Edition"
    THEATRICAL_EDITION = "Theatrical Edition"
    UNRATED = "Unrated"
    UNCUT = "Uncut"
    IMAX = "IMAX"
    REMASTERED = "Remastered"
    COLLECTORS_EDITION = "Collectors Edition"
    ULTIMATE_EDITION = "Ultimate Edition"
    FINAL_CUT = "Final Cut"
    SPECIAL_EDITION = "Special Edition"


class ArtworkType(Enum):
    POSTER = "poster"
    FANART = "fanart"
    BANNER = "banner"
    CLEARART = "clearart"
    CLEARLOGO = "clearlogo"
    DISC = "disc"
    THUMB = "thumb"
    KEYART = "keyart"
    LOGO = "logo"


# source/edition values not covered by the enums are kept verbatim
SourceValue = Union[MediaSource, str]
EditionValue = Union[MovieEdition, str]


def media_source_from_text(text: Optional[str]) -> SourceValue:
    """
    Match a media source by enum name or display title (case insensitive)

    Args:
        text: Raw value from an NFO file

    Returns:
        The matching MediaSource, UNKNOWN for blank input, or the raw text
    """
    if not text or not text.strip():
        return MediaSource.UNKNOWN
    value = text.strip()
    for source in MediaSource:
        if source is MediaSource.UNKNOWN:
            continue
        if source.name == value or source.value.lower() == value.lower():
            return source
    return value


def edition_from_text(text: Optional[str]) -> EditionValue:
    """Editions only match on the exact enum name"""
    if not text or not text.strip():
        return MovieEdition.NONE
    value = text.strip()
    if value in MovieEdition.__members__:
        return MovieEdition[value]
    return value


def source_to_text(source: SourceValue) -> str:
    if isinstance(source, MediaSource):
        return "" if source is MediaSource.UNKNOWN else source.name
    return source or ""


def edition_to_text(edition: EditionValue) -> str:
    if isinstance(edition, MovieEdition):
        return "" if edition is MovieEdition.NONE else edition.name
    return edition or ""


@dataclass
class MediaRating:
    id: str
    rating: float
    votes: int = 0
    max_value: int = 10

    def to_dict(self) -> Dict:
        return {"id": self.id, "rating": self.rating, "votes": self.votes, "max_value": self.max_value}


@dataclass
class MediaTrailer:
    url: str
    name: str = ""
    provider: str = ""
    quality: str = ""
    in_nfo: bool = False


@dataclass
class CastMember:
    name: str
    role: str = ""
    thumb_url: str = ""
    profile_url: str = ""
    ids: Dict[str, IdValue] = field(default_factory=dict)


@dataclass
class MovieSetRef:
    """Link from a movie to its parent collection"""
    title: str
    plot: str = ""
    tmdb_id: int = 0


@dataclass
class Movie:
    title: str = ""
    original_title: str = ""
    sort_title: str = ""
    year: int = 0
    plot: str = ""
    tagline: str = ""
    runtime: int = 0
    top250: int = 0
    certification: Optional[Certification] = None
    release_date: Optional[date] = None
    watched: bool = False
    playcount: int = 0
    spoken_languages: str = ""
    country: str = ""
    production_company: str = ""
    media_source: SourceValue = MediaSource.UNKNOWN
    edition: EditionValue = MovieEdition.NONE
    original_filename: str = ""
    note: str = ""
    date_added: Optional[datetime] = None
    last_played: Optional[datetime] = None

    ids: Dict[str, IdValue] = field(default_factory=dict)
    ratings: Dict[str, MediaRating] = field(default_factory=dict)
    artwork_urls: Dict[ArtworkType, str] = field(default_factory=dict)

    genres: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    showlinks: List[str] = field(default_factory=list)
    trailers: List[MediaTrailer] = field(default_factory=list)

    actors: List[CastMember] = field(default_factory=list)
    directors: List[CastMember] = field(default_factory=list)
    writers: List[CastMember] = field(default_factory=list)
    producers: List[CastMember] = field(default_factory=list)

    movie_set: Optional[MovieSetRef] = None

    # file system bookkeeping
    path: str = ""
    video_files: List[str] = field(default_factory=list)
    nfo_files: List[str] = field(default_factory=list)
    disc: bool = False
    file_creation_date: Optional[datetime] = None
    file_last_modified_date: Optional[datetime] = None

    @property
    def imdb_id(self) -> str:
        value = self.ids.get("imdb")
        return value if isinstance(value, str) else ""

    @property
    def tmdb_id(self) -> int:
        value = self.ids.get("tmdb")
        return value if isinstance(value, int) else 0

    def main_video_file(self) -> str:
        return self.video_files[0] if self.video_files else ""


@dataclass
class MovieSet:
    title: str = ""
    sort_title: str = ""
    plot: str = ""
    ids: Dict[str, IdValue] = field(default_factory=dict)
    artwork_urls: Dict[ArtworkType, str] = field(default_factory=dict)
    genres: List[str] = field(default_factory=list)
    studios: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    note: str = ""
    date_added: Optional[datetime] = None
    nfo_files: List[str] = field(default_factory=list)

    @property
    def tmdb_id(self) -> int:
        value = self.ids.get("tmdbSet")
        return value if isinstance(value, int) else 0
