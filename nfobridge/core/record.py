"""
Flat interchange record exchanged between the NFO reader, writer and mapping layer
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Set

from nfobridge.core.certification import Certification
from nfobridge.core.entities import IdValue


# provider keys
IMDB = "imdb"
TMDB = "tmdb"
TVDB = "tvdb"
TMDB_SET = "tmdbSet"
TRAKT = "trakt"
METACRITIC = "metacritic"

# rating keys
RATING_NFO = "nfo"
RATING_USER = "user"
RATING_ROTTEN_TOMATOES = "tomatometerallcritics"


@dataclass
class Rating:
    id: str = ""
    rating: float = 0.0
    votes: int = 0
    max_value: int = 10


@dataclass
class Person:
    name: str = ""
    role: str = ""
    thumb: str = ""
    profile: str = ""
    tmdb_id: str = ""
    imdb_id: str = ""
    tvdb_id: str = ""


@dataclass
class SetCandidate:
    name: str = ""
    overview: str = ""
    tmdb_id: int = 0


@dataclass
class VideoStream:
    codec: str = ""
    aspect: float = 0.0
    width: int = 0
    height: int = 0
    duration_in_seconds: int = 0
    hdr_type: str = ""
    stereo_mode: str = ""


@dataclass
class AudioStream:
    codec: str = ""
    language: str = ""
    channels: int = 0


@dataclass
class SubtitleStream:
    language: str = ""


@dataclass
class FileInfo:
    videos: List[VideoStream] = field(default_factory=list)
    audios: List[AudioStream] = field(default_factory=list)
    subtitles: List[SubtitleStream] = field(default_factory=list)


@dataclass
class MediaRecord:
    """
    One parsed or to-be-written NFO document

    Built fresh per read or write call and never kept beyond it.
    """
    title: str = ""
    original_title: str = ""
    sort_title: str = ""
    year: int = -1
    top250: int = 0
    plot: str = ""
    outline: str = ""
    tagline: str = ""
    runtime: int = 0
    certification: Optional[Certification] = None
    release_date: Optional[date] = None
    watched: bool = False
    playcount: int = 0
    languages: str = ""
    source: str = ""
    edition: str = ""
    original_filename: str = ""
    user_note: str = ""

    ids: Dict[str, IdValue] = field(default_factory=dict)
    ratings: Dict[str, Rating] = field(default_factory=dict)

    posters: List[str] = field(default_factory=list)
    banners: List[str] = field(default_factory=list)
    cleararts: List[str] = field(default_factory=list)
    clearlogos: List[str] = field(default_factory=list)
    discarts: List[str] = field(default_factory=list)
    thumbs: List[str] = field(default_factory=list)
    keyarts: List[str] = field(default_factory=list)
    logos: List[str] = field(default_factory=list)
    fanarts: List[str] = field(default_factory=list)

    genres: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    studios: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    showlinks: List[str] = field(default_factory=list)
    trailers: List[str] = field(default_factory=list)

    actors: List[Person] = field(default_factory=list)
    directors: List[Person] = field(default_factory=list)
    credits: List[Person] = field(default_factory=list)
    producers: List[Person] = field(default_factory=list)

    movie_sets: List[SetCandidate] = field(default_factory=list)

    # kodi bookkeeping we read but do not model
    fileinfo: Optional[FileInfo] = None
    epbookmark: str = ""
    last_played: Optional[datetime] = None
    status: str = ""
    code: str = ""
    date_added: Optional[datetime] = None

    # writer-only values resolved by the mapping layer
    lockdata: bool = False

    unsupported_fragments: List[str] = field(default_factory=list)
    consumed_tags: Set[str] = field(default_factory=set)
    warnings: List[str] = field(default_factory=list)

    def is_valid_nfo(self) -> bool:
        """At least a non-blank title is needed for a usable document"""
        return bool(self.title and self.title.strip())
