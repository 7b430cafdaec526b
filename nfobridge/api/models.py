"""
Pydantic models for the NFOBridge API
"""
import dataclasses
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from nfobridge.config.settings import NfoSettings
from nfobridge.core.certification import format_certification, parse_certification
from nfobridge.core.entities import (
    ArtworkType,
    CastMember,
    MediaRating,
    MediaTrailer,
    Movie,
    MovieSetRef,
    edition_from_text,
    edition_to_text,
    media_source_from_text,
    source_to_text,
)
from nfobridge.core.record import MediaRecord


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str
    uptime: str
    configuration: Dict[str, Any]


class PersonModel(BaseModel):
    name: str
    role: str = ""
    thumb: str = ""
    profile: str = ""
    ids: Dict[str, Union[int, str]] = {}


class RatingModel(BaseModel):
    id: str
    rating: float
    votes: int = 0
    max_value: int = 10


class TrailerModel(BaseModel):
    url: str
    name: str = ""
    in_nfo: bool = True


class MovieSetRefModel(BaseModel):
    title: str
    plot: str = ""
    tmdb_id: int = 0


def _cast(people: List[PersonModel]) -> List[CastMember]:
    return [CastMember(name=p.name, role=p.role, thumb_url=p.thumb, profile_url=p.profile, ids=dict(p.ids))
            for p in people]


def _people(cast: List[CastMember]) -> List[PersonModel]:
    return [PersonModel(name=c.name, role=c.role, thumb=c.thumb_url, profile=c.profile_url, ids=dict(c.ids))
            for c in cast]


class MovieModel(BaseModel):
    """Movie as exchanged over the API; enums and certifications travel as text"""
    title: str
    original_title: str = ""
    sort_title: str = ""
    year: int = 0
    plot: str = ""
    tagline: str = ""
    runtime: int = 0
    top250: int = 0
    certification: str = ""
    release_date: Optional[date] = None
    watched: bool = False
    playcount: int = 0
    spoken_languages: str = ""
    country: str = ""
    production_company: str = ""
    media_source: str = ""
    edition: str = ""
    original_filename: str = ""
    note: str = ""
    date_added: Optional[datetime] = None

    ids: Dict[str, Union[int, str]] = {}
    ratings: List[RatingModel] = []
    artwork: Dict[str, str] = {}
    genres: List[str] = []
    tags: List[str] = []
    showlinks: List[str] = []
    trailers: List[TrailerModel] = []
    actors: List[PersonModel] = []
    directors: List[PersonModel] = []
    writers: List[PersonModel] = []
    producers: List[PersonModel] = []
    movie_set: Optional[MovieSetRefModel] = None

    path: str = ""
    video_files: List[str] = []
    nfo_files: List[str] = []
    disc: bool = False

    def to_movie(self, settings: NfoSettings) -> Movie:
        """
        Convert into the domain entity

        Raises:
            ValueError: If an artwork key is not a known artwork type
        """
        movie = Movie(
            title=self.title,
            original_title=self.original_title,
            sort_title=self.sort_title,
            year=self.year,
            plot=self.plot,
            tagline=self.tagline,
            runtime=self.runtime,
            top250=self.top250,
            certification=parse_certification(self.certification, settings.certification_country),
            release_date=self.release_date,
            watched=self.watched,
            playcount=self.playcount,
            spoken_languages=self.spoken_languages,
            country=self.country,
            production_company=self.production_company,
            media_source=media_source_from_text(self.media_source),
            edition=edition_from_text(self.edition),
            original_filename=self.original_filename,
            note=self.note,
            date_added=self.date_added,
            ids=dict(self.ids),
            ratings={r.id: MediaRating(id=r.id, rating=r.rating, votes=r.votes, max_value=r.max_value)
                     for r in self.ratings},
            artwork_urls={ArtworkType(k): v for k, v in self.artwork.items()},
            genres=list(self.genres),
            tags=list(self.tags),
            showlinks=list(self.showlinks),
            trailers=[MediaTrailer(url=t.url, name=t.name, in_nfo=t.in_nfo) for t in self.trailers],
            actors=_cast(self.actors),
            directors=_cast(self.directors),
            writers=_cast(self.writers),
            producers=_cast(self.producers),
            path=self.path,
            video_files=list(self.video_files),
            nfo_files=list(self.nfo_files),
            disc=self.disc,
        )
        if self.movie_set is not None:
            movie.movie_set = MovieSetRef(title=self.movie_set.title, plot=self.movie_set.plot,
                                          tmdb_id=self.movie_set.tmdb_id)
        return movie

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieModel":
        return cls(
            title=movie.title,
            original_title=movie.original_title,
            sort_title=movie.sort_title,
            year=movie.year,
            plot=movie.plot,
            tagline=movie.tagline,
            runtime=movie.runtime,
            top250=movie.top250,
            certification=format_certification(movie.certification, "medium"),
            release_date=movie.release_date,
            watched=movie.watched,
            playcount=movie.playcount,
            spoken_languages=movie.spoken_languages,
            country=movie.country,
            production_company=movie.production_company,
            media_source=source_to_text(movie.media_source),
            edition=edition_to_text(movie.edition),
            original_filename=movie.original_filename,
            note=movie.note,
            date_added=movie.date_added,
            ids=dict(movie.ids),
            ratings=[RatingModel(**r.to_dict()) for r in movie.ratings.values()],
            artwork={k.value: v for k, v in movie.artwork_urls.items()},
            genres=list(movie.genres),
            tags=list(movie.tags),
            showlinks=list(movie.showlinks),
            trailers=[TrailerModel(url=t.url, name=t.name, in_nfo=t.in_nfo) for t in movie.trailers],
            actors=_people(movie.actors),
            directors=_people(movie.directors),
            writers=_people(movie.writers),
            producers=_people(movie.producers),
            movie_set=MovieSetRefModel(title=movie.movie_set.title, plot=movie.movie_set.plot,
                                       tmdb_id=movie.movie_set.tmdb_id) if movie.movie_set else None,
            path=movie.path,
            video_files=list(movie.video_files),
            nfo_files=list(movie.nfo_files),
            disc=movie.disc,
        )


class ParseRequest(BaseModel):
    """NFO text to parse; kind is movie, collection or any"""
    content: str
    kind: str = "movie"


class ParseResponse(BaseModel):
    valid: bool
    record: Dict[str, Any]
    movie: Optional[MovieModel] = None
    warnings: List[str] = []
    unsupported_fragments: List[str] = []


class RenderRequest(BaseModel):
    movie: MovieModel
    dialect: Optional[str] = None
    prior_content: Optional[str] = None
    clean: bool = False


class RenderResponse(BaseModel):
    xml: str


class WriteMovieRequest(BaseModel):
    movie: MovieModel
    dialect: Optional[str] = None
    namings: Optional[List[str]] = None


class WriteMovieResponse(BaseModel):
    status: str
    written: List[str]
    nfo_files: List[str]
    messages: List[Dict[str, Any]] = []


def record_to_dict(record: MediaRecord) -> Dict[str, Any]:
    """Plain dict view of a parsed record for JSON responses"""
    data = dataclasses.asdict(record)
    for key in ("unsupported_fragments", "warnings", "consumed_tags"):
        data.pop(key, None)
    return data
