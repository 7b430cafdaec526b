from datetime import date, datetime

import pytest

from nfobridge.config.settings import NfoSettings
from nfobridge.core.certification import Certification
from nfobridge.core.entities import (
    ArtworkType,
    CastMember,
    MediaRating,
    MediaSource,
    MediaTrailer,
    Movie,
    MovieEdition,
    MovieSet,
    MovieSetRef,
)


FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def settings():
    return NfoSettings()


@pytest.fixture
def movie():
    return Movie(
        title="The Matrix",
        original_title="The Matrix",
        sort_title="Matrix",
        year=1999,
        plot="A hacker learns the truth. He joins the rebels.",
        tagline="Free your mind",
        runtime=136,
        certification=Certification("US", "R"),
        release_date=date(1999, 3, 31),
        watched=True,
        playcount=2,
        spoken_languages="en",
        country="US",
        production_company="Warner Bros. / Village Roadshow Pictures",
        media_source=MediaSource.BLURAY,
        edition=MovieEdition.DIRECTORS_CUT,
        note="seen in cinema",
        date_added=datetime(2020, 1, 2, 3, 4, 5),
        ids={"imdb": "tt0133093", "tmdb": 603, "trakt": 481},
        ratings={
            "imdb": MediaRating("imdb", 8.7, 1900000),
            "tmdb": MediaRating("tmdb", 8.2, 20000),
            "user": MediaRating("user", 9.0),
        },
        artwork_urls={
            ArtworkType.POSTER: "https://image.tmdb.org/t/p/original/poster.jpg",
            ArtworkType.FANART: "https://image.tmdb.org/t/p/original/fanart.jpg",
        },
        genres=["Action", "Science Fiction"],
        tags=["cyberpunk"],
        trailers=[MediaTrailer(url="https://www.youtube.com/watch?v=vKQi3bBA1y8", in_nfo=True)],
        actors=[
            CastMember(
                name="Keanu Reeves",
                role="Neo",
                thumb_url="https://image.tmdb.org/t/p/original/keanu.jpg",
                profile_url="https://www.themoviedb.org/person/6384",
                ids={"tmdb": 6384, "imdb": "nm0000206"},
            )
        ],
        directors=[CastMember(name="Lana Wachowski", role="Director", ids={"tmdb": 9340})],
        writers=[CastMember(name="Lilly Wachowski", role="Writer", ids={"tmdb": 9339})],
        producers=[CastMember(name="Joel Silver", role="Producer", ids={"tmdb": 1218})],
        movie_set=MovieSetRef(title="The Matrix Collection", plot="All Matrix movies", tmdb_id=2344),
    )


@pytest.fixture
def movie_on_disk(movie, tmp_path):
    """The sample movie living in its own folder with one video file"""
    video = tmp_path / "The Matrix (1999).mkv"
    video.write_bytes(b"")
    movie.path = str(tmp_path)
    movie.video_files = [str(video)]
    return movie


@pytest.fixture
def movie_set():
    return MovieSet(
        title="The Matrix Collection",
        plot="All Matrix movies",
        ids={"tmdbSet": 2344},
        artwork_urls={ArtworkType.POSTER: "https://image.tmdb.org/t/p/original/set.jpg"},
        genres=["Action"],
        tags=["trilogy"],
        note="box set",
        date_added=datetime(2021, 6, 7, 8, 9, 10),
    )


@pytest.fixture
def foreign_nfo():
    """A movie NFO written by some other tool, with tags we do not model"""
    return """<?xml version="1.0" encoding="UTF-8"?>
<movie>
  <title>Heat</title>
  <year>1995</year>
  <plot>A group of professional bank robbers.</plot>
  <uniqueid type="imdb" default="true">tt0113277</uniqueid>
  <genre>Crime</genre>
  <myscraper_score>42</myscraper_score>
  <custom source="x"><entry>one</entry><entry>two</entry></custom>
  <lockdata>true</lockdata>
</movie>
"""
