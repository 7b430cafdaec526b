from pathlib import Path

import pytest

from nfobridge.core.entities import Movie, MovieSet
from nfobridge.core.naming import (
    MovieNfoNaming,
    MovieSetNfoNaming,
    clean_stacking_marker,
    get_movie_nfo_filename,
    get_movie_nfo_path,
    get_movie_set_nfo_path,
    parse_movie_namings,
    parse_movieset_namings,
)
from nfobridge.utils.exceptions import FileOperationError


@pytest.mark.parametrize("basename, expected", [
    ("Movie.cd1", "Movie"),
    ("Movie - Part 2", "Movie"),
    ("Movie_disc1", "Movie"),
    ("Movie.pt.3", "Movie"),
    ("Movie 2", "Movie 2"),
])
def test_clean_stacking_marker(basename, expected):
    assert clean_stacking_marker(basename) == expected


def test_filename_naming(tmp_path):
    movie = Movie(title="Heat", path=str(tmp_path), video_files=[str(tmp_path / "Heat (1995).mkv")])
    assert get_movie_nfo_filename(movie, MovieNfoNaming.FILENAME_NFO) == "Heat (1995).nfo"
    assert get_movie_nfo_path(movie, MovieNfoNaming.FILENAME_NFO) == tmp_path / "Heat (1995).nfo"
    assert get_movie_nfo_filename(movie, MovieNfoNaming.MOVIE_NFO) == "movie.nfo"


def test_stacked_files_drop_the_marker(tmp_path):
    movie = Movie(path=str(tmp_path), video_files=[str(tmp_path / "Heat.cd1.avi"), str(tmp_path / "Heat.cd2.avi")])
    assert get_movie_nfo_filename(movie, MovieNfoNaming.FILENAME_NFO) == "Heat.nfo"
    # a single file keeps its name untouched
    movie.video_files = movie.video_files[:1]
    assert get_movie_nfo_filename(movie, MovieNfoNaming.FILENAME_NFO) == "Heat.cd1.nfo"


def test_disc_structures(tmp_path):
    (tmp_path / "VIDEO_TS").mkdir()
    movie = Movie(path=str(tmp_path), disc=True, video_files=[str(tmp_path / "VIDEO_TS" / "VIDEO_TS.IFO")])
    assert get_movie_nfo_filename(movie, MovieNfoNaming.FILENAME_NFO) == "VIDEO_TS.nfo"
    assert get_movie_nfo_filename(movie, MovieNfoNaming.DISC_NFO) == "VIDEO_TS/VIDEO_TS.nfo"

    bluray = Movie(path=str(tmp_path), disc=True, video_files=[str(tmp_path / "BDMV" / "index.bdmv")])
    assert get_movie_nfo_filename(bluray, MovieNfoNaming.FILENAME_NFO) == "index.nfo"


def test_disc_naming_needs_a_disc(tmp_path):
    movie = Movie(title="Heat", path=str(tmp_path), video_files=[str(tmp_path / "Heat.mkv")])
    assert get_movie_nfo_filename(movie, MovieNfoNaming.DISC_NFO) == ""
    assert get_movie_nfo_path(movie, MovieNfoNaming.DISC_NFO) is None


def test_no_video_file_means_no_filename_nfo(tmp_path):
    assert get_movie_nfo_path(Movie(path=str(tmp_path)), MovieNfoNaming.FILENAME_NFO) is None


def test_movie_set_paths(tmp_path):
    movie_set = MovieSet(title="Alien: Collection")
    kodi = get_movie_set_nfo_path(movie_set, MovieSetNfoNaming.KODI, str(tmp_path))
    assert kodi == tmp_path / "Alien_ Collection" / "Alien_ Collection.nfo"
    assert kodi.parent.is_dir()
    automator = get_movie_set_nfo_path(movie_set, MovieSetNfoNaming.AUTOMATOR, str(tmp_path))
    assert automator == tmp_path / "Alien_ Collection.nfo"


def test_movie_set_path_needs_folder_and_title(tmp_path):
    assert get_movie_set_nfo_path(MovieSet(title="Alien"), MovieSetNfoNaming.KODI, "") is None
    assert get_movie_set_nfo_path(MovieSet(title=" "), MovieSetNfoNaming.KODI, str(tmp_path)) is None


def test_movie_set_folder_creation_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a folder")
    with pytest.raises(FileOperationError):
        get_movie_set_nfo_path(MovieSet(title="Alien"), MovieSetNfoNaming.KODI, str(blocker))


def test_parse_namings():
    assert parse_movie_namings(["filename", "movie"]) == [MovieNfoNaming.FILENAME_NFO, MovieNfoNaming.MOVIE_NFO]
    assert parse_movieset_namings(("automator",)) == [MovieSetNfoNaming.AUTOMATOR]
    with pytest.raises(ValueError):
        parse_movie_namings(["folder"])
    assert isinstance(get_movie_nfo_path(Movie(path="/m"), MovieNfoNaming.MOVIE_NFO), Path)
