"""
NFO file naming for movies and movie sets
"""
import re
from enum import Enum
from pathlib import Path
from typing import List, Optional

from nfobridge.core.entities import Movie, MovieSet
from nfobridge.utils.error_handler import safe_file_operation
from nfobridge.utils.logging import _log
from nfobridge.utils.validation import sanitize_filename
from nfobridge.utils.values import is_blank


class MovieNfoNaming(Enum):
    FILENAME_NFO = "filename"
    MOVIE_NFO = "movie"
    DISC_NFO = "disc"


class MovieSetNfoNaming(Enum):
    KODI = "kodi"
    AUTOMATOR = "automator"


# movie.cd1.mkv, movie-part2.avi, movie_disc 1.iso ...
STACKING_MARKER = re.compile(r"[ _.-]+(cd|dvd|part|pt|disk|disc)[ _.-]*[0-9]+$", re.IGNORECASE)

# main video file name -> NFO name for the filename naming
_DISC_FILE_NFOS = (
    (("video_ts.ifo", "video_ts"), "VIDEO_TS.nfo"),
    (("hvdvd_ts.ifo", "hvdvd_ts"), "HVDVD_TS.nfo"),
    (("index.bdmv",), "index.nfo"),
    (("bdmv",), "BDMV.nfo"),
)

# disc folder -> NFO inside it for the disc naming
_DISC_FOLDER_NFOS = (
    ("VIDEO_TS", "VIDEO_TS/VIDEO_TS.nfo"),
    ("HVDVD_TS", "HVDVD_TS/HVDVD_TS.nfo"),
    ("BDMV", "BDMV/index.nfo"),
)


def parse_movie_namings(values) -> List[MovieNfoNaming]:
    return [MovieNfoNaming(v) for v in values]


def parse_movieset_namings(values) -> List[MovieSetNfoNaming]:
    return [MovieSetNfoNaming(v) for v in values]


def clean_stacking_marker(basename: str) -> str:
    return STACKING_MARKER.sub("", basename)


def _filename_nfo(movie: Movie) -> str:
    video_file = movie.main_video_file()
    if is_blank(video_file):
        return ""
    name = Path(video_file).name

    if movie.disc:
        for candidates, nfo_name in _DISC_FILE_NFOS:
            if name.lower() in candidates:
                return nfo_name

    basename = Path(name).stem
    if len(movie.video_files) > 1:
        basename = clean_stacking_marker(basename)
    return f"{basename}.nfo"


def _disc_nfo(movie: Movie) -> str:
    if not movie.disc or is_blank(movie.path):
        return ""
    result = ""
    for folder, nfo_name in _DISC_FOLDER_NFOS:
        if (Path(movie.path) / folder).is_dir():
            result = nfo_name
    return result


def get_movie_nfo_filename(movie: Movie, naming: MovieNfoNaming) -> str:
    """
    NFO file name relative to the movie folder

    Args:
        movie: The movie
        naming: Naming scheme

    Returns:
        The relative file name, or an empty string when the naming does not
        apply to this movie
    """
    if naming is MovieNfoNaming.FILENAME_NFO:
        return _filename_nfo(movie)
    if naming is MovieNfoNaming.MOVIE_NFO:
        return "movie.nfo"
    if naming is MovieNfoNaming.DISC_NFO:
        return _disc_nfo(movie)
    return ""


def get_movie_nfo_path(movie: Movie, naming: MovieNfoNaming) -> Optional[Path]:
    filename = get_movie_nfo_filename(movie, naming)
    if is_blank(filename):
        _log("DEBUG", f"No {naming.value} NFO name for '{movie.title}'")
        return None
    return Path(movie.path) / filename


def get_movie_set_nfo_path(movie_set: MovieSet, naming: MovieSetNfoNaming, data_folder: str) -> Optional[Path]:
    """
    Target path of a movie set NFO inside the movie set data folder

    The parent directory is created when missing.

    Args:
        movie_set: The movie set
        naming: Naming scheme
        data_folder: Movie set data folder; blank disables movie set NFOs

    Returns:
        The NFO path, or None when no data folder is configured

    Raises:
        FileOperationError: If the parent directory can not be created
    """
    if is_blank(data_folder) or is_blank(movie_set.title):
        return None

    title = sanitize_filename(movie_set.title.strip())
    if naming is MovieSetNfoNaming.KODI:
        path = Path(data_folder) / title / f"{title}.nfo"
    else:
        path = Path(data_folder) / f"{title}.nfo"

    if not path.parent.exists():
        safe_file_operation("mkdir", path.parent, path.parent.mkdir, parents=True, exist_ok=True)
        _log("DEBUG", f"Created movie set folder {path.parent}")
    return path
