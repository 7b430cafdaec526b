"""
NFO Manager for reading and writing movie and movie set NFO files
Ties the reader, mapping, dialect writer, naming and persistence gate together
"""
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from nfobridge.config.settings import NfoSettings
from nfobridge.core import reader
from nfobridge.core.dialects import get_collection_dialect, get_movie_dialect
from nfobridge.core.entities import Movie, MovieSet
from nfobridge.core.gate import GateResult, delete_orphans, persist
from nfobridge.core.mapping import movie_set_to_record, movie_to_record, record_to_movie
from nfobridge.core.messages import LoggingMessageSink, MessageSink
from nfobridge.core.naming import (
    MovieNfoNaming,
    MovieSetNfoNaming,
    get_movie_nfo_path,
    get_movie_set_nfo_path,
    parse_movie_namings,
    parse_movieset_namings,
)
from nfobridge.core.record import MediaRecord
from nfobridge.core.writer import render
from nfobridge.utils.exceptions import NFOBridgeException
from nfobridge.utils.logging import _log


MovieTarget = Tuple[str, MovieNfoNaming]


class NFOManager:
    """Reads, renders and persists NFO files for movies and movie sets"""

    def __init__(self, settings: Optional[NfoSettings] = None, messages: Optional[MessageSink] = None):
        self.settings = settings or NfoSettings()
        self.messages = messages if messages is not None else LoggingMessageSink()

    # --- reading ------------------------------------------------------------

    def read_movie_nfo(self, path: Union[str, Path]) -> MediaRecord:
        return reader.read_movie_nfo(path, self.settings)

    def read_movie_set_nfo(self, path: Union[str, Path]) -> MediaRecord:
        return reader.read_movie_set_nfo(path, self.settings)

    def parse_nfo_text(self, text: Union[str, bytes], kind: str = "movie",
                       source: str = "<string>") -> MediaRecord:
        """
        Parse NFO content handed over as text

        Args:
            text: NFO content
            kind: "movie", "collection" or "any"
            source: Name used in log messages
        """
        if kind == "movie":
            return reader.parse_movie_nfo(text, source, self.settings)
        if kind == "collection":
            return reader.parse_movie_set_nfo(text, source, self.settings)
        return reader.parse_nfo(text, source, self.settings)

    def load_movie(self, path: Union[str, Path]) -> Movie:
        """Read a movie NFO and map it onto a fresh Movie tracking that file"""
        path = Path(path)
        movie = record_to_movie(self.read_movie_nfo(path))
        movie.path = str(path.parent)
        movie.nfo_files = [str(path)]
        return movie

    def _load_prior(self, nfo_files: Iterable[str], read) -> Optional[MediaRecord]:
        """First tracked NFO that still parses, unless a clean rewrite is requested"""
        if self.settings.write_clean_nfo:
            return None
        for nfo_file in nfo_files:
            if not Path(nfo_file).is_file():
                continue
            try:
                return read(nfo_file)
            except NFOBridgeException as e:
                _log("DEBUG", f"Ignoring unreadable prior NFO {nfo_file}: {e.message}")
        return None

    # --- writing ------------------------------------------------------------

    def render_movie(self, movie: Movie, dialect_name: Optional[str] = None,
                     prior: Optional[MediaRecord] = None, clean: Optional[bool] = None) -> str:
        """
        Render a movie NFO without touching the disk

        Args:
            movie: The movie
            dialect_name: Dialect; defaults to the configured one
            prior: Previously parsed NFO supplying passthrough data
            clean: Drop passthrough fragments; defaults to the configured clean rewrite

        Returns:
            The serialized document
        """
        dialect = get_movie_dialect(dialect_name or self.settings.dialect)
        clean = self.settings.write_clean_nfo if clean is None else clean
        record = movie_to_record(movie, self.settings, prior)
        return render(record, record.unsupported_fragments, dialect, self.settings, clean)

    def _default_movie_targets(self) -> List[MovieTarget]:
        return [(self.settings.dialect, n) for n in parse_movie_namings(self.settings.movie_namings)]

    def write_movie_nfos(self, movie: Movie, targets: Optional[Sequence[MovieTarget]] = None) -> List[Path]:
        """
        Write the movie's NFO files and drop the ones no longer produced

        A failing target is reported to the message sink and the remaining
        targets are still written.

        Args:
            movie: The movie; its nfo_files list is replaced on success
            targets: (dialect, naming) pairs; defaults to the configured ones

        Returns:
            NFO files belonging to the movie after this call
        """
        targets = list(targets) if targets is not None else self._default_movie_targets()
        prior = self._load_prior(movie.nfo_files, self.read_movie_nfo)

        new_files: List[Path] = []
        for dialect_name, naming in targets:
            path = None
            try:
                path = get_movie_nfo_path(movie, naming)
                if path is None:
                    continue
                content = self.render_movie(movie, dialect_name, prior)
                if persist(path, content) is GateResult.UNCHANGED:
                    _log("DEBUG", f"'{movie.title}' {dialect_name}/{naming.value} NFO is up to date")
                if path not in new_files:
                    new_files.append(path)
            except Exception as e:
                _log("ERROR", f"Could not write {naming.value} NFO for '{movie.title}': {e}")
                self.messages.error(movie.title or "<untitled>", f"NFO write failed: {e}",
                                    str(path) if path else movie.path)

        if new_files:
            delete_orphans(movie.nfo_files, new_files, self.settings.backup_dir or None)
            movie.nfo_files = [str(p) for p in new_files]
        return [Path(p) for p in movie.nfo_files]

    def render_movie_set(self, movie_set: MovieSet, prior: Optional[MediaRecord] = None,
                         clean: Optional[bool] = None) -> str:
        dialect = get_collection_dialect(self.settings.dialect)
        clean = self.settings.write_clean_nfo if clean is None else clean
        record = movie_set_to_record(movie_set, self.settings, prior)
        return render(record, record.unsupported_fragments, dialect, self.settings, clean)

    def write_movie_set_nfos(self, movie_set: MovieSet,
                             namings: Optional[Sequence[MovieSetNfoNaming]] = None) -> List[Path]:
        """
        Write the movie set's NFO files into the movie set data folder

        Args:
            movie_set: The movie set; its nfo_files list is replaced on success
            namings: Naming schemes; defaults to the configured ones

        Returns:
            NFO files belonging to the movie set after this call

        Raises:
            FileOperationError: If a target folder can not be created
        """
        data_folder = self.settings.movieset_data_folder
        if not data_folder:
            _log("DEBUG", f"No movie set data folder configured, skipping NFO for '{movie_set.title}'")
            return [Path(p) for p in movie_set.nfo_files]

        namings = list(namings) if namings is not None else parse_movieset_namings(self.settings.movieset_namings)
        prior = self._load_prior(movie_set.nfo_files, self.read_movie_set_nfo)

        new_files: List[Path] = []
        for naming in namings:
            # folder creation failures are the caller's problem
            path = get_movie_set_nfo_path(movie_set, naming, data_folder)
            if path is None:
                continue
            try:
                persist(path, self.render_movie_set(movie_set, prior))
                if path not in new_files:
                    new_files.append(path)
            except Exception as e:
                _log("ERROR", f"Could not write {naming.value} NFO for movie set '{movie_set.title}': {e}")
                self.messages.error(movie_set.title, f"NFO write failed: {e}", str(path))

        if new_files:
            delete_orphans(movie_set.nfo_files, new_files, self.settings.backup_dir or None)
            movie_set.nfo_files = [str(p) for p in new_files]
        return [Path(p) for p in movie_set.nfo_files]
