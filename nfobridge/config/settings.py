"""
NFOBridge Configuration Module
Loads all settings from environment variables (and .env files) with validation
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv

from nfobridge.core.certification import CERTIFICATION_STYLES
from nfobridge.utils.exceptions import ConfigurationError
from nfobridge.utils.logging import _log


DIALECT_NAMES = ("kodi", "mediaportal_legacy", "mediaportal_myvideo", "emby", "jellyfin")
MOVIE_NAMINGS = ("filename", "movie", "disc")
MOVIESET_NAMINGS = ("kodi", "automator")
DATE_ADDED_FIELDS = ("date_added", "file_creation_date", "file_last_modified_date", "release_date")

DEFAULT_RATING_SOURCES = ("imdb", "tmdb", "trakt", "metacritic", "tomatometerallcritics")
DEFAULT_APP_VERSION = "1.0.0"


def _bool_env(name: str, default: bool) -> bool:
    """Convert environment variable to boolean"""
    v = os.environ.get(name)
    if v is None or not v.strip():
        return default
    value = v.strip().lower()
    if value in ("1", "true", "yes", "y", "on"):
        return True
    if value in ("0", "false", "no", "n", "off"):
        return False
    raise ConfigurationError(setting=name, reason="Invalid boolean value", current_value=v)


def _get_list_env(name: str, default: Tuple[str, ...], choices: Optional[Tuple[str, ...]] = None) -> Tuple[str, ...]:
    """Comma separated list, lower-cased, optionally restricted to known values"""
    value_str = os.environ.get(name)
    if value_str is None or not value_str.strip():
        return tuple(default)

    values = tuple(v.strip().lower() for v in value_str.split(",") if v.strip())
    if choices is not None:
        unknown = [v for v in values if v not in choices]
        if unknown:
            raise ConfigurationError(
                setting=name,
                reason=f"Unknown values {unknown}, expected any of {list(choices)}",
                current_value=value_str
            )
    return values


def _get_choice_env(name: str, default: str, choices: Tuple[str, ...]) -> str:
    value = os.environ.get(name, default).strip().lower() or default
    if value not in choices:
        raise ConfigurationError(
            setting=name,
            reason=f"Must be one of {list(choices)}",
            current_value=value
        )
    return value


@dataclass(frozen=True)
class NfoSettings:
    """
    Immutable snapshot of everything the NFO reader, writer and mapping consume

    A batch works on one snapshot, so configuration changes never show up
    halfway through writing an entity's NFO files.
    """
    dialect: str = "kodi"
    movie_namings: Tuple[str, ...] = ("filename",)
    write_clean_nfo: bool = False
    rating_sources: Tuple[str, ...] = DEFAULT_RATING_SOURCES
    certification_country: str = "US"
    certification_style: str = "short"
    write_single_studio: bool = False
    write_lockdata: bool = False
    date_added_field: str = "date_added"
    nfo_language: str = "en"
    create_outline: bool = False
    outline_first_sentence: bool = False
    movieset_data_folder: str = ""
    movieset_namings: Tuple[str, ...] = ("kodi",)
    backup_dir: str = ""
    app_name: str = "nfobridge"
    app_version: str = DEFAULT_APP_VERSION


class NFOBridgeConfig:
    """Configuration class for NFOBridge with integrated validation"""

    def __init__(self):
        self._load_configuration()

    def _load_configuration(self) -> None:
        """Load all configuration from environment variables"""
        self.debug = _bool_env("DEBUG", False)
        self.port = self._get_int_env("PORT", 8080, 1, 65535)
        self.log_dir = os.environ.get("LOG_DIR", "")
        self.app_name = os.environ.get("APP_NAME", "nfobridge")
        self.app_version = os.environ.get("APP_VERSION", DEFAULT_APP_VERSION)

        self._load_nfo_settings()
        self._load_movieset_settings()

    def _load_nfo_settings(self) -> None:
        """Load the NFO dialect and writer toggles"""
        self.nfo_dialect = _get_choice_env("NFO_DIALECT", "kodi", DIALECT_NAMES)
        self.movie_namings = _get_list_env("NFO_NAMING", ("filename",), MOVIE_NAMINGS)
        self.write_clean_nfo = _bool_env("WRITE_CLEAN_NFO", False)
        self.rating_sources = _get_list_env("RATING_SOURCES", DEFAULT_RATING_SOURCES)
        self.certification_country = os.environ.get("CERTIFICATION_COUNTRY", "US").strip().upper() or "US"
        self.certification_style = _get_choice_env("CERTIFICATION_STYLE", "short", CERTIFICATION_STYLES)
        self.write_single_studio = _bool_env("NFO_WRITE_SINGLE_STUDIO", False)
        self.write_lockdata = _bool_env("NFO_WRITE_LOCKDATA", False)
        self.date_added_field = _get_choice_env("NFO_DATEADDED_FIELD", "date_added", DATE_ADDED_FIELDS)
        self.nfo_language = os.environ.get("NFO_LANGUAGE", "en").strip().lower() or "en"
        self.create_outline = _bool_env("CREATE_OUTLINE", False)
        self.outline_first_sentence = _bool_env("OUTLINE_FIRST_SENTENCE", False)
        self.backup_dir = os.environ.get("BACKUP_DIR", "")

        if len(self.certification_country) != 2:
            raise ConfigurationError(
                setting="CERTIFICATION_COUNTRY",
                reason="Expected a two letter country code",
                current_value=self.certification_country
            )

    def _load_movieset_settings(self) -> None:
        """Load movie set NFO settings"""
        self.movieset_data_folder = os.environ.get("MOVIESET_DATA_FOLDER", "")
        self.movieset_namings = _get_list_env("MOVIESET_NFO_NAMING", ("kodi",), MOVIESET_NAMINGS)

        if self.movieset_data_folder and not Path(self.movieset_data_folder).is_absolute():
            _log("WARNING", f"MOVIESET_DATA_FOLDER should be absolute: {self.movieset_data_folder}")

    def _get_int_env(self, name: str, default: int, min_val: int, max_val: int) -> int:
        """Get integer environment variable with validation"""
        value_str = os.environ.get(name)
        if not value_str:
            return default

        try:
            value = int(value_str)
        except ValueError:
            raise ConfigurationError(
                setting=name,
                reason="Invalid integer value",
                current_value=value_str
            )
        if value < min_val or value > max_val:
            raise ConfigurationError(
                setting=name,
                reason=f"Value must be between {min_val} and {max_val}",
                current_value=value_str
            )
        return value

    def nfo_settings(self) -> NfoSettings:
        """Freeze the current values for one batch of reads/writes"""
        return NfoSettings(
            dialect=self.nfo_dialect,
            movie_namings=self.movie_namings,
            write_clean_nfo=self.write_clean_nfo,
            rating_sources=self.rating_sources,
            certification_country=self.certification_country,
            certification_style=self.certification_style,
            write_single_studio=self.write_single_studio,
            write_lockdata=self.write_lockdata,
            date_added_field=self.date_added_field,
            nfo_language=self.nfo_language,
            create_outline=self.create_outline,
            outline_first_sentence=self.outline_first_sentence,
            movieset_data_folder=self.movieset_data_folder,
            movieset_namings=self.movieset_namings,
            backup_dir=self.backup_dir,
            app_name=self.app_name,
            app_version=self.app_version,
        )

    def get_configuration_summary(self) -> Dict[str, Any]:
        """Get a summary of current configuration"""
        return {
            "app": {
                "name": self.app_name,
                "version": self.app_version,
                "port": self.port,
                "debug": self.debug,
                "log_dir": self.log_dir or None
            },
            "nfo": {
                "dialect": self.nfo_dialect,
                "namings": list(self.movie_namings),
                "write_clean_nfo": self.write_clean_nfo,
                "rating_sources": list(self.rating_sources),
                "certification_country": self.certification_country,
                "certification_style": self.certification_style,
                "write_single_studio": self.write_single_studio,
                "write_lockdata": self.write_lockdata,
                "date_added_field": self.date_added_field,
                "nfo_language": self.nfo_language,
                "create_outline": self.create_outline,
                "outline_first_sentence": self.outline_first_sentence,
                "backup_dir": self.backup_dir or None
            },
            "movie_sets": {
                "data_folder": self.movieset_data_folder or None,
                "namings": list(self.movieset_namings)
            }
        }


def _load_environment_files() -> None:
    """Load environment variables from .env and optionally .env.secrets"""
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)
        _log("INFO", f"Loaded environment from {env_file}")

    secrets_file = Path(".env.secrets")
    if secrets_file.exists():
        load_dotenv(secrets_file)
        _log("INFO", f"Loaded secrets from {secrets_file}")


_load_environment_files()

# Global config instance
config = NFOBridgeConfig()
