import pytest

from nfobridge.config.settings import NFOBridgeConfig, NfoSettings
from nfobridge.utils.exceptions import ConfigurationError


ENV_NAMES = (
    "NFO_DIALECT", "NFO_NAMING", "WRITE_CLEAN_NFO", "RATING_SOURCES", "CERTIFICATION_COUNTRY",
    "CERTIFICATION_STYLE", "NFO_WRITE_SINGLE_STUDIO", "NFO_WRITE_LOCKDATA", "NFO_DATEADDED_FIELD",
    "NFO_LANGUAGE", "CREATE_OUTLINE", "OUTLINE_FIRST_SENTENCE", "MOVIESET_DATA_FOLDER",
    "MOVIESET_NFO_NAMING", "BACKUP_DIR", "PORT", "DEBUG", "APP_NAME", "APP_VERSION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = NFOBridgeConfig().nfo_settings()
    assert settings == NfoSettings()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("NFO_DIALECT", "Jellyfin")
    monkeypatch.setenv("NFO_NAMING", "filename, movie")
    monkeypatch.setenv("WRITE_CLEAN_NFO", "yes")
    monkeypatch.setenv("RATING_SOURCES", "tmdb,imdb")
    monkeypatch.setenv("CERTIFICATION_COUNTRY", "de")
    monkeypatch.setenv("CERTIFICATION_STYLE", "large")
    monkeypatch.setenv("MOVIESET_DATA_FOLDER", str(tmp_path))
    monkeypatch.setenv("MOVIESET_NFO_NAMING", "kodi,automator")
    monkeypatch.setenv("PORT", "9000")

    loaded = NFOBridgeConfig()
    settings = loaded.nfo_settings()
    assert settings.dialect == "jellyfin"
    assert settings.movie_namings == ("filename", "movie")
    assert settings.write_clean_nfo is True
    assert settings.rating_sources == ("tmdb", "imdb")
    assert settings.certification_country == "DE"
    assert settings.certification_style == "large"
    assert settings.movieset_namings == ("kodi", "automator")
    assert loaded.port == 9000

    summary = loaded.get_configuration_summary()
    assert summary["movie_sets"]["data_folder"] == str(tmp_path)
    assert summary["nfo"]["dialect"] == "jellyfin"


@pytest.mark.parametrize("name, value", [
    ("NFO_DIALECT", "plex"),
    ("NFO_NAMING", "filename,folder"),
    ("WRITE_CLEAN_NFO", "sometimes"),
    ("CERTIFICATION_COUNTRY", "USA"),
    ("CERTIFICATION_STYLE", "fancy"),
    ("NFO_DATEADDED_FIELD", "yesterday"),
    ("PORT", "70000"),
    ("PORT", "http"),
])
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError) as excinfo:
        NFOBridgeConfig()
    assert excinfo.value.details["setting"] == name
