import inspect
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nfobridge.api.models import MovieModel
from nfobridge.api.routes import register_routes
from nfobridge.config.settings import config
from nfobridge.core.messages import LoggingMessageSink
from nfobridge.core.nfo_manager import NFOManager


@pytest.fixture
def client(settings):
    app = FastAPI()
    register_routes(app, {
        "nfo_manager": NFOManager(settings, LoggingMessageSink()),
        "start_time": datetime.now(timezone.utc),
        "config": config,
        "version": "1.0.0",
    })
    return TestClient(app)


@pytest.fixture
def movie_payload(movie):
    return MovieModel.from_movie(movie).model_dump(mode="json")


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "1.0.0"
    assert "nfo" in body["configuration"]


def test_dialects(client):
    body = client.get("/dialects").json()
    assert body["default"] == "kodi"
    assert "jellyfin" in body["dialects"]


def test_parse(client, foreign_nfo):
    response = client.post("/nfo/parse", json={"content": foreign_nfo})
    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is True
    assert body["record"]["title"] == "Heat"
    assert body["record"]["ids"] == {"imdb": "tt0113277"}
    assert body["movie"]["year"] == 1995
    assert body["unsupported_fragments"][0] == "<myscraper_score>42</myscraper_score>"


def test_parse_without_known_root_is_invalid(client):
    body = client.post("/nfo/parse", json={"content": "<tvshow><title>X</title></tvshow>"}).json()
    assert body["valid"] is False
    assert body["movie"] is None
    assert body["warnings"]


def test_parse_rejects_non_xml(client):
    response = client.post("/nfo/parse", json={"content": "definitely not xml"})
    assert response.status_code == 422
    assert response.json()["detail"]["error_type"] == "NFOParseError"


def test_parse_rejects_unknown_kind(client):
    response = client.post("/nfo/parse", json={"content": "<movie/>", "kind": "episode"})
    assert response.status_code == 400
    assert response.json()["detail"]["error_type"] == "ValidationError"


def test_render(client, movie_payload):
    body = client.post("/nfo/render", json={"movie": movie_payload, "dialect": "emby"}).json()
    assert "<title>The Matrix</title>" in body["xml"]
    assert "<fanart>" not in body["xml"]
    assert "<mpaa>R</mpaa>" in body["xml"]


def test_render_keeps_prior_fragments_unless_clean(client, movie_payload, foreign_nfo):
    request = {"movie": movie_payload, "prior_content": foreign_nfo}
    assert "myscraper_score" in client.post("/nfo/render", json=request).json()["xml"]
    request["clean"] = True
    assert "myscraper_score" not in client.post("/nfo/render", json=request).json()["xml"]


def test_render_rejects_unknown_dialect_and_artwork(client, movie_payload):
    assert client.post("/nfo/render", json={"movie": movie_payload, "dialect": "plex"}).status_code == 400
    movie_payload["artwork"] = {"wallpaper": "https://x/y.jpg"}
    assert client.post("/nfo/render", json={"movie": movie_payload}).status_code == 400


def test_write_movie_nfo(client, movie_payload, tmp_path):
    movie_payload["path"] = str(tmp_path)
    movie_payload["video_files"] = [str(tmp_path / "The Matrix (1999).mkv")]
    response = client.post("/movies/nfo", json={"movie": movie_payload, "namings": ["filename", "movie"]})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["written"] == [str(tmp_path / "The Matrix (1999).nfo"), str(tmp_path / "movie.nfo")]
    assert (tmp_path / "movie.nfo").exists()


def test_write_movie_nfo_requires_path(client, movie_payload):
    response = client.post("/movies/nfo", json={"movie": movie_payload})
    assert response.status_code == 400


def test_write_movie_nfo_rejects_unknown_naming(client, movie_payload, tmp_path):
    movie_payload["path"] = str(tmp_path)
    response = client.post("/movies/nfo", json={"movie": movie_payload, "namings": ["folder"]})
    assert response.status_code == 400


def test_write_movie_nfo_reports_partial_failure(client, movie_payload, tmp_path):
    # a directory where the NFO file should go makes that one target fail
    (tmp_path / "movie.nfo").mkdir()
    movie_payload["path"] = str(tmp_path)
    movie_payload["video_files"] = [str(tmp_path / "The Matrix (1999).mkv")]
    body = client.post("/movies/nfo", json={"movie": movie_payload, "namings": ["movie", "filename"]}).json()
    assert body["status"] == "partial"
    assert body["written"] == [str(tmp_path / "The Matrix (1999).nfo")]
    assert body["messages"][0]["level"] == "error"
    assert Path(body["messages"][0]["path"]).name == "movie.nfo"


def test_write_route_is_synchronous(client):
    route = next(r for r in client.app.routes if getattr(r, "path", "") == "/movies/nfo")
    assert not inspect.iscoroutinefunction(route.endpoint)
