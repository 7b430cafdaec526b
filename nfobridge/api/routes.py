"""
FastAPI routes for NFOBridge
"""
from datetime import datetime, timezone

from fastapi import HTTPException

from nfobridge.api.models import (
    HealthResponse,
    MovieModel,
    ParseRequest,
    ParseResponse,
    RenderRequest,
    RenderResponse,
    WriteMovieRequest,
    WriteMovieResponse,
    record_to_dict,
)
from nfobridge.core.dialects import dialect_names, get_movie_dialect
from nfobridge.core.mapping import record_to_movie
from nfobridge.core.messages import LoggingMessageSink, MessageCollector
from nfobridge.core.naming import MovieNfoNaming
from nfobridge.core.nfo_manager import NFOManager
from nfobridge.utils.error_handler import create_error_response, log_structured_error
from nfobridge.utils.exceptions import NFOParseError, ValidationError
from nfobridge.utils.logging import _log
from nfobridge.utils.validation import require_choice


PARSE_KINDS = ("movie", "collection", "any")


def _bad_request(error: ValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail=create_error_response(error, include_details=True))


def _unprocessable(error: NFOParseError) -> HTTPException:
    return HTTPException(status_code=422, detail=create_error_response(error, include_details=True))


def _movie_from_request(model, settings):
    try:
        return model.to_movie(settings)
    except ValueError as e:
        raise _bad_request(ValidationError("movie", None, str(e))) from e


# ---------------------------
# Route Handlers
# ---------------------------

async def health(dependencies: dict) -> HealthResponse:
    """Health check endpoint"""
    config = dependencies["config"]
    uptime = datetime.now(timezone.utc) - dependencies["start_time"]
    return HealthResponse(
        status="healthy",
        version=dependencies["version"],
        uptime=str(uptime),
        configuration=config.get_configuration_summary(),
    )


async def list_dialects(dependencies: dict) -> dict:
    return {"dialects": dialect_names(), "default": dependencies["nfo_manager"].settings.dialect}


async def parse_nfo(request: ParseRequest, dependencies: dict) -> ParseResponse:
    """Parse NFO text; content that is not XML at all is rejected with 422"""
    manager: NFOManager = dependencies["nfo_manager"]
    try:
        require_choice(request.kind, PARSE_KINDS, "kind")
    except ValidationError as e:
        raise _bad_request(e)

    try:
        record = manager.parse_nfo_text(request.content, request.kind, "<request>")
    except NFOParseError as e:
        log_structured_error(e, "POST /nfo/parse")
        raise _unprocessable(e)

    movie = None
    if record.is_valid_nfo() and request.kind != "collection":
        movie = MovieModel.from_movie(record_to_movie(record))

    return ParseResponse(
        valid=record.is_valid_nfo(),
        record=record_to_dict(record),
        movie=movie,
        warnings=record.warnings,
        unsupported_fragments=record.unsupported_fragments,
    )


async def render_nfo(request: RenderRequest, dependencies: dict) -> RenderResponse:
    """Render a movie NFO in the requested dialect without writing it"""
    manager: NFOManager = dependencies["nfo_manager"]
    dialect = request.dialect or manager.settings.dialect
    try:
        get_movie_dialect(dialect)
    except ValidationError as e:
        raise _bad_request(e)

    prior = None
    if request.prior_content:
        try:
            prior = manager.parse_nfo_text(request.prior_content, "movie", "<prior>")
        except NFOParseError as e:
            raise _unprocessable(e)

    movie = _movie_from_request(request.movie, manager.settings)
    return RenderResponse(xml=manager.render_movie(movie, dialect, prior, request.clean))


def write_movie_nfo(request: WriteMovieRequest, dependencies: dict) -> WriteMovieResponse:
    """
    Write a movie's NFO files to disk and report per-file failures

    Runs in the FastAPI threadpool since file writes and retries block
    """
    manager: NFOManager = dependencies["nfo_manager"]
    dialect = request.dialect or manager.settings.dialect
    try:
        get_movie_dialect(dialect)
        namings = [MovieNfoNaming(require_choice(n, [m.value for m in MovieNfoNaming], "namings"))
                   for n in (request.namings or manager.settings.movie_namings)]
    except ValidationError as e:
        raise _bad_request(e)

    movie = _movie_from_request(request.movie, manager.settings)
    if not movie.path:
        raise _bad_request(ValidationError("movie.path", movie.path, "is required to write NFO files"))

    collector = MessageCollector(forward=LoggingMessageSink())
    request_manager = NFOManager(manager.settings, collector)
    nfo_files = request_manager.write_movie_nfos(movie, [(dialect, n) for n in namings])

    messages = [m.to_dict() for m in collector.drain()]
    _log("INFO", f"Wrote NFOs for '{movie.title}': {len(nfo_files)} file(s), {len(messages)} problem(s)")
    return WriteMovieResponse(
        status="partial" if messages else "success",
        written=[str(p) for p in nfo_files],
        nfo_files=movie.nfo_files,
        messages=messages,
    )


def register_routes(app, dependencies: dict):
    """
    Register all routes with the FastAPI app

    Args:
        app: FastAPI application instance
        dependencies: Dictionary containing:
            - nfo_manager: NFOManager instance
            - config: NFOBridgeConfig instance
            - start_time: Application start time
            - version: Application version string
    """

    @app.get("/health")
    async def _health() -> HealthResponse:
        return await health(dependencies)

    @app.get("/dialects")
    async def _list_dialects():
        return await list_dialects(dependencies)

    @app.post("/nfo/parse")
    async def _parse_nfo(request: ParseRequest) -> ParseResponse:
        return await parse_nfo(request, dependencies)

    @app.post("/nfo/render")
    async def _render_nfo(request: RenderRequest) -> RenderResponse:
        return await render_nfo(request, dependencies)

    @app.post("/movies/nfo")
    def _write_movie_nfo(request: WriteMovieRequest) -> WriteMovieResponse:
        return write_movie_nfo(request, dependencies)
