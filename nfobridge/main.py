#!/usr/bin/env python3
"""
NFOBridge - multi-dialect NFO reading and writing service for movies and movie sets
"""
import signal
import sys
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI

# Import configuration first
from nfobridge.config.settings import config
from nfobridge.utils.logging import _log

from nfobridge.core.dialects import dialect_names
from nfobridge.core.messages import LoggingMessageSink
from nfobridge.core.nfo_manager import NFOManager

from nfobridge.api.routes import register_routes


def get_version() -> str:
    """Get application version"""
    return config.app_version


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    return FastAPI(
        title="NFOBridge",
        description="Reads and writes movie NFO files for Kodi, Emby, Jellyfin and MediaPortal",
        version=get_version()
    )


def initialize_components() -> dict:
    """Initialize all application components"""
    nfo_manager = NFOManager(config.nfo_settings(), LoggingMessageSink())
    return {
        "nfo_manager": nfo_manager,
        "start_time": datetime.now(timezone.utc),
        "config": config,
        "version": get_version(),
    }


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully"""
    _log("INFO", f"Received signal {signum}, shutting down gracefully...")
    sys.exit(0)


def main():
    """Main application entry point"""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    _log("INFO", "Starting NFOBridge")
    _log("INFO", f"Version: {get_version()}")
    _log("INFO", f"Default dialect: {config.nfo_dialect} (available: {', '.join(dialect_names())})")
    _log("INFO", f"Movie NFO namings: {list(config.movie_namings)}, clean rewrite: {config.write_clean_nfo}")
    if config.movieset_data_folder:
        _log("INFO", f"Movie set NFOs in {config.movieset_data_folder} ({list(config.movieset_namings)})")

    app = create_app()
    dependencies = initialize_components()
    register_routes(app, dependencies)

    try:
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=config.port,
            reload=False,
            access_log=False,
            server_header=False,
        )
    except KeyboardInterrupt:
        _log("INFO", "NFOBridge stopped by user")
    except Exception as e:
        _log("ERROR", f"NFOBridge crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
