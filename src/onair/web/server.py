"""
Web server for OnAir.

Provides the FastAPI application serving live channel playlists, static
episode playlists and, when ``STREAMS_DIR`` is configured, the chunk files
the playlists point at.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ..infra.exceptions import OnAirError
from ..infra.logging import configure_logging
from ..infra.settings import settings
from .api import streams

_log = structlog.get_logger(__name__)

_QUIET_PATH_PATTERNS = [
    re.compile(r"^/streams/channel/[^/]+/playlist\.m3u8$"),
    re.compile(r"^/streams/[^/]+/\d+\.ts$"),
]


class HLSAccessFilter(logging.Filter):
    """
    Drops successful playlist and chunk GETs from the uvicorn access log.

    Players poll the live playlist every segment and fetch every chunk, so
    those lines carry no information. Errors (status >= 400) still pass.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if not isinstance(args, tuple) or len(args) < 5:
            return True
        _client, method, path, _version, status_code = args[:5]
        if method != "GET" or not isinstance(status_code, int) or status_code >= 400:
            return True
        path = str(path).split("?", 1)[0]
        return not any(pattern.match(path) for pattern in _QUIET_PATH_PATTERNS)


async def _onair_error_handler(request: Request, exc: OnAirError) -> JSONResponse:
    log = _log.warning if exc.status_code < 500 else _log.error
    log("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )


def create_app(streams_dir: str | None = None) -> FastAPI:
    """Build the application. ``streams_dir`` overrides ``settings.streams_dir``."""
    app = FastAPI(title="OnAir Playlist Server")
    app.add_exception_handler(OnAirError, _onair_error_handler)

    @app.middleware("http")
    async def streaming_headers(request: Request, call_next):
        resp = await call_next(request)
        if request.url.path.endswith(".ts"):
            resp.headers["Content-Type"] = "video/mp2t"
            # Ensure no compression for .ts files
            resp.headers["Content-Encoding"] = "identity"
        return resp

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    # Playlist routes must be registered before the /streams static mount
    app.include_router(streams.router)

    chunk_root = streams_dir if streams_dir is not None else settings.streams_dir
    if chunk_root:
        if Path(chunk_root).is_dir():
            app.mount("/streams", StaticFiles(directory=chunk_root), name="streams")
        else:
            _log.warning("streams_dir_missing", streams_dir=chunk_root)

    return app


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Run the playlist server under uvicorn."""
    configure_logging()
    logging.getLogger("uvicorn.access").addFilter(HLSAccessFilter())
    app = create_app()
    _log.info("server_starting", host=host or settings.host, port=port or settings.port)
    uvicorn.run(app, host=host or settings.host, port=port or settings.port, log_config=None)
