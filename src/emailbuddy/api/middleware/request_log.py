"""
Request logging middleware -- one start/end log line per HTTP request.

Each request gets an id ("req-<epoch ms>-<n>") stored on request.state so
the rewrite pipeline's log lines can be correlated with the HTTP ones.
Bodies are never logged: they contain the user's email drafts.
"""

import itertools
import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)

_counter = itertools.count(1)


def next_request_id() -> str:
    return f"req-{int(time.time() * 1000)}-{next(_counter)}"


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "n/a")


async def log_requests(request: Request, call_next):
    """Attach a request id and log method, path, status and duration."""
    request_id = next_request_id()
    request.state.request_id = request_id
    started = time.monotonic()
    logger.info(f"[HTTP] {request_id} {request.method} {request.url.path}")

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.monotonic() - started) * 1000
        logger.warning(
            f"[HTTP] {request_id} -> 500 unhandled {type(e).__name__} ({duration_ms:.0f}ms)"
        )
        raise

    duration_ms = (time.monotonic() - started) * 1000
    log = logger.warning if response.status_code >= 400 else logger.info
    log(f"[HTTP] {request_id} -> {response.status_code} ({duration_ms:.0f}ms)")
    response.headers["X-Request-ID"] = request_id
    return response
