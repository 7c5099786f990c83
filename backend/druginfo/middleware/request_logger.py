"""
Request logger – before/after-request hooks that write one access line
per API interaction. Request bodies are logged at DEBUG only, with
credentials redacted.
"""

import json
import logging
import time
from flask import request, g

logger = logging.getLogger("druginfo.access")

REDACTED_FIELDS = ("password", "newPassword")


def start_timer():
    g.request_started = time.perf_counter()


def log_after_request(response):
    """Log method, path, status and duration for every request."""
    # Skip health checks from filling the log
    if request.path == "/health":
        return response

    started = getattr(g, "request_started", None)
    duration_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0

    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s -> %s (%.1f ms)",
        request.method, request.path, response.status_code, duration_ms,
    )

    if logger.isEnabledFor(logging.DEBUG) and request.is_json:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            safe_body = {k: ("***" if k in REDACTED_FIELDS else v) for k, v in body.items()}
            logger.debug("Request body: %s", json.dumps(safe_body)[:2000])

    return response
