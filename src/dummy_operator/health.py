"""Health check endpoints for the operator."""

import os
from typing import Any

from prometheus_client import make_wsgi_app
from werkzeug.wrappers import Request, Response

from .constants import IMAGE_ENV_VAR


def is_ready() -> bool:
    """The operator can create Deployments only when the operand image is configured."""
    return os.getenv(IMAGE_ENV_VAR) is not None


def create_combined_wsgi_app() -> Any:
    """Create a WSGI app that combines metrics and health check endpoints.

    Returns:
        Combined WSGI application
    """
    metrics_app = make_wsgi_app()

    def combined_app(environ: dict[str, Any], start_response: Any) -> Any:
        """WSGI app that routes /healthz and /readyz, delegates /metrics to prometheus."""
        request = Request(environ)

        if request.path == "/healthz":
            response = Response('{"status":"ok"}', mimetype="application/json", status=200)
            return response(environ, start_response)
        if request.path == "/readyz":
            if is_ready():
                response = Response('{"status":"ready"}', mimetype="application/json", status=200)
            else:
                response = Response(
                    f'{{"status":"not ready","reason":"{IMAGE_ENV_VAR} is not set"}}',
                    mimetype="application/json",
                    status=503,
                )
            return response(environ, start_response)

        return metrics_app(environ, start_response)

    return combined_app
