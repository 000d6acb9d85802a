"""
Request logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from library_catalog.core.logger_config import log_performance, logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id and logs method, path, status and duration.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.bind(request_id=request_id).opt(exception=e).error(
                f"[{request_id}] Request failed: {request.method} {request.url.path} - {process_time:.4f}s"
            )
            raise

        process_time = time.time() - start_time
        message = (
            f"[{request_id}] {request.method} {request.url.path} - "
            f"Status: {response.status_code} - Time: {process_time:.4f}s"
        )
        if response.status_code >= 500:
            logger.bind(request_id=request_id).error(message)
        elif response.status_code >= 400:
            logger.bind(request_id=request_id).warning(message)
        else:
            logger.bind(request_id=request_id).info(message)

        log_performance(f"http_request_{request.method}_{request.url.path}", process_time)
        response.headers["X-Request-ID"] = request_id
        return response
