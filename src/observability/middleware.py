"""
FastAPI 中间件：记录每个请求的日志，并采集 HTTP 请求延迟 / 计数 / 状态码指标。
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.log import get_logger
from src.observability.metrics import metrics

logger = get_logger("src.api.access")


def _normalize_path(path: str) -> str:
    """
    将 path 中的数字 ID 替换为占位符，防止高基数指标。
    e.g. /api/ideas/42 → /api/ideas/{id}
    """
    parts = path.strip("/").split("/")
    normalized = ["{id}" if part.isdigit() else part for part in parts]
    return "/" + "/".join(normalized)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """请求日志 + HTTP 指标。"""

    async def dispatch(self, request: Request, call_next):
        method = request.method
        path = _normalize_path(request.url.path)

        # /metrics 自身不计入，避免自引用噪音
        if request.url.path == "/metrics":
            return await call_next(request)

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - start

        logger.info("%s %s -> %d (%.1f ms)", method, request.url.path, response.status_code, elapsed * 1000)
        metrics.http_requests_total.labels(
            method=method, endpoint=path, status_code=str(response.status_code)
        ).inc()
        metrics.http_request_duration_seconds.labels(
            method=method, endpoint=path
        ).observe(elapsed)

        return response
