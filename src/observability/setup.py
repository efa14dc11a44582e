"""
一键初始化 Observability：注册中间件 + /metrics + /health/detailed + 应用元信息。
"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from src.db.engine import ping
from src.log import get_logger
from src.observability.metrics import metrics
from src.observability.middleware import ObservabilityMiddleware

logger = get_logger(__name__)


def setup_observability(app: FastAPI, version: str) -> None:
    """在 FastAPI app 上挂载 Observability 组件；应在 router 注册之后调用。"""
    app.add_middleware(ObservabilityMiddleware)

    @app.get("/metrics", include_in_schema=False)
    def prometheus_metrics():
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health/detailed", tags=["observability"])
    def health_detailed(request: Request):
        """详细健康检查：数据库可连接、技能数据文件可读"""
        checks = {}

        try:
            ping(request.app.state.engine)
            checks["database"] = "ok"
        except Exception as e:
            checks["database"] = f"error: {e}"

        catalog = request.app.state.skill_catalog
        checks["skills_file"] = "ok" if catalog.path.is_file() else f"missing: {catalog.path}"

        overall = "ok" if all(v == "ok" for v in checks.values()) else "degraded"
        return {"status": overall, "components": checks}

    metrics.app_info.info({"version": version, "service": "skills-ideas-api"})

    logger.info("[observability] middleware + /metrics + /health/detailed registered")
