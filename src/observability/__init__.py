"""
Observability 模块：请求日志 + Prometheus metrics。

用法：
    from src.observability import setup_observability, metrics

    setup_observability(app, version="1.0.0")

    metrics.idea_mutations_total.labels(action="create").inc()
"""

from src.observability.setup import setup_observability
from src.observability.metrics import metrics

__all__ = ["setup_observability", "metrics"]
