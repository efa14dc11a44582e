"""
Prometheus metrics 定义。

所有指标集中定义，业务模块通过 `from src.observability import metrics` 引用。
"""

from prometheus_client import Counter, Histogram, Info


class _Metrics:
    """集中管理所有 Prometheus 指标"""

    def __init__(self):
        # ── HTTP 请求 ──
        self.http_requests_total = Counter(
            "ideas_api_http_requests_total",
            "HTTP 请求总数",
            ["method", "endpoint", "status_code"],
        )
        self.http_request_duration_seconds = Histogram(
            "ideas_api_http_request_duration_seconds",
            "HTTP 请求延迟 (秒)",
            ["method", "endpoint"],
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
        )

        # ── 认证 ──
        self.logins_total = Counter(
            "ideas_api_logins_total",
            "登录尝试次数",
            ["outcome"],  # success / failure
        )
        self.registrations_total = Counter(
            "ideas_api_registrations_total",
            "注册成功次数",
        )

        # ── Ideas ──
        self.idea_mutations_total = Counter(
            "ideas_api_idea_mutations_total",
            "idea 写操作次数",
            ["action"],  # create / update / delete
        )

        # ── 应用信息 ──
        self.app_info = Info("ideas_api_app", "应用元信息")


metrics = _Metrics()
