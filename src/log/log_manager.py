"""
API 日志：控制台 + 每次启动一个日志文件；启动时按保留策略清理旧文件。

配置来自 app_config.json 的 ``logging`` 段，LOG_DIR / LOG_LEVEL 环境变量优先。
"""
import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_MB = 1024 * 1024

_DEFAULT_DIR = Path(__file__).resolve().parents[2] / "logs" / "api"


class LogManager:
    """
    Retention (``cleanup``): below ``min_keep_mb`` nothing is touched; above it,
    files older than ``max_age_days`` are removed, then the oldest remaining
    ones until the directory fits in ``max_size_mb``.
    """

    def __init__(self, config: dict[str, Any] | None = None):
        cfg = config or {}
        self.log_dir = Path(os.getenv("LOG_DIR") or cfg.get("log_dir") or _DEFAULT_DIR)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        level = os.getenv("LOG_LEVEL") or cfg.get("level") or "INFO"
        self.level = getattr(logging, str(level).upper(), logging.INFO)
        self.console_output = bool(cfg.get("console_output", True))

        self.max_size_mb = int(cfg.get("max_size_mb", 100))
        self.max_age_days = int(cfg.get("max_age_days", 30))
        self.min_keep_mb = int(cfg.get("min_keep_mb", 20))

        self._run_log_path: Path | None = None
        self._formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)

    @property
    def run_log_path(self) -> Path:
        if self._run_log_path is None:
            self._run_log_path = self.log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
        return self._run_log_path

    def _handler(self, handler: logging.Handler) -> logging.Handler:
        handler.setLevel(self.level)
        handler.setFormatter(self._formatter)
        return handler

    def get_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger
        logger.setLevel(self.level)
        logger.propagate = False
        if self.console_output:
            logger.addHandler(self._handler(logging.StreamHandler()))
        logger.addHandler(self._handler(logging.FileHandler(self.run_log_path, encoding="utf-8")))
        return logger

    def _old_files(self) -> list[Path]:
        """Finished runs' log files, oldest first."""
        files = [
            f for f in self.log_dir.glob("*.log")
            if f.is_file() and f != self._run_log_path
        ]
        return sorted(files, key=lambda f: f.stat().st_mtime)

    def cleanup(self) -> dict[str, Any]:
        report: dict[str, Any] = {"deleted_by_age": [], "deleted_by_size": [], "remaining_mb": 0.0}
        files = self._old_files()
        size = sum(f.stat().st_size for f in files)
        if size < self.min_keep_mb * _MB:
            report["remaining_mb"] = size / _MB
            return report

        cutoff = (datetime.now() - timedelta(days=self.max_age_days)).timestamp()
        kept = []
        for f in files:
            if f.stat().st_mtime < cutoff:
                f.unlink()
                report["deleted_by_age"].append(f.name)
            else:
                kept.append(f)

        size = sum(f.stat().st_size for f in kept)
        while kept and size > self.max_size_mb * _MB:
            oldest = kept.pop(0)
            size -= oldest.stat().st_size
            oldest.unlink()
            report["deleted_by_size"].append(oldest.name)

        report["remaining_mb"] = size / _MB
        return report


_manager: LogManager | None = None


def init_logging(config: dict[str, Any] | None = None) -> LogManager:
    """未传 config 时使用 settings.logging。"""
    global _manager
    if config is None:
        from config.settings import settings
        config = settings.logging
    _manager = LogManager(config)
    return _manager


def get_logger(name: str, config: dict[str, Any] | None = None) -> logging.Logger:
    if _manager is None:
        init_logging(config)
    return _manager.get_logger(name)


def cleanup_logs(config: dict[str, Any] | None = None) -> dict[str, Any]:
    if _manager is None:
        init_logging(config)
    return _manager.cleanup()
