"""
统一配置模块
- 配置文件: config/app_config.json（端口、数据库、技能数据文件等可调参数）
- 本地覆盖: config/app_config.local.json（本地私密配置，如 auth.secret_key）
- 环境变量优先覆盖敏感项（JWT_SECRET / DATABASE_URL 等）
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]

_CONFIG_PATH = Path(__file__).parent / "app_config.json"
_LOCAL_CONFIG_PATH = Path(__file__).parent / "app_config.local.json"


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_raw_config() -> Dict[str, Any]:
    raw = _load_json(_CONFIG_PATH)
    if _LOCAL_CONFIG_PATH.exists():
        raw = _deep_merge(raw, _load_json(_LOCAL_CONFIG_PATH))
    return raw


def _resolve_path(value: str) -> Path:
    path = Path(os.path.expanduser(value))
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass
class ApiSettings:
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class AuthSettings:
    """认证配置：签名密钥（必须提供，放 .env 或 .local.json）、token 有效期、bcrypt 轮数"""
    secret_key: str = ""
    token_expire_hours: float = 24.0
    bcrypt_rounds: int = 10


@dataclass
class DatabaseSettings:
    url: str = "sqlite:///data/database.sqlite"


@dataclass
class SkillsSettings:
    path: Path = field(default_factory=lambda: PROJECT_ROOT / "data" / "skills.json")
    # False: 每次请求重新读取文件；True: 启动时加载一次，通过 reload() 显式刷新
    cache_enabled: bool = False


class Settings:
    def __init__(self, raw: Optional[Dict[str, Any]] = None):
        raw = load_raw_config() if raw is None else raw
        self.env = os.getenv("APP_ENV", str(raw.get("env", "dev")))

        ap = raw.get("api") or {}
        self.api = ApiSettings(
            host=os.getenv("API_HOST", str(ap.get("host", "0.0.0.0"))),
            port=int(os.getenv("PORT", ap.get("port", 3001))),
            cors_origins=list(ap.get("cors_origins") or ["*"]),
        )

        au = raw.get("auth") or {}
        self.auth = AuthSettings(
            secret_key=os.getenv("JWT_SECRET") or str(au.get("secret_key") or ""),
            token_expire_hours=float(au.get("token_expire_hours", 24)),
            bcrypt_rounds=int(au.get("bcrypt_rounds", 10)),
        )

        db = raw.get("database") or {}
        self.database = DatabaseSettings(
            url=os.getenv("DATABASE_URL") or str(db.get("url") or "sqlite:///data/database.sqlite"),
        )

        sk = raw.get("skills") or {}
        self.skills = SkillsSettings(
            path=_resolve_path(os.getenv("SKILLS_FILE") or str(sk.get("path") or "data/skills.json")),
            cache_enabled=_as_bool(os.getenv("SKILLS_CACHE", sk.get("cache_enabled", False))),
        )

        self.logging: Dict[str, Any] = dict(raw.get("logging") or {})

    @property
    def is_prod(self) -> bool:
        return self.env == "prod"

    def print_info(self):
        print(f"""
========================================
  Skills & Ideas API
========================================
  环境: {self.env}
  监听: {self.api.host}:{self.api.port}
  数据库: {self.database.url}
  技能数据: {self.skills.path} (cache={self.skills.cache_enabled})
  JWT secret: {"set" if self.auth.secret_key else "MISSING"}
========================================
        """)


# 全局单例
settings = Settings()
