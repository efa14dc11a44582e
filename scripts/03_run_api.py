#!/usr/bin/env python3
"""
启动 Skills & Ideas API 服务

用法:
  python scripts/03_run_api.py
  python scripts/03_run_api.py --port 5000 --host 0.0.0.0
  python scripts/03_run_api.py --workers 2

JWT_SECRET 必须通过环境变量 / .env / config/app_config.local.json 提供，否则启动失败。
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    from config.settings import settings
    parser = argparse.ArgumentParser(description="Run Skills & Ideas API")
    parser.add_argument("--host", default=settings.api.host, help="Bind host")
    parser.add_argument("--port", type=int, default=settings.api.port, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable reload (dev)")
    parser.add_argument("--workers", type=int, default=1, help="Number of workers (ignored with --reload)")
    args = parser.parse_args()

    if not settings.auth.secret_key:
        print("Error: JWT_SECRET is not set")
        sys.exit(1)
    settings.print_info()

    import uvicorn

    kwargs = {"host": args.host, "port": args.port, "reload": args.reload, "factory": True}
    if not args.reload and args.workers > 1:
        kwargs["workers"] = args.workers
    uvicorn.run("src.api.server:get_app", **kwargs)


if __name__ == "__main__":
    main()
