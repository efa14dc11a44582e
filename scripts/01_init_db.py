#!/usr/bin/env python3
"""
初始化数据库：建表，ideas 表为空时写入示例数据。

用法：
    python scripts/01_init_db.py
    python scripts/01_init_db.py --no-seed
    python scripts/01_init_db.py --database-url sqlite:///data/other.sqlite
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from config.settings import settings
from src.db import IdeaStore, create_db_engine, init_db
from src.db.seed import seed_sample_ideas
from src.log import get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Create tables and seed sample ideas")
    parser.add_argument("--database-url", default=None, help=f"默认 {settings.database.url}")
    parser.add_argument("--no-seed", action="store_true", help="只建表，不写示例数据")
    args = parser.parse_args()

    engine = create_db_engine(args.database_url)
    init_db(engine)
    logger.info("tables ready at %s", engine.url)

    if not args.no_seed:
        inserted = seed_sample_ideas(IdeaStore(engine))
        logger.info("seeded %d sample ideas", inserted)

    engine.dispose()


if __name__ == "__main__":
    main()
