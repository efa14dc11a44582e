#!/usr/bin/env python3
"""
命令行注册用户（与 POST /api/register 相同的校验规则）。

用法：
    python scripts/02_add_user.py --username alice --password secret123
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.db import StorageError, UserExistsError, UserStore, create_db_engine, init_db
from src.utils.validation import validate_user_input


def main():
    parser = argparse.ArgumentParser(description="Register a user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args()

    result = validate_user_input({"username": args.username, "password": args.password})
    if not result.is_valid:
        for err in result.errors:
            print(f"Error: {err}")
        sys.exit(1)

    engine = create_db_engine(args.database_url)
    init_db(engine)
    try:
        user = UserStore(engine).create(args.username, args.password)
    except (UserExistsError, StorageError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        engine.dispose()

    print(f"Created user: {user['username']} (id={user['id']})")
    print("Login: POST /api/login with body {\"username\": \"%s\", \"password\": \"...\"}" % user["username"])


if __name__ == "__main__":
    main()
