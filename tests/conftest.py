"""
共享 Fixtures: 临时 SQLite 数据库、临时技能文件、测试用 app / client。
"""

import json
import os
import tempfile

# 测试日志写到临时目录，必须在导入 src.* 之前设置
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="ideas-api-logs-"))

import pytest
from fastapi.testclient import TestClient

from config.settings import AuthSettings, Settings
from src.api.server import create_app
from src.catalog.skill_catalog import SkillCatalog
from src.db.engine import create_db_engine, init_db

TEST_SECRET = "test-secret-key-do-not-use-outside-the-test-suite"
TEST_PASSWORD = "testpassword123"


@pytest.fixture
def app_settings():
    """配置：固定 JWT secret，bcrypt 用最小轮数加快测试"""
    s = Settings(raw={})
    s.auth = AuthSettings(secret_key=TEST_SECRET, token_expire_hours=24, bcrypt_rounds=4)
    return s


@pytest.fixture
def engine(tmp_path):
    """每个测试独立的 SQLite 文件"""
    eng = create_db_engine(f"sqlite:///{tmp_path / 'test.sqlite'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def sample_skills():
    return [
        {"id": 1, "name": "Python", "category": "Programming", "proficiency": "Advanced"},
        {"id": 2, "name": "css", "category": "Frontend Design", "proficiency": "Intermediate"},
        {"id": 3, "name": "Docker", "category": "DevOps", "proficiency": "Beginner"},
        {"id": 4, "name": "JavaScript", "category": "Programming", "proficiency": "advanced"},
    ]


@pytest.fixture
def skills_file(tmp_path, sample_skills):
    path = tmp_path / "skills.json"
    path.write_text(json.dumps(sample_skills), encoding="utf-8")
    return path


@pytest.fixture
def app(app_settings, engine, skills_file):
    return create_app(app_settings, engine=engine, skill_catalog=SkillCatalog(skills_file))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered_user(client):
    """通过 API 注册一个用户，返回 {id, username, password}"""
    payload = {"username": "testuser", "password": TEST_PASSWORD}
    res = client.post("/api/register", json=payload)
    assert res.status_code == 201
    return {**res.json()["data"], "password": TEST_PASSWORD}


@pytest.fixture
def auth_headers(client, registered_user):
    res = client.post(
        "/api/login",
        json={"username": registered_user["username"], "password": registered_user["password"]},
    )
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['token']}"}
