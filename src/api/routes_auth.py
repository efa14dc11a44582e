"""
认证 API：注册、登录，以及受保护路由使用的 Bearer token 依赖。
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from src.api.responses import ApiError, format_api_response
from src.api.schemas import CurrentUser, LoginRequest, RegisterRequest
from src.auth.session import TokenError, create_token, verify_token
from src.db.errors import StorageError, UserExistsError
from src.db.user_store import UserStore
from src.log import get_logger
from src.observability.metrics import metrics
from src.utils.validation import validate_user_input

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def _get_token_from_header(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer":
        return None
    return token.strip() or None


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> CurrentUser:
    """Dependency: require a valid ``Authorization: Bearer <token>``, return the caller."""
    token = _get_token_from_header(authorization)
    if not token:
        raise ApiError(401, "No token, authorization denied")
    try:
        claims = verify_token(token, secret=request.app.state.settings.auth.secret_key)
    except TokenError:
        raise ApiError(401, "Token is not valid")
    return CurrentUser(**claims)


@router.post("/register", status_code=201)
def register(
    body: Optional[RegisterRequest] = None,
    users: UserStore = Depends(get_user_store),
) -> dict:
    """用户名+密码注册，返回 {id, username}。"""
    data = body.model_dump() if body else {}
    if not data.get("username") or not data.get("password"):
        raise ApiError(400, "Username and password are required")

    result = validate_user_input(data)
    if not result.is_valid:
        raise ApiError(400, "; ".join(result.errors), errors=result.errors)

    try:
        user = users.create(data["username"], data["password"])
    except UserExistsError:
        raise ApiError(400, "User already exists")
    except StorageError as e:
        raise ApiError(400, str(e))

    metrics.registrations_total.inc()
    return format_api_response(True, user, "User registered successfully")


@router.post("/login")
def login(
    request: Request,
    body: Optional[LoginRequest] = None,
    users: UserStore = Depends(get_user_store),
) -> dict:
    """用户名+密码登录，返回 token 与用户信息。"""
    username = body.username if body else None
    password = body.password if body else None
    if not username or not password or not isinstance(username, str) or not isinstance(password, str):
        raise ApiError(400, "Username and password are required")

    user = users.authenticate(username, password)
    if user is None:
        metrics.logins_total.labels(outcome="failure").inc()
        logger.info("failed login for username=%r", username)
        raise ApiError(401, "Invalid credentials")

    auth = request.app.state.settings.auth
    token = create_token(
        user["id"],
        user["username"],
        secret=auth.secret_key,
        expire_hours=auth.token_expire_hours,
    )
    metrics.logins_total.labels(outcome="success").inc()
    response = format_api_response(True, None, "Login successful")
    response["token"] = token
    response["user"] = user
    return response
