"""
Ideas API：列表、详情、创建（需登录）、更新、删除。

PUT / DELETE 目前不要求登录，与 POST 不对称；保留现有行为，见 DESIGN.md。
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from src.api.responses import ApiError, format_api_response
from src.api.routes_auth import get_current_user
from src.api.schemas import CurrentUser, IdeaRequest
from src.db.errors import StorageError
from src.db.idea_store import IdeaStore
from src.observability.metrics import metrics
from src.utils.validation import sanitize_query_params, validate_idea_input

router = APIRouter(prefix="/api/ideas", tags=["ideas"])


def get_idea_store(request: Request) -> IdeaStore:
    return request.app.state.idea_store


def _parse_id(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


def _checked_payload(body: Optional[IdeaRequest]) -> Dict[str, Any]:
    """Title presence first, then the full field validation."""
    data = body.model_dump() if body else {}
    if not data.get("title"):
        raise ApiError(400, "Title is required")
    result = validate_idea_input(data)
    if not result.is_valid:
        raise ApiError(400, "; ".join(result.errors), errors=result.errors)
    return data


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@router.get("")
def list_ideas(request: Request, ideas: IdeaStore = Depends(get_idea_store)) -> dict:
    """列出全部 ideas；支持 _limit / _page / _sort / _order 查询参数。"""
    options = sanitize_query_params(request.query_params)
    items = ideas.get_all(**options)
    return format_api_response(True, items, "Ideas retrieved successfully", len(items))


@router.get("/{idea_id}")
def get_idea(idea_id: str, ideas: IdeaStore = Depends(get_idea_store)) -> dict:
    parsed = _parse_id(idea_id)
    idea = ideas.get_by_id(parsed) if parsed is not None else None
    if idea is None:
        raise ApiError(404, "Idea not found")
    return format_api_response(True, idea, "Idea retrieved successfully")


@router.post("", status_code=201)
def create_idea(
    body: Optional[IdeaRequest] = None,
    user: CurrentUser = Depends(get_current_user),
    ideas: IdeaStore = Depends(get_idea_store),
) -> dict:
    """创建 idea，归属当前登录用户；status 缺省为 Concept。"""
    data = _checked_payload(body)
    try:
        idea = ideas.create(
            title=data["title"],
            description=_text_or_none(data.get("description")),
            status=data.get("status") or None,
            user_id=user.id,
        )
    except StorageError as e:
        raise ApiError(400, str(e))
    metrics.idea_mutations_total.labels(action="create").inc()
    return format_api_response(True, idea, "Idea created successfully")


@router.put("/{idea_id}")
def update_idea(
    idea_id: str,
    body: Optional[IdeaRequest] = None,
    ideas: IdeaStore = Depends(get_idea_store),
) -> dict:
    """更新 idea；未提供的 description / status 保持原值。"""
    data = _checked_payload(body)
    parsed = _parse_id(idea_id)
    if parsed is None:
        raise ApiError(404, "Idea not found")
    try:
        idea = ideas.update(
            parsed,
            title=data["title"],
            description=_text_or_none(data.get("description")),
            status=data.get("status") or None,
        )
    except StorageError as e:
        raise ApiError(400, str(e))
    if idea is None:
        raise ApiError(404, "Idea not found")
    metrics.idea_mutations_total.labels(action="update").inc()
    return format_api_response(True, idea, "Idea updated successfully")


@router.delete("/{idea_id}")
def delete_idea(idea_id: str, ideas: IdeaStore = Depends(get_idea_store)) -> dict:
    parsed = _parse_id(idea_id)
    try:
        deleted = parsed is not None and ideas.delete(parsed)
    except StorageError as e:
        raise ApiError(400, str(e))
    if not deleted:
        raise ApiError(404, "Idea not found")
    metrics.idea_mutations_total.labels(action="delete").inc()
    return format_api_response(True, None, "Idea deleted successfully")
