"""
Skills API：只读技能目录（来自 data/skills.json）。
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from src.api.responses import ApiError, format_api_response
from src.catalog.skill_catalog import SkillCatalog

router = APIRouter(prefix="/api/skills", tags=["skills"])


def get_skill_catalog(request: Request) -> SkillCatalog:
    return request.app.state.skill_catalog


@router.get("")
def list_skills(
    proficiency: Optional[str] = None,
    category: Optional[str] = None,
    sort: Optional[str] = None,
    catalog: SkillCatalog = Depends(get_skill_catalog),
) -> dict:
    """按 proficiency（精确）/ category（包含）过滤，sort=name 按名称升序。"""
    result = catalog.list(proficiency=proficiency, category=category, sort=sort)
    return format_api_response(True, result["data"], "Skills retrieved successfully", result["count"])


@router.get("/category/{category}")
def list_skills_by_category(category: str, catalog: SkillCatalog = Depends(get_skill_catalog)) -> dict:
    result = catalog.get_by_category(category)
    return format_api_response(True, result["data"], "Skills retrieved successfully", result["count"])


@router.get("/{skill_id}")
def get_skill(skill_id: str, catalog: SkillCatalog = Depends(get_skill_catalog)) -> dict:
    skill = catalog.get_by_id(skill_id)
    if skill is None:
        raise ApiError(404, "Skill not found")
    return format_api_response(True, skill, "Skill retrieved successfully")
