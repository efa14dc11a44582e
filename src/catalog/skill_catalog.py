"""
Read-only skill catalog backed by a JSON file.

By default the file is read on every call, so edits show up immediately.
With ``cache=True`` the snapshot is loaded once and only ``reload()``
refreshes it; the file carries no change signal to invalidate on.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.log import get_logger

logger = get_logger(__name__)


class CatalogError(Exception):
    """The skills file could not be read or parsed."""


def _name_key(skill: Dict[str, Any]):
    name = str(skill.get("name", ""))
    return (name.casefold(), name)


def _lower(value: Any) -> str:
    return str(value or "").lower()


class SkillCatalog:
    def __init__(self, path: Path | str, cache: bool = False):
        self.path = Path(path)
        self.cache = cache
        self._snapshot: Optional[List[Dict[str, Any]]] = None
        self._lock = threading.Lock()

    def _read(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("failed to read skills file %s: %s", self.path, e)
            raise CatalogError(str(e)) from e
        if not isinstance(data, list):
            raise CatalogError(f"{self.path} must contain a JSON array")
        return data

    def reload(self) -> int:
        """Re-read the file into the cached snapshot. Returns the skill count."""
        skills = self._read()
        with self._lock:
            self._snapshot = skills
        logger.info("skills snapshot reloaded: %d skills", len(skills))
        return len(skills)

    def all(self) -> List[Dict[str, Any]]:
        if not self.cache:
            return self._read()
        with self._lock:
            snapshot = self._snapshot
        if snapshot is None:
            self.reload()
            with self._lock:
                snapshot = self._snapshot
        return [dict(s) for s in snapshot]

    def list(
        self,
        proficiency: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        proficiency: case-insensitive exact match.
        category: case-insensitive substring match.
        sort: only ``"name"`` is recognised (ascending).
        """
        skills = self.all()
        if proficiency:
            wanted = proficiency.lower()
            skills = [s for s in skills if _lower(s.get("proficiency")) == wanted]
        if category:
            fragment = category.lower()
            skills = [s for s in skills if fragment in _lower(s.get("category"))]
        if sort == "name":
            skills = sorted(skills, key=_name_key)
        return {"count": len(skills), "data": skills}

    def get_by_id(self, skill_id: Any) -> Optional[Dict[str, Any]]:
        try:
            wanted = int(str(skill_id).strip())
        except (TypeError, ValueError):
            return None
        return next((s for s in self.all() if s.get("id") == wanted), None)

    def get_by_category(self, category: str) -> Dict[str, Any]:
        wanted = _lower(category)
        skills = [s for s in self.all() if _lower(s.get("category")) == wanted]
        return {"count": len(skills), "data": skills}
