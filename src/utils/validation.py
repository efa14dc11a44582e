"""
Payload validation for users and ideas, plus list query sanitisation.

All functions are pure: they never raise on bad input, they report it.
Every applicable field error is collected (at most one per field) so the
client can fix the whole payload in one round trip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

IDEA_STATUSES = ("Concept", "In Progress", "Completed", "On Hold")
DEFAULT_IDEA_STATUS = "Concept"

USERNAME_MIN, USERNAME_MAX = 3, 50
PASSWORD_MIN, PASSWORD_MAX = 6, 100
TITLE_MAX = 200
DESCRIPTION_MAX = 1000

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
SORTABLE_FIELDS = ("title", "createdAt", "status")
DEFAULT_SORT = "createdAt"


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def _get(data: Optional[Mapping[str, Any]], key: str) -> Any:
    if not data:
        return None
    return data.get(key)


def validate_user_input(data: Optional[Mapping[str, Any]]) -> ValidationResult:
    """Check registration payload: username 3-50 chars, password 6-100 chars."""
    result = ValidationResult()
    username = _get(data, "username")
    password = _get(data, "password")

    if not username or not isinstance(username, str):
        result.errors.append("Username is required and must be a string")
    elif len(username) < USERNAME_MIN:
        result.errors.append(f"Username must be at least {USERNAME_MIN} characters long")
    elif len(username) > USERNAME_MAX:
        result.errors.append(f"Username must be less than {USERNAME_MAX} characters")

    if not password or not isinstance(password, str):
        result.errors.append("Password is required and must be a string")
    elif len(password) < PASSWORD_MIN:
        result.errors.append(f"Password must be at least {PASSWORD_MIN} characters long")
    elif len(password) > PASSWORD_MAX:
        result.errors.append(f"Password must be less than {PASSWORD_MAX} characters")

    return result


def validate_idea_input(data: Optional[Mapping[str, Any]]) -> ValidationResult:
    """Check idea payload: title required (<=200), description optional (<=1000), status in IDEA_STATUSES."""
    result = ValidationResult()
    title = _get(data, "title")
    description = _get(data, "description")
    status = _get(data, "status")

    if not title or not isinstance(title, str):
        result.errors.append("Title is required and must be a string")
    elif not title.strip():
        result.errors.append("Title cannot be empty")
    elif len(title) > TITLE_MAX:
        result.errors.append(f"Title must be less than {TITLE_MAX} characters")

    # falsy description ("" / None) means "not supplied"
    if description and not isinstance(description, str):
        result.errors.append("Description must be a string")
    elif description and len(description) > DESCRIPTION_MAX:
        result.errors.append(f"Description must be less than {DESCRIPTION_MAX} characters")

    if status and status not in IDEA_STATUSES:
        result.errors.append(f"Status must be one of: {', '.join(IDEA_STATUSES)}")

    return result


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def sanitize_query_params(query: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Map raw ``_limit`` / ``_page`` / ``_sort`` / ``_order`` query values onto
    safe listing options. Keys the client did not send are left out.
    """
    sanitized: Dict[str, Any] = {}
    if not query:
        return sanitized

    if query.get("_limit"):
        limit = _to_int(query["_limit"])
        sanitized["limit"] = limit if limit is not None and 0 < limit <= MAX_LIMIT else DEFAULT_LIMIT

    if query.get("_page"):
        page = _to_int(query["_page"])
        sanitized["page"] = page if page is not None and page > 0 else 1

    if query.get("_sort"):
        sort = query["_sort"]
        sanitized["sort"] = sort if sort in SORTABLE_FIELDS else DEFAULT_SORT

    if query.get("_order"):
        sanitized["order"] = "DESC" if str(query["_order"]).lower() == "desc" else "ASC"

    return sanitized
