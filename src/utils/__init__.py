# Utils: payload validation and list query sanitisation
from src.utils.validation import (
    DEFAULT_IDEA_STATUS,
    IDEA_STATUSES,
    ValidationResult,
    sanitize_query_params,
    validate_idea_input,
    validate_user_input,
)

__all__ = [
    "DEFAULT_IDEA_STATUS",
    "IDEA_STATUSES",
    "ValidationResult",
    "sanitize_query_params",
    "validate_idea_input",
    "validate_user_input",
]
