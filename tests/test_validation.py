"""
输入校验单元测试：用户 / idea 载荷校验、列表查询参数清洗
"""

import pytest

from src.utils.validation import (
    IDEA_STATUSES,
    sanitize_query_params,
    validate_idea_input,
    validate_user_input,
)


# ── 用户校验 ──

class TestValidateUserInput:
    def test_valid_input(self):
        result = validate_user_input({"username": "testuser", "password": "password123"})
        assert result.is_valid is True
        assert result.errors == []

    @pytest.mark.parametrize("username", ["a", "ab"])
    def test_short_username(self, username):
        result = validate_user_input({"username": username, "password": "password123"})
        assert result.is_valid is False
        assert result.errors == ["Username must be at least 3 characters long"]

    def test_empty_username_is_missing(self):
        result = validate_user_input({"username": "", "password": "password123"})
        assert result.errors == ["Username is required and must be a string"]

    def test_username_length_bounds(self):
        assert validate_user_input({"username": "a" * 50, "password": "password123"}).is_valid
        result = validate_user_input({"username": "a" * 51, "password": "password123"})
        assert result.errors == ["Username must be less than 50 characters"]

    @pytest.mark.parametrize("password", ["1", "12345"])
    def test_short_password(self, password):
        result = validate_user_input({"username": "testuser", "password": password})
        assert result.is_valid is False
        assert result.errors == ["Password must be at least 6 characters long"]

    def test_password_length_bounds(self):
        assert validate_user_input({"username": "testuser", "password": "p" * 100}).is_valid
        result = validate_user_input({"username": "testuser", "password": "p" * 101})
        assert result.errors == ["Password must be less than 100 characters"]

    def test_missing_fields_accumulate(self):
        result = validate_user_input({})
        assert result.errors == [
            "Username is required and must be a string",
            "Password is required and must be a string",
        ]

    def test_none_payload(self):
        assert validate_user_input(None).is_valid is False

    def test_non_string_values(self):
        result = validate_user_input({"username": 12345, "password": ["secret123"]})
        assert result.errors == [
            "Username is required and must be a string",
            "Password is required and must be a string",
        ]

    def test_both_too_short(self):
        result = validate_user_input({"username": "ab", "password": "123"})
        assert result.errors == [
            "Username must be at least 3 characters long",
            "Password must be at least 6 characters long",
        ]

    def test_to_dict(self):
        assert validate_user_input({"username": "ab", "password": "password123"}).to_dict() == {
            "isValid": False,
            "errors": ["Username must be at least 3 characters long"],
        }


# ── Idea 校验 ──

class TestValidateIdeaInput:
    def test_valid_input(self):
        result = validate_idea_input(
            {"title": "Test Idea", "description": "This is a test idea", "status": "Concept"}
        )
        assert result.is_valid is True

    def test_missing_title(self):
        result = validate_idea_input({"description": "This is a test idea", "status": "Concept"})
        assert result.errors == ["Title is required and must be a string"]

    def test_blank_title(self):
        assert validate_idea_input({"title": "   "}).errors == ["Title cannot be empty"]

    def test_title_too_long(self):
        assert validate_idea_input({"title": "t" * 200}).is_valid
        assert validate_idea_input({"title": "t" * 201}).errors == [
            "Title must be less than 200 characters"
        ]

    def test_description_optional(self):
        assert validate_idea_input({"title": "Test Idea", "status": "Concept"}).is_valid

    def test_description_type_and_length(self):
        assert validate_idea_input({"title": "T", "description": 42}).errors == [
            "Description must be a string"
        ]
        assert validate_idea_input({"title": "T", "description": "d" * 1000}).is_valid
        assert validate_idea_input({"title": "T", "description": "d" * 1001}).errors == [
            "Description must be less than 1000 characters"
        ]

    def test_invalid_status_lists_allowed_values(self):
        result = validate_idea_input({"title": "Test Idea", "status": "Invalid Status"})
        assert result.errors == ["Status must be one of: Concept, In Progress, Completed, On Hold"]

    @pytest.mark.parametrize("status", IDEA_STATUSES)
    def test_every_status_accepted(self, status):
        assert validate_idea_input({"title": "T", "status": status}).is_valid

    def test_errors_accumulate_across_fields(self):
        result = validate_idea_input({"description": "d" * 1001, "status": "Done"})
        assert len(result.errors) == 3
        assert result.errors[0] == "Title is required and must be a string"

    def test_deterministic(self):
        payload = {"title": "", "status": "nope"}
        assert validate_idea_input(payload).errors == validate_idea_input(payload).errors


# ── 查询参数清洗 ──

class TestSanitizeQueryParams:
    def test_empty(self):
        assert sanitize_query_params({}) == {}
        assert sanitize_query_params(None) == {}

    def test_limit(self):
        assert sanitize_query_params({"_limit": "20"}) == {"limit": 20}
        assert sanitize_query_params({"_limit": "150"}) == {"limit": 10}
        assert sanitize_query_params({"_limit": "0"}) == {"limit": 10}
        assert sanitize_query_params({"_limit": "abc"}) == {"limit": 10}

    def test_page(self):
        assert sanitize_query_params({"_page": "3"}) == {"page": 3}
        assert sanitize_query_params({"_page": "0"}) == {"page": 1}
        assert sanitize_query_params({"_page": "-2"}) == {"page": 1}

    def test_sort(self):
        assert sanitize_query_params({"_sort": "title"}) == {"sort": "title"}
        assert sanitize_query_params({"_sort": "invalid_field"}) == {"sort": "createdAt"}

    def test_order(self):
        assert sanitize_query_params({"_order": "desc"}) == {"order": "DESC"}
        assert sanitize_query_params({"_order": "DeSc"}) == {"order": "DESC"}
        assert sanitize_query_params({"_order": "up"}) == {"order": "ASC"}

    def test_combined(self):
        query = {"_limit": "5", "_page": "2", "_sort": "status", "_order": "asc", "other": "x"}
        assert sanitize_query_params(query) == {"limit": 5, "page": 2, "sort": "status", "order": "ASC"}
