"""
API 请求/响应 Pydantic 模型

请求体字段类型故意放宽为 Any：类型/长度错误由 src.utils.validation 统一报告，
这样客户端拿到的是完整的错误列表，而不是框架的 422。
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """注册请求"""

    username: Optional[Any] = Field(None, description="用户名，3-50 个字符")
    password: Optional[Any] = Field(None, description="密码，6-100 个字符")


class LoginRequest(BaseModel):
    """登录请求"""

    username: Optional[Any] = Field(None, description="用户名")
    password: Optional[Any] = Field(None, description="密码")


class IdeaRequest(BaseModel):
    """创建/更新 idea；更新时未提供的 description/status 保持原值"""

    title: Optional[Any] = Field(None, description="标题，必填，最多 200 个字符")
    description: Optional[Any] = Field(None, description="描述，可选，最多 1000 个字符")
    status: Optional[Any] = Field(
        None,
        description="状态: Concept | In Progress | Completed | On Hold（创建时默认 Concept）",
    )


class CurrentUser(BaseModel):
    """token 中携带的调用者身份"""

    id: int
    username: str

    def to_public(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username}
