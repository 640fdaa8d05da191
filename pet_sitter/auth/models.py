"""本地账号数据模型。"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """本地账号（邮箱 + 密码注册）。"""
    id: str = Field(..., description="用户唯一 ID")
    email: str = Field(..., description="登录邮箱，小写保存")
    full_name: Optional[str] = Field(None, description="显示名")
    role: UserRole = UserRole.USER
    password_hash: str = Field(..., description="密码哈希")
    salt: str = Field(..., description="盐")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")

    model_config = ConfigDict(use_enum_values=True)
