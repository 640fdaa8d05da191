"""登录与用户：注册、登录、当前用户。"""
from pet_sitter.auth.models import User, UserRole
from pet_sitter.auth.session import Session
from pet_sitter.auth.store import AuthStore

__all__ = ["User", "UserRole", "AuthStore", "Session"]
