"""当前登录会话（进程内）。"""
from typing import Optional

from pet_sitter.auth.models import User
from pet_sitter.errors import UnauthenticatedError


class Session:
    """当前用户：登录后设置，未登录为 None。"""
    _current: Optional[User] = None

    @classmethod
    def set_current(cls, user: Optional[User]) -> None:
        cls._current = user

    @classmethod
    def get_current(cls) -> Optional[User]:
        return cls._current

    @classmethod
    def is_guest(cls) -> bool:
        return cls._current is None

    @classmethod
    def require_user_id(cls) -> str:
        if cls._current is None:
            raise UnauthenticatedError()
        return cls._current.id
