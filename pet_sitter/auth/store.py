"""账号注册与登录（本地用户集合）。"""
import hashlib
import hmac
import secrets
from typing import List, Optional

from pet_sitter.auth.models import User, UserRole
from pet_sitter.config import LOGGER, USERS_KEY
from pet_sitter.ids import generate_id, now_iso
from pet_sitter.storage.entity_store import EntityStore


def _hash_password(password: str, salt: str) -> str:
    return hashlib.sha256((password + salt).encode()).hexdigest()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthStore:
    """用户集合：邮箱不区分大小写且唯一。"""

    def __init__(self, store: EntityStore):
        self._store = store

    def _load(self) -> List[User]:
        return self._store.load(USERS_KEY, User)

    def register(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> Optional[str]:
        """注册新用户。成功返回 user_id，邮箱已存在或输入为空返回 None。"""
        email = _normalize_email(email)
        if not email or not password:
            return None
        users = self._load()
        if any(u.email == email for u in users):
            return None
        salt = secrets.token_hex(16)
        user = User(
            id=generate_id(),
            email=email,
            full_name=full_name,
            role=role,
            password_hash=_hash_password(password, salt),
            salt=salt,
            created_at=now_iso(),
        )
        users.append(user)
        self._store.save(USERS_KEY, users)
        LOGGER.info("Registered user %s", user.id)
        return user.id

    def login(self, email: str, password: str) -> Optional[User]:
        """登录：验证邮箱密码，成功返回 User，否则 None。"""
        email = _normalize_email(email)
        if not email or not password:
            return None
        user = next((u for u in self._load() if u.email == email), None)
        if user is None:
            return None
        if not hmac.compare_digest(_hash_password(password, user.salt), user.password_hash):
            return None
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._load() if u.id == user_id), None)
