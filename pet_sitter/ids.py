"""ID、时间戳与分享码生成。"""
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from pet_sitter.config import SHARE_CODE_ALPHABET, SHARE_CODE_LENGTH


def generate_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """UTC ISO-8601，带微秒，以 Z 结尾。"""
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """解析 ISO 时间；无时区的按 UTC 处理。"""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_iso(after: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """当前时间戳。给定 after 时保证结果严格晚于它（同一微秒内连续更新也递增）。"""
    current = now or utc_now()
    if after:
        previous = parse_iso(after)
        if current <= previous:
            current = previous + timedelta(microseconds=1)
    return to_iso(current)


def generate_share_code(length: int = SHARE_CODE_LENGTH) -> str:
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(length))
