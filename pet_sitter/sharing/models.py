"""分享链接数据模型。"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pet_sitter.ids import parse_iso


class ShareableLink(BaseModel):
    """指南的只读分享链接。状态只会从有效变为失效。"""
    id: str = Field(..., description="链接唯一 ID")
    guide_id: str = Field(..., description="被分享的指南")
    user_id: str = Field(..., description="创建者")
    code: str = Field(..., description="8 位分享码")
    expires_at: Optional[str] = Field(None, description="过期时间 ISO；为空则永不过期")
    is_active: bool = True
    view_count: int = Field(0, ge=0)
    created_at: str

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and parse_iso(self.expires_at) <= now

    def is_valid(self, now: datetime) -> bool:
        return self.is_active and not self.is_expired(now)
