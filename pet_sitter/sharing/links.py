"""分享链接：生成分享码、惰性判断过期、停用与浏览计数。"""
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from pet_sitter.config import LOGGER, SHARE_CODE_MAX_ATTEMPTS, SHARE_LINKS_KEY
from pet_sitter.errors import DataServiceError
from pet_sitter.ids import generate_id, generate_share_code, to_iso, utc_now
from pet_sitter.sharing.models import ShareableLink
from pet_sitter.storage.entity_store import EntityStore


class ShareLinkManager:
    """分享链接集合的读改写。

    创建新链接时会先停用同一指南的所有旧链接，因此「每份指南最多一个有效链接」
    只由 create 维护，存储本身并不阻止调用方直接启用第二个。
    """

    def __init__(self, store: EntityStore, clock: Optional[Callable[[], datetime]] = None):
        self._store = store
        self._now = clock or utc_now

    def _load(self) -> List[ShareableLink]:
        return self._store.load(SHARE_LINKS_KEY, ShareableLink)

    def _save(self, links: List[ShareableLink]) -> None:
        self._store.save(SHARE_LINKS_KEY, links)

    def _unique_code(self, links: List[ShareableLink]) -> str:
        taken = {link.code for link in links}
        for _ in range(SHARE_CODE_MAX_ATTEMPTS):
            code = generate_share_code()
            if code not in taken:
                return code
            LOGGER.debug("Share code collision, retrying")
        raise DataServiceError("Could not generate a unique share code")

    def create(self, guide_id: str, user_id: str, expires_in_days: Optional[float] = None) -> ShareableLink:
        """停用该指南的旧链接并创建新链接。"""
        links = self._load()
        for link in links:
            if link.guide_id == guide_id and link.is_active:
                link.is_active = False
        now = self._now()
        expires_at = to_iso(now + timedelta(days=expires_in_days)) if expires_in_days else None
        link = ShareableLink(
            id=generate_id(),
            guide_id=guide_id,
            user_id=user_id,
            code=self._unique_code(links),
            expires_at=expires_at,
            is_active=True,
            view_count=0,
            created_at=to_iso(now),
        )
        links.append(link)
        self._save(links)
        LOGGER.info("Created share link %s for guide %s", link.id, guide_id)
        return link

    def get_by_code(self, code: str) -> Optional[ShareableLink]:
        """查不到、已停用或已过期都返回 None。"""
        now = self._now()
        for link in self._load():
            if link.code == code:
                return link if link.is_valid(now) else None
        return None

    def list_for_user(self, user_id: str) -> List[ShareableLink]:
        return [link for link in self._load() if link.user_id == user_id]

    def deactivate(self, link_id: str) -> None:
        """停用链接；重复调用或 ID 不存在都无副作用。"""
        links = self._load()
        for link in links:
            if link.id == link_id:
                if link.is_active:
                    link.is_active = False
                    self._save(links)
                return

    def increment_view_count(self, link_id: str) -> None:
        links = self._load()
        for link in links:
            if link.id == link_id:
                link.view_count += 1
                self._save(links)
                return

    def resolve(self, code: str) -> Optional[ShareableLink]:
        """查找有效链接并记一次浏览。每次调用都会计数。"""
        link = self.get_by_code(code)
        if link is None:
            return None
        self.increment_view_count(link.id)
        link.view_count += 1
        return link

    def remove_where(self, predicate: Callable[[ShareableLink], bool]) -> int:
        """删除满足条件的链接，返回删除条数（级联删除用）。"""
        links = self._load()
        kept = [link for link in links if not predicate(link)]
        removed = len(links) - len(kept)
        if removed:
            self._save(kept)
        return removed
