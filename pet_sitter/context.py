"""当前用户的数据视图：把会话里的用户 ID 带入数据服务调用。

未登录时所有按用户的操作抛出 UnauthenticatedError。
"""
from typing import Any, Dict, List, Optional, Type

from pet_sitter.account.models import AppSettings, OnboardingState
from pet_sitter.auth.session import Session
from pet_sitter.autosave.coordinator import AutoSaveCoordinator, for_guide, for_pet
from pet_sitter.guides.models import Guide
from pet_sitter.pets.models import Pet
from pet_sitter.pets.routine import RoutineTask, build_routine_tasks
from pet_sitter.service.base import DataService
from pet_sitter.service.transfer import ExportedData
from pet_sitter.sharing.models import ShareableLink


class UserDataContext:

    def __init__(self, service: DataService, session: Type[Session] = Session):
        self.service = service
        self.session = session

    @property
    def user_id(self) -> str:
        return self.session.require_user_id()

    # ---- 宠物 ----
    def pets(self) -> List[Pet]:
        return self.service.get_pets(self.user_id)

    def active_pets(self) -> List[Pet]:
        return self.service.get_active_pets(self.user_id)

    def deceased_pets(self) -> List[Pet]:
        return self.service.get_deceased_pets(self.user_id)

    def create_pet(self, data: Dict[str, Any]) -> Pet:
        return self.service.create_pet({**data, "user_id": self.user_id})

    # ---- 指南 ----
    def guides(self) -> List[Guide]:
        return self.service.get_guides(self.user_id)

    def create_guide(self, data: Dict[str, Any]) -> Guide:
        return self.service.create_guide({**data, "user_id": self.user_id})

    def routine_tasks(self, guide_id: str) -> List[RoutineTask]:
        """指南当日任务（由在世宠物的喂食/用药安排计算）。"""
        pets = [p for p in self.service.get_guide_pets(guide_id) if p.status == "active"]
        return build_routine_tasks(pets)

    # ---- 分享 ----
    def create_share_link(self, guide_id: str, expires_in_days: Optional[float] = None) -> ShareableLink:
        return self.service.create_share_link(guide_id, self.user_id, expires_in_days)

    def share_links(self) -> List[ShareableLink]:
        return self.service.get_share_links(self.user_id)

    # ---- 设置与引导 ----
    def settings(self) -> AppSettings:
        return self.service.get_settings(self.user_id)

    def update_settings(self, updates: Dict[str, Any]) -> AppSettings:
        return self.service.update_settings(self.user_id, updates)

    def onboarding_state(self) -> Optional[OnboardingState]:
        return self.service.get_onboarding_state(self.user_id)

    def update_onboarding_state(self, updates: Dict[str, Any]) -> OnboardingState:
        return self.service.update_onboarding_state(self.user_id, updates)

    def complete_onboarding(self) -> None:
        self.service.complete_onboarding(self.user_id)

    # ---- 自动保存：按用户设置决定是否启用 ----
    def pet_autosave(self, pet_id: str, **kwargs: Any) -> AutoSaveCoordinator:
        kwargs.setdefault("enabled", self.settings().auto_save_enabled)
        return for_pet(self.service, pet_id, **kwargs)

    def guide_autosave(self, guide_id: str, **kwargs: Any) -> AutoSaveCoordinator:
        kwargs.setdefault("enabled", self.settings().auto_save_enabled)
        return for_guide(self.service, guide_id, **kwargs)

    # ---- 导入导出 ----
    def export_all_data(self) -> ExportedData:
        return self.service.export_all_data(self.user_id)

    def import_data(self, data: ExportedData) -> None:
        self.service.import_data(self.user_id, data)

    def clear_all_data(self) -> None:
        self.service.clear_all_data(self.user_id)
