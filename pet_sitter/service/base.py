"""数据服务接口：界面层唯一依赖的数据契约。

方法都返回普通数据（pydantic 模型），可被任意展示层调用。
逻辑错误（NotFoundError、UnauthenticatedError）抛异常；
「本来就可能没有」的情况（分享码无效、无速查表、无引导状态）返回 None 或空列表。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from pet_sitter.account.models import AppSettings, OnboardingState
from pet_sitter.guides.models import CheatSheet, Guide, TaskCompletion
from pet_sitter.pets.models import Pet
from pet_sitter.service.transfer import ExportedData
from pet_sitter.sharing.models import ShareableLink

Payload = Dict[str, Any]


class DataService(ABC):
    # ---- 宠物 ----
    @abstractmethod
    def get_pets(self, user_id: str) -> List[Pet]: ...

    @abstractmethod
    def get_pet(self, pet_id: str) -> Optional[Pet]: ...

    @abstractmethod
    def create_pet(self, data: Payload) -> Pet: ...

    @abstractmethod
    def update_pet(self, pet_id: str, updates: Payload) -> Pet: ...

    @abstractmethod
    def delete_pet(self, pet_id: str) -> None: ...

    @abstractmethod
    def get_active_pets(self, user_id: str) -> List[Pet]: ...

    @abstractmethod
    def get_deceased_pets(self, user_id: str) -> List[Pet]: ...

    @abstractmethod
    def mark_pet_deceased(self, pet_id: str, deceased_date: str) -> Pet: ...

    @abstractmethod
    def restore_pet(self, pet_id: str) -> Pet: ...

    # ---- 指南 ----
    @abstractmethod
    def get_guides(self, user_id: str) -> List[Guide]: ...

    @abstractmethod
    def get_guide(self, guide_id: str) -> Optional[Guide]: ...

    @abstractmethod
    def create_guide(self, data: Payload) -> Guide: ...

    @abstractmethod
    def update_guide(self, guide_id: str, updates: Payload) -> Guide: ...

    @abstractmethod
    def delete_guide(self, guide_id: str) -> None: ...

    @abstractmethod
    def duplicate_guide(self, guide_id: str) -> Guide: ...

    @abstractmethod
    def get_guide_pets(self, guide_id: str) -> List[Pet]: ...

    # ---- 任务完成记录 ----
    @abstractmethod
    def get_task_completions(self, guide_id: str, date: str) -> List[TaskCompletion]: ...

    @abstractmethod
    def mark_task_complete(self, completion: Payload) -> TaskCompletion: ...

    @abstractmethod
    def mark_task_incomplete(self, task_id: str, date: str) -> None: ...

    @abstractmethod
    def get_completion_history(self, guide_id: str) -> List[TaskCompletion]: ...

    # ---- 分享 ----
    @abstractmethod
    def create_share_link(self, guide_id: str, user_id: str, expires_in_days: Optional[float] = None) -> ShareableLink: ...

    @abstractmethod
    def get_share_link(self, code: str) -> Optional[ShareableLink]: ...

    @abstractmethod
    def get_share_links(self, user_id: str) -> List[ShareableLink]: ...

    @abstractmethod
    def deactivate_share_link(self, link_id: str) -> None: ...

    @abstractmethod
    def increment_view_count(self, link_id: str) -> None: ...

    @abstractmethod
    def get_shared_guide(self, code: str) -> Optional[Guide]: ...

    @abstractmethod
    def get_shared_guide_pets(self, code: str) -> List[Pet]: ...

    # ---- AI 速查表 ----
    @abstractmethod
    def get_cheat_sheet(self, guide_id: str) -> Optional[CheatSheet]: ...

    @abstractmethod
    def save_cheat_sheet(self, data: Payload) -> CheatSheet: ...

    @abstractmethod
    def delete_cheat_sheet(self, guide_id: str) -> None: ...

    # ---- 设置 ----
    @abstractmethod
    def get_settings(self, user_id: str) -> AppSettings: ...

    @abstractmethod
    def update_settings(self, user_id: str, updates: Payload) -> AppSettings: ...

    # ---- 引导 ----
    @abstractmethod
    def get_onboarding_state(self, user_id: str) -> Optional[OnboardingState]: ...

    @abstractmethod
    def update_onboarding_state(self, user_id: str, updates: Payload) -> OnboardingState: ...

    @abstractmethod
    def complete_onboarding(self, user_id: str) -> None: ...

    # ---- 导入导出 ----
    @abstractmethod
    def export_all_data(self, user_id: str) -> ExportedData: ...

    @abstractmethod
    def import_data(self, user_id: str, data: Union[ExportedData, Payload]) -> None: ...

    @abstractmethod
    def clear_all_data(self, user_id: str) -> None: ...
