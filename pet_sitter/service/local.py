"""本地数据服务：基于实体存储的持久化实现。

每个方法都是对一个或多个整集合的「读取 - 修改 - 写回」。两次并发调用作用于
同一集合时后写者覆盖先写者；级联删除是多次顺序写入，中途失败不会回滚，
残留的完成记录 / 分享链接 / 速查表不会被任何指南解析到。
"""
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel

from pet_sitter.account.models import AppSettings, OnboardingState
from pet_sitter.config import (
    CHEAT_SHEETS_KEY,
    COPY_SUFFIX,
    EXPORT_VERSION,
    GUIDES_KEY,
    LOGGER,
    PETS_KEY,
    TASK_COMPLETIONS_KEY,
    onboarding_key,
    settings_key,
)
from pet_sitter.errors import NotFoundError, UnauthenticatedError
from pet_sitter.guides.models import CheatSheet, Guide, TaskCompletion
from pet_sitter.ids import generate_id, now_iso, to_iso, utc_now
from pet_sitter.pets.models import Pet, PetStatus
from pet_sitter.pets.routine import rekey_task_id
from pet_sitter.service.base import DataService, Payload
from pet_sitter.service.transfer import ExportedData
from pet_sitter.sharing.links import ShareLinkManager
from pet_sitter.sharing.models import ShareableLink
from pet_sitter.storage.backend import JsonFileBackend
from pet_sitter.storage.entity_store import EntityStore

ModelT = TypeVar("ModelT", bound=BaseModel)

# 创建 / 更新时由服务端决定的字段
_MANAGED_FIELDS = ("id", "created_at", "updated_at")


def _as_payload(data: Union[BaseModel, Payload]) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise UnauthenticatedError()
    return user_id


class LocalDataService(DataService):
    """数据服务的持久化实现；默认写入数据目录下的 JSON 文件。"""

    def __init__(self, store: Optional[EntityStore] = None, clock: Optional[Callable[[], datetime]] = None):
        self.store = store or EntityStore(JsonFileBackend())
        self._now = clock or utc_now
        self.links = ShareLinkManager(self.store, clock=self._now)

    # ---- 通用读改写 ----
    def _timestamp(self, after: Optional[str] = None) -> str:
        return now_iso(after=after, now=self._now())

    def _create(self, key: str, model: Type[ModelT], data: Union[BaseModel, Payload]) -> ModelT:
        payload = _as_payload(data)
        _require_user(payload.get("user_id"))
        for field in _MANAGED_FIELDS:
            payload.pop(field, None)
        now = self._timestamp()
        row = model.model_validate({**payload, "id": generate_id(), "created_at": now, "updated_at": now})
        rows = self.store.load(key, model)
        rows.append(row)
        self.store.save(key, rows)
        LOGGER.debug("Created %s %s", model.__name__, row.id)
        return row

    def _update(self, key: str, model: Type[ModelT], row_id: str, updates: Union[BaseModel, Payload]) -> ModelT:
        rows = self.store.load(key, model)
        for index, existing in enumerate(rows):
            if existing.id != row_id:
                continue
            payload = _as_payload(updates)
            for field in _MANAGED_FIELDS:
                payload.pop(field, None)
            merged = model.model_validate({
                **existing.model_dump(),
                **payload,
                "id": existing.id,
                "created_at": existing.created_at,
                "updated_at": self._timestamp(after=existing.updated_at),
            })
            rows[index] = merged
            self.store.save(key, rows)
            return merged
        raise NotFoundError(model.__name__, row_id)

    def _delete(self, key: str, model: Type[ModelT], row_id: str) -> None:
        rows = self.store.load(key, model)
        kept = [row for row in rows if row.id != row_id]
        if len(kept) == len(rows):
            raise NotFoundError(model.__name__, row_id)
        self.store.save(key, kept)

    def _find(self, key: str, model: Type[ModelT], row_id: str) -> Optional[ModelT]:
        return next((row for row in self.store.load(key, model) if row.id == row_id), None)

    # ---- 宠物 ----
    def get_pets(self, user_id: str) -> List[Pet]:
        user_id = _require_user(user_id)
        return [p for p in self.store.load(PETS_KEY, Pet) if p.user_id == user_id]

    def get_pet(self, pet_id: str) -> Optional[Pet]:
        return self._find(PETS_KEY, Pet, pet_id)

    def create_pet(self, data: Payload) -> Pet:
        return self._create(PETS_KEY, Pet, data)

    def update_pet(self, pet_id: str, updates: Payload) -> Pet:
        return self._update(PETS_KEY, Pet, pet_id, updates)

    def delete_pet(self, pet_id: str) -> None:
        # 指南只弱引用宠物，不级联
        self._delete(PETS_KEY, Pet, pet_id)

    def get_active_pets(self, user_id: str) -> List[Pet]:
        return [p for p in self.get_pets(user_id) if p.status == PetStatus.ACTIVE]

    def get_deceased_pets(self, user_id: str) -> List[Pet]:
        return [p for p in self.get_pets(user_id) if p.status == PetStatus.DECEASED]

    def mark_pet_deceased(self, pet_id: str, deceased_date: str) -> Pet:
        return self.update_pet(pet_id, {"status": PetStatus.DECEASED, "deceased_date": deceased_date})

    def restore_pet(self, pet_id: str) -> Pet:
        return self.update_pet(pet_id, {"status": PetStatus.ACTIVE, "deceased_date": None})

    # ---- 指南 ----
    def get_guides(self, user_id: str) -> List[Guide]:
        user_id = _require_user(user_id)
        return [g for g in self.store.load(GUIDES_KEY, Guide) if g.user_id == user_id]

    def get_guide(self, guide_id: str) -> Optional[Guide]:
        return self._find(GUIDES_KEY, Guide, guide_id)

    def create_guide(self, data: Payload) -> Guide:
        return self._create(GUIDES_KEY, Guide, data)

    def update_guide(self, guide_id: str, updates: Payload) -> Guide:
        return self._update(GUIDES_KEY, Guide, guide_id, updates)

    def delete_guide(self, guide_id: str) -> None:
        """删除指南，并级联删除其速查表、完成记录与分享链接。"""
        self._delete(GUIDES_KEY, Guide, guide_id)
        self.delete_cheat_sheet(guide_id)
        completions = self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion)
        self.store.save(TASK_COMPLETIONS_KEY, [c for c in completions if c.guide_id != guide_id])
        removed_links = self.links.remove_where(lambda link: link.guide_id == guide_id)
        LOGGER.info("Deleted guide %s (%d share links removed)", guide_id, removed_links)

    def duplicate_guide(self, guide_id: str) -> Guide:
        source = self.get_guide(guide_id)
        if source is None:
            raise NotFoundError("Guide", guide_id)
        data = source.model_dump(exclude=set(_MANAGED_FIELDS))
        data["title"] = f"{source.title}{COPY_SUFFIX}"
        return self.create_guide(data)

    def get_guide_pets(self, guide_id: str) -> List[Pet]:
        """按 pet_ids 顺序返回仍然存在的宠物；已删除的宠物直接跳过。"""
        guide = self.get_guide(guide_id)
        if guide is None:
            return []
        return self._pets_for(guide)

    def _pets_for(self, guide: Guide) -> List[Pet]:
        by_id = {p.id: p for p in self.store.load(PETS_KEY, Pet)}
        return [by_id[pet_id] for pet_id in guide.pet_ids if pet_id in by_id]

    # ---- 任务完成记录 ----
    def get_task_completions(self, guide_id: str, date: str) -> List[TaskCompletion]:
        return [
            c for c in self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion)
            if c.guide_id == guide_id and c.date == date
        ]

    def mark_task_complete(self, completion: Payload) -> TaskCompletion:
        """按 (task_id, date) 覆盖写入：旧记录整条删除后插入新记录。"""
        payload = _as_payload(completion)
        payload.pop("id", None)
        row = TaskCompletion.model_validate({**payload, "id": generate_id()})
        completions = [
            c for c in self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion)
            if not (c.task_id == row.task_id and c.date == row.date)
        ]
        completions.append(row)
        self.store.save(TASK_COMPLETIONS_KEY, completions)
        return row

    def mark_task_incomplete(self, task_id: str, date: str) -> None:
        completions = self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion)
        kept = [c for c in completions if not (c.task_id == task_id and c.date == date)]
        if len(kept) != len(completions):
            self.store.save(TASK_COMPLETIONS_KEY, kept)

    def get_completion_history(self, guide_id: str) -> List[TaskCompletion]:
        return [c for c in self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion) if c.guide_id == guide_id]

    # ---- 分享 ----
    def create_share_link(self, guide_id: str, user_id: str, expires_in_days: Optional[float] = None) -> ShareableLink:
        return self.links.create(guide_id, _require_user(user_id), expires_in_days)

    def get_share_link(self, code: str) -> Optional[ShareableLink]:
        return self.links.get_by_code(code)

    def get_share_links(self, user_id: str) -> List[ShareableLink]:
        return self.links.list_for_user(_require_user(user_id))

    def deactivate_share_link(self, link_id: str) -> None:
        self.links.deactivate(link_id)

    def increment_view_count(self, link_id: str) -> None:
        self.links.increment_view_count(link_id)

    def get_shared_guide(self, code: str) -> Optional[Guide]:
        """通过分享码读取指南。命中有效链接时浏览数加一，读取本身带写入副作用。"""
        link = self.links.resolve(code)
        if link is None:
            return None
        return self.get_guide(link.guide_id)

    def get_shared_guide_pets(self, code: str) -> List[Pet]:
        guide = self.get_shared_guide(code)
        if guide is None:
            return []
        return self._pets_for(guide)

    # ---- AI 速查表 ----
    def get_cheat_sheet(self, guide_id: str) -> Optional[CheatSheet]:
        return next((s for s in self.store.load(CHEAT_SHEETS_KEY, CheatSheet) if s.guide_id == guide_id), None)

    def save_cheat_sheet(self, data: Payload) -> CheatSheet:
        """保存速查表，替换该指南已有的那份。"""
        payload = _as_payload(data)
        payload.pop("id", None)
        sheet = CheatSheet.model_validate({"generated_at": self._timestamp(), **payload, "id": generate_id()})
        sheets = [s for s in self.store.load(CHEAT_SHEETS_KEY, CheatSheet) if s.guide_id != sheet.guide_id]
        sheets.append(sheet)
        self.store.save(CHEAT_SHEETS_KEY, sheets)
        return sheet

    def delete_cheat_sheet(self, guide_id: str) -> None:
        sheets = self.store.load(CHEAT_SHEETS_KEY, CheatSheet)
        kept = [s for s in sheets if s.guide_id != guide_id]
        if len(kept) != len(sheets):
            self.store.save(CHEAT_SHEETS_KEY, kept)

    # ---- 设置 ----
    def get_settings(self, user_id: str) -> AppSettings:
        """未保存过时返回默认设置（不落盘）。"""
        user_id = _require_user(user_id)
        return self.store.load_one(settings_key(user_id), AppSettings) or AppSettings(user_id=user_id)

    def update_settings(self, user_id: str, updates: Payload) -> AppSettings:
        current = self.get_settings(user_id)
        updated = AppSettings.model_validate({**current.model_dump(), **_as_payload(updates), "user_id": user_id})
        self.store.save_one(settings_key(user_id), updated)
        return updated

    # ---- 引导 ----
    def get_onboarding_state(self, user_id: str) -> Optional[OnboardingState]:
        return self.store.load_one(onboarding_key(_require_user(user_id)), OnboardingState)

    def update_onboarding_state(self, user_id: str, updates: Payload) -> OnboardingState:
        current = self.get_onboarding_state(user_id) or OnboardingState()
        updated = OnboardingState.model_validate({**current.model_dump(), **_as_payload(updates)})
        self.store.save_one(onboarding_key(user_id), updated)
        return updated

    def complete_onboarding(self, user_id: str) -> None:
        self.update_settings(user_id, {"onboarding_completed": True})
        self.store.remove(onboarding_key(user_id))
        LOGGER.info("Onboarding completed for user %s", user_id)

    # ---- 导入导出 ----
    def export_all_data(self, user_id: str) -> ExportedData:
        pets = self.get_pets(user_id)
        guides = self.get_guides(user_id)
        guide_ids = {g.id for g in guides}
        completions = [
            c for c in self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion) if c.guide_id in guide_ids
        ]
        return ExportedData(
            version=EXPORT_VERSION,
            exported_at=to_iso(self._now()),
            pets=pets,
            guides=guides,
            task_completions=completions,
            settings=self.get_settings(user_id),
        )

    def import_data(self, user_id: str, data: Union[ExportedData, Payload]) -> None:
        """用导入内容整体替换该用户的宠物、指南、完成记录与设置。

        所有行改写为当前 user_id；若导入的 ID 已被其他用户的行占用则换新 ID，
        并同步改写指南的 pet_ids、完成记录的 guide_id 与 task_id 中的宠物 ID。
        其他用户的行保持不变。
        """
        user_id = _require_user(user_id)
        exported = data if isinstance(data, ExportedData) else ExportedData.model_validate(data)

        pets = self.store.load(PETS_KEY, Pet)
        other_pets = [p for p in pets if p.user_id != user_id]
        pet_ids = _rekey(exported.pets, {p.id for p in other_pets})
        imported_pets = [p.model_copy(update={"id": pet_ids[p.id], "user_id": user_id}) for p in exported.pets]
        self.store.save(PETS_KEY, other_pets + imported_pets)

        guides = self.store.load(GUIDES_KEY, Guide)
        previous_guide_ids = {g.id for g in guides if g.user_id == user_id}
        other_guides = [g for g in guides if g.user_id != user_id]
        guide_ids = _rekey(exported.guides, {g.id for g in other_guides})
        imported_guides = [
            g.model_copy(update={
                "id": guide_ids[g.id],
                "user_id": user_id,
                "pet_ids": [pet_ids.get(pid, pid) for pid in g.pet_ids],
            })
            for g in exported.guides
        ]
        self.store.save(GUIDES_KEY, other_guides + imported_guides)

        completions = self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion)
        kept = [c for c in completions if c.guide_id not in previous_guide_ids]
        belonging = [c for c in exported.task_completions if c.guide_id in guide_ids]
        if len(belonging) != len(exported.task_completions):
            LOGGER.warning(
                "Skipped %d imported completions with unknown guides",
                len(exported.task_completions) - len(belonging),
            )
        completion_ids = _rekey(belonging, {c.id for c in kept})
        # (task_id, date) 在整个集合内唯一，不能与其他用户的记录重复
        taken = {(c.task_id, c.date) for c in kept}
        imported_completions = []
        for c in belonging:
            task_id = rekey_task_id(c.task_id, pet_ids)
            if (task_id, c.date) in taken:
                LOGGER.warning("Skipped imported completion %s on %s: key already in use", task_id, c.date)
                continue
            taken.add((task_id, c.date))
            imported_completions.append(c.model_copy(update={
                "id": completion_ids[c.id],
                "guide_id": guide_ids[c.guide_id],
                "task_id": task_id,
            }))
        self.store.save(TASK_COMPLETIONS_KEY, kept + imported_completions)

        settings = exported.settings.model_copy(update={"user_id": user_id})
        self.store.save_one(settings_key(user_id), settings)
        LOGGER.info(
            "Imported %d pets, %d guides, %d completions for user %s",
            len(imported_pets), len(imported_guides), len(imported_completions), user_id,
        )

    def clear_all_data(self, user_id: str) -> None:
        """删除所有可追溯到该用户的行：直接 user_id，或 guide_id 属于该用户的指南。"""
        user_id = _require_user(user_id)
        pets = self.store.load(PETS_KEY, Pet)
        self.store.save(PETS_KEY, [p for p in pets if p.user_id != user_id])

        guides = self.store.load(GUIDES_KEY, Guide)
        guide_ids = {g.id for g in guides if g.user_id == user_id}
        self.store.save(GUIDES_KEY, [g for g in guides if g.user_id != user_id])

        completions = self.store.load(TASK_COMPLETIONS_KEY, TaskCompletion)
        self.store.save(TASK_COMPLETIONS_KEY, [c for c in completions if c.guide_id not in guide_ids])

        self.links.remove_where(lambda link: link.user_id == user_id or link.guide_id in guide_ids)

        sheets = self.store.load(CHEAT_SHEETS_KEY, CheatSheet)
        self.store.save(CHEAT_SHEETS_KEY, [s for s in sheets if s.guide_id not in guide_ids])

        self.store.remove(settings_key(user_id))
        self.store.remove(onboarding_key(user_id))
        LOGGER.warning("Cleared all data for user %s", user_id)


def _rekey(rows: Sequence[Any], taken: set) -> Dict[str, str]:
    """旧 ID → 新 ID；与 taken 冲突的换新 ID，其余保持不变。"""
    mapping: Dict[str, str] = {}
    for row in rows:
        mapping[row.id] = generate_id() if row.id in taken else row.id
    return mapping
