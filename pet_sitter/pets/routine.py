"""每日任务：由宠物的喂食与用药安排即时计算，不落盘。

任务 ID 由宠物 ID 与条目 ID 确定性拼出，完成记录（TaskCompletion）用它作为 task_id。
"""
from enum import Enum
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from pet_sitter.pets.models import Pet


class TimeBlock(str, Enum):
    MORNING = "morning"
    MIDDAY = "midday"
    EVENING = "evening"
    BEDTIME = "bedtime"


class TaskCategory(str, Enum):
    FEEDING = "feeding"
    MEDICATION = "medication"


_BLOCK_ORDER = [b.value for b in TimeBlock]


class RoutineTask(BaseModel):
    id: str
    pet_id: str
    time_block: TimeBlock
    time: Optional[str] = None
    title: str
    description: str = ""
    category: TaskCategory
    order: int = 0

    model_config = ConfigDict(use_enum_values=True)


def time_block_for(time: str) -> TimeBlock:
    """HH:MM → 时段：6-10 早上，11-14 中午，15-19 傍晚，其余睡前。无法解析的时间归入早上。"""
    try:
        hour = int(time.split(":")[0])
    except ValueError:
        return TimeBlock.MORNING
    if 11 <= hour < 15:
        return TimeBlock.MIDDAY
    if 15 <= hour < 20:
        return TimeBlock.EVENING
    if hour >= 20 or hour < 6:
        return TimeBlock.BEDTIME
    return TimeBlock.MORNING


def feeding_task_id(pet_id: str, entry_id: str) -> str:
    return f"feeding-{pet_id}-{entry_id}"


def medication_task_id(pet_id: str, med_id: str, index: Optional[int] = None) -> str:
    base = f"med-{pet_id}-{med_id}"
    return base if index is None else f"{base}-{index}"


def rekey_task_id(task_id: str, pet_ids: Dict[str, str]) -> str:
    """宠物换了新 ID 时，改写任务 ID 中嵌入的宠物 ID；与宠物无关的任务 ID 原样返回。"""
    for old, new in pet_ids.items():
        if old == new:
            continue
        for prefix, renamed in (
            (feeding_task_id(old, ""), feeding_task_id(new, "")),
            (medication_task_id(old, ""), medication_task_id(new, "")),
        ):
            if task_id.startswith(prefix):
                return renamed + task_id[len(prefix):]
    return task_id


def _medication_description(med) -> str:
    text = f"{med.name}: {med.dosage}"
    if med.with_food:
        text += " (with food)"
    if med.notes:
        text += f" - {med.notes}"
    return text


def build_routine_tasks(pets: Iterable[Pet]) -> List[RoutineTask]:
    """按时段、时间排序的当日任务列表。"""
    tasks: List[RoutineTask] = []
    order = 0
    for pet in pets:
        for feeding in pet.feeding_schedule:
            description = f"{feeding.amount} of {feeding.food_type}"
            if feeding.notes:
                description += f" - {feeding.notes}"
            tasks.append(RoutineTask(
                id=feeding_task_id(pet.id, feeding.id),
                pet_id=pet.id,
                time_block=time_block_for(feeding.time),
                time=feeding.time,
                title=f"Feed {pet.name}",
                description=description,
                category=TaskCategory.FEEDING,
                order=order,
            ))
            order += 1

        for med in pet.medications:
            times = [t for t in med.times if t]
            if not times:
                tasks.append(RoutineTask(
                    id=medication_task_id(pet.id, med.id),
                    pet_id=pet.id,
                    time_block=TimeBlock.MORNING,
                    title=f"Give {pet.name} medication",
                    description=_medication_description(med),
                    category=TaskCategory.MEDICATION,
                    order=order,
                ))
                order += 1
                continue
            for index, time in enumerate(times):
                tasks.append(RoutineTask(
                    id=medication_task_id(pet.id, med.id, index),
                    pet_id=pet.id,
                    time_block=time_block_for(time),
                    time=time,
                    title=f"Give {pet.name} medication",
                    description=_medication_description(med),
                    category=TaskCategory.MEDICATION,
                    order=order,
                ))
                order += 1

    tasks.sort(key=lambda t: (_BLOCK_ORDER.index(t.time_block), t.time or "", t.order))
    return tasks
