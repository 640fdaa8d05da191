"""宠物档案与每日任务。"""
from pet_sitter.pets.models import (
    FeedingSchedule,
    HealthProtocol,
    HealthSymptom,
    Medication,
    Pet,
    PetSpecies,
    PetStatus,
    VetInfo,
    WeightUnit,
)
from pet_sitter.pets.routine import RoutineTask, TimeBlock, build_routine_tasks, rekey_task_id, time_block_for

__all__ = [
    "Pet",
    "PetSpecies",
    "PetStatus",
    "WeightUnit",
    "VetInfo",
    "FeedingSchedule",
    "Medication",
    "HealthProtocol",
    "HealthSymptom",
    "RoutineTask",
    "TimeBlock",
    "build_routine_tasks",
    "rekey_task_id",
    "time_block_for",
]
