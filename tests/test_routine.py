"""每日任务派生测试。"""
from pet_sitter.pets.models import FeedingSchedule, Medication, Pet
from pet_sitter.pets.routine import TimeBlock, build_routine_tasks, rekey_task_id, time_block_for


def _pet() -> Pet:
    return Pet(
        id="p1",
        user_id="u1",
        name="Biscuit",
        feeding_schedule=[
            FeedingSchedule(id="f-evening", time="18:00", food_type="kibble", amount="1 cup"),
            FeedingSchedule(id="f-morning", time="07:30", food_type="kibble", amount="1 cup", notes="warm water"),
        ],
        medications=[
            Medication(id="m-daily", name="Vitamin", dosage="1 tab"),
            Medication(id="m-twice", name="Antibiotic", dosage="50mg", times=["08:00", "", "21:00"], with_food=True),
        ],
        created_at="2025-01-01T00:00:00Z",
        updated_at="2025-01-01T00:00:00Z",
    )


def test_time_blocks() -> None:
    assert time_block_for("06:00") == TimeBlock.MORNING
    assert time_block_for("10:59") == TimeBlock.MORNING
    assert time_block_for("11:00") == TimeBlock.MIDDAY
    assert time_block_for("15:00") == TimeBlock.EVENING
    assert time_block_for("20:00") == TimeBlock.BEDTIME
    assert time_block_for("02:00") == TimeBlock.BEDTIME


def test_unparsable_time_falls_back_to_morning(service) -> None:
    assert time_block_for("") == TimeBlock.MORNING
    assert time_block_for("soon") == TimeBlock.MORNING
    pet = service.create_pet({
        "user_id": "u1",
        "name": "Biscuit",
        "feeding_schedule": [{"id": "f1", "time": ""}],
        "medications": [{"id": "m1", "name": "Vitamin", "times": ["later"]}],
    })
    tasks = build_routine_tasks([pet])
    assert [(t.id, t.time_block) for t in tasks] == [
        (f"feeding-{pet.id}-f1", "morning"),
        (f"med-{pet.id}-m1-0", "morning"),
    ]


def test_task_ids_are_deterministic() -> None:
    ids = {t.id for t in build_routine_tasks([_pet()])}
    assert ids == {
        "feeding-p1-f-evening",
        "feeding-p1-f-morning",
        "med-p1-m-daily",
        "med-p1-m-twice-0",
        "med-p1-m-twice-1",
    }
    assert ids == {t.id for t in build_routine_tasks([_pet()])}


def test_tasks_sorted_by_block_then_time() -> None:
    tasks = build_routine_tasks([_pet()])
    assert [t.id for t in tasks] == [
        "med-p1-m-daily",
        "feeding-p1-f-morning",
        "med-p1-m-twice-0",
        "feeding-p1-f-evening",
        "med-p1-m-twice-1",
    ]
    morning_feed = tasks[1]
    assert morning_feed.description == "1 cup of kibble - warm water"
    assert tasks[2].description == "Antibiotic: 50mg (with food)"


def test_completions_match_routine_tasks(service) -> None:
    pet = service.create_pet(_pet().model_dump(exclude={"id", "created_at", "updated_at"}))
    guide = service.create_guide({"user_id": "u1", "title": "Trip", "pet_ids": [pet.id]})
    task = build_routine_tasks(service.get_guide_pets(guide.id))[0]
    service.mark_task_complete({"task_id": task.id, "guide_id": guide.id, "date": "2025-01-01"})
    done = {c.task_id for c in service.get_task_completions(guide.id, "2025-01-01")}
    assert task.id in done


def test_rekey_task_id_rewrites_pet_segment() -> None:
    mapping = {"p1": "p9", "p2": "p2"}
    assert rekey_task_id("feeding-p1-f-morning", mapping) == "feeding-p9-f-morning"
    assert rekey_task_id("med-p1-m-twice-1", mapping) == "med-p9-m-twice-1"
    assert rekey_task_id("feeding-p2-f1", mapping) == "feeding-p2-f1"
    assert rekey_task_id("walk", mapping) == "walk"
