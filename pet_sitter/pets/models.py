"""宠物档案数据模型。"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pet_sitter.ids import generate_id


class PetSpecies(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    FISH = "fish"
    REPTILE = "reptile"
    RABBIT = "rabbit"
    HAMSTER = "hamster"
    OTHER = "other"


class PetStatus(str, Enum):
    """生命周期：在世 / 已故（纪念页）。"""
    ACTIVE = "active"
    DECEASED = "deceased"


class WeightUnit(str, Enum):
    LBS = "lbs"
    KG = "kg"


class VetInfo(BaseModel):
    name: str = ""
    clinic: str = ""
    phone: str = ""
    address: Optional[str] = None
    emergency_phone: Optional[str] = None


class FeedingSchedule(BaseModel):
    """一次喂食；id 用于派生每日任务 ID。"""
    id: str = Field(default_factory=generate_id)
    time: str = Field("08:00", description="HH:MM")
    food_type: str = ""
    amount: str = ""
    notes: Optional[str] = None


class Medication(BaseModel):
    """一种药物；times 为空时视为每天早上一次。"""
    id: str = Field(default_factory=generate_id)
    name: str = ""
    dosage: str = ""
    frequency: str = "Once daily"
    times: List[str] = Field(default_factory=list, description="HH:MM 列表")
    with_food: Optional[bool] = None
    notes: Optional[str] = None


DEFAULT_HEALTH_SYMPTOMS = (
    "Vomiting",
    "Diarrhea",
    "Not eating",
    "Lethargy",
    "Excessive thirst",
    "Difficulty breathing",
    "Limping",
    "Seizures",
)


class HealthSymptom(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    is_enabled: bool = False
    is_custom: bool = False
    notes: Optional[str] = None


class HealthProtocol(BaseModel):
    """症状开关列表：照看人遇到已勾选的症状时应联系主人或兽医。"""
    symptoms: List[HealthSymptom] = Field(default_factory=list)
    general_notes: Optional[str] = None

    @classmethod
    def default(cls) -> "HealthProtocol":
        return cls(symptoms=[HealthSymptom(name=name) for name in DEFAULT_HEALTH_SYMPTOMS])


class Pet(BaseModel):
    """宠物档案。只属于一个用户，指南仅通过 ID 引用。"""
    id: str = Field(..., description="宠物唯一 ID")
    user_id: str = Field(..., description="主人用户 ID")
    name: str = Field(..., description="宠物名字")
    species: PetSpecies = PetSpecies.DOG
    breed: Optional[str] = None
    age: Optional[float] = None
    weight: Optional[float] = None
    weight_unit: Optional[WeightUnit] = None
    photo_url: Optional[str] = None
    medical_notes: Optional[str] = None
    vet_info: Optional[VetInfo] = None
    feeding_schedule: List[FeedingSchedule] = Field(default_factory=list)
    medications: List[Medication] = Field(default_factory=list)
    behavioral_notes: Optional[str] = None
    special_instructions: Optional[str] = None
    health_protocol: Optional[HealthProtocol] = None
    status: PetStatus = PetStatus.ACTIVE
    deceased_date: Optional[str] = Field(None, description="仅 status=deceased 时有值")
    created_at: str = Field(..., description="创建时间 ISO")
    updated_at: str = Field(..., description="更新时间 ISO")

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def _check_deceased_date(self) -> "Pet":
        if self.status == PetStatus.DECEASED and not self.deceased_date:
            raise ValueError("deceased pets require deceased_date")
        if self.status == PetStatus.ACTIVE and self.deceased_date:
            raise ValueError("active pets cannot have deceased_date")
        return self
