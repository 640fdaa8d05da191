"""应用设置与首次引导状态。"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class AppSettings(BaseModel):
    """每个用户一份；未保存过时由数据服务按默认值返回。"""
    user_id: str = Field(..., description="用户 ID")
    theme: Theme = Theme.SYSTEM
    notifications_enabled: bool = True
    auto_save_enabled: bool = True
    onboarding_completed: bool = False

    model_config = ConfigDict(use_enum_values=True)


class OnboardingStep(str, Enum):
    WELCOME = "welcome"
    CREATE_PET = "create_pet"
    CREATE_GUIDE = "create_guide"
    COMPLETION = "completion"


class OnboardingState(BaseModel):
    """引导进度；完成引导后整条删除。"""
    current_step: OnboardingStep = OnboardingStep.WELCOME
    completed_steps: List[OnboardingStep] = Field(default_factory=list)
    first_pet_id: Optional[str] = None
    first_guide_id: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)
