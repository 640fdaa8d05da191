"""用户设置与引导状态。"""
from pet_sitter.account.models import AppSettings, OnboardingState, OnboardingStep, Theme

__all__ = ["AppSettings", "OnboardingState", "OnboardingStep", "Theme"]
