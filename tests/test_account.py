"""设置与引导状态测试。"""
import pytest

from pet_sitter.config import settings_key
from pet_sitter.errors import UnauthenticatedError


def test_settings_defaults_are_not_persisted(service) -> None:
    settings = service.get_settings("u1")
    assert settings.user_id == "u1"
    assert settings.auto_save_enabled is True
    assert settings.notifications_enabled is True
    assert settings.onboarding_completed is False
    assert settings.theme == "system"
    assert service.backend.get_item(settings_key("u1")) is None


def test_update_settings_merges_and_persists(service) -> None:
    service.update_settings("u1", {"theme": "dark"})
    updated = service.update_settings("u1", {"auto_save_enabled": False, "user_id": "someone-else"})
    assert updated.theme == "dark"
    assert updated.auto_save_enabled is False
    assert updated.user_id == "u1"
    assert service.get_settings("u1") == updated
    assert service.get_settings("u2").auto_save_enabled is True


def test_settings_require_user(service) -> None:
    with pytest.raises(UnauthenticatedError):
        service.get_settings(None)


def test_onboarding_flow(service) -> None:
    assert service.get_onboarding_state("u1") is None
    state = service.update_onboarding_state("u1", {"current_step": "create_pet"})
    assert state.current_step == "create_pet"
    assert state.completed_steps == []

    state = service.update_onboarding_state(
        "u1", {"current_step": "create_guide", "completed_steps": ["welcome", "create_pet"], "first_pet_id": "p1"}
    )
    assert state.first_pet_id == "p1"
    assert service.get_onboarding_state("u1") == state

    service.complete_onboarding("u1")
    assert service.get_onboarding_state("u1") is None
    assert service.get_settings("u1").onboarding_completed is True


def test_onboarding_rejects_unknown_step(service) -> None:
    with pytest.raises(ValueError):
        service.update_onboarding_state("u1", {"current_step": "dance"})
