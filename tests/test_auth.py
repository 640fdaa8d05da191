"""登录、会话与当前用户数据视图测试。"""
import pytest

from pet_sitter.auth.models import User, UserRole
from pet_sitter.auth.session import Session
from pet_sitter.auth.store import AuthStore
from pet_sitter.context import UserDataContext
from pet_sitter.errors import UnauthenticatedError
from pet_sitter.storage import EntityStore, JsonFileBackend, MemoryBackend


@pytest.fixture
def auth() -> AuthStore:
    return AuthStore(EntityStore(MemoryBackend()))


def _login(auth: AuthStore, email: str = "alice@example.com") -> User:
    auth.register(email, "pass1234", full_name="Alice")
    user = auth.login(email, "pass1234")
    Session.set_current(user)
    return user


def test_register_and_login(auth) -> None:
    user_id = auth.register("alice@example.com", "pass1234", full_name="Alice")
    assert user_id is not None
    user = auth.login("alice@example.com", "pass1234")
    assert user is not None
    assert user.id == user_id
    assert user.full_name == "Alice"
    assert user.role == UserRole.USER.value
    assert auth.get_user(user_id) == user


def test_email_is_case_insensitive_and_unique(auth) -> None:
    assert auth.register("Bob@Example.com ", "pw") is not None
    assert auth.register("bob@example.com", "other") is None
    assert auth.login("BOB@example.COM", "pw") is not None


def test_login_wrong_password(auth) -> None:
    auth.register("cat@example.com", "secret")
    assert auth.login("cat@example.com", "wrong") is None
    assert auth.login("nobody@example.com", "secret") is None
    assert auth.login("cat@example.com", "secret") is not None


def test_register_rejects_empty_input(auth) -> None:
    assert auth.register("", "pw") is None
    assert auth.register("dan@example.com", "") is None


def test_users_persist_on_disk(tmp_path) -> None:
    first = AuthStore(EntityStore(JsonFileBackend(tmp_path)))
    user_id = first.register("eve@example.com", "pw")
    second = AuthStore(EntityStore(JsonFileBackend(tmp_path)))
    user = second.login("eve@example.com", "pw")
    assert user is not None and user.id == user_id
    # 明文密码不落盘
    for path in tmp_path.iterdir():
        assert "\"pw\"" not in path.read_text(encoding="utf-8")


def test_session_requires_user(auth) -> None:
    assert Session.is_guest()
    with pytest.raises(UnauthenticatedError):
        Session.require_user_id()
    user = _login(auth)
    assert not Session.is_guest()
    assert Session.require_user_id() == user.id


def test_context_rejects_guest(service) -> None:
    ctx = UserDataContext(service)
    with pytest.raises(UnauthenticatedError):
        ctx.pets()
    with pytest.raises(UnauthenticatedError):
        ctx.create_guide({"title": "Trip"})


def test_context_scopes_to_current_user(service, auth) -> None:
    ctx = UserDataContext(service)
    alice = _login(auth)
    pet = ctx.create_pet({"name": "Biscuit", "user_id": "someone-else"})
    assert pet.user_id == alice.id
    ctx.create_pet({"name": "Old Tom", "status": "deceased", "deceased_date": "2024-05-01"})

    bob = _login(auth, "bob@example.com")
    assert ctx.pets() == []
    Session.set_current(alice)
    assert [p.name for p in ctx.pets()] == ["Biscuit", "Old Tom"]
    assert [p.name for p in ctx.active_pets()] == ["Biscuit"]
    assert [p.name for p in ctx.deceased_pets()] == ["Old Tom"]
    assert bob.id != alice.id


def test_context_routine_tasks_skip_deceased(service, auth) -> None:
    ctx = UserDataContext(service)
    _login(auth)
    alive = ctx.create_pet({
        "name": "Biscuit",
        "feeding_schedule": [{"id": "am", "time": "07:00", "food_type": "kibble", "amount": "1 cup"}],
    })
    gone = ctx.create_pet({
        "name": "Old Tom",
        "status": "deceased",
        "deceased_date": "2024-05-01",
        "feeding_schedule": [{"id": "pm", "time": "18:00"}],
    })
    guide = ctx.create_guide({"title": "Trip", "pet_ids": [alive.id, gone.id]})
    tasks = ctx.routine_tasks(guide.id)
    assert [t.id for t in tasks] == [f"feeding-{alive.id}-am"]


def test_context_share_and_settings(service, auth) -> None:
    ctx = UserDataContext(service)
    user = _login(auth)
    guide = ctx.create_guide({"title": "Trip"})
    link = ctx.create_share_link(guide.id, expires_in_days=3)
    assert link.user_id == user.id
    assert ctx.share_links() == [link]

    assert ctx.settings().auto_save_enabled is True
    ctx.update_settings({"theme": "dark"})
    assert ctx.settings().theme == "dark"

    assert ctx.onboarding_state() is None
    state = ctx.update_onboarding_state({"current_step": "create_pet", "completed_steps": ["welcome"]})
    assert ctx.onboarding_state() == state
    ctx.complete_onboarding()
    assert ctx.onboarding_state() is None
    assert ctx.settings().onboarding_completed is True


def test_context_autosave_follows_setting(qapp, service, auth) -> None:
    ctx = UserDataContext(service)
    _login(auth)
    pet = ctx.create_pet({"name": "Biscuit"})

    saver = ctx.pet_autosave(pet.id, debounce_ms=50)
    assert saver.enabled
    saver.close()

    ctx.update_settings({"auto_save_enabled": False})
    saver = ctx.pet_autosave(pet.id, debounce_ms=50)
    assert not saver.enabled
    saver.set_data({"name": "Biscuit"})
    saver.set_data({"name": "Changed"})
    saver.save_now()
    assert service.get_pet(pet.id).name == "Biscuit"
    saver.close()


def test_context_export_import_clear(service, auth) -> None:
    ctx = UserDataContext(service)
    _login(auth)
    ctx.create_pet({"name": "Biscuit"})
    data = ctx.export_all_data()
    assert [p.name for p in data.pets] == ["Biscuit"]

    ctx.clear_all_data()
    assert ctx.pets() == []
    ctx.import_data(data)
    assert [p.name for p in ctx.pets()] == ["Biscuit"]
