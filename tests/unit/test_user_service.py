import pytest

from days.core.exceptions import NotFoundError, UnauthorizedError, ValidationAppError
from days.core.security import Argon2Params, parse_access_token
from days.domain.exceptions import AlreadyExistsError, InvalidFormatError
from days.domain.value_objects import Identifier
from days.schemas.auth import LoginRequest
from days.schemas.user import ChangePasswordRequest, CreateUserRequest, UpdateUserRequest
from days.services import auth as auth_module
from days.services.auth import AuthService
from days.services.users import UserService
from tests.fakes import build_repositories

FAST_PARAMS = Argon2Params(time_cost=1, memory_cost_kib=1024, parallelism=1)


def _services():
    repos = build_repositories()
    return repos, UserService(repos.users, FAST_PARAMS), AuthService(repos.users, password_params=FAST_PARAMS)


def _create_request(**overrides) -> CreateUserRequest:
    payload = {"email": "Alice@Example.com", "username": "Alice", "password": "StrongPass123"}
    payload.update(overrides)
    return CreateUserRequest(**payload)


@pytest.mark.asyncio
async def test_create_user_normalizes_and_hides_password():
    repos, users, _ = _services()
    created = await users.create_user(_create_request(first_name="Alice", timezone=""))

    assert created.email == "alice@example.com"
    assert created.username == "alice"
    assert created.timezone == "UTC"
    assert "password" not in created.model_dump()
    assert "password_hash" not in created.model_dump()

    stored = await repos.users.get_by_id(Identifier.of(created.id))
    assert stored is not None
    assert stored.password_hash.count(":") == 1


@pytest.mark.asyncio
async def test_create_user_rejects_short_password_and_bad_email():
    _, users, _ = _services()
    with pytest.raises(ValidationAppError):
        await users.create_user(_create_request(password="short"))
    with pytest.raises(InvalidFormatError):
        await users.create_user(_create_request(email="nope"))


@pytest.mark.asyncio
async def test_duplicate_email_or_username_conflicts():
    _, users, _ = _services()
    await users.create_user(_create_request())

    with pytest.raises(AlreadyExistsError):
        await users.create_user(_create_request(username="someone-else"))
    with pytest.raises(AlreadyExistsError):
        await users.create_user(_create_request(email="other@example.com", username="ALICE"))


@pytest.mark.asyncio
async def test_update_user_rechecks_uniqueness_excluding_self():
    _, users, _ = _services()
    alice = await users.create_user(_create_request())
    await users.create_user(_create_request(email="bob@example.com", username="bob"))
    alice_id = Identifier.of(alice.id)

    same = await users.update_user(alice_id, UpdateUserRequest(email="alice@example.com", last_name="Liddell"))
    assert same.last_name == "Liddell"
    assert same.display_name == "Liddell"

    with pytest.raises(AlreadyExistsError):
        await users.update_user(alice_id, UpdateUserRequest(username="bob"))

    renamed = await users.update_user(alice_id, UpdateUserRequest(username="alice2", timezone="Europe/Paris"))
    assert renamed.username == "alice2"
    assert renamed.timezone == "Europe/Paris"


@pytest.mark.asyncio
async def test_delete_user_and_missing_user():
    _, users, _ = _services()
    alice = await users.create_user(_create_request())
    alice_id = Identifier.of(alice.id)

    await users.delete_user(alice_id)
    with pytest.raises(NotFoundError):
        await users.get_user(alice_id)
    with pytest.raises(NotFoundError):
        await users.delete_user(alice_id)


@pytest.mark.asyncio
async def test_login_issues_token_for_registered_user():
    _, users, auth = _services()
    alice = await users.create_user(_create_request())

    result = await auth.login(LoginRequest(email="ALICE@example.com", password="StrongPass123"))
    assert result.token_type == "bearer"
    assert result.user.id == alice.id
    assert parse_access_token(result.access_token) == Identifier.of(alice.id)

    authenticated = await auth.authenticate(result.access_token)
    assert authenticated.username == "alice"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("email", "password"),
    [
        ("alice@example.com", "WrongPass123"),
        ("nobody@example.com", "StrongPass123"),
        ("not-an-email", "StrongPass123"),
    ],
)
async def test_login_failures_are_indistinguishable(email, password):
    _, users, auth = _services()
    await users.create_user(_create_request())

    with pytest.raises(UnauthorizedError) as exc:
        await auth.login(LoginRequest(email=email, password=password))
    assert exc.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_unknown_email_still_runs_password_check_and_is_not_logged(monkeypatch, caplog):
    _, users, auth = _services()
    await users.create_user(_create_request())

    checked = []
    real_verify = auth_module.verify_password

    def counting_verify(password, stored_hash, params=None):
        checked.append(stored_hash)
        return real_verify(password, stored_hash, params)

    monkeypatch.setattr(auth_module, "verify_password", counting_verify)

    with caplog.at_level("WARNING", logger="days.services.auth"):
        with pytest.raises(UnauthorizedError):
            await auth.login(LoginRequest(email="nobody@example.com", password="StrongPass123"))
        with pytest.raises(UnauthorizedError):
            await auth.login(LoginRequest(email="nobody@example.com", password="StrongPass123"))

    assert len(checked) == 2
    assert checked[0] == checked[1]
    assert checked[0].count(":") == 1
    assert "nobody@example.com" not in caplog.text


@pytest.mark.asyncio
async def test_unencodable_passwords_fail_cleanly():
    _, users, auth = _services()
    await users.create_user(_create_request())

    with pytest.raises(ValidationAppError) as exc:
        await users.create_user(
            CreateUserRequest.model_construct(email="bob@example.com", username="bob", password="\ud800abcdefgh")
        )
    assert exc.value.details == {"field": "password"}

    with pytest.raises(UnauthorizedError):
        await auth.login(LoginRequest.model_construct(email="alice@example.com", password="\ud800abcdefgh"))


@pytest.mark.asyncio
async def test_authenticate_fails_once_user_is_deleted():
    _, users, auth = _services()
    alice = await users.create_user(_create_request())
    token = (await auth.login(LoginRequest(email="alice@example.com", password="StrongPass123"))).access_token

    await users.delete_user(Identifier.of(alice.id))
    with pytest.raises(UnauthorizedError):
        await auth.authenticate(token)


@pytest.mark.asyncio
async def test_change_password_requires_current_password():
    _, users, auth = _services()
    alice = await users.create_user(_create_request())
    alice_id = Identifier.of(alice.id)

    with pytest.raises(UnauthorizedError):
        await users.change_password(alice_id, ChangePasswordRequest(current_password="nope", new_password="NewPass12345"))
    with pytest.raises(ValidationAppError):
        await users.change_password(alice_id, ChangePasswordRequest(current_password="StrongPass123", new_password="short"))

    await users.change_password(alice_id, ChangePasswordRequest(current_password="StrongPass123", new_password="NewPass12345"))
    await auth.login(LoginRequest(email="alice@example.com", password="NewPass12345"))
    with pytest.raises(UnauthorizedError):
        await auth.login(LoginRequest(email="alice@example.com", password="StrongPass123"))
