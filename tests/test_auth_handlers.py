from datetime import datetime, timedelta, timezone

import pytest

from chatto.application.commands.auth import (
    LoginUserCommand,
    LoginUserHandler,
    LogoutUserCommand,
    LogoutUserHandler,
    RegisterUserCommand,
    RegisterUserHandler,
)
from chatto.application.queries.auth import VerifySessionHandler, VerifySessionQuery
from chatto.domain.exceptions import (
    ConflictError,
    DomainValidationError,
    UnauthenticatedError,
)
from chatto.infrastructure.security import BcryptPasswordHasher, JwtTokenService
from fakes import Store

ISSUED_AT = datetime.now(timezone.utc)


@pytest.fixture()
def auth():
    store = Store()
    hasher = BcryptPasswordHasher(rounds=4)
    tokens = JwtTokenService(secret="test-secret", issuer="chatto", audience="chatto-clients")
    return store, hasher, tokens


def _login_handler(store, hasher, tokens, ttl=timedelta(hours=24)):
    return LoginUserHandler(
        store.users, store.sessions, hasher, tokens, session_ttl=ttl, clock=lambda: ISSUED_AT
    )


@pytest.mark.anyio
async def test_register_stores_a_hash_not_the_password(auth):
    store, hasher, _ = auth

    user = await RegisterUserHandler(store.users, hasher).execute(
        RegisterUserCommand(" Alice@Example.com ", "hunter22")
    )

    assert user.email.value == "alice@example.com"
    assert user.password_hash != "hunter22"
    assert await hasher.verify("hunter22", user.password_hash)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "email, password", [("not-an-email", "pw"), ("a@b.io", "  "), ("a@b.io", "p" * 73)]
)
async def test_register_validation(auth, email, password):
    store, hasher, _ = auth
    with pytest.raises(DomainValidationError):
        await RegisterUserHandler(store.users, hasher).execute(
            RegisterUserCommand(email, password)
        )


@pytest.mark.anyio
async def test_duplicate_email_conflicts(auth):
    store, hasher, _ = auth
    handler = RegisterUserHandler(store.users, hasher)
    await handler.execute(RegisterUserCommand("alice@example.com", "pw"))

    with pytest.raises(ConflictError):
        await handler.execute(RegisterUserCommand("ALICE@example.com", "other"))


@pytest.mark.anyio
async def test_login_verify_logout(auth):
    store, hasher, tokens = auth
    await RegisterUserHandler(store.users, hasher).execute(
        RegisterUserCommand("alice@example.com", "pw")
    )
    verify = VerifySessionHandler(tokens, store.sessions, store.users)

    result = await _login_handler(store, hasher, tokens).execute(
        LoginUserCommand("alice@example.com", "pw")
    )
    identity = await verify.execute(VerifySessionQuery(result.token))

    assert identity.user_id == result.user.id
    assert identity.email.value == "alice@example.com"
    assert result.session.expires_at == ISSUED_AT + timedelta(hours=24)

    assert await LogoutUserHandler(store.sessions).execute(LogoutUserCommand(result.token))
    with pytest.raises(UnauthenticatedError):
        await verify.execute(VerifySessionQuery(result.token))


@pytest.mark.anyio
async def test_each_login_is_a_separate_session(auth):
    store, hasher, tokens = auth
    await RegisterUserHandler(store.users, hasher).execute(
        RegisterUserCommand("alice@example.com", "pw")
    )
    login = _login_handler(store, hasher, tokens)

    phone = await login.execute(LoginUserCommand("alice@example.com", "pw"))
    laptop = await login.execute(LoginUserCommand("alice@example.com", "pw"))
    await LogoutUserHandler(store.sessions).execute(LogoutUserCommand(phone.token))

    verify = VerifySessionHandler(tokens, store.sessions, store.users)
    assert (await verify.execute(VerifySessionQuery(laptop.token))).user_id == laptop.user.id


@pytest.mark.anyio
@pytest.mark.parametrize("email, password", [("alice@example.com", "wrong"), ("nobody@example.com", "pw")])
async def test_bad_credentials(auth, email, password):
    store, hasher, tokens = auth
    await RegisterUserHandler(store.users, hasher).execute(
        RegisterUserCommand("alice@example.com", "pw")
    )

    with pytest.raises(DomainValidationError, match="Invalid credentials"):
        await _login_handler(store, hasher, tokens).execute(LoginUserCommand(email, password))


@pytest.mark.anyio
async def test_verify_rejects_foreign_and_expired_tokens(auth):
    store, hasher, tokens = auth
    await RegisterUserHandler(store.users, hasher).execute(
        RegisterUserCommand("alice@example.com", "pw")
    )
    result = await _login_handler(store, hasher, tokens).execute(
        LoginUserCommand("alice@example.com", "pw")
    )

    forged = JwtTokenService("other-secret", "chatto", "chatto-clients").issue(
        result.user.id, result.user.email, ISSUED_AT, ISSUED_AT + timedelta(hours=1)
    )
    verify = VerifySessionHandler(tokens, store.sessions, store.users)
    with pytest.raises(UnauthenticatedError):
        await verify.execute(VerifySessionQuery(forged))
    with pytest.raises(UnauthenticatedError):
        await verify.execute(VerifySessionQuery(""))

    later = VerifySessionHandler(
        tokens, store.sessions, store.users, clock=lambda: ISSUED_AT + timedelta(days=2)
    )
    with pytest.raises(UnauthenticatedError):
        await later.execute(VerifySessionQuery(result.token))
