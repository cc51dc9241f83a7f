try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import asyncio

import pytest

from parts_proxy.clients.supplier import SupplierAuthError, SupplierRequestError, TokenGrant
from parts_proxy.services.credential_store import CredentialStore, StoredCredentials
from parts_proxy.services.token_manager import TOKEN_EXPIRY_SKEW_MS, TokenLifecycleManager

pytestmark = pytest.mark.anyio

NOW_SECONDS = 1_700_000_000
NOW_MS = NOW_SECONDS * 1000


class FakeClock:
    def __init__(self, now_ms: float = NOW_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms


class FakeSupplierAuth:
    """Replays queued login/refresh results and records every call."""

    def __init__(self, store: CredentialStore | None = None) -> None:
        self.login_results: list[TokenGrant | Exception] = []
        self.refresh_results: list[TokenGrant | Exception] = []
        self.calls: list[tuple[str, str | None]] = []
        self.store_during_login: list[StoredCredentials] = []
        self._store = store

    async def login(self) -> TokenGrant:
        self.calls.append(("login", None))
        if self._store is not None:
            self.store_during_login.append(self._store.read())
        await asyncio.sleep(0)
        return self._next(self.login_results)

    async def refresh(self, refresh_token: str) -> TokenGrant:
        self.calls.append(("refresh", refresh_token))
        await asyncio.sleep(0)
        return self._next(self.refresh_results)

    @staticmethod
    def _next(results: list[TokenGrant | Exception]) -> TokenGrant:
        if not results:
            raise AssertionError("Unexpected supplier auth call")
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _build(store: CredentialStore | None = None, clock: FakeClock | None = None):
    store = store or CredentialStore()
    auth = FakeSupplierAuth(store)
    manager = TokenLifecycleManager(store, auth, clock=clock or FakeClock())
    return manager, store, auth


async def test_cached_token_is_reused_until_skew_window(make_token) -> None:
    clock = FakeClock()
    manager, store, auth = _build(clock=clock)
    token = make_token(exp=NOW_SECONDS + 3600)
    expires_at = (NOW_SECONDS + 3600) * 1000
    store.write(token, "refresh-1", expires_at)

    clock.now_ms = expires_at - TOKEN_EXPIRY_SKEW_MS - 1
    assert await manager.get_valid_token() == token
    assert await manager.get_valid_token() == token
    assert auth.calls == []

    refreshed = make_token(exp=NOW_SECONDS + 7200)
    auth.refresh_results.append(TokenGrant(access_token=refreshed, refresh_token="refresh-2"))
    clock.now_ms = expires_at - TOKEN_EXPIRY_SKEW_MS

    assert await manager.get_valid_token() == refreshed
    assert auth.calls == [("refresh", "refresh-1")]


async def test_empty_store_logs_in_once_and_caches(make_token) -> None:
    manager, store, auth = _build()
    token = make_token(exp=NOW_SECONDS + 600)
    auth.login_results.append(TokenGrant(access_token=token, refresh_token="refresh-1"))

    assert await manager.get_valid_token() == token
    assert await manager.get_valid_token() == token

    assert auth.calls == [("login", None)]
    assert store.read() == StoredCredentials(
        access_token=token,
        refresh_token="refresh-1",
        expires_at=(NOW_SECONDS + 600) * 1000,
    )


async def test_expired_token_with_refresh_token_triggers_single_refresh(make_token) -> None:
    manager, store, auth = _build()
    store.write(make_token(exp=NOW_SECONDS - 10), "refresh-1", (NOW_SECONDS - 10) * 1000)
    new_token = make_token(exp=NOW_SECONDS + 900)
    auth.refresh_results.append(TokenGrant(access_token=new_token, refresh_token="refresh-2"))

    assert await manager.get_valid_token() == new_token

    assert auth.calls == [("refresh", "refresh-1")]
    assert store.read().refresh_token == "refresh-2"
    assert store.read().expires_at == (NOW_SECONDS + 900) * 1000


async def test_expired_token_without_refresh_token_triggers_single_login(make_token) -> None:
    manager, store, auth = _build()
    store.write(make_token(exp=NOW_SECONDS - 10), None, (NOW_SECONDS - 10) * 1000)
    new_token = make_token(exp=NOW_SECONDS + 900)
    auth.login_results.append(TokenGrant(access_token=new_token, refresh_token=None))

    assert await manager.get_valid_token() == new_token
    assert auth.calls == [("login", None)]


async def test_refresh_without_new_refresh_token_keeps_previous(make_token) -> None:
    manager, store, auth = _build()
    store.write("stale", "refresh-keep", 0)
    auth.refresh_results.append(TokenGrant(access_token=make_token(exp=NOW_SECONDS + 60)))

    await manager.get_valid_token()

    assert store.read().refresh_token == "refresh-keep"


@pytest.mark.parametrize(
    "failure",
    [
        SupplierAuthError("Invalid refresh response"),
        SupplierRequestError("Supplier API responded with HTTP 401", status_code=401),
        SupplierRequestError("connection refused"),
    ],
)
async def test_failed_refresh_clears_store_then_logs_in(make_token, failure) -> None:
    manager, store, auth = _build()
    store.write("stale", "refresh-1", 0)
    auth.refresh_results.append(failure)
    fresh = make_token(exp=NOW_SECONDS + 900)
    auth.login_results.append(TokenGrant(access_token=fresh, refresh_token="refresh-9"))

    assert await manager.get_valid_token() == fresh

    assert auth.calls == [("refresh", "refresh-1"), ("login", None)]
    assert auth.store_during_login == [StoredCredentials()]
    assert store.read().refresh_token == "refresh-9"


async def test_refresh_outcome_requests_login_when_refresh_fails() -> None:
    manager, store, auth = _build()
    store.write("stale", "refresh-1", 0)
    auth.refresh_results.append(SupplierAuthError("Invalid refresh response"))

    outcome = await manager.refresh()

    assert outcome.needs_login
    assert store.read().is_empty


async def test_refresh_outcome_without_refresh_token_skips_network() -> None:
    manager, _, auth = _build()

    outcome = await manager.refresh()

    assert outcome.needs_login
    assert auth.calls == []


async def test_failed_login_propagates_and_leaves_store_empty() -> None:
    manager, store, auth = _build()
    auth.login_results.append(SupplierAuthError("Failed to obtain supplier access token"))

    with pytest.raises(SupplierAuthError):
        await manager.get_valid_token()

    assert store.read().is_empty
    assert auth.calls == [("login", None)]


async def test_failed_refresh_and_failed_login_propagates_login_error() -> None:
    manager, store, auth = _build()
    store.write("stale", "refresh-1", 0)
    auth.refresh_results.append(SupplierAuthError("Invalid refresh response"))
    auth.login_results.append(SupplierRequestError("HTTP 503", status_code=503))

    with pytest.raises(SupplierRequestError) as exc_info:
        await manager.get_valid_token()

    assert exc_info.value.status_code == 503
    assert store.read().is_empty


async def test_malformed_token_is_treated_as_expired(make_token) -> None:
    manager, store, auth = _build()
    auth.login_results.append(TokenGrant(access_token="not-a-jwt", refresh_token=None))
    good = make_token(exp=NOW_SECONDS + 900)
    auth.login_results.append(TokenGrant(access_token=good, refresh_token=None))

    assert await manager.get_valid_token() == "not-a-jwt"
    assert store.read().expires_at == 0

    assert await manager.get_valid_token() == good
    assert auth.calls == [("login", None), ("login", None)]


async def test_concurrent_callers_share_one_login(make_token) -> None:
    manager, _, auth = _build()
    token = make_token(exp=NOW_SECONDS + 900)
    auth.login_results.append(TokenGrant(access_token=token, refresh_token="refresh-1"))

    results = await asyncio.gather(*(manager.get_valid_token() for _ in range(5)))

    assert results == [token] * 5
    assert auth.calls == [("login", None)]
