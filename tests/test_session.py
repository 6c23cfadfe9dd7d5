import json

import httpx
import pytest

from food_ordering.core.config import Settings
from food_ordering.navigation import (
    ACTIVE_TINT,
    INACTIVE_TINT,
    TABS,
    RouteDecision,
    decide_route,
    tab_bar,
)
from food_ordering.services.backend import BackendError
from food_ordering.services.session import (
    AppwriteSessionProvider,
    MockSessionProvider,
    SessionStore,
    get_session_provider,
)

ENDPOINT = "https://appwrite.test/v1"
ACCOUNT = {"$id": "acc1", "name": "Ada", "email": "ada@example.com"}


def appwrite_provider(handler, **overrides):
    values = {
        "env_mode": "production",
        "appwrite_endpoint": ENDPOINT,
        "appwrite_project_id": "proj",
        "appwrite_session_jwt": "jwt-token",
        **overrides,
    }
    settings = Settings(_env_file=None, **values)
    client = httpx.AsyncClient(base_url=ENDPOINT, transport=httpx.MockTransport(handler))
    return AppwriteSessionProvider(settings, client=client)


# =============================================================================
# STORE
# =============================================================================

def test_store_starts_loading_and_signed_out():
    store = SessionStore(MockSessionProvider(user=ACCOUNT))

    assert store.is_loading is True
    assert store.is_authenticated is False
    assert decide_route(store) is RouteDecision.LOADING


@pytest.mark.asyncio
async def test_fetch_signs_in_when_provider_has_user():
    store = SessionStore(MockSessionProvider(user=ACCOUNT))

    result = await store.fetch_authenticated_user()

    assert result.success is True
    assert store.is_authenticated is True
    assert store.is_loading is False
    assert store.user["email"] == "ada@example.com"
    assert decide_route(store) is RouteDecision.RENDER_SHELL


@pytest.mark.asyncio
async def test_no_session_redirects_to_sign_in():
    store = SessionStore(MockSessionProvider())

    await store.fetch_authenticated_user()

    assert store.is_authenticated is False
    assert store.user is None
    assert decide_route(store) is RouteDecision.REDIRECT_SIGN_IN


@pytest.mark.asyncio
async def test_provider_failure_counts_as_signed_out():
    store = SessionStore(MockSessionProvider(user=ACCOUNT, error=RuntimeError("network down")))

    result = await store.refresh()

    assert result.success is False
    assert "network down" in result.error_message
    assert store.is_authenticated is False
    assert store.is_loading is False


@pytest.mark.asyncio
async def test_refresh_signs_out_after_session_ends():
    provider = MockSessionProvider(user=ACCOUNT)
    store = SessionStore(provider)
    await store.fetch_authenticated_user()

    provider.user = None
    await store.refresh()

    assert store.is_authenticated is False
    assert provider.fetch_count == 2


def test_development_factory_signs_in_demo_user():
    provider = get_session_provider()

    assert provider.provider_name == "mock"
    assert provider.user is not None


# =============================================================================
# APPWRITE PROVIDER
# =============================================================================

@pytest.mark.asyncio
async def test_appwrite_account_becomes_user():
    def handler(request):
        assert request.url.path == "/v1/account"
        assert request.headers["X-Appwrite-JWT"] == "jwt-token"
        assert request.headers["X-Appwrite-Project"] == "proj"
        return httpx.Response(200, json=ACCOUNT)

    result = await appwrite_provider(handler).fetch_current_user()

    assert result.success is True
    assert result.user["$id"] == "acc1"


@pytest.mark.asyncio
async def test_appwrite_profile_lookup_by_account_id():
    def handler(request):
        if request.url.path == "/v1/account":
            return httpx.Response(200, json=ACCOUNT)
        assert request.url.path == "/v1/databases/food_ordering/collections/users/documents"
        query = json.loads(request.url.params["queries[]"])
        assert query == {"method": "equal", "attribute": "accountId", "values": ["acc1"]}
        return httpx.Response(200, json={"total": 1, "documents": [{"$id": "u1", "accountId": "acc1"}]})

    result = await appwrite_provider(handler, user_collection_id="users").fetch_current_user()

    assert result.user == {"$id": "u1", "accountId": "acc1"}


@pytest.mark.asyncio
async def test_appwrite_missing_profile_means_no_session():
    def handler(request):
        if request.url.path == "/v1/account":
            return httpx.Response(200, json=ACCOUNT)
        return httpx.Response(200, json={"total": 0, "documents": []})

    result = await appwrite_provider(handler, user_collection_id="users").fetch_current_user()

    assert result.success is False


@pytest.mark.asyncio
async def test_appwrite_unauthorized_means_no_session():
    def handler(request):
        return httpx.Response(401, json={"message": "User (role: guests) missing scope (account)", "code": 401})

    result = await appwrite_provider(handler).fetch_current_user()

    assert result.success is False
    assert "missing scope" in result.error_message


@pytest.mark.asyncio
async def test_appwrite_server_error_raises_and_store_signs_out():
    provider = appwrite_provider(lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(BackendError):
        await provider.fetch_current_user()

    store = SessionStore(provider)
    await store.fetch_authenticated_user()
    assert store.is_authenticated is False


@pytest.mark.asyncio
async def test_appwrite_without_jwt_skips_request():
    def handler(request):
        raise AssertionError("no request expected")

    provider = appwrite_provider(handler, appwrite_session_jwt=None)

    result = await provider.fetch_current_user()

    assert result.success is False


# =============================================================================
# TABS
# =============================================================================

def test_four_fixed_tabs_in_order():
    assert [tab.name for tab in TABS] == ["index", "search", "cart", "profile"]
    assert [tab.title for tab in TABS] == ["Home", "Search", "Cart", "Profile"]


def test_tab_bar_highlights_only_active_tab():
    entries = tab_bar("cart")

    focused = [e.destination.name for e in entries if e.focused]
    assert focused == ["cart"]
    assert {e.tint for e in entries if not e.focused} == {INACTIVE_TINT}
    assert next(e for e in entries if e.focused).tint == ACTIVE_TINT


def test_tab_bar_rejects_unknown_tab():
    with pytest.raises(KeyError):
        tab_bar("orders")
