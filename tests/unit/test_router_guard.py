from __future__ import annotations

import pytest

from router.guards import create_router, make_auth_guard
from router.routes import (
    ADMIN,
    HOME,
    LOGIN,
    NavigationError,
    Route,
    RouteMeta,
    RouteNotFoundError,
    Router,
)
from state.auth import AuthStore
from state.local_store import LocalStorage


@pytest.fixture
def auth(tmp_path) -> AuthStore:
    return AuthStore(LocalStorage(tmp_path / "local_storage.json"))


def test_route_table_flags():
    assert HOME.meta == RouteMeta()
    assert LOGIN.meta.requires_guest and not LOGIN.meta.requires_auth
    assert ADMIN.meta.requires_auth and not ADMIN.meta.requires_guest


def test_admin_redirects_to_login_when_logged_out(auth):
    router = create_router(auth)
    nav = router.push("/admin")

    assert nav.route is LOGIN
    assert nav.redirected_from is ADMIN
    assert router.current is LOGIN


def test_login_redirects_home_when_logged_in(auth):
    auth.login()
    router = create_router(auth)
    nav = router.push("/login")

    assert nav.route is HOME
    assert nav.redirected_from is LOGIN


@pytest.mark.parametrize("logged_in", [False, True])
def test_home_is_always_reachable(auth, logged_in):
    if logged_in:
        auth.login()
    nav = create_router(auth).push("/")

    assert nav.route is HOME
    assert nav.redirected is False


def test_admin_allowed_and_login_allowed_in_matching_state(auth):
    router = create_router(auth)
    assert router.push("/login").route is LOGIN

    auth.login()
    assert router.push("/admin").route is ADMIN


def test_guard_refreshes_from_storage_on_every_navigation(auth, tmp_path):
    router = create_router(auth)
    # Another process logs in through the same storage file
    AuthStore(LocalStorage(tmp_path / "local_storage.json")).login()

    assert auth.is_authenticated is False
    assert router.push("/admin").route is ADMIN
    assert auth.is_authenticated is True


def test_route_without_flags_is_public(auth):
    extra = Route(path="/about", name="About")
    router = Router(routes=(HOME, LOGIN, ADMIN, extra))
    router.before_each(make_auth_guard(auth))

    assert router.push("/about").route is extra


def test_resolve_by_name_and_trailing_slash():
    router = Router()
    assert router.resolve("Admin") is ADMIN
    assert router.resolve("/admin/") is ADMIN
    assert router.resolve("login") is LOGIN


def test_unknown_route_raises():
    with pytest.raises(RouteNotFoundError):
        Router().push("/nowhere")


def test_hooks_run_in_order_and_receive_from_route():
    router = Router()
    calls = []

    def first(to, from_):
        calls.append(("first", to.name, from_.name if from_ else None))
        return None

    def second(to, from_):
        calls.append(("second", to.name, from_.name if from_ else None))
        return None

    router.before_each(first)
    remove_second = router.before_each(second)
    router.push("/")
    remove_second()
    router.push("/login")

    assert calls == [
        ("first", "Home", None),
        ("second", "Home", None),
        ("first", "Login", "Home"),
    ]


def test_redirect_loop_is_bounded():
    router = Router()
    router.before_each(lambda to, _from: "/login" if to is HOME else "/")

    with pytest.raises(NavigationError):
        router.push("/")
    assert router.current is None
