from __future__ import annotations

from typing import Optional

from state.auth import AuthStore

from .routes import HOME, LOGIN, BeforeEachHook, Route, Router


def make_auth_guard(auth: AuthStore) -> BeforeEachHook:
    """Build the `before_each` hook enforcing `requires_auth` / `requires_guest`.

    Rules, evaluated on every navigation:
    - refresh the flag from storage (`check_auth`);
    - auth-only route while logged out -> `/login`;
    - guest-only route while logged in -> `/`;
    - anything else proceeds. Routes without flags are public.
    """

    def guard(to: Route, from_: Optional[Route]) -> Optional[str]:  # noqa: ARG001
        authenticated = auth.check_auth()
        if to.meta.requires_auth and not authenticated:
            return LOGIN.path
        if to.meta.requires_guest and authenticated:
            return HOME.path
        return None

    return guard


def create_router(auth: AuthStore) -> Router:
    router = Router()
    router.before_each(make_auth_guard(auth))
    return router


__all__ = ["create_router", "make_auth_guard"]
