from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence


logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10


class RouterError(RuntimeError):
    """Base error for the console router."""


class RouteNotFoundError(RouterError):
    """No route matches the requested path or name."""


class NavigationError(RouterError):
    """Navigation could not settle on a route (e.g. endless redirects)."""


@dataclass(frozen=True)
class RouteMeta:
    requires_auth: bool = False
    requires_guest: bool = False


@dataclass(frozen=True)
class Route:
    """A path in the console, the view name it renders and its access flags."""

    path: str
    name: str
    meta: RouteMeta = field(default_factory=RouteMeta)


# A hook returns None to let navigation proceed, or a path/name to redirect to.
BeforeEachHook = Callable[[Route, Optional[Route]], Optional[str]]


@dataclass(frozen=True)
class Navigation:
    route: Route
    redirected_from: Optional[Route] = None

    @property
    def redirected(self) -> bool:
        return self.redirected_from is not None


HOME = Route(path="/", name="Home")
LOGIN = Route(path="/login", name="Login", meta=RouteMeta(requires_guest=True))
ADMIN = Route(path="/admin", name="Admin", meta=RouteMeta(requires_auth=True))

ROUTES: Sequence[Route] = (HOME, LOGIN, ADMIN)


def _normalize_path(path: str) -> str:
    p = (path or "").strip()
    if not p.startswith("/"):
        p = "/" + p
    if len(p) > 1:
        p = p.rstrip("/") or "/"
    return p


class Router:
    """
    Minimal client-side router.

    - Routes are matched by exact path (trailing slash ignored) or by name.
    - `before_each` hooks run in registration order before every navigation,
      including navigations caused by a redirect.
    """

    def __init__(self, routes: Sequence[Route] = ROUTES) -> None:
        self._by_path: Dict[str, Route] = {r.path: r for r in routes}
        self._by_name: Dict[str, Route] = {r.name: r for r in routes}
        self._hooks: List[BeforeEachHook] = []
        self._current: Optional[Route] = None

    @property
    def current(self) -> Optional[Route]:
        return self._current

    @property
    def routes(self) -> List[Route]:
        return list(self._by_path.values())

    def before_each(self, hook: BeforeEachHook) -> Callable[[], None]:
        """Register a pre-navigation hook; returns a callable that removes it."""
        self._hooks.append(hook)

        def remove() -> None:
            if hook in self._hooks:
                self._hooks.remove(hook)

        return remove

    def resolve(self, target: str) -> Route:
        route = self._by_name.get(target) or self._by_path.get(_normalize_path(target))
        if route is None:
            raise RouteNotFoundError(f"No route for {target!r}")
        return route

    def push(self, target: str) -> Navigation:
        """Navigate to `target` (path or route name), following guard redirects."""
        requested = self.resolve(target)
        route = requested
        for _ in range(MAX_REDIRECTS):
            redirect = self._run_hooks(route)
            if redirect is None:
                self._current = route
                if route is requested:
                    return Navigation(route=route)
                return Navigation(route=route, redirected_from=requested)
            logger.info("Navigation to %s redirected to %s", route.path, redirect)
            route = self.resolve(redirect)
        raise NavigationError(f"Too many redirects while navigating to {requested.path}")

    def _run_hooks(self, to: Route) -> Optional[str]:
        for hook in list(self._hooks):
            redirect = hook(to, self._current)
            if redirect is not None:
                return redirect
        return None


__all__ = [
    "ADMIN",
    "HOME",
    "LOGIN",
    "ROUTES",
    "BeforeEachHook",
    "Navigation",
    "NavigationError",
    "Route",
    "RouteMeta",
    "RouteNotFoundError",
    "Router",
    "RouterError",
]
