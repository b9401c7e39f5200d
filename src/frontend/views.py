from __future__ import annotations

from typing import Any, Dict, Optional

from common.prisoners import Prisoner
from common.users import User
from router.routes import ADMIN, LOGIN, Navigation

from .context import AppContext


def _fmt_fields(record: Dict[str, Any]) -> str:
    parts = [f"{k}={record[k]}" for k in sorted(record) if k != "id"]
    return ", ".join(parts) if parts else "(no fields)"


def format_prisoner(prisoner: Prisoner) -> str:
    return f"[{prisoner.id or '?'}] {_fmt_fields(prisoner.model_dump())}"


def format_user(user: User) -> str:
    # Never echo passwords back to the terminal
    return f"[{user.id or '?'}] {user.username or '(no username)'}"


class HomeView:
    """Public prisoner list with create/update/delete actions."""

    title = "Prisoners"

    def __init__(self, ctx: AppContext) -> None:
        self._ctx = ctx

    def render(self) -> str:
        prisoners = self._ctx.prisoners.find_all()
        if not prisoners:
            return f"{self.title}\n(no prisoners registered)"
        lines = [f"{self.title} ({len(prisoners)})"]
        lines.extend(format_prisoner(p) for p in prisoners)
        return "\n".join(lines)

    def show(self, prisoner_id: str) -> str:
        return format_prisoner(self._ctx.prisoners.find_by_id(prisoner_id))

    def add(self, fields: Dict[str, Any]) -> Prisoner:
        return self._ctx.prisoners.save(fields)

    def update(self, prisoner_id: str, fields: Dict[str, Any]) -> Prisoner:
        return self._ctx.prisoners.update(prisoner_id, fields)

    def delete(self, prisoner_id: str) -> Any:
        return self._ctx.prisoners.delete_by_id(prisoner_id)


class LoginView:
    """Credential form: on success flips the auth flag and moves to /admin."""

    title = "Login"

    def __init__(self, ctx: AppContext) -> None:
        self._ctx = ctx

    def render(self) -> str:
        return f"{self.title}\nRun `prisoner-admin login -u USERNAME` to sign in."

    def submit(self, username: str, password: str) -> Optional[Navigation]:
        """Return the navigation to the admin panel, or None on bad credentials."""
        user = self._ctx.users.login(username, password)
        if user is None:
            return None
        self._ctx.auth.login()
        return self._ctx.router.push(ADMIN.path)


class AdminView:
    """User administration; only reachable while authenticated."""

    title = "Users"

    def __init__(self, ctx: AppContext) -> None:
        self._ctx = ctx

    def render(self) -> str:
        users = self._ctx.users.find_all()
        if not users:
            return f"{self.title}\n(no users registered)"
        lines = [f"{self.title} ({len(users)})"]
        lines.extend(format_user(u) for u in users)
        return "\n".join(lines)

    def add(self, username: str, password: str) -> User:
        return self._ctx.users.save({"username": username, "password": password})

    def update(self, user_id: str, *, username: Optional[str] = None, password: Optional[str] = None) -> User:
        current = self._ctx.users.find_by_id(user_id)
        changes: Dict[str, Any] = current.model_dump(mode="json")
        if username is not None:
            changes["username"] = username
        if password is not None:
            changes["password"] = password
        return self._ctx.users.update(user_id, changes)

    def delete(self, user_id: str) -> Any:
        return self._ctx.users.delete_by_id(user_id)

    def logout(self) -> Navigation:
        self._ctx.auth.logout()
        return self._ctx.router.push(LOGIN.path)


VIEWS = {
    "Home": HomeView,
    "Login": LoginView,
    "Admin": AdminView,
}


def view_for(ctx: AppContext, route_name: str):
    return VIEWS[route_name](ctx)


__all__ = [
    "AdminView",
    "HomeView",
    "LoginView",
    "VIEWS",
    "format_prisoner",
    "format_user",
    "view_for",
]
