#!/usr/bin/env python3
"""
prisoner-admin - console front end for the prisoner registry.

Each invocation behaves like one page load: storage is read, the auth flag
restored, the requested route navigated (through the auth/guest guard) and
the resulting view rendered or acted upon.
"""

import argparse
import getpass
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from common.mockapi import MockApiError
from router.routes import ADMIN, HOME, LOGIN, Navigation, RouterError

from .config import load_settings
from .context import AppContext, create_app
from .views import AdminView, HomeView, LoginView, format_prisoner, format_user, view_for

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_field_assignments(items: Sequence[str]) -> Dict[str, Any]:
    """Turn `["name=Ana", "age=42"]` into `{"name": "Ana", "age": 42}`.

    Values that parse as JSON (numbers, booleans, null, quoted strings) are
    decoded; anything else is kept as the raw string.
    """
    fields: Dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected FIELD=VALUE, got {item!r}")
        try:
            fields[key] = json.loads(raw)
        except ValueError:
            fields[key] = raw
    return fields


def record_id(value: str) -> str:
    """argparse type for record ids: any non-blank string."""
    if not value.strip():
        raise argparse.ArgumentTypeError("record id must not be empty")
    return value


def _report_redirect(nav: Navigation) -> None:
    if nav.redirected_from is not None:
        print(f"{nav.redirected_from.path} is not available; showing {nav.route.path}", file=sys.stderr)


def cmd_open(ctx: AppContext, args: argparse.Namespace) -> int:
    nav = ctx.router.push(args.path)
    _report_redirect(nav)
    print(view_for(ctx, nav.route.name).render())
    return 1 if nav.redirected else 0


def cmd_login(ctx: AppContext, args: argparse.Namespace) -> int:
    nav = ctx.router.push(LOGIN.path)
    if nav.redirected:
        print("Already signed in.")
        return 1

    username = args.username or input("Username: ")
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    result = LoginView(ctx).submit(username, password)
    if result is None:
        print("Invalid username or password.", file=sys.stderr)
        return 1
    if result.redirected:
        # Storage write failed, so the guard no longer sees the login
        print("Signed in, but the session could not be saved; check the storage directory.", file=sys.stderr)
        return 1
    print(f"Signed in as {username}.")
    print(view_for(ctx, result.route.name).render())
    return 0


def cmd_logout(ctx: AppContext, args: argparse.Namespace) -> int:  # noqa: ARG001
    AdminView(ctx).logout()
    print("Signed out.")
    return 0


def cmd_prisoners(ctx: AppContext, args: argparse.Namespace) -> int:
    nav = ctx.router.push(HOME.path)
    _report_redirect(nav)
    view = HomeView(ctx)

    if args.action == "list":
        print(view.render())
    elif args.action == "show":
        print(view.show(args.id))
    elif args.action == "add":
        print(f"Created {format_prisoner(view.add(parse_field_assignments(args.fields)))}")
    elif args.action == "update":
        print(f"Updated {format_prisoner(view.update(args.id, parse_field_assignments(args.fields)))}")
    elif args.action == "delete":
        view.delete(args.id)
        print(f"Deleted prisoner {args.id}")
    return 0


def cmd_users(ctx: AppContext, args: argparse.Namespace) -> int:
    nav = ctx.router.push(ADMIN.path)
    if nav.redirected:
        print("Login required: run `prisoner-admin login` first.", file=sys.stderr)
        return 1
    view = AdminView(ctx)

    if args.action == "list":
        print(view.render())
    elif args.action == "add":
        print(f"Created {format_user(view.add(args.username, args.password))}")
    elif args.action == "update":
        print(f"Updated {format_user(view.update(args.id, username=args.username, password=args.password))}")
    elif args.action == "delete":
        view.delete(args.id)
        print(f"Deleted user {args.id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prisoner-admin",
        description="Manage prisoner records behind a simple login gate",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_open = sub.add_parser("open", help="Navigate to a route and print its view")
    p_open.add_argument("path", help="Route path or name, e.g. / /login /admin")
    p_open.set_defaults(func=cmd_open)

    p_login = sub.add_parser("login", help="Sign in with a username and password")
    p_login.add_argument("-u", "--username")
    p_login.add_argument("-p", "--password", help="Prompted when omitted")
    p_login.set_defaults(func=cmd_login)

    p_logout = sub.add_parser("logout", help="Sign out")
    p_logout.set_defaults(func=cmd_logout)

    p_pris = sub.add_parser("prisoners", help="Prisoner records (public)")
    pris_sub = p_pris.add_subparsers(dest="action", required=True)
    pris_sub.add_parser("list", help="List all prisoners")
    p_show = pris_sub.add_parser("show", help="Show one prisoner")
    p_show.add_argument("id", type=record_id)
    p_add = pris_sub.add_parser("add", help="Create a prisoner from FIELD=VALUE pairs")
    p_add.add_argument("fields", nargs="+", metavar="FIELD=VALUE")
    p_upd = pris_sub.add_parser("update", help="Replace a prisoner's fields")
    p_upd.add_argument("id", type=record_id)
    p_upd.add_argument("fields", nargs="+", metavar="FIELD=VALUE")
    p_del = pris_sub.add_parser("delete", help="Delete a prisoner")
    p_del.add_argument("id", type=record_id)
    p_pris.set_defaults(func=cmd_prisoners)

    p_users = sub.add_parser("users", help="User administration (login required)")
    users_sub = p_users.add_subparsers(dest="action", required=True)
    users_sub.add_parser("list", help="List all users")
    u_add = users_sub.add_parser("add", help="Create a user")
    u_add.add_argument("-u", "--username", required=True)
    u_add.add_argument("-p", "--password", required=True)
    u_upd = users_sub.add_parser("update", help="Change a user's username and/or password")
    u_upd.add_argument("id", type=record_id)
    u_upd.add_argument("-u", "--username")
    u_upd.add_argument("-p", "--password")
    u_del = users_sub.add_parser("delete", help="Delete a user")
    u_del.add_argument("id", type=record_id)
    p_users.set_defaults(func=cmd_users)

    return parser


def main(argv: Optional[List[str]] = None, *, ctx: Optional[AppContext] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "fields", None):
        try:
            parse_field_assignments(args.fields)
        except ValueError as e:
            parser.error(str(e))

    owns_ctx = ctx is None
    if ctx is None:
        try:
            settings = load_settings()
        except RuntimeError as e:
            parser.error(str(e))
        logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, stream=sys.stderr)
        ctx = create_app(settings)

    try:
        return args.func(ctx, args)
    except MockApiError as e:
        logger.debug("API call failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except RouterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        if owns_ctx:
            ctx.close()


if __name__ == "__main__":
    sys.exit(main())
