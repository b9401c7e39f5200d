"""
Console routing: route table, navigation and the auth/guest guard.
"""

from .guards import create_router, make_auth_guard
from .routes import Navigation, Route, RouteMeta, Router

__all__ = [
    "Navigation",
    "Route",
    "RouteMeta",
    "Router",
    "create_router",
    "make_auth_guard",
]
