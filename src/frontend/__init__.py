"""
prisoner-admin console: settings, bootstrap, views and CLI entry point.
"""

from .config import Settings, load_settings
from .context import AppContext, create_app

__all__ = ["AppContext", "Settings", "create_app", "load_settings"]
