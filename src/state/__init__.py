"""
Persistent client-side state: file-backed local storage and the auth flag.
"""

from .auth import AuthStore
from .local_store import LocalStorage

__all__ = ["AuthStore", "LocalStorage"]
