from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .mockapi import MockApiError, ResourceClient


logger = logging.getLogger(__name__)


class User(BaseModel):
    """
    Console user as stored by MockAPI.

    Notes
    - The password is stored and compared in plaintext; the mock backend has
      no notion of hashing or sessions.
    - Missing `username`/`password` fields are tolerated (None never matches
      a login attempt).
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, description="Server-assigned identifier")
    username: Optional[str] = None
    password: Optional[str] = None


class UserClient(ResourceClient[User]):
    """CRUD client for the `/users` collection, plus credential lookup."""

    resource = "users"
    model = User

    def login(self, username: str, password: str) -> Optional[User]:
        """
        Return the first user whose username and password match exactly.

        Fetches the whole collection on every call and scans it linearly.
        Comparison is case-sensitive. Returns None when nothing matches, which
        covers both an unknown username and a wrong password.
        Raises the underlying `MockApiError` (after logging it) when the
        collection cannot be fetched.
        """
        try:
            users = self.find_all()
        except MockApiError as exc:
            logger.error("Login lookup failed: %s", exc)
            raise

        for user in users:
            if user.username == username and user.password == password:
                return user
        return None


__all__ = ["User", "UserClient"]
