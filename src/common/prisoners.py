from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .mockapi import ResourceClient


class Prisoner(BaseModel):
    """
    Prisoner record as stored by MockAPI.

    Only `id` is known client-side; every other field (name, crime, cell...)
    is kept as an extra attribute and sent back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, description="Server-assigned identifier")


class PrisonerClient(ResourceClient[Prisoner]):
    """CRUD client for the `/prisoners` collection."""

    resource = "prisoners"
    model = Prisoner


__all__ = ["Prisoner", "PrisonerClient"]
