"""
Identity model.

The resolved caller principal passed explicitly into every service call.

Dependencies: pydantic
System role: Caller identity contract
"""

import uuid

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """Authenticated caller."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: uuid.UUID
    email: str
    name: str | None = None
