"""Identity building block shared by persisted catalog entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4


def new_id() -> str:
    return str(uuid4())


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain and is never reassigned."""

    id: str = field(default_factory=new_id)
