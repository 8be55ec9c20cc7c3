"""Typed payload models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EchoResponse(BaseModel):
    """Description of one request, built once and serialized right away."""

    model_config = ConfigDict(populate_by_name=True)

    data: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    json_: Any = Field(default=None, alias="json")
    method: str
    origin: str
    params: dict[str, str] = Field(default_factory=dict)
    url: str

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation (``json`` key, fixed field order)."""
        return self.model_dump(by_alias=True)
