from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReorderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ordered_ids: list[str] = Field(alias="orderedIds")


class AltUpdate(BaseModel):
    alt: str = ""
