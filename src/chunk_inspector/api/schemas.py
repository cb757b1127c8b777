from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChunkListRequest(BaseModel):
    paths: list[str]


class FieldRequest(BaseModel):
    """Coordinates of one field; accepts snake_case or camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    index_path: str
    chunk_filename: str
    item_index: int = Field(ge=0)
    field_index: int = Field(ge=0)


class ErrorResponse(BaseModel):
    code: str
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    cache_entries: int = 0
    cache_bytes: int = 0
