"""Shared query option models."""

from pydantic import BaseModel, Field


class FindOptions(BaseModel):
    sort: list[tuple[str, int]] | None = None
    skip: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=0)
