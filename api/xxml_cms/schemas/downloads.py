"""Downloads catalog Pydantic schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

Platform = Literal["WINDOWS", "MACOS", "LINUX", "ALL"]


class DownloadInput(BaseModel):
    """Download as submitted by staff; an update replaces every field."""

    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    version: str = Field(min_length=1, max_length=50)
    platform: Platform
    file_url: str
    file_size: str | None = None
    release_date: datetime | None = None
    is_latest: bool = False
    is_featured: bool = False
    sort_order: int = 0

    @field_validator("file_url")
    @classmethod
    def validate_file_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")) or len(v) <= len("https://"):
            raise ValueError("Must be a valid URL")
        return v


class DownloadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    description: str
    version: str
    platform: str
    file_url: str
    file_size: str | None
    release_date: datetime | None
    is_latest: bool
    is_featured: bool
    sort_order: int
