"""Pydantic models for the MediaPackage tagging REST payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MediaPackageBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ListTagsResponse(MediaPackageBaseModel):
    tags: dict[str, str] = Field(default_factory=dict)


class TagResourceRequest(MediaPackageBaseModel):
    tags: dict[str, str]


class ErrorResponse(MediaPackageBaseModel):
    message: str | None = None
    message_upper: str | None = Field(default=None, alias="Message")

    @property
    def text(self) -> str | None:
        return self.message or self.message_upper
