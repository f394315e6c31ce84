from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Guid(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str = Field(description="Article identifier")
    # Never a permalink, so readers do not collapse it with the item link.
    is_permalink: Literal[False] = False


class Enclosure(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Thumbnail URL behind the image proxy")
    length: int = Field(0, ge=0, description="Size in bytes, 0 when unknown")
    type: str = Field("image/jpeg", description="Media type of the thumbnail")


class FeedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str = Field(description="Canonical article URL")
    guid: Guid
    pub_date: str = Field(description="RFC 2822 style timestamp with offset")
    enclosure: Enclosure


class ChannelMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str


class FeedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "2.0"
    channel: ChannelMetadata
    self_link: str = Field(description="href of the atom rel=self link")
    items: tuple[FeedItem, ...] = ()
