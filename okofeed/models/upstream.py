from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_as_empty(value: Any, empty: Any) -> Any:
    return empty if value is None else value


class SeoFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str = Field("", description="Path segment of the article permalink")

    @field_validator("slug", mode="before")
    @classmethod
    def _null_slug(cls, value: Any) -> Any:
        return _null_as_empty(value, "")


class FeaturedImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_url: str = Field("", description="Image URL, absolute or proxy-relative")

    @field_validator("original_url", mode="before")
    @classmethod
    def _null_url(cls, value: Any) -> Any:
        return _null_as_empty(value, "")


class UpstreamRecord(BaseModel):
    """One article node as returned by the OKO.press API.

    Articles without SEO fields or a featured image are still valid; the
    missing parts read as empty strings.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Article identifier, unique per source")
    title: str = Field(description="Article headline")
    publish_at: str = Field(description="Publication time, UTC without offset")
    seo_fields: SeoFields = Field(default_factory=SeoFields)
    featured_image: FeaturedImage = Field(default_factory=FeaturedImage)

    @field_validator("seo_fields", "featured_image", mode="before")
    @classmethod
    def _null_nested(cls, value: Any) -> Any:
        return _null_as_empty(value, {})

    @property
    def slug(self) -> str:
        return self.seo_fields.slug

    @property
    def image_url(self) -> str:
        return self.featured_image.original_url


class _NodeList(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: tuple[UpstreamRecord, ...]


class UpstreamResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: _NodeList

    @property
    def records(self) -> tuple[UpstreamRecord, ...]:
        return self.data.nodes
