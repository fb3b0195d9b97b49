"""Pydantic DTOs (Data Transfer Objects) for the Article feature.

JSON bodies use camelCase keys (``urlToImage``, ``createdAt``); snake_case
names are accepted on input as well.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ArticleCreate(BaseModel):
    """Schema for manually inserting an article."""

    title: str = Field(..., min_length=1, examples=["Solar Power Advances"])
    description: str = Field(..., min_length=1, examples=["Efficiency rose 25% this year."])
    topic: str = Field("", examples=["renewable energy"])
    url: str | None = None
    url_to_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    published_at: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    description: str
    topic: str
    created_at: datetime
    url: str | None = None
    url_to_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    published_at: str | None = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
