"""Pydantic DTOs for article generation and topic validation."""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class GenerateRequest(BaseModel):
    """Body of the generation endpoints.

    ``topic`` is optional at the schema level so that a missing topic is
    answered with a 400 error body instead of a validation error.
    """

    topic: str | None = Field(None, examples=["renewable energy"])
    previous_titles: list[str] | None = None
    fallback_on_error: bool = False

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class GeneratedContentResponse(BaseModel):
    title: str
    description: str


class ErrorResponse(BaseModel):
    """Failure body shared by the generation endpoints."""

    error: str
    details: Any = None


class TopicValidationRequest(BaseModel):
    topic: str | None = None


class TopicValidationResponse(BaseModel):
    is_valid: bool
    message: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
