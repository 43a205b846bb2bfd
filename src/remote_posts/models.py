"""Pydantic models for the remote posts resource."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 10

# Exact JSON integer: booleans, numeric strings and floats such as 3.0 are rejected.
PostCount = Annotated[int, Field(strict=True, ge=0)]


class Post(BaseModel):
    """A post as returned by the remote API. Unknown fields are kept as extras."""

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    id: str = Field(description="Post identifier")
    title: str | None = Field(default=None, description="Post title")
    body: str | None = Field(default=None, description="Post body")

    @field_validator("id")
    @classmethod
    def _require_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Post id must not be empty")
        return v


class PostPage(BaseModel):
    """One page of posts plus the size of the full filtered set."""

    model_config = ConfigDict(frozen=True)

    items: list[Post] = Field(default_factory=list, description="Posts in server order")
    total_count: int = Field(ge=0, description="Count of all posts matching the filter")


class PostQuery(BaseModel):
    """Filter and paging parameters for listing posts."""

    model_config = ConfigDict(frozen=True, strict=True)

    q: str | None = Field(default=None, description="Optional filter string")
    offset: int = Field(default=DEFAULT_OFFSET, ge=0, description="Items to skip")
    limit: int = Field(default=DEFAULT_LIMIT, gt=0, description="Maximum items to return")

    def to_params(self) -> dict[str, Any]:
        """Render as query parameters, omitting an unset filter."""
        params: dict[str, Any] = {"offset": self.offset, "limit": self.limit}
        if self.q is not None:
            params = {"q": self.q, **params}
        return params
